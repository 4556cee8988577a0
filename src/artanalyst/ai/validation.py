"""Validation of image payloads received from the UI."""

import re
from dataclasses import dataclass
from typing import Any

from ..config import ALLOWED_IMAGE_TYPES, BASE64_PADDING_DIVISOR

_BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


@dataclass(frozen=True)
class ImageValidation:
    is_valid: bool
    error: str | None = None


def validate_base64(data: Any) -> bool:
    """Check base64 shape: alphabet, at most two padding chars, length % 4 == 0."""
    if not data or not isinstance(data, str):
        return False
    return bool(_BASE64_PATTERN.match(data)) and len(data) % BASE64_PADDING_DIVISOR == 0


def validate_mime_type(mime_type: Any) -> bool:
    """Case-insensitive check against the allowed image types."""
    if not mime_type or not isinstance(mime_type, str):
        return False
    return mime_type.lower() in ALLOWED_IMAGE_TYPES


def validate_image_data(image_base64: Any, mime_type: Any) -> ImageValidation:
    """Validate an image payload before it is sent for analysis."""
    if not image_base64 or not isinstance(image_base64, str):
        return ImageValidation(False, "Image data is required and must be a valid string")

    if not mime_type or not isinstance(mime_type, str):
        return ImageValidation(False, "MIME type is required and must be a valid string")

    if not validate_mime_type(mime_type):
        return ImageValidation(
            False,
            f"Unsupported image format: {mime_type}. Allowed formats: {', '.join(ALLOWED_IMAGE_TYPES)}",
        )

    if not validate_base64(image_base64):
        return ImageValidation(False, "Invalid image data format. Expected valid base64 encoding.")

    return ImageValidation(True)
