from .analyzer import ImageAnalyzer
from .validation import ImageValidation, validate_base64, validate_image_data, validate_mime_type

__all__ = [
    "ImageAnalyzer",
    "ImageValidation",
    "validate_base64",
    "validate_image_data",
    "validate_mime_type",
]
