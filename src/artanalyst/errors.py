"""Error taxonomy for the application state core.

Validation failures are recovered locally on read and refused on write.
Boundary errors tag the failure domain so callers can tell storage, window
and AI failures apart without parsing messages.
"""

from typing import Any


class ArtAnalystError(Exception):
    """Base class for all artanalyst errors."""


class ValidationError(ArtAnalystError):
    """Persisted or incoming data does not match its record schema."""

    def __init__(self, kind: str, problems: list[str] | None = None):
        self.kind = kind
        self.problems = list(problems or [])
        detail = "; ".join(self.problems) if self.problems else "invalid value"
        super().__init__(f"{kind} validation failed: {detail}")


class BoundaryError(ArtAnalystError):
    """Failure surfaced across the UI boundary.

    Subclasses carry a default message and a stable ``error_type`` tag.
    """

    default_message = "Boundary operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def error_type(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        return str(self)


class ApiKeyMissingError(BoundaryError):
    default_message = "Gemini API key is not configured"


class ImageAnalysisError(BoundaryError):
    default_message = "AI image analysis failed"


class StorageError(BoundaryError):
    default_message = "State store operation failed"


class WindowControlError(BoundaryError):
    default_message = "Window control operation failed"


def create_error_response(error: BaseException) -> dict[str, Any]:
    """Build the failure envelope for an error."""
    error_type = error.error_type if isinstance(error, BoundaryError) else type(error).__name__
    return {
        "success": False,
        "error": str(error),
        "errorType": error_type,
    }


def create_success_response(data: Any = None) -> dict[str, Any]:
    """Build the success envelope, including ``data`` only when present."""
    response: dict[str, Any] = {"success": True}
    if data is not None:
        response["data"] = data
    return response
