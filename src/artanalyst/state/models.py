"""Data models for persisted application state.

These models are the record schemas: validation is strict about types
(no numeric strings, no integer booleans, no NaN or infinity) and records
serialize back to the camelCase JSON layout of the state file.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """A single chat turn as stored in history."""

    model_config = ConfigDict(frozen=True, strict=True, allow_inf_nan=False)

    id: str = Field(description="Message identifier (uniqueness not enforced)")
    role: ChatRole = Field(description="Who sent the message")
    content: str = Field(description="Message text")
    timestamp: int | float = Field(description="Epoch milliseconds")

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON document stored on disk."""
        return self.model_dump(mode="json")


class WindowState(BaseModel):
    """Last known window geometry."""

    model_config = ConfigDict(frozen=True, strict=True, allow_inf_nan=False, populate_by_name=True)

    x: int | float
    y: int | float
    width: int | float
    height: int | float
    is_maximized: bool = Field(alias="isMaximized")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Settings(BaseModel):
    """Application settings.

    Currently has no declared fields; unknown keys are kept so newer
    settings survive a round trip through older code.
    """

    model_config = ConfigDict(extra="allow", strict=True)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DisplayArea(BaseModel):
    """Work area of the primary display, in screen coordinates."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class AnalysisResult(BaseModel):
    """Outcome of an image analysis request."""

    model_config = ConfigDict(frozen=True)

    success: bool
    text: str | None = None
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> "AnalysisResult":
        return cls(success=False, error=error)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class AiStatus(BaseModel):
    """Availability of the AI backend as reported to the UI."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_initialized: bool = Field(alias="isInitialized")
    has_api_key: bool = Field(alias="hasApiKey")
    model_name: str = Field(alias="modelName")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
