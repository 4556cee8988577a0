"""Application configuration.

Centralizes magic numbers for the state core and loads runtime settings
from the environment (optionally via a ``.env`` file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Storage and history
MAX_CHAT_HISTORY_SIZE = 1000  # Maximum messages kept in chat history
ALLOWED_STORE_KEYS = ("chatHistory", "windowState", "settings")
STORE_FILENAME = "state.json"

# Window management
WINDOW_STATE_SAVE_DEBOUNCE_MS = 500  # Quiet period before geometry is persisted
MIN_WINDOW_WIDTH = 800
MIN_WINDOW_HEIGHT = 600
DEFAULT_WINDOW_WIDTH = 1200
DEFAULT_WINDOW_HEIGHT = 800
WINDOW_DISPLAY_MARGIN = 100  # Margin kept free when centering on a display
MAX_DIMENSION_MULTIPLIER = 2  # Max window size as a multiple of the display

# Image upload
ALLOWED_IMAGE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)
BASE64_PADDING_DIVISOR = 4  # Base64 payload length must divide by this

# AI service
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

DEFAULT_DATA_DIR = Path.home() / ".artanalyst"


class AppConfig(BaseModel):
    """Runtime configuration resolved from the environment."""

    gemini_api_key: str | None = Field(default=None, description="Google AI API key")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL, description="Gemini model name")
    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="Directory holding the state file")
    log_level: str = Field(default="WARNING", description="Root log level for the CLI")

    @property
    def store_path(self) -> Path:
        """Path of the persisted state document."""
        return self.data_dir / STORE_FILENAME

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "AppConfig":
        """Build configuration from environment variables.

        Args:
            dotenv: Load a ``.env`` file into the environment first

        Returns:
            Resolved configuration

        Environment variables:
            GEMINI_API_KEY: Google AI API key (optional; AI features disabled without it)
            GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
            ARTANALYST_DATA_DIR: State directory (default: ~/.artanalyst)
            ARTANALYST_LOG_LEVEL: Log level (default: WARNING)
        """
        if dotenv:
            load_dotenv()

        data_dir = os.getenv("ARTANALYST_DATA_DIR")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            log_level=os.getenv("ARTANALYST_LOG_LEVEL", "WARNING").upper(),
        )
