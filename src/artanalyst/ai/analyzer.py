"""Google Gemini image analysis.

Uses the official Google GenAI SDK for async multimodal requests.
Reference: https://github.com/googleapis/python-genai

Hidden design decisions:
- Google GenAI client initialization (skipped without an API key)
- Request format: one user turn with a text part and an inline image part
- Failures are reported as an ``AnalysisResult`` rather than raised
"""

import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from ..config import ALLOWED_IMAGE_TYPES, DEFAULT_GEMINI_MODEL
from ..state.models import AiStatus, AnalysisResult

logger = logging.getLogger(__name__)

NOT_INITIALIZED_MESSAGE = "Google Generative AI not initialized. Check your API key."


class ImageAnalyzer:
    """Send an image and prompt to Gemini and return the text reply."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GEMINI_MODEL,
        client: Any | None = None,
        **client_kwargs: Any
    ):
        """Initialize the analyzer.

        Args:
            api_key: Google AI API key; without one (and no client) the
                analyzer stays uninitialized
            model: Gemini model name
            client: Pre-built ``genai.Client`` (or compatible object)
            **client_kwargs: Additional kwargs for Client
        """
        self._api_key = api_key
        self._model = model
        if client is not None:
            self._client = client
        elif api_key:
            self._client = genai.Client(api_key=api_key, **client_kwargs)
        else:
            logger.error("GEMINI_API_KEY not found in environment variables")
            self._client = None

    @property
    def model(self) -> str:
        return self._model

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    def status(self) -> AiStatus:
        return AiStatus(
            is_initialized=self.is_initialized,
            has_api_key=bool(self._api_key),
            model_name=self._model,
        )

    def _build_contents(self, image_bytes: bytes, mime_type: str, prompt: str) -> list[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part(text=prompt),
                    types.Part(inline_data=types.Blob(mime_type=mime_type, data=image_bytes)),
                ],
            )
        ]

    def _extract_content(self, response) -> str:
        """Extract text content from a Gemini response, tolerating empty candidates."""
        if response.candidates and len(response.candidates) > 0:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def analyze(self, image_base64: str, mime_type: str, prompt: str) -> AnalysisResult:
        """Analyze an image.

        Args:
            image_base64: Base64-encoded image bytes
            mime_type: Image MIME type (must be an allowed image type)
            prompt: Instruction for the model

        Returns:
            AnalysisResult with ``text`` on success or ``error`` on failure
        """
        if not self.is_initialized:
            return AnalysisResult.failure(NOT_INITIALIZED_MESSAGE)

        if not image_base64 or not mime_type or not prompt:
            return AnalysisResult.failure("Missing required parameters: imageBase64, mimeType, or prompt")

        if mime_type not in ALLOWED_IMAGE_TYPES:
            return AnalysisResult.failure(f"Unsupported image type: {mime_type}")

        try:
            image_bytes = base64.b64decode(image_base64, validate=True)
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=self._build_contents(image_bytes, mime_type, prompt),
            )
            text = self._extract_content(response)
        except Exception as exc:
            logger.error("AI analysis error: %s", exc)
            return AnalysisResult.failure(str(exc) or "Unknown error occurred during analysis")

        return AnalysisResult(success=True, text=text)
