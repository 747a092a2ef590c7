"""
Gemini client for legal document analysis.

Thin boundary around google-generativeai: ordered prompt parts in, one text
completion out. One call per request, no retries; every SDK failure is
surfaced as UpstreamUnavailable.
"""

import logging
from typing import Optional

import google.generativeai as genai

from .config import AnalyzerConfig
from .errors import UpstreamUnavailable
from .prompts import InlineDataPart, PromptPart, TextPart

logger = logging.getLogger(__name__)


def to_gemini_part(part: PromptPart) -> dict:
    """Convert a prompt part to the SDK's dict form."""
    if isinstance(part, InlineDataPart):
        return {"inline_data": {"mime_type": part.mime_type, "data": part.data}}
    if isinstance(part, TextPart):
        return {"text": part.text}
    raise TypeError(f"Unsupported prompt part: {type(part).__name__}")


class GeminiClient:
    """
    Calls a Gemini model with a single user turn.

    Usage:
        client = GeminiClient.from_config(config)
        raw_text = client.generate(parts)
    """

    def __init__(self, api_key: str, model_name: str, timeout_seconds: Optional[float] = None):
        if not api_key:
            raise ValueError("Gemini API key must be provided.")

        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._model = genai.GenerativeModel(model_name)
        logger.info(f"Gemini client initialized with model {model_name}")

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "GeminiClient":
        return cls(
            api_key=config.api_key,
            model_name=config.model_name,
            timeout_seconds=config.timeout_seconds,
        )

    def generate(self, parts: list[PromptPart]) -> str:
        """
        Send the parts as one user turn and return the reply text.

        Raises:
            UpstreamUnavailable: the call failed or the reply carried no text
        """
        contents = [{"role": "user", "parts": [to_gemini_part(p) for p in parts]}]
        request_options = {"timeout": self.timeout_seconds} if self.timeout_seconds else None

        try:
            response = self._model.generate_content(contents, request_options=request_options)
            # .text raises ValueError when the reply was blocked or empty
            return response.text
        except Exception as e:
            logger.error(f"Gemini generation failed ({self.model_name}): {type(e).__name__}: {e}")
            raise UpstreamUnavailable(details=str(e)) from e
