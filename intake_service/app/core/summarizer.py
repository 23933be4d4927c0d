import logging
import re
from functools import lru_cache
from typing import Optional

from google import genai
from google.genai import types

from shared.core.config import settings

logger = logging.getLogger(__name__)

TITLE_PROMPT = 'Summarize this maintenance request into a 3-word title: "{message}"'

_STRIP_CHARS = re.compile(r'[".*]')


def clean_title(text: str) -> str:
    title = _STRIP_CHARS.sub("", text or "")
    return " ".join(title.split())


class TitleSummarizer:
    """Gemini backed one-shot title generator."""

    def __init__(self, api_key: str, model: str, timeout_seconds: float, client=None):
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )

    def summarize(self, message: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=TITLE_PROMPT.format(message=message),
            config=types.GenerateContentConfig(
                temperature=0.2,
                max_output_tokens=16,
            ),
        )
        return clean_title(response.text or "")


@lru_cache()
def _cached_summarizer(api_key: str, model: str, timeout_seconds: float) -> TitleSummarizer:
    return TitleSummarizer(api_key, model, timeout_seconds)


def get_title_summarizer() -> Optional[TitleSummarizer]:
    """FastAPI dependency; None when no Gemini key is configured."""
    if not settings.GEMINI_API_KEY:
        return None
    try:
        return _cached_summarizer(
            settings.GEMINI_API_KEY, settings.GEMINI_MODEL, settings.SUMMARY_TIMEOUT_SECONDS)
    except Exception:
        logger.exception("Gemini client initialization failed")
        return None
