import logging
import re
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional

from shared.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Maintenance Request"
MAX_TITLE_LENGTH = 200

# Twilio sandbox opt-in phrase, e.g. "join brave-tiger"
_SANDBOX_JOIN = re.compile(r"\bjoin\s+[a-z-]+\s*", re.IGNORECASE)

_summary_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="title-summary")


def clean_message_body(body: str) -> str:
    return _SANDBOX_JOIN.sub("", body or "").strip()


def fallback_title(message: str) -> str:
    return message[:settings.TITLE_FALLBACK_LENGTH] or DEFAULT_TITLE


def generate_title(message: str, summarizer=None) -> str:
    """
    Best-effort ticket title.

    The summarizer gets SUMMARY_TIMEOUT_SECONDS; any error, timeout or empty
    answer falls back to the truncated message.
    """
    title = fallback_title(message)
    if summarizer is None or len(message) <= settings.SUMMARY_MIN_LENGTH:
        return title

    future = _summary_pool.submit(summarizer.summarize, message)
    try:
        summary: Optional[str] = future.result(timeout=settings.SUMMARY_TIMEOUT_SECONDS)
    except FutureTimeout:
        future.cancel()
        logger.warning("Title summarizer timed out after %ss",
                       settings.SUMMARY_TIMEOUT_SECONDS)
        return title
    except Exception as e:
        logger.warning("Title summarizer failed: %s", e)
        return title

    summary = (summary or "").strip()[:MAX_TITLE_LENGTH]
    return summary or title
