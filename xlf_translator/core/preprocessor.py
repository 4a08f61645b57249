import re
from typing import Optional

from xlf_translator.utils.logger import setup_logger

logger = setup_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def preprocess_text(text: str, index: Optional[int] = None) -> str:
    """Collapse whitespace runs to a single space and trim the result."""
    cleaned = _WHITESPACE.sub(" ", text).strip()

    if not cleaned:
        logger.debug(f"Empty text detected for {index}, keeping empty")
        return ""

    if len(cleaned) < 3:
        logger.debug(f"Very short text for {index}: {cleaned!r}")

    return cleaned
