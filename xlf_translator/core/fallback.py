from typing import Dict, List, Optional

from xlf_translator.utils.logger import setup_logger

logger = setup_logger(__name__)


def _fallback_token(target_lang: str, translation_context: Optional[str]) -> str:
    lang = target_lang.upper()
    if translation_context:
        context = translation_context.lower()
        if "occupational" in context or "prl" in context:
            return f"WORKPLACE_SAFETY_{lang}"
        if "technical" in context:
            return f"TECHNICAL_{lang}"
        if "educational" in context:
            return f"EDUCATIONAL_{lang}"
    return f"{lang}_TRANSLATION"


def generate_contextual_fallbacks(texts: List[str],
                                  target_lang: str,
                                  translation_context: Optional[str] = None) -> Dict[str, str]:
    """
    Build placeholder translations for when the remote model is unavailable.

    Blank texts map to "" and every other text at index i maps to
    "[<TOKEN>_<i>]", where the token is picked from keywords in the context.
    """
    token = _fallback_token(target_lang, translation_context)
    fallbacks = {}
    for index, text in enumerate(texts):
        if not text or not text.strip():
            fallbacks[str(index)] = ""
        else:
            fallbacks[str(index)] = f"[{token}_{index}]"

    logger.info(f"Generated {len(fallbacks)} contextual fallbacks ({token})")
    return fallbacks
