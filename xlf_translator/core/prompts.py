from typing import List, Optional

MAX_CONTEXT_SAMPLES = 40
MAX_CONTEXT_CHARS = 800
SAMPLE_SEPARATOR = "\n---\n"


def _enumerate_texts(texts: List[str]) -> str:
    return "\n".join(f"{i}: {text}" for i, text in enumerate(texts))


def build_translation_prompt(texts: List[str],
                             source_lang: str,
                             target_lang: str,
                             translation_context: Optional[str] = None) -> str:
    """
    Build the instruction sent to the model for one chunk of texts.

    When guidance is given it is placed verbatim at the top, followed by a
    separator and the translation instructions. Both variants demand that
    inline markup survives and that the answer is a bare JSON object keyed by
    the stringified index.
    """
    texts_block = _enumerate_texts(texts)

    if translation_context and translation_context.strip():
        return f"""{translation_context}

---

TRANSLATION INSTRUCTIONS:
- Translate ALL {len(texts)} texts from {source_lang} to {target_lang}
- Follow the contextual guidelines above precisely
- Preserve ALL XML structure: <g>, <br/>, <strong>, etc.
- Maintain exact formatting and spacing
- Return ONLY JSON format: {{"0": "translation1", "1": "translation2", ...}}
- Do not add any text before or after the JSON object

TEXTS TO TRANSLATE:
{texts_block}"""

    return f"""Translate each of the {len(texts)} texts from {source_lang} to {target_lang}.

CRITICAL REQUIREMENTS:
- Translate ALL {len(texts)} texts
- Preserve ALL XML structure exactly: <g>, <br/>, <strong>, etc.
- Maintain exact formatting and spacing
- Return ONLY JSON format: {{"0": "translation1", "1": "translation2", ...}}
- Do not add any text before or after the JSON object

TEXTS TO TRANSLATE:
{texts_block}"""


def build_context_prompt(sample_texts: List[str], user_context: str, target_lang: str) -> str:
    """Build the analysis prompt asking the model for a structured context block."""
    sample = SAMPLE_SEPARATOR.join(sample_texts[:MAX_CONTEXT_SAMPLES])
    user_context_line = f"ADDITIONAL USER CONTEXT: {user_context}" if user_context else ""
    user_requirements_line = "**USER REQUIREMENTS**: [Incorporate user context here]\n" if user_context else ""

    return f"""Analyze this content and generate precise translation context guidelines.

CONTENT SAMPLE (first {MAX_CONTEXT_SAMPLES} representative texts):
{sample}

{user_context_line}

TARGET LANGUAGE: {target_lang}

Generate ONLY a structured translation context (max {MAX_CONTEXT_CHARS} characters) in exactly this format:

**CONTENT TYPE**: [Educational/Training/Technical/Corporate/Interactive]
**DOMAIN**: [Identify specific domain: Corporate Training, Technical Software, Academic Course, E-Learning Platform, Occupational Health & Safety Training, etc.]
**TERMINOLOGY APPROACH**: [Specific {target_lang} terminology guidance for this domain - be precise about technical vs educational language]
**TONE**: [Professional/Academic/Technical/Instructional/Interactive - choose most appropriate]
**AUDIENCE**: [Learners/Employees/Students/Technical Users/End Users - be specific]
**SPECIAL CONSIDERATIONS**: [UI elements, technical accuracy, cultural adaptation, learning flow, interaction clarity - list relevant ones]
{user_requirements_line}**QUALITY STANDARDS**: Maintain XML structure integrity, preserve spacing, ensure {target_lang} linguistic accuracy

Focus on translation quality enhancement. Be specific and actionable."""
