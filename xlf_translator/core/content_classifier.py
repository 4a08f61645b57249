import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

OCCUPATIONAL_HEALTH_SAFETY = "occupational-health-safety"
TECHNICAL = "technical"
EDUCATIONAL = "educational"
CORPORATE = "corporate"

# Tie-break order: the first domain holding the greatest weight wins.
DOMAIN_ORDER: Tuple[str, ...] = (EDUCATIONAL, OCCUPATIONAL_HEALTH_SAFETY, TECHNICAL, CORPORATE)

DEFAULT_CONFIDENCE = 50
MAX_CONFIDENCE = 95


@dataclass(frozen=True)
class DomainProfile:
    name: str
    keywords: Tuple[str, ...]


DOMAINS: Dict[str, DomainProfile] = {
    EDUCATIONAL: DomainProfile(
        name="Educational & E-Learning",
        keywords=(
            "lesson", "course", "learning", "training", "module", "chapter", "quiz", "assessment",
            "knowledge", "skill", "student", "learn", "teach", "education", "instruction",
        ),
    ),
    OCCUPATIONAL_HEALTH_SAFETY: DomainProfile(
        name="Occupational Health & Safety (PRL)",
        keywords=(
            "prl", "prevención", "riesgos laborales", "ergonomía", "postura", "asiento", "respaldo",
            "estrés laboral", "seguridad", "salud laboral", "workplace safety", "occupational health",
            "ergonomic", "posture", "safety guidelines", "health risks", "prevention",
        ),
    ),
    TECHNICAL: DomainProfile(
        name="Technical & IT Training",
        keywords=(
            "api", "system", "software", "configuration", "install", "database", "server", "code",
            "technical", "setup", "data", "process", "function", "network", "interface", "development",
        ),
    ),
    CORPORATE: DomainProfile(
        name="Corporate Training",
        keywords=(
            "company", "organization", "team", "department", "employee", "business", "corporate",
            "workplace", "professional", "management", "process", "procedure", "policy",
        ),
    ),
}

TERMINOLOGY_APPROACHES: Dict[str, str] = {
    OCCUPATIONAL_HEALTH_SAFETY: "Professional {lang} workplace safety terminology, "
                                "technical precision for ergonomic and health concepts",
    TECHNICAL: "Technical {lang} terminology with accuracy for system/software concepts, "
               "maintain English technical terms where standard",
    EDUCATIONAL: "Clear, accessible {lang} with educational clarity, "
                 "avoid overly technical jargon unless necessary",
    CORPORATE: "Professional business {lang} terminology, formal register appropriate for corporate environment",
}
GENERIC_TERMINOLOGY_APPROACH = "Professional {lang} terminology appropriate for the content domain"

UI_PATTERN = re.compile(r"\b(click|button|navigate|select|choose|continue|next|previous|start|complete)\b")
TECHNICAL_PATTERN = re.compile(r"\b(api|system|configuration|database|server|technical|setup|install)\b")
EDUCATIONAL_PATTERN = re.compile(r"\b(lesson|course|learning|training|module|chapter|quiz|student|learn)\b")
CORPORATE_PATTERN = re.compile(r"\b(company|organization|employee|business|corporate|workplace|team)\b")

_KEYWORD_PATTERNS: Dict[str, List[re.Pattern]] = {
    key: [re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE) for keyword in profile.keywords]
    for key, profile in DOMAINS.items()
}


@dataclass
class PatternAnalysis:
    content_type: str = "Educational/Training Content"
    recommended_tone: str = "Professional"
    target_audience: str = "Learners"
    special_considerations: List[str] = field(default_factory=list)


@dataclass
class DomainClassification:
    primary: str
    description: str
    confidence: int
    weights: Dict[str, int]


def _combined_content(sample_texts: List[str]) -> str:
    return " ".join(sample_texts).lower()


def analyze_content_patterns(sample_texts: List[str]) -> PatternAnalysis:
    """Derive content type, tone, audience and special considerations from keyword groups.

    Rules run in a fixed order: later matches overwrite the scalar fields,
    and every match appends to the considerations list.
    """
    content = _combined_content(sample_texts)
    analysis = PatternAnalysis()

    if UI_PATTERN.search(content):
        analysis.special_considerations.extend(["UI elements", "interaction clarity"])

    if TECHNICAL_PATTERN.search(content):
        analysis.recommended_tone = "Technical"
        analysis.target_audience = "Technical Users"
        analysis.special_considerations.append("technical accuracy")

    if EDUCATIONAL_PATTERN.search(content):
        analysis.content_type = "E-Learning Platform"
        analysis.special_considerations.append("learning flow")

    if CORPORATE_PATTERN.search(content):
        analysis.content_type = "Corporate Training"
        analysis.target_audience = "Employees"
        analysis.recommended_tone = "Professional"

    return analysis


def detect_content_domain(sample_texts: List[str]) -> DomainClassification:
    """Pick the domain whose keywords match most often, with a confidence score."""
    content = _combined_content(sample_texts)

    weights = {
        key: sum(len(pattern.findall(content)) for pattern in _KEYWORD_PATTERNS[key])
        for key in DOMAIN_ORDER
    }

    primary = DOMAIN_ORDER[0]
    for key in DOMAIN_ORDER[1:]:
        if weights[key] > weights[primary]:
            primary = key

    max_weight = weights[primary]
    if max_weight > 0:
        # halves round up
        confidence = min(math.floor(max_weight / len(sample_texts) * 100 + 0.5), MAX_CONFIDENCE)
    else:
        confidence = DEFAULT_CONFIDENCE

    return DomainClassification(
        primary=primary,
        description=DOMAINS[primary].name,
        confidence=confidence,
        weights=weights,
    )


def get_terminology_approach(domain: str, target_lang: str) -> str:
    template = TERMINOLOGY_APPROACHES.get(domain, GENERIC_TERMINOLOGY_APPROACH)
    return template.format(lang=target_lang)
