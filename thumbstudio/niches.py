"""
Content categories (niches) and the per-niche prompt styles and default fonts.
"""

from enum import Enum

from .errors import InputInvalid


class Niche(str, Enum):
    MYSTERY = "Mystery & Dark History"
    FINANCE = "Finance & Wealth"
    AI_SCIENCE = "AI & Future Science"
    DOCUMENTARY = "Cinematic Documentary"
    FACTS = "Mind-Blowing Facts"
    GROWTH = "YouTube Growth"
    CREATOR_ED = "Creator Education"
    GAMING = "Gaming & Esports"


DEFAULT_NICHE = Niche.MYSTERY

NICHE_STYLES = {
    Niche.MYSTERY: "Style: Noir mystery, eerie lighting, dark shadows, cold/hot contrast.",
    Niche.FINANCE: "Style: Premium, wealth, sleek dark surfaces, glowing gold accents.",
    Niche.AI_SCIENCE: "Style: Futuristic, glowing neural networks, tech-noir aesthetics.",
    Niche.DOCUMENTARY: "Style: Gritty realism, high-detail textures, dramatic cinematic grading.",
    Niche.FACTS: "Style: Mind-blowing scale, surreal vibrant colors, energy glows.",
    Niche.GROWTH: "Style: Urgent, high energy, red/black high-contrast palette.",
    Niche.CREATOR_ED: "Style: Clean pro studio, minimalist lighting, elegant composition.",
    Niche.GAMING: "Style: Intense neon RGB, futuristic hardware vibes, high-energy glow.",
}


def parse_niche(value) -> Niche:
    """
    Resolve a niche from its enum value, member name or a loose spelling.

    Accepts "Gaming & Esports", "GAMING", "gaming" or "ai_science".
    """
    if isinstance(value, Niche):
        return value
    text = str(value or "").strip()
    if not text:
        raise InputInvalid("Category is required")
    lowered = text.lower()
    for niche in Niche:
        if lowered in (niche.value.lower(), niche.name.lower()):
            return niche
    key = lowered.replace("-", "_").replace(" ", "_")
    for niche in Niche:
        if key == niche.name.lower():
            return niche
    raise InputInvalid(f"Unknown category '{value}'")


def suggest_font(niche: Niche, topic: str) -> str:
    """Pick the default hook font for a niche/topic pair. First rule wins."""
    lower_topic = topic.lower()
    if niche == Niche.MYSTERY or "secret" in lower_topic:
        return "cinzel"
    if niche == Niche.AI_SCIENCE or "tech" in lower_topic:
        return "space-mono"
    if niche in (Niche.GROWTH, Niche.FACTS):
        return "anton"
    return "bebas"
