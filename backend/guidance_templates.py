"""
Feeling classification and prompt templates for Gurbani guidance.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Category(str, Enum):
    DIFFICULTY = "difficulty"
    GRATITUDE = "gratitude"
    GROWTH = "growth"
    STANDARD = "standard"


# Checked in this order; the first set with a hit wins.
DIFFICULTY_KEYWORDS = (
    "sad",
    "anxious",
    "worried",
    "stressed",
    "depressed",
    "angry",
    "frustrated",
    "lost",
    "confused",
)
GRATITUDE_KEYWORDS = ("happy", "grateful", "thankful", "blessed", "joyful", "excited", "peaceful")
GROWTH_KEYWORDS = ("spiritual", "grow", "learn", "develop", "progress", "enlighten", "meditate")

CATEGORY_PRECEDENCE = (
    (Category.DIFFICULTY, DIFFICULTY_KEYWORDS),
    (Category.GRATITUDE, GRATITUDE_KEYWORDS),
    (Category.GROWTH, GROWTH_KEYWORDS),
)


RESPONSE_FORMAT = """
    Respond with JSON in this format:
    {
      "gurbaniTuk": {
        "gurmukhi": "Authentic Gurbani verse in Gurmukhi script",
        "transliteration": "Roman transliteration",
        "translation": "English translation",
        "source": "Ang number, Sri Guru Granth Sahib Ji",
        "raag": "Raag of the shabad, if known"
      },
      "actions": ["Action 1", "Action 2", "Action 3"],
      "ardaas": "Suggested prayer",
      "explanation": "How this Gurbani relates to their feeling"
    }

    Only quote authentic Gurbani and always cite the Ang it appears on in "source".
"""


TEMPLATE_CONFIGS: Dict[Category, Dict[str, str]] = {
    Category.STANDARD: {
        "name": "Standard Guidance",
        "opening": 'You are a wise Sikh spiritual guide. A person feels: "{feeling}".',
        "focus": "Provide guidance based on Gurbani with practical actions and a suggested Ardaas.",
        "actions": "",
    },
    Category.DIFFICULTY: {
        "name": "Times of Difficulty",
        "opening": 'You are a compassionate Sikh spiritual counselor. Someone is going through difficulty: "{feeling}".',
        "focus": "Focus on Gurbani verses about resilience, faith during hardship, and Waheguru's support.",
        "actions": "Include actions that provide comfort and strength.",
    },
    Category.GRATITUDE: {
        "name": "Gratitude & Joy",
        "opening": 'You are a joyful Sikh guide. Someone is feeling grateful: "{feeling}".',
        "focus": "Focus on Gurbani about thankfulness, sharing blessings, and expressing gratitude to Waheguru.",
        "actions": "Include actions about seva and sharing joy with others.",
    },
    Category.GROWTH: {
        "name": "Spiritual Growth",
        "opening": 'You are a Sikh teacher focused on spiritual development. Someone seeks growth: "{feeling}".',
        "focus": "Focus on Gurbani about spiritual progress, discipline, and the path to enlightenment.",
        "actions": "Include actions about meditation, study, and spiritual practices.",
    },
}


@dataclass(frozen=True)
class PromptSelection:
    category: Category
    prompt: str


def classify_feeling(feeling: str) -> Category:
    lowered = (feeling or "").lower()
    for category, keywords in CATEGORY_PRECEDENCE:
        if any(k in lowered for k in keywords):
            return category
    return Category.STANDARD


def parse_category(value: Optional[str]) -> Optional[Category]:
    """Map a user-supplied category name to a Category, or None if unknown."""
    low = (value or "").strip().lower()
    if not low:
        return None
    try:
        return Category(low)
    except ValueError:
        return None


def build_prompt(category: Category, feeling: str) -> str:
    config = TEMPLATE_CONFIGS[category]
    # str.replace keeps braces inside the feeling text intact
    lines = [config["opening"].replace("{feeling}", feeling), "", config["focus"]]
    if config["actions"]:
        lines.append(config["actions"])
    body = "\n    ".join(lines)
    return f"\n    {body}\n{RESPONSE_FORMAT}"


def select_prompt_template(feeling: str, category: Optional[Category] = None) -> PromptSelection:
    chosen = category or classify_feeling(feeling)
    return PromptSelection(category=chosen, prompt=build_prompt(chosen, feeling))


def get_all_categories() -> list[str]:
    return [c.value for c in Category]
