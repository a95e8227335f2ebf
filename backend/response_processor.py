"""Validation and backfill for generator guidance output.

The generator is untrusted: its text may not be JSON, may be missing keys,
or may quote something that is not Gurmukhi at all. Every path through
``normalize_guidance`` ends in a fully populated ``GuidanceResponse`` built
from the generator's fields where they pass and the category defaults where
they do not.

The Gurmukhi check is a shallow syntactic gate (Unicode block plus a minimum
length). It says nothing about whether the verse is real Gurbani.
"""

import json
import re
from typing import Optional

from guidance_templates import Category, classify_feeling
from schemas import GuidanceResponse, GurbaniTuk
from text_utils import clean_str, contains_any, contains_gurmukhi, strip_surrogates

REQUIRED_KEYS = ("gurbaniTuk", "actions", "ardaas")

MAX_GENERATED_ACTIONS = 4
MAX_ACTIONS = 5
MIN_GURMUKHI_LENGTH = 5

NAAM_SIMRAN_REMINDER = "ਵਾਹਿਗੁਰੂ - Recite Waheguru and practice Naam Simran for 15 minutes"
CORE_PRACTICE_KEYWORDS = ("naam simran", "meditation", "waheguru")

ARDAAS_GREETING = "ਵਾਹਿਗੁਰੂ ਜੀ"
_LEADING_GREETING_RE = re.compile(
    r"^\s*(?:waheguru|ਵਾਹਿਗੁਰੂ)(?![\w'’])"
    # "Waheguru Ji's grace ..." is a sentence, not a greeting
    r"(?![\s-]*(?:ji|ਜੀ)['’])"
    r"(?:[\s-]*(?:ji|ਜੀ)(?!\w))?\s*[,!.]?\s*",
    re.IGNORECASE,
)

DEFAULT_VERSES: dict[Category, GurbaniTuk] = {
    Category.DIFFICULTY: GurbaniTuk(
        gurmukhi="ਸਭਨਾ ਜੀਆ ਕਾ ਇਕੁ ਦਾਤਾ ਸੋ ਮੈ ਵਿਸਰਿ ਨ ਜਾਈ ॥",
        transliteration="Sabhnaa jeeaa kaa ik daataa so mai visar na jaaee.",
        translation="The One Lord is the Giver of all souls; may I never forget Him.",
        source="Ang 2, Guru Granth Sahib Ji",
    ),
    Category.GRATITUDE: GurbaniTuk(
        gurmukhi="ਧਨਿ ਧਨਿ ਰਾਮਦਾਸ ਗੁਰੁ ਜਿਨਿ ਸਿਰਿਆ ਤਿਨੈ ਸਵਾਰਿਆ ॥",
        transliteration="Dhan dhan Raamdaas Gur jin siriaa tinai savaariaa.",
        translation="Blessed, blessed is Guru Ram Das; He who created You, has also exalted You.",
        source="Ang 1406, Guru Granth Sahib Ji",
    ),
    Category.GROWTH: GurbaniTuk(
        gurmukhi="ਮਨ ਤੂੰ ਜੋਤਿ ਸਰੂਪੁ ਹੈ ਆਪਣਾ ਮੂਲੁ ਪਛਾਣੁ ॥",
        transliteration="Man toon jot saroop hai aapnaa mool pachhaan.",
        translation="O my mind, you are the embodiment of the Divine Light; recognize your own origin.",
        source="Ang 441, Guru Granth Sahib Ji",
    ),
    Category.STANDARD: GurbaniTuk(
        gurmukhi="ਸਰਬੱਤ ਦਾ ਭਲਾ ਕਰੇ ਵਾਹਿਗੁਰੂ ॥",
        transliteration="Sarbat da bhala kare Waheguru.",
        translation="May Waheguru bless all with prosperity and peace.",
        source="Sikh Prayer Tradition",
    ),
}

DEFAULT_ACTIONS: dict[Category, tuple[str, ...]] = {
    Category.DIFFICULTY: (
        "ਵਾਹਿਗੁਰੂ - Practice Naam Simran meditation for 15 minutes",
        "Read Sukhmani Sahib for peace and tranquility",
        "Read today's Hukamnama and reflect on its meaning",
        "Connect with Sangat (spiritual community) for support",
    ),
    Category.GRATITUDE: (
        "ਵਾਹਿਗੁਰੂ - Practice Naam Simran meditation for 15 minutes",
        "Share your blessings through seva (selfless service)",
        "Read today's Hukamnama and reflect on its meaning",
        "Offer an Ardaas of thanks (shukrana) before sleeping",
    ),
    Category.GROWTH: (
        "ਵਾਹਿਗੁਰੂ - Practice Naam Simran meditation for 15 minutes",
        "Recite Japji Sahib at Amrit Vela (early morning)",
        "Read 5 pages of Guru Granth Sahib and note one teaching",
        "Perform an act of seva (selfless service) for someone in need",
    ),
    Category.STANDARD: (
        "ਵਾਹਿਗੁਰੂ - Practice Naam Simran meditation for 15 minutes",
        "Read today's Hukamnama and reflect on its meaning",
        "Perform an act of seva (selfless service) for someone in need",
        "Connect with Sangat (spiritual community) for support",
    ),
}

DEFAULT_ARDAAS: dict[Category, str] = {
    Category.DIFFICULTY: (
        "please grant me peace, clarity, and strength to navigate this moment with grace. "
        "Help me remember that You are with me in every hardship. ਸਰਬੱਤ ਦਾ ਭਲਾ।"
    ),
    Category.GRATITUDE: (
        "thank You for the blessings You have showered upon me. "
        "Keep me humble and let me share this joy through seva. ਸਰਬੱਤ ਦਾ ਭਲਾ।"
    ),
    Category.GROWTH: (
        "guide my steps on the path of Naam. Bless me with discipline in my practice "
        "and the wisdom to live by Your Hukam. ਸਰਬੱਤ ਦਾ ਭਲਾ।"
    ),
    Category.STANDARD: (
        "please grant me peace, clarity, and strength to navigate this moment with grace. "
        "Help me find wisdom in Your teachings and comfort in Your presence. ਸਰਬੱਤ ਦਾ ਭਲਾ।"
    ),
}

DEFAULT_EXPLANATIONS: dict[Category, str] = {
    Category.DIFFICULTY: (
        "This Gurbani reminds us that Waheguru is the Giver of all and never leaves us. "
        "In hard moments, remembering the One who sustains every soul brings steadiness and hope."
    ),
    Category.GRATITUDE: (
        "This Gurbani celebrates the Guru's grace. Gratitude in Sikhi is expressed by "
        "remembering the Giver and sharing what we have been given with others."
    ),
    Category.GROWTH: (
        "This Gurbani calls the mind back to its divine origin. Spiritual growth begins "
        "by recognizing the Light within and nurturing it through Naam, seva and study."
    ),
    Category.STANDARD: (
        "This Gurbani verse provides divine guidance for your current emotional state. "
        "The teachings of our Gurus offer wisdom and comfort for every situation we face in life."
    ),
}


def is_valid_gurmukhi(text: str) -> bool:
    return contains_gurmukhi(text) and len(text) > MIN_GURMUKHI_LENGTH


def ardaas_greeting(feeling: str) -> str:
    return f"{ARDAAS_GREETING}, as I share that I feel {strip_surrogates(feeling).lower()}, "


def personalize_ardaas(ardaas: str, feeling: str, category: Category = Category.STANDARD) -> str:
    body = _LEADING_GREETING_RE.sub("", clean_str(ardaas), count=1).strip()
    if not body:
        body = DEFAULT_ARDAAS[category]
    return ardaas_greeting(feeling) + body


def _bonus_action(feeling: str) -> Optional[str]:
    lowered = (feeling or "").lower()
    if "anxious" in lowered or "worried" in lowered:
        return "Read Sukhmani Sahib for peace and tranquility"
    if "grateful" in lowered or "happy" in lowered:
        return "Share your blessings through seva (selfless service)"
    return None


def enhance_actions(actions: list, feeling: str) -> list[str]:
    items = [clean_str(a) for a in actions]
    items = [a for a in items if a][:MAX_GENERATED_ACTIONS]
    had_generated = bool(items)

    if not any(contains_any(a, CORE_PRACTICE_KEYWORDS) for a in items):
        items.insert(0, NAAM_SIMRAN_REMINDER)

    # Only an empty generator list gets a feeling-specific extra
    if not had_generated:
        bonus = _bonus_action(feeling)
        if bonus:
            items.append(bonus)

    return items[:MAX_ACTIONS]


def fallback_response(feeling: str, category: Category) -> GuidanceResponse:
    return GuidanceResponse(
        gurbani_tuk=DEFAULT_VERSES[category],
        actions=list(DEFAULT_ACTIONS[category]),
        ardaas=personalize_ardaas(DEFAULT_ARDAAS[category], feeling, category),
        explanation=DEFAULT_EXPLANATIONS[category],
    )


def _normalize_verse(raw: dict, category: Category, issues: list[str]) -> GurbaniTuk:
    default = DEFAULT_VERSES[category]
    gurmukhi = clean_str(raw.get("gurmukhi"))
    if not is_valid_gurmukhi(gurmukhi):
        print(f"[guidance] Invalid Gurmukhi detected, using {category.value} fallback verse")
        issues.append("invalid_gurmukhi")
        return default

    values = {}
    for field in ("transliteration", "translation", "source"):
        value = clean_str(raw.get(field))
        if not value:
            issues.append(f"missing_field:{field}")
            value = getattr(default, field)
        values[field] = value

    return GurbaniTuk(gurmukhi=gurmukhi, raag=clean_str(raw.get("raag")) or None, **values)


def normalize_guidance(
    raw_text: str,
    feeling: str,
    category: Optional[Category] = None,
) -> tuple[GuidanceResponse, list[str]]:
    """Return guidance plus the list of recoveries that were needed.

    ``category`` should be the one the prompt was built for; when omitted it
    is derived from ``feeling`` with the same classifier.
    """
    chosen = category or classify_feeling(feeling)
    issues: list[str] = []

    try:
        parsed = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError) as exc:
        print(f"[guidance] Error processing response: {exc}")
        return fallback_response(feeling, chosen), ["parse_error"]

    if not isinstance(parsed, dict):
        print("[guidance] Error processing response: top-level JSON is not an object")
        return fallback_response(feeling, chosen), ["parse_error"]

    if any(parsed.get(k) is None for k in REQUIRED_KEYS) or not isinstance(parsed["gurbaniTuk"], dict):
        print("[guidance] Incomplete response structure, using fallback")
        return fallback_response(feeling, chosen), ["incomplete_structure"]

    verse = _normalize_verse(parsed["gurbaniTuk"], chosen, issues)

    raw_actions = parsed["actions"]
    if isinstance(raw_actions, list):
        actions = enhance_actions(raw_actions, feeling)
        if not any(clean_str(a) for a in raw_actions):
            issues.append("missing_actions")
        elif actions[0] == NAAM_SIMRAN_REMINDER:
            issues.append("added_naam_simran")
    else:
        issues.append("missing_actions")
        actions = list(DEFAULT_ACTIONS[chosen])

    ardaas = clean_str(parsed.get("ardaas"))
    if not ardaas:
        issues.append("missing_field:ardaas")
        ardaas = DEFAULT_ARDAAS[chosen]

    explanation = clean_str(parsed.get("explanation"))
    if not explanation:
        issues.append("missing_field:explanation")
        explanation = DEFAULT_EXPLANATIONS[chosen]

    guidance = GuidanceResponse(
        gurbani_tuk=verse,
        actions=actions,
        ardaas=personalize_ardaas(ardaas, feeling, chosen),
        explanation=explanation,
    )
    return guidance, issues


def process_guidance_response(
    raw_text: str,
    feeling: str,
    category: Optional[Category] = None,
) -> GuidanceResponse:
    guidance, _ = normalize_guidance(raw_text, feeling, category)
    return guidance
