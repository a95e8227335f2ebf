"""Low-level text helpers used by the guidance core.

No dependency on schemas, models, or any other project module.
"""

import re

GURMUKHI_BLOCK_RE = re.compile(r"[\u0A00-\u0A7F]")
# Lone UTF-16 halves decoded from JSON escapes; they cannot be encoded as UTF-8
SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def strip_surrogates(text: str) -> str:
    return SURROGATE_RE.sub("", text or "")


def contains_any(text: str, keywords) -> bool:
    lowered = (text or "").lower()
    return any(k in lowered for k in keywords)


def contains_gurmukhi(text: str) -> bool:
    return bool(GURMUKHI_BLOCK_RE.search(text or ""))


def clean_str(value) -> str:
    """Return a whitespace-normalized, UTF-8 safe string, or "" for non-strings."""
    if not isinstance(value, str):
        return ""
    return normalize_whitespace(strip_surrogates(value))


def preview(text: str, limit: int = 100) -> str:
    raw = normalize_whitespace(text)
    if len(raw) <= limit:
        return raw
    return raw[:limit] + "..."
