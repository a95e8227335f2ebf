"""
Daily Hukamnama fetch, formatting, and per-day cache.
"""

from datetime import date, datetime, timezone
from typing import Optional

import httpx

from config import HUKAMNAMA_API_URL, HUKAMNAMA_TIMEOUT_SEC
from schemas import HukamnamaResponse
from telemetry import append_event


class HukamnamaUnavailable(Exception):
    """Raised when an archived Hukamnama cannot be fetched."""


DAILY_ACTIONS = [
    "Reflect on the meaning of today's Hukamnama",
    "Share the wisdom with someone who might benefit",
    "Apply the teachings in your daily life",
]

ARCHIVE_ACTIONS = [
    "Reflect on the meaning of this Hukamnama",
    "Share the wisdom with someone who might benefit",
    "Apply the teachings in your daily life",
]

FALLBACK_ACTIONS = [
    "Spend 15 minutes in Naam Simran meditation",
    "Work honestly and diligently in your daily tasks",
    "Help others find spiritual peace through your example",
]

FALLBACK_HUKAMNAMA = {
    "gurmukhi": "ਜੈਤਸਰੀ ਮਹਲਾ ੪ ਘਰੁ ੧ ਚਉਪਦੇ ॥ ੴ ਸਤਿਗੁਰ ਪ੍ਰਸਾਦਿ ॥ ਮੇਰੇ ਹੀਅਰੇ ਰਤਨੁ ਨਾਮੁ ਹਰਿ ਬਸਿਆ ਗੁਰਿ ਹਾਥੁ ਧਰਿਓ ਮੇਰੈ ਮਾਥਾ ॥",
    "punjabi": (
        "Jaitsree, Fourth Mehl, First House, Chau-Padas: One Universal Creator God. "
        "By The Grace Of The True Guru: The Jewel of the Lord's Name abides within my heart; "
        "the Guru has placed His hand on my forehead."
    ),
    "english": (
        "Jaitsree, Fourth Mehl, First House, Chau-Padas: One Universal Creator God. "
        "By The Grace Of The True Guru: The Jewel of the Lord's Name abides within my heart; "
        "the Guru has placed His hand on my forehead."
    ),
    "audioLinks": {
        "gurmukhi": "https://www.sikhnet.com/audio/hukamnama/gurmukhi/today.mp3",
        "english": "https://www.sikhnet.com/audio/hukamnama/english/today.mp3",
        "punjabi": "https://www.sikhnet.com/audio/hukamnama/punjabi/today.mp3",
    },
    "source": "Ang 696",
    "pageNumber": "696",
    "writer": "Guru Ram Das Ji",
    "raag": "Jaitsree",
}


def display_date(day: date) -> str:
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def format_hukamnama(data: dict, fallback_date: str, explanation: str, actions: list[str]) -> HukamnamaResponse:
    audio = data.get("audioLinks") if isinstance(data.get("audioLinks"), dict) else {}
    return HukamnamaResponse(
        date=str(data.get("date") or fallback_date),
        hukamnama={
            "gurmukhi": str(data.get("gurmukhi") or ""),
            "transliteration": str(data.get("punjabi") or ""),
            "translation": str(data.get("english") or ""),
            "explanation": explanation,
            "actions": list(actions),
            "source": str(data.get("source") or ""),
            "pageNumber": str(data.get("pageNumber") or ""),
            "writer": str(data.get("writer") or ""),
            "raag": str(data.get("raag") or ""),
            "audioLinks": {k: str(audio.get(k) or "") for k in ("gurmukhi", "english", "punjabi")},
        },
    )


class DailyCache:
    """Holds one value for one calendar day."""

    def __init__(self):
        self._day: Optional[date] = None
        self._value = None

    def get(self, day: date):
        if self._day == day:
            return self._value
        return None

    def set(self, day: date, value) -> None:
        self._day = day
        self._value = value

    def clear(self) -> None:
        self._day = None
        self._value = None


class HukamnamaService:
    def __init__(
        self,
        base_url: str = HUKAMNAMA_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = HUKAMNAMA_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self.cache = DailyCache()

    async def _fetch(self, path: str) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.get(f"{self.base_url}/{path}")
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict) or not data.get("gurmukhi"):
            raise ValueError("Hukamnama payload missing gurmukhi")
        return data

    async def get_daily(self, today: Optional[date] = None) -> HukamnamaResponse:
        day = today or datetime.now(timezone.utc).date()
        cached = self.cache.get(day)
        if cached is not None:
            return cached

        try:
            data = await self._fetch("today")
        except Exception as exc:
            print(f"[hukamnama] Error getting daily Hukamnama: {exc}")
            append_event("hukamnama_fallback", {"detail": str(exc)[:200]})
            # Not cached, so the next request retries the fetch
            return format_hukamnama(
                FALLBACK_HUKAMNAMA,
                display_date(day),
                "This is a fallback Hukamnama as we couldn't connect to SikhNet.",
                FALLBACK_ACTIONS,
            )

        result = format_hukamnama(
            data,
            display_date(day),
            "This is today's Hukamnama from Sri Harmandir Sahib, Amritsar.",
            DAILY_ACTIONS,
        )
        self.cache.set(day, result)
        return result

    async def get_by_date(self, year: int, month: int, day: int) -> HukamnamaResponse:
        try:
            requested = date(int(year), int(month), int(day))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid date: {year}-{month}-{day}") from exc

        try:
            data = await self._fetch(f"{requested.year:04d}/{requested.month:02d}/{requested.day:02d}")
        except Exception as exc:
            print(f"[hukamnama] Error getting Hukamnama by date: {exc}")
            raise HukamnamaUnavailable("Failed to get Hukamnama for the specified date") from exc

        label = display_date(requested)
        return format_hukamnama(data, label, f"This is the Hukamnama from {label}.", ARCHIVE_ACTIONS)


hukamnama_service = HukamnamaService()
