"""Environment-backed settings shared by the API, services and scripts."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load backend/.env early so every module sees the same values.
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def _env_int(name: str, default: int, min_value: int, max_value: int) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_float(name: str, default: float, min_value: float, max_value: float) -> float:
    raw = os.getenv(name)
    try:
        value = float(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def cors_origins() -> list[str]:
    raw = _env("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000,http://127.0.0.1:8000")
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


# Seva point rules
ROOH_CHECK_POINTS = _env_int("ROOH_CHECK_POINTS", 5, 0, 100)
HUKAMNAMA_READ_POINTS = _env_int("HUKAMNAMA_READ_POINTS", 10, 0, 100)
QUIZ_POINTS_PER_CORRECT = _env_int("QUIZ_POINTS_PER_CORRECT", 3, 0, 100)
ARDAAS_POINTS = _env_int("ARDAAS_POINTS", 5, 0, 100)
FEEDBACK_POINTS = _env_int("FEEDBACK_POINTS", 5, 0, 100)
WEEKLY_GOAL = _env_int("WEEKLY_SEVA_GOAL", 100, 10, 10000)

HUKAMNAMA_API_URL = (_env("HUKAMNAMA_API_URL", "https://api.sikhnet.com/v1/hukamnama") or "").rstrip("/")
HUKAMNAMA_TIMEOUT_SEC = _env_float("HUKAMNAMA_TIMEOUT_SEC", 10.0, 1.0, 60.0)
