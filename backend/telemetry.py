"""Guidance telemetry: JSON-lines event log and a windowed summary."""

import json
import os
from collections import Counter, deque
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Iterator, Optional

from text_utils import normalize_whitespace

_BACKEND_DIR = Path(__file__).resolve().parent

EVENT_SUBMITTED = "guidance_submitted"
EVENT_FALLBACK = "guidance_fallback"
EVENT_LLM_ERROR = "llm_error"


def telemetry_path() -> Path:
    # Absolute values win over the backend directory in the join
    name = os.getenv("GUIDANCE_TELEMETRY_LOG") or "guidance_telemetry.log"
    return _BACKEND_DIR / name


def telemetry_enabled() -> bool:
    raw = os.getenv("GUIDANCE_TELEMETRY_ENABLED") or "1"
    return raw.strip().lower() in ("1", "true", "yes", "on")


def append_event(event: str, payload: Optional[dict] = None) -> None:
    if not telemetry_enabled():
        return
    line = json.dumps(
        {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": normalize_whitespace(event or "event"),
            "payload": payload or {},
        },
        ensure_ascii=False,
    )
    try:
        path = telemetry_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as exc:
        # Telemetry must never fail a request
        print(f"[telemetry] write failed: {exc}")


def _read_events(path: Path, stats: dict) -> Iterator[dict]:
    """Yield decoded lines; undecodable ones bump ``stats['parse_errors']``."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            raw = line.strip()
            if not raw:
                continue
            try:
                item = json.loads(raw)
            except ValueError:
                stats["parse_errors"] += 1
                continue
            if isinstance(item, dict):
                yield item
            else:
                stats["parse_errors"] += 1


def _event_time(item: dict) -> Optional[datetime]:
    try:
        ts = datetime.fromisoformat(str(item.get("ts") or "").replace("Z", "+00:00"))
    except ValueError:
        return None
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def read_telemetry_summary(hours: int = 24, limit: int = 6) -> dict:
    window = max(1, min(168, int(hours or 24)))
    keep = max(1, min(25, int(limit or 6)))
    now_utc = datetime.now(timezone.utc)
    cutoff = now_utc - timedelta(hours=window)

    counts: Counter = Counter()
    categories: Counter = Counter()
    issues: Counter = Counter()
    recent: deque = deque(maxlen=keep)
    stats = {"parse_errors": 0}
    path = telemetry_path()
    file_exists = path.exists()

    if file_exists:
        try:
            for item in _read_events(path, stats):
                ts = _event_time(item)
                if ts is None or ts < cutoff:
                    continue
                event = normalize_whitespace(str(item.get("event") or "")) or "event"
                payload = item.get("payload") if isinstance(item.get("payload"), dict) else {}
                counts[event] += 1

                if event == EVENT_SUBMITTED:
                    categories[normalize_whitespace(str(payload.get("category") or "")) or "unknown"] += 1
                elif event == EVENT_FALLBACK and isinstance(payload.get("issues"), list):
                    issues.update(k for k in (normalize_whitespace(str(i or "")) for i in payload["issues"]) if k)

                recent.append({"ts": ts.isoformat(), "event": event, "payload": payload})
        except OSError as exc:
            print(f"[telemetry] read failed: {exc}")

    submitted = counts[EVENT_SUBMITTED]
    fallback_rate = round(counts[EVENT_FALLBACK] * 100.0 / submitted, 2) if submitted else 0.0

    return {
        "status": "ok",
        "now_utc": now_utc.isoformat(),
        "window_hours": window,
        "telemetry_enabled": telemetry_enabled(),
        "file_exists": file_exists,
        "file_path": path.name,
        "counts": dict(counts),
        "category_counts": dict(categories),
        "issue_counts": dict(issues),
        "fallback_rate_percent": fallback_rate,
        "llm_error_count": counts[EVENT_LLM_ERROR],
        "recent": list(recent),
        "parse_errors": stats["parse_errors"],
    }
