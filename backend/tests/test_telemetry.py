import json

from telemetry import append_event, read_telemetry_summary


def test_disabled_telemetry_writes_nothing(tmp_path, monkeypatch):
    log = tmp_path / "telemetry.log"
    monkeypatch.setenv("GUIDANCE_TELEMETRY_LOG", str(log))
    monkeypatch.setenv("GUIDANCE_TELEMETRY_ENABLED", "0")
    append_event("guidance_submitted", {"category": "growth"})
    assert not log.exists()


def test_summary_counts_events(tmp_path, monkeypatch):
    log = tmp_path / "telemetry.log"
    monkeypatch.setenv("GUIDANCE_TELEMETRY_LOG", str(log))
    monkeypatch.setenv("GUIDANCE_TELEMETRY_ENABLED", "1")

    append_event("guidance_submitted", {"category": "difficulty"})
    append_event("guidance_submitted", {"category": "difficulty"})
    append_event("guidance_submitted", {"category": "gratitude"})
    append_event("guidance_fallback", {"category": "difficulty", "issues": ["parse_error"]})
    append_event("llm_error", {"type": "auth", "detail": "Invalid API key"})
    with open(log, "a", encoding="utf-8") as f:
        f.write("not json\n")

    summary = read_telemetry_summary(hours=1, limit=2)
    assert summary["telemetry_enabled"] is True
    assert summary["counts"]["guidance_submitted"] == 3
    assert summary["category_counts"] == {"difficulty": 2, "gratitude": 1}
    assert summary["issue_counts"] == {"parse_error": 1}
    assert summary["fallback_rate_percent"] == 33.33
    assert summary["llm_error_count"] == 1
    assert summary["parse_errors"] == 1
    assert [e["event"] for e in summary["recent"]] == ["guidance_fallback", "llm_error"]


def test_old_events_fall_outside_window(tmp_path, monkeypatch):
    log = tmp_path / "telemetry.log"
    monkeypatch.setenv("GUIDANCE_TELEMETRY_LOG", str(log))
    log.write_text(
        json.dumps({"ts": "2020-01-01T00:00:00+00:00", "event": "guidance_submitted", "payload": {}}) + "\n",
        encoding="utf-8",
    )
    summary = read_telemetry_summary(hours=24)
    assert summary["counts"] == {}
    assert summary["fallback_rate_percent"] == 0.0
