"""Health, row counts and guidance telemetry."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from deps import get_db, get_llm_service
from llm_service import LLMService
from models import Feedback, QuizResult, Reminder, SpiritualTodo, UserSubmission
from schemas import StatsResponse
from telemetry import read_telemetry_summary

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
async def api_health(llm: LLMService = Depends(get_llm_service)):
    return {
        "status": "ok",
        "message": "Rooh da Safar API is running",
        "openai": {"environmentKey": llm.is_configured()},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: Session = Depends(get_db)):
    return StatsResponse(
        submissions=db.query(UserSubmission).count(),
        todos=db.query(SpiritualTodo).count(),
        quiz_results=db.query(QuizResult).count(),
        feedback=db.query(Feedback).count(),
        reminders=db.query(Reminder).count(),
    )


@router.get("/telemetry/summary")
async def get_telemetry_summary(hours: int = 24, limit: int = 6):
    """Return telemetry counters and recent events for guidance generation."""
    return read_telemetry_summary(hours=hours, limit=limit)
