"""Rooh check flow: prompt, generate, validate, persist, reward."""

from typing import Optional

from sqlalchemy.orm import Session

from config import ROOH_CHECK_POINTS
from guidance_templates import Category, select_prompt_template
from llm_service import LLMService, is_llm_error, parse_llm_error
from models import SpiritualTodo, User, UserSubmission
from points_service import REASON_ROOH_CHECK, award_points, record_check_in
from response_processor import normalize_guidance
from schemas import GuidanceResponse, GurbaniTuk
from telemetry import append_event
from text_utils import preview


def add_todos_from_actions(db: Session, user_id: int, actions: list[str], source: str) -> int:
    """Add actions to the to-do list, skipping ones already open. Returns how many were added."""
    open_texts = {
        t.text
        for t in db.query(SpiritualTodo)
        .filter(SpiritualTodo.user_id == user_id)
        .filter(SpiritualTodo.completed == False)  # noqa: E712
        .all()
    }
    added = 0
    for action in actions:
        if action in open_texts:
            continue
        db.add(SpiritualTodo(user_id=user_id, text=action, completed=False, source=source))
        open_texts.add(action)
        added += 1
    return added


async def generate_guidance(
    llm: LLMService,
    feeling: str,
    category: Optional[Category] = None,
    api_key: Optional[str] = None,
) -> tuple[Category, GuidanceResponse]:
    selection = select_prompt_template(feeling, category)

    raw = ""
    if llm.is_configured(api_key):
        raw = await llm.generate_guidance(selection.prompt, api_key=api_key)
        if is_llm_error(raw):
            err = parse_llm_error(raw)
            print(f"[guidance] LLM error: type={err.get('type')} detail={err.get('detail')}")
            append_event("llm_error", err)
            raw = ""
        else:
            print(f"[guidance] LLM response received: {preview(raw)}")
    else:
        print("[guidance] No API key found, using fallback response")

    guidance, issues = normalize_guidance(raw, feeling, selection.category)
    append_event("guidance_submitted", {"category": selection.category.value})
    if issues:
        append_event("guidance_fallback", {"category": selection.category.value, "issues": issues})
    return selection.category, guidance


async def submit_feeling(
    db: Session,
    llm: LLMService,
    feeling: str,
    user: Optional[User] = None,
    category: Optional[Category] = None,
    api_key: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> UserSubmission:
    chosen, guidance = await generate_guidance(llm, feeling, category, api_key)
    user_id = user.id if user else None

    points = 0
    if user is not None:
        record_check_in(user)
        points = award_points(db, user, REASON_ROOH_CHECK, ROOH_CHECK_POINTS)

    submission = UserSubmission(
        user_id=user_id,
        feeling=feeling,
        category=chosen.value,
        gurbani_tuk=guidance.gurbani_tuk.gurmukhi,
        transliteration=guidance.gurbani_tuk.transliteration,
        translation=guidance.gurbani_tuk.translation,
        source=guidance.gurbani_tuk.source,
        raag=guidance.gurbani_tuk.raag,
        explanation=guidance.explanation,
        actions=list(guidance.actions),
        ardaas=guidance.ardaas,
        seva_points=points,
        user_agent=(user_agent or "")[:255] or None,
    )
    db.add(submission)
    if user is not None:
        add_todos_from_actions(db, user_id, list(guidance.actions), source="rooh-check")
    db.commit()
    db.refresh(submission)
    return submission


def guidance_from_submission(row: UserSubmission) -> GuidanceResponse:
    return GuidanceResponse(
        gurbani_tuk=GurbaniTuk(
            gurmukhi=row.gurbani_tuk,
            transliteration=row.transliteration,
            translation=row.translation,
            source=row.source,
            raag=row.raag,
        ),
        actions=list(row.actions or []),
        ardaas=row.ardaas,
        explanation=row.explanation,
    )


def get_last_submission(db: Session, user_id: int) -> Optional[UserSubmission]:
    return (
        db.query(UserSubmission)
        .filter(UserSubmission.user_id == user_id)
        .order_by(UserSubmission.created_at.desc(), UserSubmission.id.desc())
        .first()
    )


def get_recent_submissions(db: Session, user_id: int, limit: int = 10) -> list[UserSubmission]:
    take = max(1, min(int(limit or 10), 50))
    return (
        db.query(UserSubmission)
        .filter(UserSubmission.user_id == user_id)
        .order_by(UserSubmission.created_at.desc(), UserSubmission.id.desc())
        .limit(take)
        .all()
    )
