"""Rooh check routes: submit a feeling, read back guidance, offer ardaas."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from config import ARDAAS_POINTS
from deps import get_db, get_current_user, get_optional_user, get_llm_service
from guidance_service import (
    get_last_submission,
    get_recent_submissions,
    guidance_from_submission,
    submit_feeling,
)
from guidance_templates import get_all_categories, parse_category, select_prompt_template
from llm_service import LLMService
from models import User, UserSubmission
from points_service import REASON_ARDAAS, already_awarded_today, award_points
from schemas import (
    FeelingRequest,
    PointsAwardResponse,
    PromptPreviewResponse,
    SubmissionResponse,
)

router = APIRouter(prefix="/api/guidance", tags=["guidance"])


def _submission_response(row: UserSubmission) -> SubmissionResponse:
    return SubmissionResponse(
        id=row.id,
        user_id=row.user_id,
        feeling=row.feeling,
        category=row.category,
        guidance=guidance_from_submission(row),
        seva_points=row.seva_points or 0,
        created_at=row.created_at,
    )


def _requested_category(value: Optional[str]):
    if value in (None, ""):
        return None
    category = parse_category(value)
    if category is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid category. Valid categories: {', '.join(get_all_categories())}",
        )
    return category


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_guidance(
    body: FeelingRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    llm: LLMService = Depends(get_llm_service),
):
    category = _requested_category(body.category)
    row = await submit_feeling(
        db,
        llm,
        body.feeling,
        user=user,
        category=category,
        api_key=body.api_key,
        user_agent=request.headers.get("user-agent"),
    )
    return _submission_response(row)


@router.post("/preview", response_model=PromptPreviewResponse)
async def preview_prompt(body: FeelingRequest):
    selection = select_prompt_template(body.feeling, _requested_category(body.category))
    return PromptPreviewResponse(category=selection.category.value, prompt=selection.prompt)


@router.get("/last", response_model=SubmissionResponse)
async def last_guidance(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    row = get_last_submission(db, user.id)
    if not row:
        raise HTTPException(status_code=404, detail="No guidance yet. Share how you feel first.")
    return _submission_response(row)


@router.get("/recent", response_model=List[SubmissionResponse])
async def recent_guidance(
    limit: int = 10,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = get_recent_submissions(db, user.id, limit)
    return [_submission_response(r) for r in rows]


@router.post("/ardaas", response_model=PointsAwardResponse)
async def offer_ardaas(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if already_awarded_today(db, user.id, REASON_ARDAAS):
        raise HTTPException(status_code=409, detail="Ardaas points already added today")
    awarded = award_points(db, user, REASON_ARDAAS, ARDAAS_POINTS, once_per_day=True)
    db.commit()
    db.refresh(user)
    return PointsAwardResponse(
        awarded=awarded,
        total_seva_points=user.total_seva_points,
        weekly_seva_points=user.weekly_seva_points,
    )
