"""Feedback and practice reminders."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from config import FEEDBACK_POINTS
from deps import get_db, get_current_user, get_optional_user
from models import Feedback, Reminder, User
from points_service import REASON_FEEDBACK, award_points
from schemas import FeedbackCreate, FeedbackResponse, ReminderCreate, ReminderResponse

router = APIRouter(prefix="/api", tags=["community"])


@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    feedback_data: FeedbackCreate,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    feedback = Feedback(
        user_id=user.id if user else None,
        feedback_type=feedback_data.feedback_type,
        content=feedback_data.content,
    )
    db.add(feedback)
    awarded = award_points(db, user, REASON_FEEDBACK, FEEDBACK_POINTS) if user else 0
    db.commit()
    db.refresh(feedback)
    print(f"[feedback] type={feedback.feedback_type} user={feedback.user_id}")

    data = FeedbackResponse.model_validate(feedback)
    return data.model_copy(update={"seva_points": awarded})


@router.get("/reminders", response_model=List[ReminderResponse])
async def list_reminders(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    reminders = (
        db.query(Reminder)
        .filter(Reminder.user_id == user.id)
        .order_by(Reminder.time.asc(), Reminder.id.asc())
        .all()
    )
    return [ReminderResponse.model_validate(r) for r in reminders]


@router.post("/reminders", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    reminder_data: ReminderCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    reminder = Reminder(
        user_id=user.id,
        action=reminder_data.action,
        time=reminder_data.time,
        days=reminder_data.days,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return ReminderResponse.model_validate(reminder)


@router.delete("/reminders/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    reminder = (
        db.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.user_id == user.id)
        .first()
    )
    if not reminder:
        raise HTTPException(status_code=404, detail="Reminder not found")
    db.delete(reminder)
    db.commit()
