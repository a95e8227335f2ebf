"""Sikhi knowledge quiz."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import QUIZ_POINTS_PER_CORRECT
from deps import get_db, get_optional_user
from models import QuizResult, User
from points_service import REASON_QUIZ, award_points
from quiz_data import public_questions, result_message, score_answers
from schemas import QuizQuestion, QuizResultResponse, QuizSubmission

router = APIRouter(prefix="/api/quiz", tags=["quiz"])


@router.get("/questions", response_model=List[QuizQuestion])
async def get_questions():
    return public_questions()


@router.post("/submit", response_model=QuizResultResponse)
async def submit_quiz(
    submission: QuizSubmission,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    score, review = score_answers(submission.answers)
    total = len(review)
    points = score * QUIZ_POINTS_PER_CORRECT

    db.add(QuizResult(
        user_id=user.id if user else None,
        score=score,
        total_questions=total,
        seva_points=points,
    ))
    if user:
        award_points(db, user, REASON_QUIZ, points)
    db.commit()

    return QuizResultResponse(
        score=score,
        total_questions=total,
        seva_points=points,
        message=result_message(score, total),
        review=review,
    )
