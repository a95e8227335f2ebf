"""User registration, login, settings and Seva points dashboard."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth import create_access_token
from config import WEEKLY_GOAL
from deps import get_db, get_current_user
from models import DEFAULT_SETTINGS, QuizResult, SpiritualTodo, User, UserSubmission
from points_service import current_weekly_points, weekly_breakdown, weekly_progress
from schemas import (
    DashboardResponse,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserSettingsUpdate,
)

router = APIRouter(prefix="/api/users", tags=["users"])


def _user_response(user: User) -> UserResponse:
    data = UserResponse.model_validate(user)
    return data.model_copy(update={
        "weekly_seva_points": current_weekly_points(user),
        "settings": {**DEFAULT_SETTINGS, **(user.settings or {})},
    })


def _token_for(user: User) -> TokenResponse:
    token = create_access_token(data={"sub": user.username, "user_id": user.id})
    return TokenResponse(access_token=token, user=_user_response(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user_data: UserCreate, db: Session = Depends(get_db)):
    username = (user_data.username or "").strip()
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")
    existing = db.query(User).filter(User.username == username).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username already exists")

    db_user = User(
        username=username,
        display_name=(user_data.display_name or "").strip() or username,
        total_seva_points=0,
        weekly_seva_points=0,
        streak_days=0,
        settings=dict(DEFAULT_SETTINGS),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return _token_for(db_user)


@router.post("/login", response_model=TokenResponse)
async def login_user(user_data: UserCreate, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == (user_data.username or "").strip()).first()
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _token_for(user)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return _user_response(user)


@router.patch("/me/settings", response_model=UserResponse)
async def update_settings(
    updates: UserSettingsUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    merged = {**DEFAULT_SETTINGS, **(user.settings or {})}
    merged.update(updates.model_dump(exclude_none=True))
    # Reassign so the JSON column is flagged dirty
    user.settings = merged
    db.commit()
    db.refresh(user)
    return _user_response(user)


@router.get("/me/dashboard", response_model=DashboardResponse)
async def get_dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    submissions = db.query(UserSubmission).filter(UserSubmission.user_id == user.id).count()
    todos_completed = (
        db.query(SpiritualTodo)
        .filter(SpiritualTodo.user_id == user.id, SpiritualTodo.completed == True)  # noqa: E712
        .count()
    )
    quizzes = db.query(QuizResult).filter(QuizResult.user_id == user.id).count()
    return DashboardResponse(
        total_seva_points=user.total_seva_points or 0,
        weekly_seva_points=current_weekly_points(user),
        weekly_goal=WEEKLY_GOAL,
        progress_percent=weekly_progress(user),
        streak_days=user.streak_days or 0,
        daily_points=weekly_breakdown(db, user.id),
        submissions=submissions,
        todos_completed=todos_completed,
        quizzes_taken=quizzes,
    )
