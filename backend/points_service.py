"""Seva points ledger, weekly totals and check-in streaks."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import WEEKLY_GOAL
from models import User, SevaPointEvent

REASON_ROOH_CHECK = "rooh_check"
REASON_HUKAMNAMA_READ = "hukamnama_read"
REASON_QUIZ = "quiz"
REASON_ARDAAS = "ardaas"
REASON_FEEDBACK = "feedback"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def week_start_for(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _roll_week(user: User, today: date) -> None:
    current = week_start_for(today)
    if user.week_start != current:
        user.week_start = current
        user.weekly_seva_points = 0


def already_awarded_today(db: Session, user_id: int, reason: str, today: Optional[date] = None) -> bool:
    day = today or utc_today()
    return (
        db.query(SevaPointEvent)
        .filter(SevaPointEvent.user_id == user_id)
        .filter(SevaPointEvent.reason == reason)
        .filter(SevaPointEvent.awarded_on == day)
        .first()
        is not None
    )


def award_points(
    db: Session,
    user: User,
    reason: str,
    points: int,
    once_per_day: bool = False,
    today: Optional[date] = None,
) -> int:
    """Add points to the user and the ledger; return the points actually awarded.

    Does not commit; the caller owns the transaction.
    """
    day = today or utc_today()
    if points <= 0:
        return 0
    if once_per_day and already_awarded_today(db, user.id, reason, day):
        return 0

    _roll_week(user, day)
    user.total_seva_points = (user.total_seva_points or 0) + points
    user.weekly_seva_points = (user.weekly_seva_points or 0) + points
    db.add(SevaPointEvent(user_id=user.id, reason=reason, points=points, awarded_on=day))
    # Sessions run with autoflush off; later once-per-day checks must see this row
    db.flush()
    return points


def record_check_in(user: User, today: Optional[date] = None) -> int:
    """Update the daily check-in streak and return it."""
    day = today or utc_today()
    last = user.last_check_in
    if last == day:
        return user.streak_days or 1
    if last == day - timedelta(days=1):
        user.streak_days = (user.streak_days or 0) + 1
    else:
        user.streak_days = 1
    user.last_check_in = day
    return user.streak_days


def current_weekly_points(user: User, today: Optional[date] = None) -> int:
    day = today or utc_today()
    if user.week_start != week_start_for(day):
        return 0
    return user.weekly_seva_points or 0


def weekly_progress(user: User, today: Optional[date] = None) -> float:
    return round(min(current_weekly_points(user, today) / float(WEEKLY_GOAL) * 100.0, 100.0), 1)


def weekly_breakdown(db: Session, user_id: int, today: Optional[date] = None) -> list[dict]:
    """Points per day for the last seven days, oldest first."""
    day = today or utc_today()
    start = day - timedelta(days=6)
    rows = (
        db.query(SevaPointEvent.awarded_on, func.sum(SevaPointEvent.points))
        .filter(SevaPointEvent.user_id == user_id)
        .filter(SevaPointEvent.awarded_on >= start)
        .filter(SevaPointEvent.awarded_on <= day)
        .group_by(SevaPointEvent.awarded_on)
        .all()
    )
    by_day = {d: int(total or 0) for d, total in rows}
    out = []
    for offset in range(7):
        d = start + timedelta(days=offset)
        out.append({"day": d.strftime("%a"), "date": d.isoformat(), "points": by_day.get(d, 0)})
    return out
