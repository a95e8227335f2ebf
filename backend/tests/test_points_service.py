from datetime import date, timedelta

from models import SevaPointEvent, User
from points_service import (
    REASON_ARDAAS,
    REASON_QUIZ,
    award_points,
    current_weekly_points,
    record_check_in,
    week_start_for,
    weekly_breakdown,
    weekly_progress,
)

# A Wednesday
TODAY = date(2025, 3, 5)


def _user(db, username="harpreet"):
    user = User(username=username, total_seva_points=0, weekly_seva_points=0, streak_days=0)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def test_week_starts_on_monday():
    assert week_start_for(TODAY) == date(2025, 3, 3)
    assert week_start_for(date(2025, 3, 3)) == date(2025, 3, 3)


def test_award_adds_to_totals_and_ledger(db):
    user = _user(db)
    assert award_points(db, user, REASON_QUIZ, 9, today=TODAY) == 9
    db.commit()

    assert user.total_seva_points == 9
    assert user.weekly_seva_points == 9
    assert user.week_start == date(2025, 3, 3)
    event = db.query(SevaPointEvent).filter(SevaPointEvent.user_id == user.id).one()
    assert (event.reason, event.points, event.awarded_on) == (REASON_QUIZ, 9, TODAY)


def test_zero_points_are_not_recorded(db):
    user = _user(db)
    assert award_points(db, user, REASON_QUIZ, 0, today=TODAY) == 0
    assert db.query(SevaPointEvent).count() == 0


def test_once_per_day_reason(db):
    user = _user(db)
    assert award_points(db, user, REASON_ARDAAS, 5, once_per_day=True, today=TODAY) == 5
    assert award_points(db, user, REASON_ARDAAS, 5, once_per_day=True, today=TODAY) == 0
    assert award_points(db, user, REASON_ARDAAS, 5, once_per_day=True, today=TODAY + timedelta(days=1)) == 5
    db.commit()
    assert user.total_seva_points == 10


def test_weekly_points_reset_on_new_week(db):
    user = _user(db)
    award_points(db, user, REASON_QUIZ, 40, today=TODAY)
    next_monday = date(2025, 3, 10)
    assert current_weekly_points(user, next_monday) == 0

    award_points(db, user, REASON_QUIZ, 6, today=next_monday)
    db.commit()
    assert user.total_seva_points == 46
    assert user.weekly_seva_points == 6
    assert current_weekly_points(user, next_monday) == 6


def test_weekly_progress_is_capped(db):
    user = _user(db)
    award_points(db, user, REASON_QUIZ, 50, today=TODAY)
    assert weekly_progress(user, TODAY) == 50.0
    award_points(db, user, REASON_QUIZ, 500, today=TODAY)
    assert weekly_progress(user, TODAY) == 100.0


def test_check_in_streak():
    user = User(username="x", streak_days=0)
    assert record_check_in(user, TODAY) == 1
    assert record_check_in(user, TODAY) == 1
    assert record_check_in(user, TODAY + timedelta(days=1)) == 2
    assert record_check_in(user, TODAY + timedelta(days=2)) == 3
    assert record_check_in(user, TODAY + timedelta(days=5)) == 1
    assert user.last_check_in == TODAY + timedelta(days=5)


def test_weekly_breakdown_last_seven_days(db):
    user = _user(db)
    award_points(db, user, REASON_QUIZ, 3, today=TODAY)
    award_points(db, user, REASON_ARDAAS, 5, today=TODAY)
    award_points(db, user, REASON_QUIZ, 6, today=TODAY - timedelta(days=2))
    award_points(db, user, REASON_QUIZ, 100, today=TODAY - timedelta(days=9))
    db.commit()

    days = weekly_breakdown(db, user.id, TODAY)
    assert len(days) == 7
    assert days[0]["date"] == "2025-02-27"
    assert days[-1] == {"day": "Wed", "date": "2025-03-05", "points": 8}
    assert days[-3]["points"] == 6
    assert sum(d["points"] for d in days) == 14
