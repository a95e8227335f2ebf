"""Daily Hukamnama, archive lookup and read tracking."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config import HUKAMNAMA_READ_POINTS
from deps import get_db, get_current_user, get_hukamnama_service
from hukamnama_service import HukamnamaService, HukamnamaUnavailable
from models import User
from points_service import REASON_HUKAMNAMA_READ, already_awarded_today, award_points
from schemas import HukamnamaResponse, PointsAwardResponse

router = APIRouter(prefix="/api/hukamnama", tags=["hukamnama"])


@router.get("/today", response_model=HukamnamaResponse)
async def get_today(service: HukamnamaService = Depends(get_hukamnama_service)):
    return await service.get_daily()


@router.get("/archive/{year}/{month}/{day}", response_model=HukamnamaResponse)
async def get_archive(
    year: int,
    month: int,
    day: int,
    service: HukamnamaService = Depends(get_hukamnama_service),
):
    try:
        return await service.get_by_date(year, month, day)
    except HukamnamaUnavailable as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/read", response_model=PointsAwardResponse)
async def mark_read(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if already_awarded_today(db, user.id, REASON_HUKAMNAMA_READ):
        raise HTTPException(status_code=409, detail="Hukamnama points already added today")
    awarded = award_points(db, user, REASON_HUKAMNAMA_READ, HUKAMNAMA_READ_POINTS, once_per_day=True)
    db.commit()
    db.refresh(user)
    return PointsAwardResponse(
        awarded=awarded,
        total_seva_points=user.total_seva_points,
        weekly_seva_points=user.weekly_seva_points,
    )
