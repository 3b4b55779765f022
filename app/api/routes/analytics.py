# app/api/routes/analytics.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from datetime import date

from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user
from app.schemas.analytics import CategorySpending, NetWorthResponse, TimeSeriesPoint
from app.utils import analytics

router = APIRouter(prefix="/analytics", tags=["analytics"])

class DateRange:
    """Required, inclusive start_date/end_date query parameters"""

    def __init__(
        self,
        start_date: date = Query(..., description="First day included"),
        end_date: date = Query(..., description="Last day included"),
    ):
        if end_date < start_date:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="end_date must not be before start_date")
        self.start_date = start_date
        self.end_date = end_date

@router.get("/net-worth", response_model=NetWorthResponse)
async def get_net_worth(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await analytics.calculate_net_worth(user.id, db)

@router.get("/spending-by-category", response_model=List[CategorySpending])
async def get_spending_by_category(
    period: DateRange = Depends(),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await analytics.spending_by_category(user.id, period.start_date, period.end_date, db)

@router.get("/income-over-time", response_model=List[TimeSeriesPoint])
async def get_income_over_time(
    period: DateRange = Depends(),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await analytics.income_over_time(user.id, period.start_date, period.end_date, db)

@router.get("/spending-over-time", response_model=List[TimeSeriesPoint])
async def get_spending_over_time(
    period: DateRange = Depends(),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await analytics.spending_over_time(user.id, period.start_date, period.end_date, db)
