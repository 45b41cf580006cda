from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from nexgen.dependencies import get_analytics_service
from nexgen.schemas.reports import DateRange, PerformanceStats, Timeframe, TrendPoint
from nexgen.services import AnalyticsService

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/performance", response_model=PerformanceStats)
def performance(
    user_id: Optional[str] = Query(None, description="Restrict to one user's orders"),
    start: Optional[datetime] = Query(None, description="Inclusive window start"),
    end: Optional[datetime] = Query(None, description="Inclusive window end"),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    date_range = None
    if start is not None or end is not None:
        if start is None or end is None:
            raise HTTPException(status_code=400, detail="start and end must be given together.")
        try:
            date_range = DateRange(start=start, end=end)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail="end must not be before start.") from exc
    return analytics.get_performance_stats(user_id=user_id, date_range=date_range)


@router.get("/trends", response_model=List[TrendPoint])
def trends(
    timeframe: Timeframe = Query(Timeframe.DAILY),
    user_id: Optional[str] = Query(None, description="Restrict to one user's orders"),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    return analytics.get_sales_trend_data(timeframe, user_id=user_id)


__all__ = ["router"]
