"""
Calendar API endpoint.
"""
from fastapi import APIRouter, HTTPException, Query, status

from spending_tracker.db import schemas
from spending_tracker.services.calendar_service import CalendarRangeError, get_calendar

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_model=schemas.CalendarMonth)
def get_calendar_endpoint(
    month: int = Query(..., description="Month number, 1-12"),
    year: int = Query(..., description="Four-digit year, 1900-2100"),
):
    try:
        return get_calendar(month, year)
    except CalendarRangeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
