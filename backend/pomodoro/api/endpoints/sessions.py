# backend/pomodoro/api/endpoints/sessions.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from pomodoro.api.deps import get_session_logging
from pomodoro.schemas.session import CompletedIntervalRead, ProductivityStats
from pomodoro.services.session_logging import SessionLoggingService

router = APIRouter()


# READ ALL (최근 순)
@router.get("/", response_model=List[CompletedIntervalRead])
async def read_sessions(logging_service: SessionLoggingService = Depends(get_session_logging)):
    return await logging_service.get_all_sessions()


@router.get("/work/{day}", response_model=List[CompletedIntervalRead])
async def read_work_sessions_for_date(
    day: date,
    logging_service: SessionLoggingService = Depends(get_session_logging),
):
    return await logging_service.get_work_sessions_for_date(day)


@router.get("/stats/{day}", response_model=ProductivityStats)
async def read_productivity_stats(
    day: date,
    logging_service: SessionLoggingService = Depends(get_session_logging),
):
    return ProductivityStats(
        date=day,
        total_hours=await logging_service.get_total_work_hours_for_date(day),
        session_count=await logging_service.get_work_session_count_for_date(day),
        productivity_level=await logging_service.get_productivity_level_for_date(day),
    )


@router.get("/month/{year}/{month}", response_model=List[CompletedIntervalRead])
async def read_sessions_for_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    logging_service: SessionLoggingService = Depends(get_session_logging),
):
    return await logging_service.get_sessions_for_month(year, month)


@router.get("/year/{year}", response_model=List[CompletedIntervalRead])
async def read_sessions_for_year(
    year: int = Path(..., ge=1, le=9999),
    logging_service: SessionLoggingService = Depends(get_session_logging),
):
    return await logging_service.get_sessions_for_year(year)


# DELETE
@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    logging_service: SessionLoggingService = Depends(get_session_logging),
):
    deleted = await logging_service.delete_session(session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Session not found")
    return None
