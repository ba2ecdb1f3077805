# backend/pomodoro/api/endpoints/progress.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Path

from pomodoro.api.deps import get_progress_service
from pomodoro.schemas.progress import ProgressChart, ProgressDay, ProgressMonth, YearlyStats
from pomodoro.services.progress import ProgressChartService

router = APIRouter()


@router.get("/chart", response_model=ProgressChart)
async def get_current_year_chart(progress: ProgressChartService = Depends(get_progress_service)):
    return await progress.get_current_year_chart()


@router.get("/chart/{year}", response_model=ProgressChart)
async def get_progress_chart(
    year: int = Path(..., ge=1, le=9999),
    progress: ProgressChartService = Depends(get_progress_service),
):
    return await progress.generate_year(year)


@router.get("/month/{year}/{month}", response_model=ProgressMonth)
async def get_progress_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    progress: ProgressChartService = Depends(get_progress_service),
):
    return await progress.generate_month(year, month)


@router.get("/day/{day}", response_model=ProgressDay)
async def get_progress_day(
    day: date,
    progress: ProgressChartService = Depends(get_progress_service),
):
    return await progress.generate_day(day)


# 연도 선택 드롭다운용
@router.get("/years", response_model=List[int])
async def get_available_years(progress: ProgressChartService = Depends(get_progress_service)):
    return progress.get_available_years()


@router.get("/stats", response_model=YearlyStats)
async def get_current_year_stats(progress: ProgressChartService = Depends(get_progress_service)):
    return await progress.get_current_year_stats()


@router.get("/stats/{year}", response_model=YearlyStats)
async def get_yearly_stats(
    year: int = Path(..., ge=1, le=9999),
    progress: ProgressChartService = Depends(get_progress_service),
):
    return await progress.get_yearly_stats(year)
