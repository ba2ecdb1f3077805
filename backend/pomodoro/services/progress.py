# backend/pomodoro/services/progress.py

import calendar
import logging
from datetime import date
from typing import Callable, List

from pomodoro.core.clock import utc_today
from pomodoro.schemas.progress import ProgressChart, ProgressDay, ProgressMonth, YearlyStats
from pomodoro.services.session_logging import SessionLoggingService, productivity_level

logger = logging.getLogger(__name__)

# 차트를 제공하는 가장 이른 연도
FIRST_CHART_YEAR = 2025
MAX_YEARS_BACK = 2


def days_in_month(year: int, month: int) -> int:
    """그레고리력 기준 (4로 나눠지면 윤년, 100의 배수는 400으로 나눠질 때만)"""
    return calendar.monthrange(year, month)[1]


class ProgressChartService:
    """
    SessionLoggingService의 하루 집계를 월/연 단위 차트로 묶습니다.
    읽기 전용이고 부수 효과가 없어서 동시에 여러 요청이 와도 안전합니다.
    """

    def __init__(self, session_logging: SessionLoggingService, today: Callable[[], date] = utc_today):
        self.session_logging = session_logging
        self._today = today

    async def generate_day(self, d: date) -> ProgressDay:
        total_hours = await self.session_logging.get_total_work_hours_for_date(d)
        session_count = await self.session_logging.get_work_session_count_for_date(d)
        level = productivity_level(total_hours)
        return ProgressDay(
            date=d,
            total_hours=total_hours,
            session_count=session_count,
            productivity_level=level,
        )

    async def generate_month(self, year: int, month: int) -> ProgressMonth:
        days = [
            await self.generate_day(date(year, month, day))
            for day in range(1, days_in_month(year, month) + 1)
        ]
        return ProgressMonth(year=year, month=month, days=days)

    async def generate_year(self, year: int) -> ProgressChart:
        months = [await self.generate_month(year, month) for month in range(1, 13)]
        chart = ProgressChart(year=year, months=months)
        logger.debug(
            "Built chart for %s: %.2fh over %s work days",
            year, chart.total_year_hours, chart.total_work_days,
        )
        return chart

    async def get_current_year_chart(self) -> ProgressChart:
        return await self.generate_year(self._today().year)

    def get_available_years(self) -> List[int]:
        current_year = self._today().year
        start_year = max(FIRST_CHART_YEAR, current_year - MAX_YEARS_BACK)
        years = list(range(start_year, current_year + 1))
        # 아직 2025년 이전이면 올해만
        if not years:
            years.append(current_year)
        return years

    async def get_yearly_stats(self, year: int) -> YearlyStats:
        chart = await self.generate_year(year)
        return YearlyStats(
            year=year,
            total_hours=chart.total_year_hours,
            total_sessions=chart.total_year_sessions,
            work_days=chart.total_work_days,
            average_hours_per_day=chart.average_hours_per_work_day,
            current_streak=chart.current_streak,
            longest_streak=chart.longest_streak,
        )

    async def get_current_year_stats(self) -> YearlyStats:
        return await self.get_yearly_stats(self._today().year)
