# 파일 위치: backend/pomodoro/schemas/progress.py

import calendar
from datetime import date
from typing import List

from pydantic import BaseModel, Field, computed_field

# 생산성 단계별 표시 정보 (GitHub 잔디 스타일)
LEVEL_COLOR_CLASSES = {0: "no-work", 1: "light-work", 2: "medium-work", 3: "high-work"}
LEVEL_CSS_COLORS = {0: "#ebedf0", 1: "#9be9a8", 2: "#40c463", 3: "#30a14e"}


class ProgressDay(BaseModel):
    """
    [응답] 차트의 칸 하나(하루). 저장하지 않고 요청마다 계산합니다.
    """
    date: date
    total_hours: float = 0.0
    session_count: int = 0
    productivity_level: int = Field(0, ge=0, le=3)

    @computed_field
    @property
    def color_class(self) -> str:
        return LEVEL_COLOR_CLASSES.get(self.productivity_level, "no-work")

    @computed_field
    @property
    def css_color(self) -> str:
        return LEVEL_CSS_COLORS.get(self.productivity_level, "#ebedf0")

    @computed_field
    @property
    def description(self) -> str:
        if self.productivity_level == 0:
            return "No work sessions"
        return f"{self.total_hours:.1f} hours, {self.session_count} sessions"


class ProgressMonth(BaseModel):
    """
    [응답] 한 달치 날짜 목록 + 합계
    """
    year: int
    month: int = Field(..., ge=1, le=12)
    days: List[ProgressDay]

    @computed_field
    @property
    def total_hours(self) -> float:
        return sum(d.total_hours for d in self.days)

    @computed_field
    @property
    def total_sessions(self) -> int:
        return sum(d.session_count for d in self.days)

    @computed_field
    @property
    def days_in_month(self) -> int:
        return len(self.days)

    @computed_field
    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month].upper()

    @computed_field
    @property
    def short_month_name(self) -> str:
        return self.month_name[:3]


class ProgressChart(BaseModel):
    """
    [응답] GET /api/progress/chart/{year}
    1년치(12개월) 차트. 합계/평균/연속 기록은 모두 months에서 파생됩니다.
    """
    year: int
    months: List[ProgressMonth]

    def iter_days(self):
        for month in self.months:
            yield from month.days

    @computed_field
    @property
    def total_year_hours(self) -> float:
        return sum(m.total_hours for m in self.months)

    @computed_field
    @property
    def total_year_sessions(self) -> int:
        return sum(m.total_sessions for m in self.months)

    @computed_field
    @property
    def total_work_days(self) -> int:
        return sum(1 for d in self.iter_days() if d.productivity_level > 0)

    @computed_field
    @property
    def average_hours_per_work_day(self) -> float:
        work_days = self.total_work_days
        return self.total_year_hours / work_days if work_days > 0 else 0.0

    @computed_field
    @property
    def current_streak(self) -> int:
        """
        차트의 마지막 날(12/31)부터 거꾸로 세는 연속 작업일.
        '오늘' 기준이 아니라 차트 끝 기준입니다.
        """
        streak = 0
        for day in reversed(list(self.iter_days())):
            if day.productivity_level == 0:
                break
            streak += 1
        return streak

    @computed_field
    @property
    def longest_streak(self) -> int:
        longest = current = 0
        for day in self.iter_days():
            if day.productivity_level > 0:
                current += 1
                longest = max(longest, current)
            else:
                current = 0
        return longest


class YearlyStats(BaseModel):
    """
    [응답] GET /api/progress/stats/{year}
    """
    year: int
    total_hours: float
    total_sessions: int
    work_days: int
    average_hours_per_day: float
    current_streak: int
    longest_streak: int
