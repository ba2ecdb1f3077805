# 파일 위치: backend/pomodoro/schemas/session.py

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

from pomodoro.models.timer import SessionType

# --- 내부 요청 스키마 ---

class CompletedIntervalCreate(BaseModel):
    """
    [내부] 타이머가 세션을 마무리할 때 세션 로그로 넘기는 구간 데이터입니다.
    duration_seconds는 반드시 end_time - start_time과 같고 0보다 커야 합니다.
    """
    model_config = ConfigDict(frozen=True)

    session_type: SessionType
    start_time: datetime
    end_time: datetime
    duration_seconds: int

    @model_validator(mode="after")
    def check_duration(self):
        if self.duration_seconds <= 0:
            raise ValueError("duration_seconds must be > 0")
        span = int((self.end_time - self.start_time).total_seconds())
        if span != self.duration_seconds:
            raise ValueError("duration_seconds must equal end_time - start_time")
        return self

# --- API 응답(Response) 스키마 ---

class CompletedIntervalRead(BaseModel):
    """
    [응답] GET /api/sessions 등에서 완료된 구간을 반환할 때의 데이터 구조입니다.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    session_type: SessionType
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def duration_minutes(self) -> int:
        return self.duration_seconds // 60

    @computed_field
    @property
    def duration_hours(self) -> float:
        return self.duration_seconds / 3600.0


class ProductivityStats(BaseModel):
    """
    [응답] GET /api/sessions/stats/{date}
    하루 단위 생산성 요약
    """
    date: date
    total_hours: float
    session_count: int
    productivity_level: int
