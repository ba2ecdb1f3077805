# 파일 위치: backend/pomodoro/schemas/timer.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pomodoro.models.timer import PomodoroSettings, SessionType, TimerSession, TimerState

# --- API 요청(Request) 스키마 ---

class SettingsUpdate(BaseModel):
    """
    [요청] PUT /api/timer/settings
    보낸 필드만 현재 설정에 덮어씁니다. 모든 필드는 선택 사항입니다.
    """
    work_duration_minutes: Optional[int] = Field(None, ge=1)
    short_break_duration_minutes: Optional[int] = Field(None, ge=1)
    long_break_duration_minutes: Optional[int] = Field(None, ge=1)
    long_break_interval: Optional[int] = None
    auto_start_breaks: Optional[bool] = None
    auto_start_pomodoros: Optional[bool] = None

    def apply_to(self, current: PomodoroSettings) -> PomodoroSettings:
        update_fields = {k: v for k, v in self.model_dump().items() if v is not None}
        return current.model_copy(update=update_fields)

# --- API 응답(Response) 스키마 ---

class TimerSessionRead(BaseModel):
    """
    [응답] /api/timer/* 공통 응답. 현재 세션의 스냅샷입니다.
    """
    session_type: SessionType
    state: TimerState
    total_duration_seconds: int
    remaining_seconds: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    completed_work_sessions: int
    elapsed_seconds: int
    progress_percentage: float
    completed: bool

    @classmethod
    def from_session(cls, session: TimerSession) -> "TimerSessionRead":
        return cls(
            session_type=session.session_type,
            state=session.state,
            total_duration_seconds=session.total_duration_seconds,
            remaining_seconds=session.remaining_seconds,
            start_time=session.start_time,
            end_time=session.end_time,
            completed_work_sessions=session.completed_work_sessions,
            elapsed_seconds=session.elapsed_seconds,
            progress_percentage=round(session.progress_percentage, 2),
            completed=session.is_completed,
        )
