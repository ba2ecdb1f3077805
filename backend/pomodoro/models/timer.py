# 파일 위치: backend/pomodoro/models/timer.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionType(str, Enum):
    """뽀모도로 구간의 종류"""
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"


class TimerState(str, Enum):
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class PomodoroSettings(BaseModel):
    """
    타이머 설정 값. 서버 메모리에만 보관되며 마지막으로 적용된 값이 유지됩니다.
    """
    work_duration_minutes: int = Field(25, ge=1)
    short_break_duration_minutes: int = Field(5, ge=1)
    long_break_duration_minutes: int = Field(15, ge=1)
    # 몇 번의 WORK 세션마다 긴 휴식을 넣을지. 0 이하면 항상 짧은 휴식
    long_break_interval: int = 4
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False

    def duration_minutes_for(self, session_type: SessionType) -> int:
        if session_type == SessionType.WORK:
            return self.work_duration_minutes
        if session_type == SessionType.SHORT_BREAK:
            return self.short_break_duration_minutes
        return self.long_break_duration_minutes


class TimerSession(BaseModel):
    """
    현재 진행 중인 단일 타이머 세션.
    TimerService만 이 객체를 수정하고, 바깥으로는 model_copy() 스냅샷만 내보냅니다.
    """
    session_type: SessionType = SessionType.WORK
    state: TimerState = TimerState.STOPPED
    total_duration_seconds: int = 0
    remaining_seconds: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    completed_work_sessions: int = 0

    @classmethod
    def new(cls, session_type: SessionType, duration_minutes: int, completed_work_sessions: int = 0) -> "TimerSession":
        total = duration_minutes * 60
        return cls(
            session_type=session_type,
            state=TimerState.STOPPED,
            total_duration_seconds=total,
            remaining_seconds=total,
            completed_work_sessions=completed_work_sessions,
        )

    @property
    def is_completed(self) -> bool:
        return self.remaining_seconds <= 0

    @property
    def elapsed_seconds(self) -> int:
        return self.total_duration_seconds - self.remaining_seconds

    @property
    def progress_percentage(self) -> float:
        if self.total_duration_seconds == 0:
            return 0.0
        return self.elapsed_seconds / self.total_duration_seconds * 100.0
