# backend/pomodoro/services/session_logging.py

import calendar
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Tuple

from pomodoro.core.errors import IncompleteIntervalError, LogWriteError
from pomodoro.crud.sessions import SessionLog
from pomodoro.models.timer import SessionType, TimerSession
from pomodoro.schemas.session import CompletedIntervalCreate, CompletedIntervalRead

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


# 표현 가능한 마지막 시각 (9999-12-31의 다음 자정은 datetime 범위 밖)
MAX_UTC = datetime.max.replace(tzinfo=timezone.utc)


def day_window(d: date) -> Tuple[datetime, datetime]:
    """하루 구간 [d 00:00, d+1 00:00) (UTC, 저장된 시각과 같은 기준)"""
    start = datetime.combine(d, time.min, tzinfo=timezone.utc)
    try:
        end = start + timedelta(days=1)
    except OverflowError:
        end = MAX_UTC
    return start, end


def month_window(year: int, month: int) -> Tuple[datetime, datetime]:
    first = date(year, month, 1)
    last = first.replace(day=calendar.monthrange(year, month)[1])
    return day_window(first)[0], day_window(last)[1]


def year_window(year: int) -> Tuple[datetime, datetime]:
    return day_window(date(year, 1, 1))[0], day_window(date(year, 12, 31))[1]


def productivity_level(hours: float) -> int:
    """
    하루 작업 시간을 0~3 단계로 변환합니다. (잔디 차트 색상용)
    0: 작업 없음 / 1: 1시간 미만 / 2: 1~3시간 (3시간 포함) / 3: 3시간 초과
    """
    if hours <= 0:
        return 0
    if hours < 1:
        return 1
    if hours <= 3:
        return 2
    return 3


def build_interval(timer_session: TimerSession) -> CompletedIntervalCreate:
    """
    TimerSession -> CompletedIntervalCreate
    시작/종료 시각이 모두 있어야 하고 길이가 양수여야 합니다.
    """
    if timer_session.start_time is None or timer_session.end_time is None:
        raise IncompleteIntervalError("Session must have both start and end times to be logged")

    duration = int((timer_session.end_time - timer_session.start_time).total_seconds())
    if duration <= 0:
        raise IncompleteIntervalError(
            f"Session duration must be positive (got {duration}s)"
        )

    return CompletedIntervalCreate(
        session_type=timer_session.session_type,
        start_time=timer_session.start_time,
        end_time=timer_session.start_time + timedelta(seconds=duration),
        duration_seconds=duration,
    )


class SessionLoggingService:
    """
    완료된 세션 기록 + 날짜별 생산성 집계.
    집계는 읽기 전용이라 별도 락이 필요 없습니다.
    """

    def __init__(self, session_log: SessionLog):
        self.session_log = session_log

    async def log_completed_session(self, timer_session: TimerSession) -> CompletedIntervalRead:
        interval = build_interval(timer_session)
        try:
            saved = await self.session_log.append(interval)
        except Exception as e:
            raise LogWriteError(f"Failed to append session: {e}") from e

        logger.info(
            "Logged %s session %s (%ss)",
            saved.session_type.value, saved.id, saved.duration_seconds,
        )
        return saved

    async def get_all_sessions(self) -> List[CompletedIntervalRead]:
        return await self.session_log.list_all()

    async def get_sessions_between(self, start: datetime, end: datetime) -> List[CompletedIntervalRead]:
        return await self.session_log.list_between(start, end)

    async def get_work_sessions_for_date(self, d: date) -> List[CompletedIntervalRead]:
        start, end = day_window(d)
        return await self.session_log.list_between(start, end, SessionType.WORK)

    async def get_total_work_hours_for_date(self, d: date) -> float:
        start, end = day_window(d)
        total_seconds = await self.session_log.sum_work_seconds(start, end)
        return total_seconds / SECONDS_PER_HOUR

    async def get_work_session_count_for_date(self, d: date) -> int:
        return len(await self.get_work_sessions_for_date(d))

    async def get_productivity_level_for_date(self, d: date) -> int:
        return productivity_level(await self.get_total_work_hours_for_date(d))

    async def get_sessions_for_month(self, year: int, month: int) -> List[CompletedIntervalRead]:
        start, end = month_window(year, month)
        return await self.get_sessions_between(start, end)

    async def get_sessions_for_year(self, year: int) -> List[CompletedIntervalRead]:
        start, end = year_window(year)
        return await self.get_sessions_between(start, end)

    async def delete_session(self, session_id: str) -> bool:
        if not session_id:
            return False
        deleted = await self.session_log.delete_by_id(session_id)
        if deleted:
            logger.info("Deleted session %s", session_id)
        return deleted
