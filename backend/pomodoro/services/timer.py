# backend/pomodoro/services/timer.py

import asyncio
import logging
from typing import Optional

from pomodoro.core.clock import Clock, Ticker, utcnow
from pomodoro.core.errors import IncompleteIntervalError, LogWriteError
from pomodoro.models.timer import PomodoroSettings, SessionType, TimerSession, TimerState
from pomodoro.services.session_logging import SessionLoggingService

logger = logging.getLogger(__name__)


def next_session_type(finished: SessionType, completed_work_sessions: int, long_break_interval: int) -> SessionType:
    """
    WORK 다음에는 휴식, 휴식 다음에는 항상 WORK.
    long_break_interval 번째 WORK마다 긴 휴식. 간격이 0 이하면 항상 짧은 휴식.
    """
    if finished != SessionType.WORK:
        return SessionType.WORK
    if long_break_interval <= 0:
        return SessionType.SHORT_BREAK
    if completed_work_sessions % long_break_interval == 0:
        return SessionType.LONG_BREAK
    return SessionType.SHORT_BREAK


class TimerService:
    """
    단 하나의 활성 TimerSession을 소유하는 상태 머신.

    상태:
        STOPPED -> RUNNING (start)
        RUNNING -> PAUSED (pause), PAUSED -> RUNNING (start)
        * -> STOPPED (stop)
        * -> COMPLETED (complete, 또는 남은 시간이 0이 되는 틱)

    모든 변경(틱 포함)은 self._lock 안에서만 일어나고,
    밖으로는 항상 model_copy() 스냅샷을 돌려줍니다.
    세션 로그 저장은 락을 놓은 뒤에 수행하므로 I/O가 틱을 막지 않습니다.
    """

    def __init__(
        self,
        session_logging: SessionLoggingService,
        settings: Optional[PomodoroSettings] = None,
        clock: Clock = utcnow,
        ticker: Optional[Ticker] = None,
    ):
        self.session_logging = session_logging
        self._settings = settings or PomodoroSettings()
        self._clock = clock
        self._ticker = ticker or Ticker(interval=1.0)
        self._lock = asyncio.Lock()
        self._session = self._fresh_session(SessionType.WORK)

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    async def get_current_session(self) -> TimerSession:
        async with self._lock:
            return self._snapshot()

    async def get_settings(self) -> PomodoroSettings:
        async with self._lock:
            return self._settings.model_copy()

    # ------------------------------------------------------------------
    # 상태 전이
    # ------------------------------------------------------------------
    async def start(self) -> TimerSession:
        async with self._lock:
            s = self._session
            if s.state not in (TimerState.STOPPED, TimerState.PAUSED):
                logger.debug("start() ignored in state %s", s.state.value)
                return self._snapshot()

            s.state = TimerState.RUNNING
            # 일시정지 후 재개할 때는 시작 시각을 다시 찍지 않음
            if s.start_time is None:
                s.start_time = self._clock()
            self._ticker.start(self._on_tick)
            logger.info("Timer started: %s (%ss left)", s.session_type.value, s.remaining_seconds)
            return self._snapshot()

    async def pause(self) -> TimerSession:
        async with self._lock:
            s = self._session
            if s.state != TimerState.RUNNING:
                logger.debug("pause() ignored in state %s", s.state.value)
                return self._snapshot()

            s.state = TimerState.PAUSED
            self._ticker.stop()
            logger.info("Timer paused at %ss", s.remaining_seconds)
            return self._snapshot()

    async def stop(self) -> TimerSession:
        async with self._lock:
            s = self._session
            s.state = TimerState.STOPPED
            s.remaining_seconds = s.total_duration_seconds
            s.start_time = None
            s.end_time = None
            self._ticker.stop()
            logger.info("Timer stopped")
            return self._snapshot()

    async def complete(self) -> TimerSession:
        async with self._lock:
            finished = self._complete_locked()
            snapshot = self._snapshot()
        if finished is not None:
            await self._record(finished)
        return snapshot

    async def transition_to_next(self) -> TimerSession:
        async with self._lock:
            self._transition_locked()
            return self._snapshot()

    async def reset(self) -> TimerSession:
        async with self._lock:
            self._ticker.stop()
            self._session = self._fresh_session(SessionType.WORK)
            logger.info("Timer reset")
            return self._snapshot()

    async def update_settings(self, new_settings: PomodoroSettings) -> PomodoroSettings:
        """
        설정 변경. 현재 세션이 STOPPED일 때만 길이를 바로 반영하고,
        RUNNING/PAUSED 세션은 다음 전이/리셋부터 새 설정을 따릅니다.
        """
        async with self._lock:
            self._settings = new_settings.model_copy()
            s = self._session
            if s.state == TimerState.STOPPED:
                total = self._settings.duration_minutes_for(s.session_type) * 60
                s.total_duration_seconds = total
                s.remaining_seconds = total
            if self._settings.long_break_interval <= 0:
                logger.warning("long_break_interval <= 0: long breaks are disabled")
            return self._settings.model_copy()

    async def shutdown(self) -> None:
        async with self._lock:
            self._ticker.stop()

    # ------------------------------------------------------------------
    # 내부 로직 (self._lock 보유 상태에서만 호출)
    # ------------------------------------------------------------------
    async def _on_tick(self) -> None:
        async with self._lock:
            s = self._session
            if s.state != TimerState.RUNNING:
                return

            s.remaining_seconds = max(0, s.remaining_seconds - 1)
            if s.remaining_seconds > 0:
                return

            finished = self._complete_locked()
            auto_start = self._should_auto_start(finished)
            if auto_start:
                self._transition_locked()
                self._session.state = TimerState.RUNNING
                self._session.start_time = self._clock()
                self._ticker.start(self._on_tick)

        if finished is not None:
            await self._record(finished)

    def _complete_locked(self) -> Optional[TimerSession]:
        s = self._session
        if s.state == TimerState.COMPLETED:
            logger.debug("complete() ignored: session already completed")
            return None

        s.state = TimerState.COMPLETED
        s.end_time = self._clock()
        self._ticker.stop()

        # 로그 저장용 스냅샷은 카운터 증가 전에 떠 둠
        finished = s.model_copy()
        if s.session_type == SessionType.WORK:
            s.completed_work_sessions += 1
        logger.info(
            "Session completed: %s (work sessions=%s)",
            s.session_type.value, s.completed_work_sessions,
        )
        return finished

    def _transition_locked(self) -> None:
        current = self._session
        next_type = next_session_type(
            current.session_type,
            current.completed_work_sessions,
            self._settings.long_break_interval,
        )
        self._ticker.stop()
        self._session = self._fresh_session(next_type, current.completed_work_sessions)
        logger.info("Transitioned %s -> %s", current.session_type.value, next_type.value)

    def _should_auto_start(self, finished: Optional[TimerSession]) -> bool:
        if finished is None:
            return False
        if finished.session_type == SessionType.WORK:
            return self._settings.auto_start_breaks
        return self._settings.auto_start_pomodoros

    def _fresh_session(self, session_type: SessionType, completed_work_sessions: int = 0) -> TimerSession:
        return TimerSession.new(
            session_type,
            self._settings.duration_minutes_for(session_type),
            completed_work_sessions=completed_work_sessions,
        )

    def _snapshot(self) -> TimerSession:
        return self._session.model_copy()

    async def _record(self, finished: TimerSession) -> None:
        """
        완료 구간을 세션 로그에 저장. 실패해도 상태 전이는 이미 끝난 상태이므로
        호출자에게 예외를 올리지 않고 로그로만 남깁니다.
        """
        try:
            await self.session_logging.log_completed_session(finished)
        except IncompleteIntervalError as e:
            logger.error("Completed session was not logged: %s", e)
        except LogWriteError:
            logger.exception("Failed to log session")
