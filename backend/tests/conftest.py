"""Shared fixtures: in-memory session log, a controllable clock and a manual ticker."""

from datetime import datetime, timedelta, timezone

import pytest

from pomodoro.crud.sessions import InMemorySessionLog
from pomodoro.models.timer import PomodoroSettings
from pomodoro.services.progress import ProgressChartService
from pomodoro.services.session_logging import SessionLoggingService
from pomodoro.services.timer import TimerService

START = datetime(2025, 3, 10, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns a fixed UTC time that tests move forward explicitly."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


class ManualTicker:
    """Ticker stand-in: nothing runs until the test calls tick()."""

    def __init__(self, clock: FakeClock = None):
        self.clock = clock
        self.callback = None
        self.starts = 0
        self.stops = 0

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, callback) -> None:
        self.stop()
        self.callback = callback
        self.starts += 1

    def stop(self) -> None:
        if self.callback is not None:
            self.stops += 1
        self.callback = None

    async def tick(self, times: int = 1) -> None:
        for _ in range(times):
            if self.callback is None:
                break
            if self.clock is not None:
                self.clock.advance(1)
            await self.callback()


class FailingSessionLog(InMemorySessionLog):
    """Session log whose writes always fail."""

    async def append(self, interval):
        raise RuntimeError("disk full")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticker(clock):
    return ManualTicker(clock)


@pytest.fixture
def session_log():
    return InMemorySessionLog()


@pytest.fixture
def session_logging(session_log):
    return SessionLoggingService(session_log)


@pytest.fixture
def short_settings():
    """1-minute work, 1-minute short break, 2-minute long break, long break every 2."""
    return PomodoroSettings(
        work_duration_minutes=1,
        short_break_duration_minutes=1,
        long_break_duration_minutes=2,
        long_break_interval=2,
    )


@pytest.fixture
def timer(session_logging, clock, ticker):
    return TimerService(session_logging, clock=clock, ticker=ticker)


@pytest.fixture
def short_timer(session_logging, short_settings, clock, ticker):
    return TimerService(session_logging, settings=short_settings, clock=clock, ticker=ticker)


@pytest.fixture
def progress(session_logging):
    return ProgressChartService(session_logging)
