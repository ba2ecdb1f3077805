"""Tests for the per-day productivity aggregation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from pomodoro.models.timer import SessionType
from pomodoro.schemas.session import CompletedIntervalCreate
from pomodoro.services.session_logging import MAX_UTC, day_window, productivity_level, year_window


async def log_work(session_log, start: datetime, seconds: int, session_type=SessionType.WORK):
    return await session_log.append(CompletedIntervalCreate(
        session_type=session_type,
        start_time=start,
        end_time=start + timedelta(seconds=seconds),
        duration_seconds=seconds,
    ))


class TestProductivityLevel:
    @pytest.mark.parametrize("hours,level", [
        (0, 0),
        (0.0, 0),
        (0.01, 1),
        (0.99, 1),
        (1.0, 2),
        (2.5, 2),
        (3.0, 2),
        (3.01, 3),
        (12, 3),
    ])
    def test_thresholds(self, hours, level):
        assert productivity_level(hours) == level


def test_day_window_is_utc_midnight_to_midnight():
    start, end = day_window(date(2025, 3, 10))
    assert start == datetime(2025, 3, 10, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 11, tzinfo=timezone.utc)


def test_last_representable_day_clamps_window_end():
    start, end = day_window(date(9999, 12, 31))
    assert start == datetime(9999, 12, 31, tzinfo=timezone.utc)
    assert end == MAX_UTC
    assert year_window(9999) == (datetime(9999, 1, 1, tzinfo=timezone.utc), MAX_UTC)


class TestDailyAggregates:
    @pytest.mark.asyncio
    async def test_round_trip_single_pomodoro(self, session_log, session_logging):
        t = datetime(2025, 5, 5, 14, 0, tzinfo=timezone.utc)
        await log_work(session_log, t, 1500)

        assert await session_logging.get_work_session_count_for_date(t.date()) >= 1
        assert await session_logging.get_total_work_hours_for_date(t.date()) >= 1500 / 3600
        assert await session_logging.get_productivity_level_for_date(t.date()) == 1

    @pytest.mark.asyncio
    async def test_breaks_do_not_count(self, session_log, session_logging):
        t = datetime(2025, 5, 5, 14, 0, tzinfo=timezone.utc)
        await log_work(session_log, t, 900, SessionType.LONG_BREAK)
        await log_work(session_log, t + timedelta(minutes=15), 300, SessionType.SHORT_BREAK)

        assert await session_logging.get_work_session_count_for_date(t.date()) == 0
        assert await session_logging.get_total_work_hours_for_date(t.date()) == 0
        assert await session_logging.get_productivity_level_for_date(t.date()) == 0

    @pytest.mark.asyncio
    async def test_interval_belongs_to_day_it_started(self, session_log, session_logging):
        late = datetime(2025, 5, 5, 23, 50, tzinfo=timezone.utc)
        await log_work(session_log, late, 1500)

        assert await session_logging.get_work_session_count_for_date(date(2025, 5, 5)) == 1
        assert await session_logging.get_work_session_count_for_date(date(2025, 5, 6)) == 0

    @pytest.mark.asyncio
    async def test_exactly_three_hours_is_level_two(self, session_log, session_logging):
        t = datetime(2025, 5, 5, 8, 0, tzinfo=timezone.utc)
        for i in range(6):
            await log_work(session_log, t + timedelta(minutes=30 * i), 1800)

        d = t.date()
        assert await session_logging.get_total_work_hours_for_date(d) == 3.0
        assert await session_logging.get_work_session_count_for_date(d) == 6
        assert await session_logging.get_productivity_level_for_date(d) == 2

    @pytest.mark.asyncio
    async def test_empty_day_is_zeroed(self, session_logging):
        d = date(1999, 1, 1)
        assert await session_logging.get_total_work_hours_for_date(d) == 0.0
        assert await session_logging.get_work_session_count_for_date(d) == 0
        assert await session_logging.get_work_sessions_for_date(d) == []
