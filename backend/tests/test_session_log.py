"""Tests for the in-memory session log and the logging service boundary."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from pomodoro.core.errors import IncompleteIntervalError, LogWriteError
from pomodoro.crud.sessions import serialize_interval
from pomodoro.models.timer import SessionType, TimerSession, TimerState
from pomodoro.schemas.session import CompletedIntervalCreate
from pomodoro.services.session_logging import SessionLoggingService, build_interval
from pomodoro.utils.dummy_data import create_dummy_intervals

from conftest import FailingSessionLog

T0 = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


def make_interval(start: datetime, seconds: int, session_type=SessionType.WORK) -> CompletedIntervalCreate:
    return CompletedIntervalCreate(
        session_type=session_type,
        start_time=start,
        end_time=start + timedelta(seconds=seconds),
        duration_seconds=seconds,
    )


def finished_session(start, end, session_type=SessionType.WORK) -> TimerSession:
    session = TimerSession.new(session_type, 25)
    session.state = TimerState.COMPLETED
    session.start_time = start
    session.end_time = end
    return session


class TestCompletedIntervalCreate:
    def test_duration_must_match_span(self):
        with pytest.raises(ValidationError):
            CompletedIntervalCreate(
                session_type=SessionType.WORK,
                start_time=T0,
                end_time=T0 + timedelta(seconds=100),
                duration_seconds=90,
            )

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_interval(T0, 0)


class TestInMemorySessionLog:
    @pytest.mark.asyncio
    async def test_append_assigns_id(self, session_log):
        saved = await session_log.append(make_interval(T0, 1500))
        assert saved.id
        assert saved.duration_minutes == 25
        assert await session_log.get(saved.id) == saved

    @pytest.mark.asyncio
    async def test_list_between_is_half_open_and_descending(self, session_log):
        await session_log.append(make_interval(T0, 60))
        await session_log.append(make_interval(T0 + timedelta(hours=2), 60))
        await session_log.append(make_interval(T0 + timedelta(days=1), 60))

        found = await session_log.list_between(T0, T0 + timedelta(days=1))

        assert [s.start_time for s in found] == [T0 + timedelta(hours=2), T0]

    @pytest.mark.asyncio
    async def test_sum_work_seconds_ignores_breaks(self, session_log):
        await session_log.append(make_interval(T0, 1500))
        await session_log.append(make_interval(T0 + timedelta(minutes=25), 300, SessionType.SHORT_BREAK))
        await session_log.append(make_interval(T0 + timedelta(minutes=30), 1500))

        total = await session_log.sum_work_seconds(T0, T0 + timedelta(days=1))
        assert total == 3000

    @pytest.mark.asyncio
    async def test_sum_on_empty_range_is_zero(self, session_log):
        assert await session_log.sum_work_seconds(T0, T0 + timedelta(days=1)) == 0

    @pytest.mark.asyncio
    async def test_delete_by_id(self, session_log):
        saved = await session_log.append(make_interval(T0, 60))
        assert await session_log.delete_by_id(saved.id) is True
        assert await session_log.delete_by_id(saved.id) is False
        assert await session_log.list_all() == []


class TestBuildInterval:
    def test_requires_both_timestamps(self):
        with pytest.raises(IncompleteIntervalError):
            build_interval(finished_session(T0, None))
        with pytest.raises(IncompleteIntervalError):
            build_interval(finished_session(None, T0))

    def test_requires_positive_duration(self):
        with pytest.raises(IncompleteIntervalError):
            build_interval(finished_session(T0, T0))

    def test_duration_is_wall_clock_span(self):
        interval = build_interval(finished_session(T0, T0 + timedelta(minutes=31)))
        assert interval.duration_seconds == 31 * 60


class TestSessionLoggingService:
    @pytest.mark.asyncio
    async def test_incomplete_session_is_not_written(self, session_logging, session_log):
        with pytest.raises(IncompleteIntervalError):
            await session_logging.log_completed_session(finished_session(T0, None))
        assert await session_log.list_all() == []

    @pytest.mark.asyncio
    async def test_write_failure_is_wrapped(self):
        service = SessionLoggingService(FailingSessionLog())
        with pytest.raises(LogWriteError) as exc:
            await service.log_completed_session(finished_session(T0, T0 + timedelta(minutes=1)))
        assert isinstance(exc.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_sessions_for_month_and_year(self, session_logging, session_log):
        await session_log.append(make_interval(datetime(2025, 1, 31, 23, 59, tzinfo=timezone.utc), 60))
        await session_log.append(make_interval(datetime(2025, 2, 1, 0, 0, tzinfo=timezone.utc), 60))
        await session_log.append(make_interval(datetime(2025, 2, 28, 23, 0, tzinfo=timezone.utc), 60))
        await session_log.append(make_interval(datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc), 60))

        february = await session_logging.get_sessions_for_month(2025, 2)
        year = await session_logging.get_sessions_for_year(2025)

        assert len(february) == 2
        assert len(year) == 3

    @pytest.mark.asyncio
    async def test_delete_session_ignores_empty_id(self, session_logging):
        assert await session_logging.delete_session("") is False


def test_serialize_interval_treats_naive_as_utc():
    doc = {
        "_id": "abc",
        "session_type": "WORK",
        "start_time": datetime(2025, 6, 1, 8, 0),
        "end_time": datetime(2025, 6, 1, 8, 25),
        "duration_seconds": 1500,
    }
    read = serialize_interval(doc)
    assert read.start_time.tzinfo == timezone.utc
    assert read.session_type == SessionType.WORK
    assert read.created_at is None


@pytest.mark.asyncio
async def test_dummy_intervals_seed_a_chartable_log(session_log, session_logging):
    end_day = date(2025, 6, 30)
    created = await create_dummy_intervals(session_log, end_day=end_day, weeks=1)

    # 2+5+0+9+1+3+0 WORK sessions, each followed by a short break
    assert len(created) == 40
    assert await session_logging.get_work_session_count_for_date(date(2025, 6, 27)) == 9
    assert await session_logging.get_productivity_level_for_date(date(2025, 6, 27)) == 3
    assert await session_logging.get_productivity_level_for_date(date(2025, 6, 28)) == 0
