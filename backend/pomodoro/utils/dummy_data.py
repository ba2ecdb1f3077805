from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from pomodoro.crud.sessions import SessionLog
from pomodoro.models.timer import SessionType
from pomodoro.schemas.session import CompletedIntervalCreate, CompletedIntervalRead

# (요일 오프셋, WORK 세션 수) 패턴. 차트에서 여러 단계가 보이도록 섞어 둠
DEFAULT_PATTERN = [(0, 2), (1, 5), (2, 0), (3, 9), (4, 1), (5, 3), (6, 0)]


async def create_dummy_intervals(
    session_log: SessionLog,
    end_day: Optional[date] = None,
    weeks: int = 4,
    work_minutes: int = 25,
    break_minutes: int = 5,
) -> List[CompletedIntervalRead]:
    """차트 확인용 가짜 완료 구간 생성 (WORK + 짧은 휴식 반복)"""
    end_day = end_day or datetime.now(timezone.utc).date()
    created = []

    for week in range(weeks):
        for offset, work_count in DEFAULT_PATTERN:
            day = end_day - timedelta(days=week * 7 + offset)
            cursor = datetime.combine(day, time(9, 0), tzinfo=timezone.utc)

            for _ in range(work_count):
                for session_type, minutes in (
                    (SessionType.WORK, work_minutes),
                    (SessionType.SHORT_BREAK, break_minutes),
                ):
                    end = cursor + timedelta(minutes=minutes)
                    payload = CompletedIntervalCreate(
                        session_type=session_type,
                        start_time=cursor,
                        end_time=end,
                        duration_seconds=minutes * 60,
                    )
                    created.append(await session_log.append(payload))
                    cursor = end

    return created
