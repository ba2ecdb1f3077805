# 파일 위치: backend/pomodoro/core/clock.py

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
TickCallback = Callable[[], Awaitable[None]]


def utcnow() -> datetime:
    """
    초 단위로 자른 현재 UTC 시각.
    세션 길이를 정수 초로 계산하기 때문에 마이크로초는 버립니다.
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


def utc_today() -> date:
    """UTC 기준 오늘 날짜. 하루 구간도 UTC로 자르므로 같은 기준을 씁니다."""
    return datetime.now(timezone.utc).date()


def ensure_aware_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    naive datetime이 들어오면 UTC로 간주해서 tzinfo를 붙입니다.
    (Mongo에서 읽은 값은 기본적으로 naive로 돌아옵니다)
    """
    if dt is None:
        return dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class Ticker:
    """
    고정 주기로 콜백을 호출하는 백그라운드 태스크.

    - 한 번에 하나의 태스크만 돌아갑니다. start()는 기존 태스크를 먼저 멈춥니다.
    - stop()은 몇 번을 호출해도 안전합니다.
    - 콜백 내부에서 stop()을 호출해도 자기 자신을 cancel하지 않고
      현재 콜백이 끝난 뒤 루프만 빠져나갑니다.
    """

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: TickCallback) -> None:
        self.stop()
        self._task = asyncio.create_task(self._run(callback))

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            return
        task.cancel()

    async def _run(self, callback: TickCallback) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            if self._task is not me:
                break
            try:
                await callback()
            except Exception:
                # 틱 하나가 실패해도 카운트다운 자체는 계속 돌아야 함
                logger.exception("Tick callback failed")
