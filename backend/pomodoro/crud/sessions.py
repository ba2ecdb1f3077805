# backend/pomodoro/crud/sessions.py

import asyncio
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING

from pomodoro.core.clock import ensure_aware_utc, utcnow
from pomodoro.models.session import CompletedIntervalInDB
from pomodoro.models.timer import SessionType
from pomodoro.schemas.session import CompletedIntervalCreate, CompletedIntervalRead


def serialize_interval(doc) -> CompletedIntervalRead:
    """
    Mongo document(dict) -> CompletedIntervalRead
    """
    return CompletedIntervalRead(
        id=str(doc["_id"]),
        session_type=doc["session_type"],
        start_time=ensure_aware_utc(doc["start_time"]),
        end_time=ensure_aware_utc(doc["end_time"]),
        duration_seconds=int(doc["duration_seconds"]),
        created_at=ensure_aware_utc(doc.get("created_at")),
    )


def _strip_or_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    if not isinstance(v, str):
        return v
    s = v.strip()
    return s or None


class SessionLog(ABC):
    """
    완료된 구간의 추가 전용 저장소.
    기간 조회는 모두 start_time 기준 반-열린 구간 [start, end) 입니다.
    """

    @abstractmethod
    async def append(self, interval: CompletedIntervalCreate) -> CompletedIntervalRead:
        ...

    @abstractmethod
    async def list_between(
        self,
        start: datetime,
        end: datetime,
        session_type: Optional[SessionType] = None,
    ) -> List[CompletedIntervalRead]:
        """start_time 내림차순"""

    @abstractmethod
    async def sum_work_seconds(self, start: datetime, end: datetime) -> int:
        ...

    @abstractmethod
    async def delete_by_id(self, interval_id: str) -> bool:
        ...

    @abstractmethod
    async def list_all(self) -> List[CompletedIntervalRead]:
        ...

    @abstractmethod
    async def get(self, interval_id: str) -> Optional[CompletedIntervalRead]:
        ...

    async def ping(self) -> bool:
        return True


class MongoSessionLog(SessionLog):
    """
    motor 컬렉션 기반 세션 로그.
    _id는 events 컬렉션과 같이 uuid 문자열로 통일합니다.
    """

    def __init__(self, db, collection_name: str = "completed_sessions"):
        self.db = db
        self.collection = db[collection_name]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("start_time", DESCENDING)])
        await self.collection.create_index([("session_type", ASCENDING), ("start_time", DESCENDING)])

    # CREATE
    async def append(self, interval: CompletedIntervalCreate) -> CompletedIntervalRead:
        doc = CompletedIntervalInDB(
            id=str(uuid.uuid4()),
            session_type=interval.session_type,
            start_time=ensure_aware_utc(interval.start_time),
            end_time=ensure_aware_utc(interval.end_time),
            duration_seconds=interval.duration_seconds,
            created_at=utcnow(),
        ).model_dump(by_alias=True)
        # Enum은 문자열로 저장
        doc["session_type"] = interval.session_type.value

        await self.collection.insert_one(doc)
        return serialize_interval(doc)

    # READ MANY (기간)
    async def list_between(
        self,
        start: datetime,
        end: datetime,
        session_type: Optional[SessionType] = None,
    ) -> List[CompletedIntervalRead]:
        query = {"start_time": {"$gte": ensure_aware_utc(start), "$lt": ensure_aware_utc(end)}}
        if session_type is not None:
            query["session_type"] = session_type.value

        cursor = self.collection.find(query).sort("start_time", -1)
        return [serialize_interval(doc) async for doc in cursor]

    async def sum_work_seconds(self, start: datetime, end: datetime) -> int:
        pipeline = [
            {
                "$match": {
                    "session_type": SessionType.WORK.value,
                    "start_time": {"$gte": ensure_aware_utc(start), "$lt": ensure_aware_utc(end)},
                }
            },
            {"$group": {"_id": None, "total": {"$sum": "$duration_seconds"}}},
        ]
        cursor = self.collection.aggregate(pipeline)
        rows = await cursor.to_list(length=1)
        if not rows:
            return 0
        return max(0, int(rows[0]["total"]))

    # READ ALL
    async def list_all(self) -> List[CompletedIntervalRead]:
        cursor = self.collection.find({}).sort("start_time", -1)
        return [serialize_interval(doc) async for doc in cursor]

    # READ ONE
    async def get(self, interval_id: str) -> Optional[CompletedIntervalRead]:
        interval_id = _strip_or_none(interval_id)
        if interval_id is None:
            return None
        doc = await self.collection.find_one({"_id": interval_id})
        return serialize_interval(doc) if doc else None

    # DELETE
    async def delete_by_id(self, interval_id: str) -> bool:
        interval_id = _strip_or_none(interval_id)
        if interval_id is None:
            return False
        result = await self.collection.delete_one({"_id": interval_id})
        return result.deleted_count == 1

    async def ping(self) -> bool:
        # MongoDB ping: 연결/권한/네트워크 문제를 가장 단순하게 확인
        await self.db.command("ping")
        return True


class InMemorySessionLog(SessionLog):
    """
    MONGO_URI 없이 띄울 때 쓰는 메모리 저장소. 프로세스가 끝나면 사라집니다.
    """

    def __init__(self):
        self._items: List[CompletedIntervalRead] = []
        self._lock = asyncio.Lock()

    async def append(self, interval: CompletedIntervalCreate) -> CompletedIntervalRead:
        saved = CompletedIntervalRead(
            id=str(uuid.uuid4()),
            session_type=interval.session_type,
            start_time=ensure_aware_utc(interval.start_time),
            end_time=ensure_aware_utc(interval.end_time),
            duration_seconds=interval.duration_seconds,
            created_at=utcnow(),
        )
        async with self._lock:
            self._items.append(saved)
        return saved

    async def list_between(
        self,
        start: datetime,
        end: datetime,
        session_type: Optional[SessionType] = None,
    ) -> List[CompletedIntervalRead]:
        start, end = ensure_aware_utc(start), ensure_aware_utc(end)
        async with self._lock:
            found = [
                s for s in self._items
                if start <= s.start_time < end
                and (session_type is None or s.session_type == session_type)
            ]
        return sorted(found, key=lambda s: s.start_time, reverse=True)

    async def sum_work_seconds(self, start: datetime, end: datetime) -> int:
        work = await self.list_between(start, end, SessionType.WORK)
        return sum(s.duration_seconds for s in work)

    async def list_all(self) -> List[CompletedIntervalRead]:
        async with self._lock:
            items = list(self._items)
        return sorted(items, key=lambda s: s.start_time, reverse=True)

    async def get(self, interval_id: str) -> Optional[CompletedIntervalRead]:
        interval_id = _strip_or_none(interval_id)
        async with self._lock:
            for s in self._items:
                if s.id == interval_id:
                    return s
        return None

    async def delete_by_id(self, interval_id: str) -> bool:
        interval_id = _strip_or_none(interval_id)
        async with self._lock:
            for i, s in enumerate(self._items):
                if s.id == interval_id:
                    del self._items[i]
                    return True
        return False
