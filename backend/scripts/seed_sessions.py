import asyncio
import sys
import os

# 경로 설정
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from pomodoro.core.config import settings
from pomodoro.crud.sessions import MongoSessionLog
from pomodoro.db.mongo import connect_to_mongo, close_mongo_connection, get_db
from pomodoro.utils.dummy_data import create_dummy_intervals


async def main():
    if not settings.MONGO_URI:
        print("MONGO_URI is not set. Nothing to seed.")
        return

    print("1. Connecting to MongoDB...")
    await connect_to_mongo()
    session_log = MongoSessionLog(get_db(), settings.SESSIONS_COLLECTION)
    await session_log.ensure_indexes()

    # 이미 데이터가 있으면 중복 생성하지 않음
    count = await session_log.collection.count_documents({})
    if count == 0:
        print("2. Creating dummy intervals...")
        created = await create_dummy_intervals(session_log)
        print(f"Inserted {len(created)} intervals.")
    else:
        print(f"2. Collection already has {count} intervals. Skipping.")

    await close_mongo_connection()

if __name__ == "__main__":
    asyncio.run(main())
