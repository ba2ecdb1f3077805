# backend/pomodoro/db/mongo.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from pomodoro.core.config import settings

logger = logging.getLogger(__name__)

client: AsyncIOMotorClient | None = None
db = None


async def connect_to_mongo():
    global client, db
    client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
    db = client[settings.MONGO_DB_NAME]
    logger.info("MongoDB Connected! (db=%s)", settings.MONGO_DB_NAME)


async def close_mongo_connection():
    global client, db
    if client:
        client.close()
        client = None
        db = None
        logger.info("MongoDB Connection Closed!")


def get_db():
    if db is None:
        raise RuntimeError("MongoDB not initialized. Did you call connect_to_mongo()?")
    return db
