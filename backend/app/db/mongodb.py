import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    client: AsyncIOMotorClient = None


db = Database()


async def get_database() -> AsyncIOMotorDatabase:
    return db.client[settings.DATABASE_NAME]


async def connect_to_mongo():
    # tz_aware so stored deadlines compare against timezone-aware "now"
    db.client = AsyncIOMotorClient(
        settings.MONGODB_URL, tz_aware=True, appname=settings.PROJECT_NAME
    )
    logger.info(f"Connected to MongoDB database {settings.DATABASE_NAME}")


async def close_mongo_connection():
    if db.client is not None:
        db.client.close()
        db.client = None
        logger.info("Closed MongoDB connection")
