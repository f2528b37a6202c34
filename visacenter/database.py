import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorGridFSBucket

from visacenter.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """Owns the Mongo client, the database handle and the documents bucket.

    Created on application startup and closed on shutdown; routes reach it
    through the dependencies in ``visacenter.dependencies``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client = None
        self.db = None
        self.fs_bucket = None

    async def connect(self):
        if not self.settings.mongo_uri:
            raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

        self.client = AsyncIOMotorClient(self.settings.mongo_uri, tz_aware=True)
        self.db = self.client[self.settings.database_name]
        self.fs_bucket = AsyncIOMotorGridFSBucket(self.db, bucket_name=self.settings.documents_bucket)
        await self.client.admin.command("ping")

        if "mongodb+srv" in self.settings.mongo_uri:
            logger.info("Connected to MongoDB Atlas (database=%s)", self.settings.database_name)
        else:
            logger.warning("Connected to LOCAL MongoDB (database=%s)", self.settings.database_name)

        await self.db.jobs.create_index([("posted_date", -1)])
        await self.db.applications.create_index([("created_at", -1)])
        await self.db.users.create_index("username", unique=True)
        await self.db.revoked_tokens.create_index("expires_at", expireAfterSeconds=0)

    async def close(self):
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
