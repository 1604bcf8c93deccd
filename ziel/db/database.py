import logging

from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)


class Database:
    """Holds the Mongo client and the two collections the API works on."""

    def __init__(self, settings, client=None):
        self.owns_client = client is None
        if client is None:
            client = AsyncIOMotorClient(settings.mongodb_url)
        self.client = client
        self.db = client[settings.database_name]
        self.students = self.db["Student"]
        self.teachers = self.db["Teacher"]

    def collection(self, kind: str):
        return self.students if kind == "student" else self.teachers

    async def ping(self):
        await self.client.admin.command('ping')
        logger.info("Pinged your deployment. You successfully connected to MongoDB!")

    async def init_indexes(self):
        # the unique index, not the early-exit lookups in crud, is what keeps emails unique
        await self.students.create_index("email", unique=True)
        await self.teachers.create_index("email", unique=True)

    def close(self):
        if self.owns_client:
            self.client.close()
