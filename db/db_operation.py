from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import PyMongoError
from settings.config import settings
from utils.logger import get_logger

logger = get_logger("DB_OPERATION")

async def create_indexes():
    reviews = mongo_conn.reviews_collection
    # one review per user per restaurant
    await reviews.create_index([("restaurant_id", ASCENDING), ("user_id", ASCENDING)], unique=True)
    await reviews.create_index("user_id")
    await reviews.create_index("restaurant_id")
    await mongo_conn.restaurants_collection.create_index("cuisine")
    await mongo_conn.users_collection.create_index("email", unique=True)
    logger.info("Indexes created")

class MongoConnection:
    def __init__(self):
        logger.info("Initializing MongoDB Connection")
        mongo_uri = settings.MONGO_URI
        self.client = AsyncIOMotorClient(mongo_uri)
        self.db = self.client[settings.DB_NAME]
        self.users_collection = self.db["users"]
        self.audit_logs = self.db["audit_logs"]
        self.restaurants_collection = self.db["restaurants"]
        self.reviews_collection = self.db["reviews"]

    async def connect(self):
        """Ping the server; raises if it is unreachable or rejects our credentials."""
        try:
            await self.db.command("ping")
        except PyMongoError:
            logger.exception(f"MongoDB ping failed for database {settings.DB_NAME}")
            raise
        logger.info(f"Connected to MongoDB, database {settings.DB_NAME}")

# Create the instance
mongo_conn = MongoConnection()
