import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from booknest.core.config import MONGO_URI, DATABASE_NAME

logger = logging.getLogger("booknest.db")

client = None


def get_client() -> MongoClient:
    global client
    if client is None:
        client = MongoClient(MONGO_URI)
        try:
            client.admin.command("ping")
            logger.info("Connected to MongoDB at %s", MONGO_URI)
        except PyMongoError as e:
            # the API still starts; handlers report the failure per request
            logger.error("Could not connect to MongoDB: %s", e)
    return client


def ensure_indexes(db: Database):
    db["users"].create_index([("email", ASCENDING)], unique=True)
    db["carts"].create_index([("user_id", ASCENDING)], unique=True)
    db["orders"].create_index([("user_id", ASCENDING), ("order_date", ASCENDING)])


_indexed = False


def get_db() -> Database:
    """FastAPI dependency returning the application database."""
    global _indexed
    db = get_client()[DATABASE_NAME]
    if not _indexed:
        ensure_indexes(db)
        _indexed = True
    return db
