"""
Database Configuration and Connection Management
Builds the MongoDB client from explicit settings
"""

import logging

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

from securetag.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def create_mongo_client(settings, connect_check: bool = True) -> MongoClient:
    """
    Create a pooled MongoDB client

    Args:
        settings: Application settings
        connect_check: Ping the server before returning

    Returns:
        MongoClient: Connected client (timezone-aware datetimes)

    Raises:
        StoreUnavailableError: If the ping fails
    """
    client = MongoClient(
        settings.mongodb_uri,
        maxPoolSize=50,
        minPoolSize=0,
        maxIdleTimeMS=30000,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True
    )

    if connect_check:
        try:
            client.admin.command('ping')
            logger.info(f"Connected to database: {settings.database_name}")
        except ConnectionFailure as e:
            logger.error(f"Database connection failed: {e}")
            client.close()
            raise StoreUnavailableError(f"Cannot reach MongoDB: {e}")

    return client


def close_mongo_client(client: MongoClient):
    """Close client and release pooled connections"""
    if client is None:
        return
    client.close()
    logger.info("Database connection closed")
