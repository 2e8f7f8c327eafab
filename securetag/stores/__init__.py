"""
Persistence layer
Store interface and its MongoDB / in-memory implementations
"""

import logging

from .base import Store
from .memory_store import InMemoryStore
from .mongo_store import MongoStore

logger = logging.getLogger(__name__)


def build_store(settings) -> Store:
    """Construct the configured store backend"""
    if settings.store_backend == 'memory':
        logger.warning("Using in-memory store - data is lost on restart")
        return InMemoryStore()

    from securetag.config.database import create_mongo_client

    client = create_mongo_client(settings)
    return MongoStore(client, settings.database_name, use_transactions=settings.mongodb_transactions)


__all__ = ['Store', 'InMemoryStore', 'MongoStore', 'build_store']
