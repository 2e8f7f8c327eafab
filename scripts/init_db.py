"""
Create the MongoDB collection indexes

    python scripts/init_db.py
"""
import logging
import sys

from securetag import setup_logging
from securetag.config import Settings
from securetag.core.exceptions import SecureTagError
from securetag.stores import MongoStore, build_store

logger = logging.getLogger('init_db')


def main():
    try:
        settings = Settings.from_env()
    except SecureTagError as e:
        print(f"❌ {e.message}")
        return 1

    setup_logging(settings)

    if settings.store_backend != 'mongo':
        print(f"Nothing to initialize for STORE_BACKEND={settings.store_backend}")
        return 0

    try:
        store = build_store(settings)
    except SecureTagError as e:
        logger.error(f"Could not connect to MongoDB: {e.message}")
        return 1

    assert isinstance(store, MongoStore)
    try:
        store.ensure_indexes()
    except SecureTagError as e:
        logger.error(f"Index creation failed: {e.message}")
        return 1
    finally:
        store.close()

    print(f"✅ Indexes created on database '{settings.database_name}'")
    return 0


if __name__ == '__main__':
    sys.exit(main())
