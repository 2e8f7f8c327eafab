"""
Configuration module
Settings object and database client construction
"""

from .settings import Settings, Environment
from .database import create_mongo_client, close_mongo_client

__all__ = ['Settings', 'Environment', 'create_mongo_client', 'close_mongo_client']
