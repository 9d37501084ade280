import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Set pymongo logger to WARNING to reduce noise from driver-level logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

# MongoDB is optional: without MONGO_URL the JSON file store is used
MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'polyglot')
SNAPSHOT_COLLECTION_NAME = 'snapshot_slots'

_client_cache = None
_connection_failed = False


def reset_client():
    global _client_cache, _connection_failed
    _client_cache = None
    _connection_failed = False


def get_mongodb_client() -> MongoClient | None:
    """Get MongoDB client with connection caching and reconnection logic.

    Connection strategy:
    1. Return cached client if healthy (ping succeeds)
    2. If cached client fails, attempt reconnection
    3. If initial connection failed (config issue), don't retry

    Returns:
        MongoDB client or None if not configured or connection fails
    """
    global _client_cache, _connection_failed

    if _client_cache:
        try:
            _client_cache.admin.command('ping')
            return _client_cache
        except PyMongoError:
            _client_cache = None
            logger.debug("[MONGODB] Cached client failed ping, attempting reconnection...")

    if _connection_failed or not MONGO_URL:
        return None

    try:
        client = MongoClient(
            MONGO_URL,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=5,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
        _client_cache = client
        logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        _connection_failed = True
        return None
