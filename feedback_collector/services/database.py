"""
MongoDB connection shared by every request in the process.

The client is created lazily on first use and reused afterwards. Concurrent
first requests all await one connection task, so only a single client is
ever opened. A failed attempt is forgotten so the next request retries.
"""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import (AsyncIOMotorClient, AsyncIOMotorCollection,
                                 AsyncIOMotorDatabase)
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from ..configurations.config import settings
from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None
_connecting: Optional[asyncio.Future] = None


async def _open_connection() -> AsyncIOMotorDatabase:
    global _client

    if not settings.MONGODB_URI:
        raise DatabaseConnectionError("MONGODB_URI environment variable is not set")

    client = None
    try:
        # A malformed URI fails here, before any network round trip
        client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        )
        await client.admin.command("ping")
        database = client[settings.MONGODB_DB]
        # Listing sorts on createdAt, newest first
        await database[settings.FEEDBACK_COLLECTION].create_index([("createdAt", DESCENDING)])
    except PyMongoError as e:
        if client is not None:
            client.close()
        logger.error(f"MongoDB connection failed: {str(e)}", exc_info=True)
        raise DatabaseConnectionError("Could not connect to MongoDB") from e

    _client = client
    logger.info(f"Connected to MongoDB database '{settings.MONGODB_DB}'")
    return database


async def connect() -> AsyncIOMotorDatabase:
    """
    Return the shared database handle, connecting on the first call.
    Raises DatabaseConnectionError if the URI is missing or the server
    cannot be reached.
    """
    global _database, _connecting

    if _database is not None:
        return _database

    if _connecting is None:
        _connecting = asyncio.ensure_future(_open_connection())
    pending = _connecting

    try:
        # Shielded so a cancelled request does not cancel the shared attempt
        database = await asyncio.shield(pending)
    except Exception:
        # Forget any failed attempt so the next request retries
        if _connecting is pending:
            _connecting = None
        raise

    _database = database
    return database


async def get_feedback_collection() -> AsyncIOMotorCollection:
    """FastAPI dependency returning the feedback collection."""
    database = await connect()
    return database[settings.FEEDBACK_COLLECTION]


async def ping() -> None:
    # A fresh connection has just been pinged by connect()
    if _database is None:
        await connect()
        return
    await _database.client.admin.command("ping")


def close_connection() -> None:
    """Close the shared client, if one was opened."""
    global _client, _database, _connecting

    if _client is not None:
        _client.close()
        logger.info("MongoDB connection closed")
    _client = None
    _database = None
    _connecting = None
