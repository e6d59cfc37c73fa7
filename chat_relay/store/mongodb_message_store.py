import asyncio
import logging
from datetime import timezone
from typing import Optional

from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from chat_relay.chat_models import ChatMessage, utc_now
from .message_store import MessageStore
from .store_types import StoreConnectionError, StoreResult

logger = logging.getLogger(__name__)

DEFAULT_DB = "chatdb"
DEFAULT_COLLECTION = "messages"


class MongoDBMessageStore(MessageStore):
    """Message store backed by a single MongoDB collection.

    One client is shared by every session; the driver's own connection pool
    makes it safe for concurrent use.
    """
    def __init__(
        self,
        *,
        mongo_uri: str,
        mongo_db: str = DEFAULT_DB,
        mongo_collection: str = DEFAULT_COLLECTION,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if not mongo_uri or not mongo_db or not mongo_collection:
            raise ValueError("MongoDB URI, database, and collection are required")
        self.mongo_uri = mongo_uri
        self.mongo_db = mongo_db
        self.mongo_collection = mongo_collection
        self._client: Optional[AsyncIOMotorClient] = None
        self._coll = None

    def _ensure_client(self) -> None:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.mongo_uri,
                serverSelectionTimeoutMS=int(self.connect_timeout * 1000),
                tz_aware=True,
                tzinfo=timezone.utc,
            )
            self._coll = self._client[self.mongo_db][self.mongo_collection]

    async def connect(self) -> None:
        """Ping the server, failing after ``connect_timeout`` seconds."""
        try:
            self._ensure_client()
            await asyncio.wait_for(self._client.admin.command("ping"), timeout=self.connect_timeout)
        except (PyMongoError, asyncio.TimeoutError, ValueError) as e:
            await self.close()
            raise StoreConnectionError(
                f"Failed to connect to MongoDB: {type(e).__name__}: {e}", uri=self.mongo_uri
            ) from e
        logger.info(f"[STORE] Connected to MongoDB ({self.mongo_db}.{self.mongo_collection})")

    async def fetch_history(self) -> StoreResult[list[ChatMessage]]:
        if self._coll is None:
            return StoreResult.failure(RuntimeError("MongoDB store is not connected"))
        try:
            cursor = self._coll.find({}).sort("timestamp", ASCENDING)
            docs = await asyncio.wait_for(cursor.to_list(length=None), timeout=self.operation_timeout)
        except (PyMongoError, BSONError, asyncio.TimeoutError) as e:
            logger.error(f"[STORE] Failed to retrieve history: {type(e).__name__}: {e}")
            return StoreResult.failure(e)

        history = []
        for doc in docs:
            try:
                history.append(ChatMessage.from_document(doc))
            except ValueError as e:
                logger.warning(f"[STORE] Skipping undecodable message: {e}")
        logger.debug(f"[STORE] Fetched {len(history)} messages from MongoDB")
        return StoreResult.success(history)

    async def append(self, text: str) -> StoreResult[ChatMessage]:
        if self._coll is None:
            return StoreResult.failure(RuntimeError("MongoDB store is not connected"))
        message = ChatMessage(text=text, timestamp=utc_now())
        try:
            await asyncio.wait_for(self._coll.insert_one(message.to_document()), timeout=self.operation_timeout)
        except (PyMongoError, asyncio.TimeoutError) as e:
            logger.error(f"[STORE] Failed to save message: {type(e).__name__}: {e}")
            return StoreResult.failure(e)
        return StoreResult.success(message)

    async def drop(self) -> None:
        """Drop the backing collection. Test and maintenance helper, not used by the relay."""
        if self._client is not None:
            await self._client[self.mongo_db].drop_collection(self.mongo_collection)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("[STORE] MongoDB connection closed")
        self._client = None
        self._coll = None
