"""Base MongoDB repository with reusable patterns.

Provides common functionality for MongoDB repositories:
- Connection management
- Document mapping (domain ↔ MongoDB)
- Error handling (driver errors surface as PersistenceError)
- Logging

Concrete MongoDB repositories inherit from MongoBaseRepository.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Tuple, TypeVar
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from domain.shared.errors import PersistenceError
from infrastructure.config import get_mongodb_database, get_mongodb_uri


TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Provides:
    - Connection pooling (motor handles this automatically)
    - Document ↔ Entity mapping hooks
    - Error handling: driver failures are logged, then re-raised as
      PersistenceError so the core reports them as internal errors
    - Datetime handling (timezone-aware, stored as sortable UTC strings)

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity
    """

    def __init__(self, client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None):
        """
        Initialize repository with optional client.

        Args:
            client: Motor client (if None, creates new one from config)
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER, "
                    "and MONGODB_PASSWORD environment variables."
                )
            self._client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri)
        else:
            self._client = client

        database_name = get_mongodb_database()
        self._db = self._client[database_name]
        self._collection = self._db[self.collection_name]

        logger.info(
            f"Initialized {self.__class__.__name__} " f"for collection '{self.collection_name}'"
        )

    # ============================================================
    # Abstract Properties/Methods (must be implemented)
    # ============================================================

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        """Convert domain entity to MongoDB document."""
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Convert MongoDB document to domain entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        pass

    # ============================================================
    # Protected Utility Methods (for subclasses)
    # ============================================================

    @property
    def collection(self) -> AsyncIOMotorCollection[Dict[str, Any]]:
        """Get MongoDB collection handle."""
        return self._collection

    @staticmethod
    def datetime_to_iso(dt: datetime) -> str:
        """
        Convert datetime to ISO string for MongoDB storage.

        Always normalised to UTC with microsecond precision so that string
        comparison orders values chronologically.

        Args:
            dt: Timezone-aware datetime

        Returns:
            ISO 8601 string in UTC
        """
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")

    @staticmethod
    def iso_to_datetime(iso_str: str) -> datetime:
        """Convert ISO string to timezone-aware datetime (UTC if no offset)."""
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    def _failure(self, operation: str, error: Exception, filter_dict: Any = None) -> PersistenceError:
        logger.error(
            f"Error in {operation}: collection={self.collection_name}, "
            f"filter={filter_dict}, error={error}"
        )
        return PersistenceError(f"{operation} failed on {self.collection_name}")

    async def _find_one(
        self,
        filter_dict: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Find single document, or None if not found."""
        try:
            return await self._collection.find_one(filter_dict, projection)
        except PyMongoError as e:
            raise self._failure("find_one", e, filter_dict) from e

    async def _iterate(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        """Stream matching documents from a cursor."""
        try:
            cursor = self._collection.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            async for doc in cursor:
                yield doc
        except PyMongoError as e:
            raise self._failure("find", e, filter_dict) from e

    async def _insert_one(self, document: Dict[str, Any]) -> None:
        try:
            await self._collection.insert_one(document)
        except PyMongoError as e:
            raise self._failure("insert_one", e) from e

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        upsert: bool = False,
    ) -> int:
        """
        Update single document.

        Returns:
            Number of documents matched (0 or 1)
        """
        try:
            result = await self._collection.update_one(filter_dict, update_dict, upsert=upsert)
            return result.matched_count
        except PyMongoError as e:
            raise self._failure("update_one", e, filter_dict) from e

    async def _find_one_and_update(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Atomically update a document and return it after the update."""
        try:
            return await self._collection.find_one_and_update(
                filter_dict, update_dict, return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise self._failure("find_one_and_update", e, filter_dict) from e

    async def close(self) -> None:
        """Close MongoDB connection."""
        self._client.close()
        logger.info(f"Closed connection for {self.__class__.__name__}")
