"""
Document store abstraction for MongoDB and an in-memory test implementation.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ASCENDING, MongoClient, ReturnDocument
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class DbClient(Protocol):
    """Interface for content storage; one collection per content type."""

    def insert(self, collection: str, doc: dict) -> dict:
        ...

    def find(
        self, collection: str, filter: Optional[dict] = None, newest_first: bool = True
    ) -> list[dict]:
        ...

    def find_one(self, collection: str, filter: Optional[dict] = None) -> Optional[dict]:
        ...

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        ...

    def update(self, collection: str, doc_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete(self, collection: str, doc_id: str) -> bool:
        ...

    def count(self, collection: str, filter: Optional[dict] = None) -> int:
        ...

    def ping(self) -> bool:
        ...

    def connection_state(self) -> str:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(doc_id) -> Optional[ObjectId]:
    """Parse a path id; malformed ids map to None so callers can 404."""
    if isinstance(doc_id, ObjectId):
        return doc_id
    try:
        return ObjectId(str(doc_id))
    except (InvalidId, TypeError):
        return None


def _stamp_new(doc: dict) -> dict:
    now = utc_now()
    stamped = dict(doc)
    stamped["_id"] = ObjectId()
    stamped["createdAt"] = now
    stamped["updatedAt"] = now
    return stamped


class InMemoryDbClient:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.collections: Dict[str, Dict[ObjectId, dict]] = {}

    def _collection(self, name: str) -> Dict[ObjectId, dict]:
        return self.collections.setdefault(name, {})

    @staticmethod
    def _matches(doc: dict, filter: Optional[dict]) -> bool:
        return all(doc.get(key) == value for key, value in (filter or {}).items())

    def insert(self, collection: str, doc: dict) -> dict:
        stamped = _stamp_new(copy.deepcopy(doc))
        self._collection(collection)[stamped["_id"]] = stamped
        return copy.deepcopy(stamped)

    def find(
        self, collection: str, filter: Optional[dict] = None, newest_first: bool = True
    ) -> list[dict]:
        docs = [
            copy.deepcopy(doc)
            for doc in self._collection(collection).values()
            if self._matches(doc, filter)
        ]
        if newest_first:
            docs.reverse()
        return docs

    def find_one(self, collection: str, filter: Optional[dict] = None) -> Optional[dict]:
        docs = self.find(collection, filter)
        return docs[0] if docs else None

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        doc = self._collection(collection).get(oid)
        return copy.deepcopy(doc) if doc else None

    def update(self, collection: str, doc_id: str, changes: dict) -> Optional[dict]:
        oid = to_object_id(doc_id)
        doc = self._collection(collection).get(oid) if oid else None
        if doc is None:
            return None
        doc.update(copy.deepcopy(changes))
        doc["updatedAt"] = utc_now()
        return copy.deepcopy(doc)

    def delete(self, collection: str, doc_id: str) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        return self._collection(collection).pop(oid, None) is not None

    def count(self, collection: str, filter: Optional[dict] = None) -> int:
        return len(self.find(collection, filter))

    def ping(self) -> bool:
        return True

    def connection_state(self) -> str:
        return "in-memory"

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.collections.clear()


class MongoDbClient:
    """
    pymongo-backed implementation.

    The underlying ``MongoClient`` is created on first use and kept for the
    lifetime of the process so warm serverless invocations reuse the pool.
    A client whose connection check fails is dropped and rebuilt on the
    next call.
    """

    def __init__(
        self,
        uri: Optional[str],
        db_name: str = "dentist_website",
        *,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        socket_timeout_ms: int = 45000,
        max_pool_size: int = 1,
        client: Optional[MongoClient] = None,
    ):
        if not uri and client is None:
            raise ValueError("MONGODB_URI is required for MongoDbClient")
        self.uri = uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.connect_timeout_ms = connect_timeout_ms
        self.socket_timeout_ms = socket_timeout_ms
        self.max_pool_size = max_pool_size
        self._client = client
        self._last_error: Optional[str] = None

    def _get_client(self) -> MongoClient:
        if self._client is None:
            logger.info("Creating new MongoDB client for database %s", self.db_name)
            self._client = MongoClient(
                self.uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                connectTimeoutMS=self.connect_timeout_ms,
                socketTimeoutMS=self.socket_timeout_ms,
                maxPoolSize=self.max_pool_size,
                minPoolSize=0,
                maxIdleTimeMS=10000,
                retryWrites=True,
                retryReads=True,
            )
        return self._client

    def _coll(self, name: str):
        return self._get_client()[self.db_name][name]

    def _drop_client(self) -> None:
        if self._client is not None:
            try:
                self._client.close()
            except PyMongoError:
                logger.warning("Error while closing MongoDB client", exc_info=True)
        self._client = None

    def insert(self, collection: str, doc: dict) -> dict:
        stamped = _stamp_new(doc)
        self._coll(collection).insert_one(stamped)
        return stamped

    def find(
        self, collection: str, filter: Optional[dict] = None, newest_first: bool = True
    ) -> list[dict]:
        direction = DESCENDING if newest_first else ASCENDING
        cursor = self._coll(collection).find(filter or {}).sort(
            [("createdAt", direction), ("_id", direction)]
        )
        return list(cursor)

    def find_one(self, collection: str, filter: Optional[dict] = None) -> Optional[dict]:
        return self._coll(collection).find_one(
            filter or {}, sort=[("createdAt", DESCENDING), ("_id", DESCENDING)]
        )

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        return self._coll(collection).find_one({"_id": oid})

    def update(self, collection: str, doc_id: str, changes: dict) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        payload = dict(changes)
        payload.pop("_id", None)
        payload["updatedAt"] = utc_now()
        return self._coll(collection).find_one_and_update(
            {"_id": oid},
            {"$set": payload},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, collection: str, doc_id: str) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        result = self._coll(collection).delete_one({"_id": oid})
        return result.deleted_count == 1

    def count(self, collection: str, filter: Optional[dict] = None) -> int:
        return self._coll(collection).count_documents(filter or {})

    def ping(self) -> bool:
        try:
            self._get_client().admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB connection check failed: %s", exc)
            self._last_error = str(exc)
            self._drop_client()
            return False
        self._last_error = None
        return True

    def connection_state(self) -> str:
        if self.ping():
            return "connected"
        return f"error: {self._last_error}"
