"""
Document persistence for routes, metrics, predictions and saved scenarios.

MongoDB is used when ``MONGODB_URI`` is configured and reachable. Otherwise
the process keeps documents in memory: exact-match filtering plus ``$gte`` /
``$lte`` ranges, no indexes, no transactions, nothing survives a restart.
"""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from src.settings import Settings

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
RANGE_OPERATORS = {"$gte", "$lte", "$gt", "$lt"}


@dataclass
class InsertResult:
    inserted_id: Any
    acknowledged: bool = True


@dataclass
class InsertManyResult:
    inserted_ids: List[Any] = field(default_factory=list)
    acknowledged: bool = True

    @property
    def inserted_count(self) -> int:
        return len(self.inserted_ids)


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass
class DeleteResult:
    deleted_count: int
    acknowledged: bool = True


class DocumentStore(ABC):
    """Minimal collection API shared by the MongoDB and in-memory backends."""

    backend = "abstract"

    @abstractmethod
    def find(self, collection: str, query: Optional[Mapping[str, Any]] = None) -> List[Document]:
        ...

    def find_one(self, collection: str, query: Optional[Mapping[str, Any]] = None) -> Optional[Document]:
        results = self.find(collection, query)
        return results[0] if results else None

    @abstractmethod
    def insert_one(self, collection: str, document: Document) -> InsertResult:
        ...

    def insert_many(self, collection: str, documents: List[Document]) -> InsertManyResult:
        return InsertManyResult([self.insert_one(collection, doc).inserted_id for doc in documents])

    @abstractmethod
    def update_one(self, collection: str, query: Mapping[str, Any], values: Mapping[str, Any]) -> UpdateResult:
        """Apply ``values`` as a ``$set`` to the first matching document."""

    @abstractmethod
    def delete_one(self, collection: str, query: Mapping[str, Any]) -> DeleteResult:
        ...

    def count(self, collection: str, query: Optional[Mapping[str, Any]] = None) -> int:
        return len(self.find(collection, query))

    def close(self) -> None:
        pass


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, Mapping) and condition and set(condition) <= RANGE_OPERATORS:
        if value is None:
            return False
        try:
            for operator, bound in condition.items():
                if operator == "$gte" and not value >= bound:
                    return False
                if operator == "$lte" and not value <= bound:
                    return False
                if operator == "$gt" and not value > bound:
                    return False
                if operator == "$lt" and not value < bound:
                    return False
        except TypeError:
            return False
        return True
    return value == condition


def matches(document: Mapping[str, Any], query: Optional[Mapping[str, Any]]) -> bool:
    """True when every query key matches; missing keys never match."""
    for key, condition in (query or {}).items():
        if key not in document or not _matches_condition(document[key], condition):
            return False
    return True


class InMemoryDocumentStore(DocumentStore):
    backend = "memory"

    def __init__(self):
        self._collections: Dict[str, List[Document]] = {}
        self._lock = threading.Lock()

    def _collection(self, name: str) -> List[Document]:
        return self._collections.setdefault(name, [])

    def find(self, collection, query=None):
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._collection(collection) if matches(doc, query)]

    def insert_one(self, collection, document):
        # Like pymongo, the caller's document receives the generated _id.
        document.setdefault("_id", ObjectId())
        with self._lock:
            self._collection(collection).append(copy.deepcopy(document))
        return InsertResult(document["_id"])

    def update_one(self, collection, query, values):
        with self._lock:
            for stored in self._collection(collection):
                if matches(stored, query):
                    modified = any(stored.get(key) != value for key, value in values.items())
                    stored.update(copy.deepcopy(dict(values)))
                    return UpdateResult(matched_count=1, modified_count=int(modified))
        return UpdateResult(matched_count=0, modified_count=0)

    def delete_one(self, collection, query):
        with self._lock:
            documents = self._collection(collection)
            for index, stored in enumerate(documents):
                if matches(stored, query):
                    del documents[index]
                    return DeleteResult(deleted_count=1)
        return DeleteResult(deleted_count=0)


class MongoDocumentStore(DocumentStore):
    backend = "mongodb"

    def __init__(self, client: MongoClient, database: str):
        self.client = client
        self.db = client[database]

    @classmethod
    def connect(cls, uri: str, database: str, timeout_ms: int = 5000) -> "MongoDocumentStore":
        """Open a client and ping the server; raises ``PyMongoError`` when unreachable."""
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, connectTimeoutMS=timeout_ms)
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        return cls(client, database)

    def find(self, collection, query=None):
        return list(self.db[collection].find(dict(query or {})))

    def find_one(self, collection, query=None):
        return self.db[collection].find_one(dict(query or {}))

    def insert_one(self, collection, document):
        result = self.db[collection].insert_one(document)
        return InsertResult(result.inserted_id, result.acknowledged)

    def insert_many(self, collection, documents):
        if not documents:
            return InsertManyResult()
        result = self.db[collection].insert_many(documents)
        return InsertManyResult(list(result.inserted_ids), result.acknowledged)

    def update_one(self, collection, query, values):
        result = self.db[collection].update_one(dict(query), {"$set": dict(values)})
        return UpdateResult(result.matched_count, result.modified_count, result.acknowledged)

    def delete_one(self, collection, query):
        result = self.db[collection].delete_one(dict(query))
        return DeleteResult(result.deleted_count, result.acknowledged)

    def count(self, collection, query=None):
        return self.db[collection].count_documents(dict(query or {}))

    def close(self) -> None:
        self.client.close()


def connect_document_store(settings: Settings) -> DocumentStore:
    """MongoDB when configured and reachable, otherwise the in-memory store."""
    if not settings.use_mongodb:
        logger.info("MONGODB_URI not set; using in-memory document store", extra={"store": "memory"})
        return InMemoryDocumentStore()
    try:
        store = MongoDocumentStore.connect(
            settings.mongodb_uri, settings.mongodb_db, timeout_ms=settings.mongodb_timeout_ms
        )
    except PyMongoError as exc:
        logger.warning(
            "could not connect to MongoDB (%s); falling back to in-memory document store",
            exc,
            extra={"store": "memory"},
        )
        return InMemoryDocumentStore()
    logger.info("connected to MongoDB database %s", settings.mongodb_db, extra={"store": "mongodb"})
    return store


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id from the URL; malformed ids yield ``None``."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize_document(value: Any) -> Any:
    """JSON-friendly copy: ``_id`` becomes ``id``; ObjectIds and datetimes become strings."""
    if isinstance(value, Mapping):
        serialized = {}
        for key, item in value.items():
            serialized["id" if key == "_id" else key] = serialize_document(item)
        return serialized
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
