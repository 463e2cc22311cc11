"""
Collection capability interface and adapters.

A Fixture accepts any object with callable ``find``, ``save`` and ``remove``;
subclassing DocumentCollection is optional. Methods may be coroutine
functions or plain functions.

    find(predicate)   -> documents (list, iterable or async iterable)
    save(document)    -> acknowledgement, None if nothing was saved
    remove(predicate) -> {"n": removed_count}
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping

from bson import ObjectId
from pymongo.errors import PyMongoError

from .errors import UpstreamError
from .query import matches


class DocumentCollection(ABC):
    """
    Abstract base class for fixture collections.
    """

    name: str = ""

    @abstractmethod
    async def find(self, predicate: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Return the documents matching ``predicate``."""

    @abstractmethod
    async def save(self, document: Dict[str, Any]) -> Any:
        """Insert or replace ``document`` by ``_id``."""

    @abstractmethod
    async def remove(self, predicate: Mapping[str, Any]) -> Dict[str, int]:
        """Delete the documents matching ``predicate``; returns ``{"n": count}``."""


class InMemoryCollection(DocumentCollection):
    """
    Dict-backed collection keyed by ``_id``.

    Documents are copied in and out, so callers never share state with the
    store. Insertion order is preserved. Handy for tests and for trying
    fixtures out without a database.
    """

    def __init__(self, name: str, documents: Iterable[Dict[str, Any]] = ()):
        self.name = name
        self._documents: Dict[Any, Dict[str, Any]] = {}
        for doc in documents:
            self._put(doc)

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._documents.values()]

    def _put(self, document: Dict[str, Any]) -> Any:
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self._documents[doc["_id"]] = doc
        return doc["_id"]

    async def find(self, predicate: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._documents.values() if matches(predicate, doc)]

    async def save(self, document: Dict[str, Any]) -> Any:
        return self._put(document)

    async def remove(self, predicate: Mapping[str, Any]) -> Dict[str, int]:
        doomed = [_id for _id, doc in self._documents.items() if matches(predicate, doc)]
        for _id in doomed:
            del self._documents[_id]
        return {"n": len(doomed)}


class MongoCollection(DocumentCollection):
    """
    Adapter giving a PyMongo collection the fixture API.

    PyMongo is synchronous, so each call runs in a worker thread. Driver
    errors are re-raised as UpstreamError with the original as the cause.

    Example:
        client = MongoClient("mongodb://localhost:27017")
        users = MongoCollection(client.app.users)
    """

    def __init__(self, collection: Any):
        self.collection = collection
        self.name = collection.name

    def __repr__(self) -> str:
        return f"MongoCollection({self.name!r})"

    async def _run(self, operation: str, func, *args, **kwargs) -> Any:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except PyMongoError as e:
            raise UpstreamError(operation, self.name, str(e)) from e

    def _find(self, predicate: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return list(self.collection.find(predicate))

    def _save(self, document: Dict[str, Any]) -> Any:
        if "_id" not in document:
            result = self.collection.insert_one(document)
            return result.inserted_id
        self.collection.replace_one({"_id": document["_id"]}, document, upsert=True)
        return document["_id"]

    async def find(self, predicate: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return await self._run("find", self._find, predicate)

    async def save(self, document: Dict[str, Any]) -> Any:
        return await self._run("save", self._save, document)

    async def remove(self, predicate: Mapping[str, Any]) -> Dict[str, int]:
        result = await self._run("remove", self.collection.delete_many, predicate)
        return {"n": result.deleted_count}


__all__ = ["DocumentCollection", "InMemoryCollection", "MongoCollection"]
