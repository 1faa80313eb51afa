"""In-memory fake document store for testing.

Implements the same collection contract as ``storefront_service.store`` but
keeps documents in a dict. Each call yields to the event loop once before
touching data, so concurrent tasks interleave the way they would against a
real server, while the conditional increment itself stays atomic.
"""

from __future__ import annotations

import asyncio
import copy
import re
from typing import Any

from bson import ObjectId

from storefront_service.errors import StoreError


def _matches(document: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, clause) for clause in condition):
                return False
            continue
        value = document.get(key)
        if isinstance(condition, dict):
            if "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                    return False
            if "$gte" in condition:
                if not isinstance(value, (int, float)) or value < condition["$gte"]:
                    return False
        elif value != condition:
            return False
    return True


class FakeCollection:

    def __init__(self, name: str, documents: list[dict] | None = None) -> None:
        self.name = name
        self._docs: dict[ObjectId, dict] = {}
        self.fail_with: Exception | None = None
        for doc in documents or []:
            self.seed(doc)

    def seed(self, document: dict) -> ObjectId:
        doc = dict(document)
        doc.setdefault("_id", ObjectId())
        self._docs[doc["_id"]] = doc
        return doc["_id"]

    def get(self, document_id: ObjectId) -> dict | None:
        return self._docs.get(document_id)

    def all(self) -> list[dict]:
        return list(self._docs.values())

    async def _tick(self, operation: str) -> None:
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise StoreError(f"{operation} {self.name}", self.fail_with)

    async def find_all(self) -> list[dict]:
        return await self.find({})

    async def find(self, query: dict[str, Any]) -> list[dict]:
        await self._tick("query")
        return [copy.deepcopy(d) for d in self._docs.values() if _matches(d, query)]

    async def find_by_id(self, document_id: ObjectId) -> dict | None:
        await self._tick("read from")
        doc = self._docs.get(document_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, document: dict) -> ObjectId:
        await self._tick("write to")
        return self.seed(copy.deepcopy(document))

    async def increment(self, document_id, field, amount, minimum=None) -> bool:
        await self._tick("update")
        doc = self._docs.get(document_id)
        if doc is None:
            return False
        if minimum is not None and not _matches(doc, {field: {"$gte": minimum}}):
            return False
        doc[field] = doc.get(field, 0) + amount
        return True


class FakeDocumentStore:

    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.reachable = True

    def collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def ping(self) -> bool:
        return self.reachable

    def close(self) -> None:
        pass
