"""MongoDB document store adapter built on motor."""

from typing import Any, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from storefront_service.errors import InvalidRequest, StoreError
from storefront_service.logger import store_logger


def parse_object_id(value: Any) -> ObjectId:
    """Parse a client-supplied identifier into an ObjectId.

    Raises:
        InvalidRequest: If the value is not a valid 24-character hex id.
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        raise InvalidRequest(f"invalid product _id: {value!r}")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidRequest(f"invalid product _id: {value!r}") from e


class DocumentCollection:
    """Handle on a single named collection.

    Every driver failure is re-raised as :class:`StoreError` so callers only
    deal with the storefront error taxonomy.
    """

    def __init__(self, collection):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def find_all(self) -> list[dict]:
        return await self.find({})

    async def find(self, query: Mapping[str, Any]) -> list[dict]:
        try:
            return await self._collection.find(query).to_list(length=None)
        except PyMongoError as e:
            store_logger.error(f"find on {self.name} failed: {e}")
            raise StoreError(f"query {self.name}", e) from e

    async def find_by_id(self, document_id: ObjectId) -> Optional[dict]:
        try:
            return await self._collection.find_one({"_id": document_id})
        except PyMongoError as e:
            store_logger.error(f"find_one {document_id} on {self.name} failed: {e}")
            raise StoreError(f"read from {self.name}", e) from e

    async def insert_one(self, document: Mapping[str, Any]) -> ObjectId:
        try:
            result = await self._collection.insert_one(dict(document))
        except PyMongoError as e:
            store_logger.error(f"insert into {self.name} failed: {e}")
            raise StoreError(f"write to {self.name}", e) from e
        return result.inserted_id

    async def increment(
        self,
        document_id: ObjectId,
        field: str,
        amount: int,
        minimum: Optional[int] = None,
    ) -> bool:
        """Atomically add ``amount`` to ``field`` on one document.

        When ``minimum`` is given the update only applies if the field's
        current value is at least ``minimum``; the check and the write are a
        single store-level operation.

        Returns:
            bool: True if a document was modified.
        """
        query: dict[str, Any] = {"_id": document_id}
        if minimum is not None:
            query[field] = {"$gte": minimum}
        try:
            result = await self._collection.update_one(query, {"$inc": {field: amount}})
        except PyMongoError as e:
            store_logger.error(f"update of {document_id} on {self.name} failed: {e}")
            raise StoreError(f"update {self.name}", e) from e
        return result.modified_count == 1


class DocumentStore:
    """Connection to a named logical database."""

    def __init__(self, uri: str, database_name: str, timeout_ms: int = 5000):
        self._client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        self._database = self._client[database_name]
        self.database_name = database_name

    def collection(self, name: str) -> DocumentCollection:
        return DocumentCollection(self._database[name])

    async def ping(self) -> bool:
        """Check whether the store answers a ping.

        Returns:
            bool: True if the server responded, False otherwise.
        """
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            store_logger.error(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        self._client.close()
