"""
Base Repository

Shared document access for the collection repositories. Subclasses name
their collection and model; everything returned to services is a model
instance, never a raw document.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Typed access to one collection.

    Usage:
        class ProjectRepository(BaseRepository[Project]):
            collection_name = "projects"
            model_class = Project
    """

    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, data: Optional[Dict[str, Any]]) -> Optional[T]:
        if data is None:
            return None
        return self.model_class(**data)

    async def get_by_id(self, id: str) -> Optional[T]:
        return self._to_model(await self.collection.find_one({"_id": id}))

    async def find_one(
        self,
        query: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[T]:
        return self._to_model(await self.collection.find_one(query, projection))

    async def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = 1,
    ) -> List[T]:
        """Find documents matching ``query``, optionally sorted, one page at a time."""
        cursor = self.collection.find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        cursor = cursor.skip(skip).limit(limit)
        docs = await cursor.to_list(limit)
        return [self.model_class(**doc) for doc in docs]

    async def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return await self.collection.count_documents(query or {})

    async def create(self, model: T) -> T:
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model

    async def update(self, id: str, update_data: Dict[str, Any]) -> Optional[T]:
        """``$set`` the given fields and return the stored document afterwards."""
        if update_data:
            await self.collection.update_one({"_id": id}, {"$set": update_data})
        return await self.get_by_id(id)

    async def update_where(
        self, id: str, condition: Dict[str, Any], update_data: Dict[str, Any]
    ) -> bool:
        """
        Compare-and-set on a single document.

        The ``$set`` only applies while the document still matches
        ``condition``. MongoDB applies the match and the write atomically,
        so of two racing callers at most one sees True.
        """
        result = await self.collection.update_one(
            {"_id": id, **condition}, {"$set": update_data}
        )
        return result.matched_count > 0

    async def update_many(self, query: Dict[str, Any], update_data: Dict[str, Any]) -> int:
        """``$set`` on every match; returns how many documents changed."""
        result = await self.collection.update_many(query, {"$set": update_data})
        return result.modified_count

    async def delete(self, id: str) -> bool:
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0

    async def delete_many(self, query: Dict[str, Any]) -> int:
        result = await self.collection.delete_many(query)
        return result.deleted_count
