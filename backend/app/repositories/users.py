"""
User Repository

Centralizes all database operations for users.
"""

from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from app.core.constants import COLLECTION_USERS
from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    collection_name = COLLECTION_USERS
    model_class = User

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        return await self.find_one({"username": username})

    async def find_by_ids(self, user_ids: List[str]) -> List[Dict[str, Any]]:
        """Find raw user documents by list of IDs."""
        if not user_ids:
            return []
        cursor = self.collection.find({"_id": {"$in": user_ids}})
        return await cursor.to_list(None)

    async def add_member_project(self, user_id: str, project_id: str) -> None:
        """Record project membership on the user (set union, safe to repeat)."""
        await self.collection.update_one(
            {"_id": user_id}, {"$addToSet": {"member_projects": project_id}}
        )

    async def remove_member_project(self, user_id: str, project_id: str) -> None:
        """Drop project membership from the user (safe to repeat)."""
        await self.collection.update_one(
            {"_id": user_id}, {"$pull": {"member_projects": project_id}}
        )

    async def add_owned_project(self, user_id: str, project_id: str) -> None:
        await self.collection.update_one(
            {"_id": user_id}, {"$addToSet": {"owned_projects": project_id}}
        )

    async def set_member_projects(self, user_id: str, project_ids: List[str]) -> None:
        """Overwrite the derived member_projects list."""
        await self.collection.update_one(
            {"_id": user_id}, {"$set": {"member_projects": project_ids}}
        )

    async def iter_member_projects(self) -> AsyncIterator[Tuple[str, List[str]]]:
        """Yield (user id, member_projects) for every user."""
        cursor = self.collection.find({}, {"_id": 1, "member_projects": 1})
        async for doc in cursor:
            yield doc["_id"], doc.get("member_projects", [])
