"""
Project Repository

Centralizes all database operations for projects.
"""

from typing import Any, Dict, List, Optional

from app.core import utc_now
from app.core.constants import COLLECTION_PROJECTS
from app.models.project import Project
from app.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for project database operations."""

    collection_name = COLLECTION_PROJECTS
    model_class = Project

    async def find_accessible(
        self,
        user_id: str,
        username: Optional[str] = None,
        limit: int = 1000,
    ) -> List[Project]:
        """Find projects the user owns (by id or legacy creator name) or belongs to."""
        conditions: List[Dict[str, Any]] = [
            {"owner_id": user_id},
            {"member_ids": user_id},
        ]
        if username:
            conditions.append({"owner_id": None, "created_by": username})
        return await self.find_many(
            {"$or": conditions}, limit=limit, sort_by="name", sort_order=1
        )

    async def find_by_member(self, user_id: str, limit: int = 1000) -> List[Project]:
        """Find projects listing the user in member_ids."""
        return await self.find_many({"member_ids": user_id}, limit=limit)

    async def add_member(self, project_id: str, user_id: str) -> None:
        """Add a member id to the project (set union, safe to repeat)."""
        await self.collection.update_one(
            {"_id": project_id},
            {
                "$addToSet": {"member_ids": user_id},
                "$set": {"updated_at": utc_now()},
            },
        )

    async def remove_member(self, project_id: str, user_id: str) -> None:
        """Remove a member id from the project (safe to repeat)."""
        await self.collection.update_one(
            {"_id": project_id},
            {
                "$pull": {"member_ids": user_id},
                "$set": {"updated_at": utc_now()},
            },
        )
