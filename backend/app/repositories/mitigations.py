"""
Mitigation Repository

Centralizes all database operations for mitigations.
"""

from typing import List

from app.core.constants import COLLECTION_MITIGATIONS
from app.models.mitigation import Mitigation
from app.repositories.base import BaseRepository


class MitigationRepository(BaseRepository[Mitigation]):
    """Repository for mitigation database operations."""

    collection_name = COLLECTION_MITIGATIONS
    model_class = Mitigation

    async def find_by_project(self, project_id: str, limit: int = 500) -> List[Mitigation]:
        return await self.find_many(
            {"project_id": project_id}, limit=limit, sort_by="created_at", sort_order=-1
        )

    async def find_by_assignee(self, user_id: str, limit: int = 500) -> List[Mitigation]:
        return await self.find_many(
            {"assignee": user_id}, limit=limit, sort_by="due_date", sort_order=1
        )
