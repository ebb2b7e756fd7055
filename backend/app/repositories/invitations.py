"""
Invitation Repository

Centralizes all database operations for project invitations.
Status writes are conditional on the stored status still being PENDING,
so two racing transitions cannot both succeed.
"""

from datetime import datetime
from typing import List, Optional

from pymongo.errors import DuplicateKeyError

from app.core import utc_now
from app.core.constants import COLLECTION_INVITATIONS
from app.models.invitation import InvitationStatus, ProjectInvitation
from app.repositories.base import BaseRepository


class PendingInvitationExists(Exception):
    """Raised when the partial unique index rejects a second PENDING invitation."""


class InvitationRepository(BaseRepository[ProjectInvitation]):
    """Repository for invitation database operations."""

    collection_name = COLLECTION_INVITATIONS
    model_class = ProjectInvitation

    async def create(self, model: ProjectInvitation) -> ProjectInvitation:
        """Insert an invitation, translating unique index violations."""
        try:
            await self.collection.insert_one(model.model_dump(by_alias=True))
        except DuplicateKeyError as e:
            raise PendingInvitationExists(str(e)) from e
        return model

    async def find_pending(
        self, project_id: str, user_id: str
    ) -> Optional[ProjectInvitation]:
        """The PENDING invitation for the pair, if any."""
        return await self.find_one(
            {
                "project_id": project_id,
                "user_id": user_id,
                "status": InvitationStatus.PENDING.value,
            }
        )

    async def find_by_user(
        self, user_id: str, status: Optional[InvitationStatus] = None
    ) -> List[ProjectInvitation]:
        """Find a user's invitations, newest first."""
        query = {"user_id": user_id}
        if status is not None:
            query["status"] = status.value
        return await self.find_many(
            query, limit=1000, sort_by="invited_at", sort_order=-1
        )

    async def find_by_project(
        self, project_id: str, skip: int = 0, limit: int = 100
    ) -> List[ProjectInvitation]:
        """Find invitations for a project, newest first."""
        return await self.find_many(
            {"project_id": project_id},
            skip=skip,
            limit=limit,
            sort_by="invited_at",
            sort_order=-1,
        )

    async def transition(
        self,
        invitation_id: str,
        target: InvitationStatus,
        responded_at: Optional[datetime] = None,
    ) -> bool:
        """
        Move a PENDING invitation to ``target``.

        Returns:
            False if the invitation was no longer PENDING.
        """
        update = {"status": target.value}
        if responded_at is not None:
            update["responded_at"] = responded_at
        return await self.update_where(
            invitation_id, {"status": InvitationStatus.PENDING.value}, update
        )

    async def expire_overdue(self, now: Optional[datetime] = None) -> int:
        """Flip every PENDING invitation past its deadline to EXPIRED."""
        return await self.update_many(
            {
                "status": InvitationStatus.PENDING.value,
                "expires_at": {"$lt": now or utc_now()},
            },
            {"status": InvitationStatus.EXPIRED.value},
        )
