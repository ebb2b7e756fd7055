"""
Notification Repository

Centralizes all database operations for user notifications.
"""

from datetime import datetime
from typing import List, Optional

from app.core import utc_now
from app.core.constants import COLLECTION_NOTIFICATIONS
from app.models.notification import Notification
from app.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification database operations."""

    collection_name = COLLECTION_NOTIFICATIONS
    model_class = Notification

    async def find_by_user(
        self,
        user_id: str,
        is_read: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        query = {"user_id": user_id}
        if is_read is not None:
            query["is_read"] = is_read
        return await self.find_many(
            query, skip=skip, limit=limit, sort_by="created_at", sort_order=-1
        )

    async def count_unread(self, user_id: str) -> int:
        return await self.count({"user_id": user_id, "is_read": False})

    async def mark_read(self, notification_id: str, read_at: datetime) -> bool:
        """Flip a single notification to read. Already-read ones keep their read_at."""
        return await self.update_where(
            notification_id, {"is_read": False}, {"is_read": True, "read_at": read_at}
        )

    async def mark_read_many(self, notification_ids: List[str], read_at: datetime) -> int:
        """Flip a batch of notifications to read, skipping any already read."""
        if not notification_ids:
            return 0
        return await self.update_many(
            {"_id": {"$in": notification_ids}, "is_read": False},
            {"is_read": True, "read_at": read_at},
        )

    async def delete_read(self, user_id: str) -> int:
        return await self.delete_many({"user_id": user_id, "is_read": True})

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Delete notifications past their retention window."""
        return await self.delete_many({"expires_at": {"$lt": now or utc_now()}})
