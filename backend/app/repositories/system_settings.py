"""
System Settings Repository

Centralizes all database operations for the singleton system settings document.
"""

from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.constants import COLLECTION_SYSTEM_SETTINGS
from app.models.system import SystemSettings


class SystemSettingsRepository:
    """Repository for system settings database operations."""

    SETTINGS_ID = "current"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[COLLECTION_SYSTEM_SETTINGS]

    async def get(self) -> SystemSettings:
        """Get system settings, falling back to defaults when none are stored."""
        data = await self.collection.find_one({"_id": self.SETTINGS_ID})
        if data:
            return SystemSettings(**data)
        return SystemSettings()

    async def update(self, update_data: Dict[str, Any]) -> SystemSettings:
        """Update system settings (upsert)."""
        await self.collection.update_one(
            {"_id": self.SETTINGS_ID}, {"$set": update_data}, upsert=True
        )
        return await self.get()
