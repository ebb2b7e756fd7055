import logging

import pymongo

from app.core.constants import (
    COLLECTION_INVITATIONS,
    COLLECTION_MITIGATIONS,
    COLLECTION_NOTIFICATIONS,
    COLLECTION_PROJECTS,
    COLLECTION_SYSTEM_SETTINGS,
    COLLECTION_USERS,
)
from app.db.mongodb import get_database
from app.models.invitation import InvitationStatus
from app.models.system import SystemSettings

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates indexes for all collections to ensure performance."""
    logger.info("Creating database indexes...")

    # Users
    await db[COLLECTION_USERS].create_index("username", unique=True)
    await db[COLLECTION_USERS].create_index("email", unique=True)
    await db[COLLECTION_USERS].create_index("member_projects")

    # Projects
    await db[COLLECTION_PROJECTS].create_index("owner_id")
    await db[COLLECTION_PROJECTS].create_index("created_by")
    await db[COLLECTION_PROJECTS].create_index("name")
    await db[COLLECTION_PROJECTS].create_index("member_ids")

    # Invitations
    # At most one PENDING invitation per (project, invitee). Terminal records
    # fall out of the index so re-invitation creates a fresh document.
    await db[COLLECTION_INVITATIONS].create_index(
        [("project_id", pymongo.ASCENDING), ("user_id", pymongo.ASCENDING)],
        unique=True,
        partialFilterExpression={"status": InvitationStatus.PENDING.value},
        name="uniq_pending_invitation",
    )
    await db[COLLECTION_INVITATIONS].create_index(
        [("user_id", pymongo.ASCENDING), ("invited_at", pymongo.DESCENDING)]
    )
    await db[COLLECTION_INVITATIONS].create_index(
        [("project_id", pymongo.ASCENDING), ("invited_at", pymongo.DESCENDING)]
    )
    # Housekeeping sweep
    await db[COLLECTION_INVITATIONS].create_index(
        [("status", pymongo.ASCENDING), ("expires_at", pymongo.ASCENDING)]
    )

    # Notifications
    await db[COLLECTION_NOTIFICATIONS].create_index(
        [
            ("user_id", pymongo.ASCENDING),
            ("is_read", pymongo.ASCENDING),
            ("created_at", pymongo.DESCENDING),
        ]
    )
    # TTL: MongoDB removes a notification once expires_at has passed
    await db[COLLECTION_NOTIFICATIONS].create_index(
        "expires_at", expireAfterSeconds=0
    )

    # Mitigations
    await db[COLLECTION_MITIGATIONS].create_index(
        [("project_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]
    )
    await db[COLLECTION_MITIGATIONS].create_index("assignee")

    logger.info("Database indexes created successfully.")


async def init_db():
    db = await get_database()

    await create_indexes(db)

    settings_collection = db[COLLECTION_SYSTEM_SETTINGS]
    if await settings_collection.count_documents({}) == 0:
        logger.info("No system settings found. Storing defaults.")
        await settings_collection.insert_one(
            SystemSettings().model_dump(by_alias=True)
        )
