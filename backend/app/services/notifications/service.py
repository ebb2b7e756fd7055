import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from app.core import utc_now
from app.core.config import settings
from app.core.constants import (
    HIGH_PRIORITY_SEVERITIES,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    build_action_url,
)
from app.core.exceptions import ForbiddenError, NotFoundError, RejectedOperationError
from app.core.metrics import notifications_created_total
from app.models.notification import Notification, NotificationType, RelatedEntityType
from app.models.user import User
from app.repositories.notifications import NotificationRepository
from app.services.identity import IdentityDirectory

logger = logging.getLogger(__name__)


class NotificationService:
    """
    In-app notification records. Producers call ``create`` or one of the
    typed helpers; readers go through the owner-checked operations below.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.repository = NotificationRepository(db)
        self.identity = IdentityDirectory(db)

    async def create(
        self,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        related_entity_id: Optional[str] = None,
        related_entity_type: Optional[RelatedEntityType] = None,
        priority: str = PRIORITY_MEDIUM,
        retention_days: Optional[int] = None,
        action_url: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """
        Persist an unread notification.

        Retention defaults to NOTIFICATION_RETENTION_DAYS; the typed helpers
        below pass the long retention window instead.
        """
        if retention_days is None:
            retention_days = settings.NOTIFICATION_RETENTION_DAYS
        if action_url is None and related_entity_type and related_entity_id:
            action_url = build_action_url(
                RelatedEntityType(related_entity_type).value, related_entity_id
            )

        try:
            notification = Notification.with_retention(
                retention_days,
                user_id=user_id,
                type=type,
                title=title,
                message=message,
                related_entity_id=related_entity_id,
                related_entity_type=related_entity_type,
                priority=priority,
                action_url=action_url,
                metadata=metadata or {},
            )
        except ValidationError as e:
            raise RejectedOperationError(f"Invalid notification: {e.errors()[0]['msg']}") from e
        await self.repository.create(notification)
        notifications_created_total.labels(type=notification.type).inc()
        return notification

    # -------------------------------------------------------------------------
    # Long-lived notification types
    # -------------------------------------------------------------------------

    async def notify_project_invited(
        self,
        user_id: str,
        project_id: str,
        project_name: str,
        invited_by: str,
        invitation_id: Optional[str] = None,
    ) -> Notification:
        return await self.create(
            user_id,
            NotificationType.PROJECT_INVITED,
            "Project Invitation",
            f"{invited_by} invited you to join project: {project_name}",
            related_entity_id=invitation_id or project_id,
            related_entity_type=(
                RelatedEntityType.INVITATION if invitation_id else RelatedEntityType.PROJECT
            ),
            retention_days=settings.NOTIFICATION_LONG_RETENTION_DAYS,
            metadata={
                "projectId": project_id,
                "projectName": project_name,
                "invitedBy": invited_by,
            },
        )

    async def notify_mitigation_assigned(
        self,
        user_id: str,
        mitigation_id: str,
        mitigation_title: str,
        project_name: Optional[str] = None,
        assigned_by: Optional[str] = None,
    ) -> Notification:
        message = f"You have been assigned to mitigation '{mitigation_title}'"
        if project_name:
            message += f" in project '{project_name}'"
        return await self.create(
            user_id,
            NotificationType.MITIGATION_ASSIGNED,
            "New Mitigation Assigned",
            message,
            related_entity_id=mitigation_id,
            related_entity_type=RelatedEntityType.MITIGATION,
            retention_days=settings.NOTIFICATION_LONG_RETENTION_DAYS,
            metadata={
                "projectName": project_name,
                "mitigationTitle": mitigation_title,
                "assignedBy": assigned_by,
            },
        )

    async def notify_task_assigned(
        self,
        user_id: str,
        task_id: str,
        task_title: str,
        project_name: Optional[str] = None,
        assigned_by: Optional[str] = None,
    ) -> Notification:
        return await self.create(
            user_id,
            NotificationType.TASK_ASSIGNED,
            "New Task Assigned",
            f"You have been assigned to task: {task_title}",
            related_entity_id=task_id,
            related_entity_type=RelatedEntityType.TASK,
            retention_days=settings.NOTIFICATION_LONG_RETENTION_DAYS,
            metadata={
                "projectName": project_name,
                "taskTitle": task_title,
                "assignedBy": assigned_by,
            },
        )

    async def notify_risk_detected(
        self,
        user_id: str,
        risk_id: str,
        risk_title: str,
        severity: str,
        project_name: Optional[str] = None,
    ) -> Notification:
        severity = severity.upper()
        return await self.create(
            user_id,
            NotificationType.RISK_DETECTED,
            "New Risk Detected",
            f"A {severity.lower()} severity risk has been detected: {risk_title}",
            related_entity_id=risk_id,
            related_entity_type=RelatedEntityType.RISK,
            priority=PRIORITY_HIGH if severity in HIGH_PRIORITY_SEVERITIES else PRIORITY_MEDIUM,
            retention_days=settings.NOTIFICATION_LONG_RETENTION_DAYS,
            metadata={
                "projectName": project_name,
                "riskTitle": risk_title,
                "severity": severity,
            },
        )

    async def notify_deadline_approaching(
        self,
        user_id: str,
        entity_type: RelatedEntityType,
        entity_id: str,
        entity_title: str,
        deadline: datetime,
        project_name: Optional[str] = None,
    ) -> Notification:
        return await self.create(
            user_id,
            NotificationType.DEADLINE_APPROACHING,
            "Deadline Approaching",
            f"{entity_title} is due soon",
            related_entity_id=entity_id,
            related_entity_type=entity_type,
            priority=PRIORITY_HIGH,
            retention_days=settings.NOTIFICATION_LONG_RETENTION_DAYS,
            metadata={
                "projectName": project_name,
                "entityTitle": entity_title,
                "deadline": deadline.isoformat(),
            },
        )

    # -------------------------------------------------------------------------
    # Reader operations
    # -------------------------------------------------------------------------

    async def list_notifications(
        self, identity: str, skip: int = 0, limit: int = 100
    ) -> List[Notification]:
        user = await self.identity.require_caller(identity)
        return await self.repository.find_by_user(user.id, skip=skip, limit=limit)

    async def list_unread(self, identity: str, limit: int = 100) -> List[Notification]:
        user = await self.identity.require_caller(identity)
        return await self.repository.find_by_user(user.id, is_read=False, limit=limit)

    async def unread_count(self, identity: str) -> int:
        user = await self.identity.require_caller(identity)
        return await self.repository.count_unread(user.id)

    async def _get_owned(self, notification_id: str, user: User) -> Notification:
        notification = await self.repository.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.user_id != user.id:
            raise ForbiddenError("Not authorized to access this notification")
        return notification

    async def mark_as_read(self, notification_id: str, identity: str) -> Notification:
        user = await self.identity.require_caller(identity)
        notification = await self._get_owned(notification_id, user)
        if notification.is_read:
            return notification

        await self.repository.mark_read(notification.id, utc_now())
        updated = await self.repository.get_by_id(notification.id)
        if updated is None:
            raise NotFoundError("Notification not found")
        return updated

    async def mark_all_as_read(self, identity: str) -> int:
        """
        Flip every unread notification of the caller. Each flip is independent,
        so a partial run is finished by calling this again.
        """
        user = await self.identity.require_caller(identity)
        unread = await self.repository.find_by_user(user.id, is_read=False, limit=10000)
        return await self.repository.mark_read_many([n.id for n in unread], utc_now())

    async def delete_notification(self, notification_id: str, identity: str) -> None:
        user = await self.identity.require_caller(identity)
        notification = await self._get_owned(notification_id, user)
        await self.repository.delete(notification.id)

    async def delete_read(self, identity: str) -> int:
        user = await self.identity.require_caller(identity)
        deleted = await self.repository.delete_read(user.id)
        logger.debug(f"Deleted {deleted} read notifications for {user.username}")
        return deleted
