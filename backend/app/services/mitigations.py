"""
Mitigation Service

CRUD for project mitigations. Setting or changing the assignee produces a
MITIGATION_ASSIGNED notification and a best-effort assignment email.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import BackgroundTasks
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core import utc_now
from app.core.constants import MITIGATION_STATUS_COMPLETED
from app.core.exceptions import ForbiddenError, NotFoundError, RejectedOperationError
from app.models.mitigation import Mitigation
from app.models.project import Project
from app.models.user import User
from app.repositories.mitigations import MitigationRepository
from app.repositories.projects import ProjectRepository
from app.services.identity import IdentityDirectory
from app.services.notifications.email_service import EmailService
from app.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)

# Fields an update may reset to null; any other null in an update is ignored
CLEARABLE_FIELDS = {"assignee", "description", "due_date"}


class MitigationService:
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        email_service: Optional[EmailService] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.mitigations = MitigationRepository(db)
        self.projects = ProjectRepository(db)
        self.identity = IdentityDirectory(db)
        self.notifications = notification_service or NotificationService(db)
        self.email_service = email_service or EmailService(db)

    async def _get_accessible_project(self, project_id: str, user: User) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if not project.has_access(user.id, user.username):
            raise ForbiddenError("Not a member of this project")
        return project

    async def _get_accessible(self, mitigation_id: str, user: User):
        mitigation = await self.mitigations.get_by_id(mitigation_id)
        if mitigation is None:
            raise NotFoundError("Mitigation not found")
        project = await self._get_accessible_project(mitigation.project_id, user)
        return mitigation, project

    async def _resolve_assignee(self, project: Project, assignee_id: str) -> User:
        assignee = await self.identity.require_user(assignee_id)
        if not project.has_access(assignee.id, assignee.username):
            raise RejectedOperationError("Assignee must be a member of the project")
        return assignee

    async def _notify_assignee(
        self,
        mitigation: Mitigation,
        assignee: User,
        project: Project,
        assigned_by: User,
        background_tasks: Optional[BackgroundTasks],
    ) -> None:
        try:
            await self.notifications.notify_mitigation_assigned(
                assignee.id,
                mitigation.id,
                mitigation.title,
                project_name=project.name,
                assigned_by=assigned_by.username,
            )
        except Exception as e:
            logger.error(f"Failed to create assignment notification for {assignee.username}: {e}")

        email_args = (
            assignee.email,
            assignee.display_name,
            mitigation.id,
            mitigation.title,
            project.name,
            mitigation.due_date,
        )
        if background_tasks is not None:
            background_tasks.add_task(
                self.email_service.send_mitigation_assignment_email, *email_args
            )
            return

        try:
            await self.email_service.send_mitigation_assignment_email(*email_args)
        except Exception as e:
            logger.error(f"Failed to send assignment email to {assignee.email}: {e}")

    async def create_mitigation(
        self,
        project_id: str,
        data: Dict[str, Any],
        identity: str,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Mitigation:
        user = await self.identity.require_caller(identity)
        project = await self._get_accessible_project(project_id, user)

        assignee = None
        if data.get("assignee"):
            assignee = await self._resolve_assignee(project, data["assignee"])
            data["assignee"] = assignee.id

        mitigation = Mitigation(project_id=project.id, created_by=user.id, **data)
        await self.mitigations.create(mitigation)

        if assignee is not None:
            await self._notify_assignee(mitigation, assignee, project, user, background_tasks)
        return mitigation

    async def update_mitigation(
        self,
        mitigation_id: str,
        update_data: Dict[str, Any],
        identity: str,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Mitigation:
        update_data = {
            k: v for k, v in update_data.items() if v is not None or k in CLEARABLE_FIELDS
        }
        user = await self.identity.require_caller(identity)
        mitigation, project = await self._get_accessible(mitigation_id, user)

        new_assignee = None
        if update_data.get("assignee"):
            new_assignee = await self._resolve_assignee(project, update_data["assignee"])
            update_data["assignee"] = new_assignee.id
            if new_assignee.id == mitigation.assignee:
                new_assignee = None

        if update_data.get("status") == MITIGATION_STATUS_COMPLETED and not mitigation.completed_at:
            update_data["completed_at"] = utc_now()
            update_data["progress_percentage"] = 100.0

        update_data["updated_at"] = utc_now()
        updated = await self.mitigations.update(mitigation.id, update_data)
        if updated is None:
            raise NotFoundError("Mitigation not found")

        if new_assignee is not None:
            await self._notify_assignee(updated, new_assignee, project, user, background_tasks)
        return updated

    async def complete_mitigation(self, mitigation_id: str, identity: str) -> Mitigation:
        user = await self.identity.require_caller(identity)
        mitigation, _ = await self._get_accessible(mitigation_id, user)
        if mitigation.status == MITIGATION_STATUS_COMPLETED:
            return mitigation

        now = utc_now()
        return await self.mitigations.update(
            mitigation.id,
            {
                "status": MITIGATION_STATUS_COMPLETED,
                "progress_percentage": 100.0,
                "completed_at": now,
                "updated_at": now,
            },
        )

    async def get_mitigation(self, mitigation_id: str, identity: str) -> Mitigation:
        user = await self.identity.require_caller(identity)
        mitigation, _ = await self._get_accessible(mitigation_id, user)
        return mitigation

    async def list_for_project(self, project_id: str, identity: str) -> List[Mitigation]:
        user = await self.identity.require_caller(identity)
        project = await self._get_accessible_project(project_id, user)
        return await self.mitigations.find_by_project(project.id)

    async def list_assigned_to_me(self, identity: str) -> List[Mitigation]:
        user = await self.identity.require_caller(identity)
        return await self.mitigations.find_by_assignee(user.id)

    async def delete_mitigation(self, mitigation_id: str, identity: str) -> None:
        """Only the project owner or the mitigation's creator may delete it."""
        user = await self.identity.require_caller(identity)
        mitigation, project = await self._get_accessible(mitigation_id, user)
        if mitigation.created_by != user.id and not project.is_owner(user.id, user.username):
            raise ForbiddenError("Only the project owner or creator can delete this mitigation")
        await self.mitigations.delete(mitigation.id)
