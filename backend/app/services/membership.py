"""
Membership Synchronizer

Keeps ``projects.member_ids`` and ``users.member_projects`` in agreement.

The two lists live in different documents and are written one after the
other. The project side is the source of truth and is always written first;
the user side is a derived index that ``reconcile_user_projects`` can rebuild.
Both writes use set semantics, so re-running an interrupted add or remove
converges on the same state.
"""

import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.constants import MSG_CANNOT_REMOVE_OWNER
from app.core.exceptions import ForbiddenError, NotFoundError, RejectedOperationError
from app.core.metrics import membership_changes_total
from app.models.project import Project
from app.models.user import User
from app.repositories.projects import ProjectRepository
from app.repositories.users import UserRepository
from app.services.identity import IdentityDirectory

logger = logging.getLogger(__name__)

MSG_ONLY_OWNER_CAN_MANAGE = "Only the project owner can manage members"


class MembershipService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.projects = ProjectRepository(db)
        self.users = UserRepository(db)
        self.identity = IdentityDirectory(db)

    async def get_project(self, project_id: str) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def _require_owner(self, project: Project, requested_by: str) -> User:
        requester = await self.identity.resolve(requested_by)
        if requester is None or not project.is_owner(requester.id, requester.username):
            raise ForbiddenError(MSG_ONLY_OWNER_CAN_MANAGE)
        return requester

    async def add_member(self, project_id: str, user_id: str, requested_by: str) -> Project:
        """
        Add ``user_id`` to the project on behalf of ``requested_by``.

        Owners and existing members are left untouched and the current
        project is returned.
        """
        project = await self.get_project(project_id)
        await self._require_owner(project, requested_by)
        user = await self.identity.require_user(user_id)

        if project.is_owner(user.id, user.username) or project.is_member(user.id):
            # The user side may lag behind after an interrupted add
            if project.is_member(user.id) and project.id not in user.member_projects:
                await self.users.add_member_project(user.id, project.id)
            return project

        await self.projects.add_member(project.id, user.id)
        await self.users.add_member_project(user.id, project.id)
        membership_changes_total.labels(operation="add").inc()
        logger.info(f"Added user {user.username} to project {project.name}")

        return await self.get_project(project.id)

    async def remove_member(self, project_id: str, user_id: str, requested_by: str) -> Project:
        """
        Remove ``user_id`` from the project. Removing a non-member is a no-op;
        the owner can never be removed.
        """
        project = await self.get_project(project_id)
        await self._require_owner(project, requested_by)

        target = await self.identity.resolve(user_id)
        target_id = target.id if target else user_id
        target_name = target.username if target else None
        if project.is_owner(target_id, target_name):
            raise RejectedOperationError(MSG_CANNOT_REMOVE_OWNER)

        was_member = project.is_member(target_id)
        await self.projects.remove_member(project.id, target_id)
        if target is not None:
            await self.users.remove_member_project(target.id, project.id)

        if was_member:
            membership_changes_total.labels(operation="remove").inc()
            logger.info(f"Removed user {target_name or target_id} from project {project.name}")

        return await self.get_project(project.id)

    async def list_members(self, project_id: str, identity: str) -> List[User]:
        """Member profiles of a project, readable by its owner and members."""
        project = await self.get_project(project_id)
        caller = await self.identity.require_caller(identity)
        if not project.has_access(caller.id, caller.username):
            raise ForbiddenError("Not a member of this project")

        docs = await self.users.find_by_ids(project.member_ids)
        return [User(**doc) for doc in docs]

    async def reconcile_user_projects(self, user_id: str) -> List[str]:
        """
        Rebuild a user's ``member_projects`` from ``projects.member_ids``.

        Returns the project ids the user ends up with.
        """
        user = await self.identity.require_user(user_id)
        projects = await self.projects.find_by_member(user.id)
        project_ids = sorted(p.id for p in projects if not p.is_owner(user.id, user.username))

        if sorted(user.member_projects) != project_ids:
            logger.warning(
                f"Membership drift for user {user.username}: "
                f"{sorted(user.member_projects)} -> {project_ids}"
            )
            await self.users.set_member_projects(user.id, project_ids)
        return project_ids
