import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models.project import Project
from app.repositories.projects import ProjectRepository
from app.repositories.users import UserRepository
from app.services.identity import IdentityDirectory

logger = logging.getLogger(__name__)


class ProjectService:
    """Project creation and access-checked reads. Membership lives in MembershipService."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.projects = ProjectRepository(db)
        self.users = UserRepository(db)
        self.identity = IdentityDirectory(db)

    async def create_project(
        self, name: str, identity: str, description: Optional[str] = None
    ) -> Project:
        owner = await self.identity.require_caller(identity)
        project = Project(
            name=name,
            description=description,
            owner_id=owner.id,
            created_by=owner.username,
        )
        await self.projects.create(project)
        await self.users.add_owned_project(owner.id, project.id)
        logger.info(f"User {owner.username} created project {project.name}")
        return project

    async def list_projects(self, identity: str) -> List[Project]:
        user = await self.identity.require_caller(identity)
        return await self.projects.find_accessible(user.id, user.username)

    async def get_project(self, project_id: str, identity: str) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        user = await self.identity.require_caller(identity)
        if not project.has_access(user.id, user.username):
            raise ForbiddenError("Not a member of this project")
        return project
