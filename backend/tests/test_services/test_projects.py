"""Tests for ProjectService and IdentityDirectory."""

import asyncio

import pytest

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models.project import Project
from app.services.identity import IdentityDirectory
from app.services.projects import ProjectService
from tests.mocks.mongodb import seed


class TestIdentityDirectory:
    def test_resolves_id_then_username(self, fake_db, invitee):
        directory = IdentityDirectory(fake_db)

        assert asyncio.run(directory.resolve(invitee.id)).username == "victor"
        assert asyncio.run(directory.resolve("victor")).id == invitee.id
        assert asyncio.run(directory.resolve("nobody")) is None
        assert asyncio.run(directory.resolve(None)) is None

    def test_require_caller_is_forbidden_for_unknown(self, fake_db):
        with pytest.raises(ForbiddenError):
            asyncio.run(IdentityDirectory(fake_db).require_caller("ghost"))

    def test_require_user_is_not_found_for_unknown(self, fake_db):
        with pytest.raises(NotFoundError):
            asyncio.run(IdentityDirectory(fake_db).require_user("ghost"))


class TestProjectService:
    def test_create_records_owner(self, fake_db, owner):
        project = asyncio.run(ProjectService(fake_db).create_project("Hermes", owner.id))

        assert project.owner_id == owner.id
        assert project.created_by == "olivia"
        owner_doc = next(d for d in fake_db["users"].docs if d["_id"] == owner.id)
        assert owner_doc["owned_projects"] == [project.id]

    def test_list_projects_includes_owned_member_and_legacy(self, fake_db, owner, invitee):
        seed(fake_db, "projects", Project(id="a", name="Alpha", owner_id=owner.id))
        seed(fake_db, "projects", Project(id="b", name="Beta", owner_id="someone", member_ids=[owner.id]))
        seed(fake_db, "projects", Project(id="c", name="Gamma", created_by="olivia"))
        seed(fake_db, "projects", Project(id="d", name="Delta", owner_id=invitee.id))

        projects = asyncio.run(ProjectService(fake_db).list_projects(owner.id))

        assert [p.id for p in projects] == ["a", "b", "c"]

    def test_get_project_requires_access(self, fake_db, project, owner, outsider):
        service = ProjectService(fake_db)

        assert asyncio.run(service.get_project(project.id, owner.id)).name == "Apollo"
        with pytest.raises(ForbiddenError):
            asyncio.run(service.get_project(project.id, outsider.id))
        with pytest.raises(NotFoundError):
            asyncio.run(service.get_project("missing", owner.id))
