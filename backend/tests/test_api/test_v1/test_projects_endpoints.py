"""Tests for project and membership API endpoints."""

import asyncio

import pytest

from app.core.exceptions import RejectedOperationError
from app.models.project import Project
from app.models.user import User
from app.schemas.project import MemberAdd, ProjectCreate, ProjectResponse
from app.schemas.user import UserSummary


def _make_project(**kwargs):
    data = {"id": "proj-1", "name": "Apollo", "owner_id": "owner-1", "created_by": "olivia"}
    data.update(kwargs)
    return Project(**data)


class TestProjectEndpoints:
    def test_create_project(self, current_user, make_service):
        from app.api.v1.endpoints.projects import create_project

        service = make_service(create_project=_make_project())

        result = asyncio.run(
            create_project(
                project_in=ProjectCreate(name="Apollo", description="Moonshot"),
                current_user=current_user,
                service=service,
            )
        )

        assert result.name == "Apollo"
        service.create_project.assert_awaited_once_with("Apollo", "owner-1", description="Moonshot")

    def test_read_projects(self, current_user, make_service):
        from app.api.v1.endpoints.projects import read_projects

        service = make_service(list_projects=[_make_project()])

        result = asyncio.run(read_projects(current_user=current_user, service=service))

        assert [p.id for p in result] == ["proj-1"]


class TestMemberEndpoints:
    def test_add_member(self, current_user, make_service):
        from app.api.v1.endpoints.projects import add_project_member

        service = make_service(add_member=_make_project(member_ids=["user-2"]))

        result = asyncio.run(
            add_project_member(
                project_id="proj-1",
                member_in=MemberAdd(user_id="victor"),
                current_user=current_user,
                service=service,
            )
        )

        assert result.member_ids == ["user-2"]
        service.add_member.assert_awaited_once_with("proj-1", "victor", "owner-1")

    def test_remove_owner_propagates_rejection(self, current_user, make_service):
        from app.api.v1.endpoints.projects import remove_project_member

        service = make_service(remove_member=None)
        service.remove_member.side_effect = RejectedOperationError("Cannot remove the project owner")

        with pytest.raises(RejectedOperationError):
            asyncio.run(
                remove_project_member(
                    project_id="proj-1", user_id="owner-1", current_user=current_user, service=service
                )
            )

    def test_read_members(self, current_user, make_service):
        from app.api.v1.endpoints.projects import read_project_members

        member = User(id="user-2", username="victor", email="victor@example.com")
        service = make_service(list_members=[member])

        result = asyncio.run(
            read_project_members(project_id="proj-1", current_user=current_user, service=service)
        )

        assert result == [member]

    def test_read_project_invitations_passes_paging(self, current_user, make_service):
        from app.api.v1.endpoints.projects import read_project_invitations

        service = make_service(list_project_invitations=[])

        asyncio.run(
            read_project_invitations(
                project_id="proj-1", skip=10, limit=5, current_user=current_user, service=service
            )
        )

        service.list_project_invitations.assert_awaited_once_with("proj-1", "owner-1", skip=10, limit=5)


class TestResponseSchemas:
    def test_project_response_from_document(self):
        project = _make_project(member_ids=["user-2"])

        body = ProjectResponse.model_validate(project.model_dump(by_alias=True)).model_dump()

        assert body["id"] == "proj-1"
        assert body["member_ids"] == ["user-2"]

    def test_user_summary_hides_internal_fields(self):
        user = User(id="user-2", username="victor", email="victor@example.com", member_projects=["p"])

        body = UserSummary.model_validate(user.model_dump(by_alias=True)).model_dump()

        assert body["id"] == "user-2"
        assert "member_projects" not in body
        assert "last_logout_at" not in body
