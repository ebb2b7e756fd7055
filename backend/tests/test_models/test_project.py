"""Tests for the Project model's ownership and membership helpers."""

from app.models.project import Project


class TestProjectOwnership:
    def test_owner_by_id(self):
        project = Project(name="Apollo", owner_id="owner-1")
        assert project.is_owner("owner-1")
        assert not project.is_owner("user-2")

    def test_owner_id_takes_precedence_over_created_by(self):
        project = Project(name="Apollo", owner_id="owner-1", created_by="olivia")
        assert not project.is_owner("someone-else", "olivia")

    def test_legacy_created_by_fallback(self):
        project = Project(name="Legacy", created_by="olivia")
        assert project.is_owner("owner-1", "olivia")
        assert not project.is_owner("owner-1", "victor")

    def test_legacy_fallback_requires_username(self):
        project = Project(name="Legacy", created_by="olivia")
        assert not project.is_owner("owner-1")


class TestProjectMembership:
    def test_member_ids_default_empty(self):
        assert Project(name="Apollo").member_ids == []

    def test_is_member(self):
        project = Project(name="Apollo", owner_id="owner-1", member_ids=["user-2"])
        assert project.is_member("user-2")
        assert not project.is_member("owner-1")

    def test_has_access(self):
        project = Project(name="Apollo", owner_id="owner-1", member_ids=["user-2"])
        assert project.has_access("owner-1")
        assert project.has_access("user-2")
        assert not project.has_access("user-3")
