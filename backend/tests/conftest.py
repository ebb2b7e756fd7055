"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases.
"""

import asyncio
import os
import sys
from unittest.mock import AsyncMock, MagicMock

# Ensure the backend app is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any app code imports the settings singleton
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_riskboard"

import pytest  # noqa: E402

from tests.mocks.mongodb import FakeDatabase, seed  # noqa: E402


@pytest.fixture
def fake_db():
    """In-memory database with the production indexes applied."""
    from app.core.init_db import create_indexes

    db = FakeDatabase()
    asyncio.run(create_indexes(db))
    return db


@pytest.fixture
def owner(fake_db):
    from app.models.user import User

    return seed(fake_db, "users", User(id="owner-1", username="olivia", email="olivia@example.com"))


@pytest.fixture
def invitee(fake_db):
    from app.models.user import User

    return seed(
        fake_db,
        "users",
        User(
            id="user-2",
            username="victor",
            email="victor@example.com",
            first_name="Victor",
            last_name="Vance",
        ),
    )


@pytest.fixture
def outsider(fake_db):
    from app.models.user import User

    return seed(fake_db, "users", User(id="user-3", username="xavier", email="xavier@example.com"))


@pytest.fixture
def project(fake_db, owner):
    from app.models.project import Project

    return seed(
        fake_db,
        "projects",
        Project(id="proj-1", name="Apollo", owner_id=owner.id, created_by=owner.username),
    )


@pytest.fixture
def email_service():
    """EmailService stand-in recording calls; every send succeeds."""
    service = MagicMock()
    service.send_project_invitation_email = AsyncMock(return_value=True)
    service.send_mitigation_assignment_email = AsyncMock(return_value=True)
    return service
