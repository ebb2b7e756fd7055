"""Shared fixtures for API endpoint tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.user import User


@pytest.fixture
def current_user():
    """Authenticated caller as resolved by get_current_active_user."""
    return User(id="owner-1", username="olivia", email="olivia@example.com")


@pytest.fixture
def make_service():
    """Factory for service doubles with the given coroutine return values."""

    def _make(**returns):
        service = MagicMock()
        for name, value in returns.items():
            setattr(service, name, AsyncMock(return_value=value))
        return service

    return _make
