"""Tests for application wiring: error rendering, routes and health probes."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvitationExpiredError,
    NotFoundError,
    RejectedOperationError,
)


class TestServiceErrorHandler:
    @pytest.mark.parametrize(
        "error, status_code, code",
        [
            (NotFoundError("Project not found"), 404, "NOT_FOUND"),
            (ForbiddenError("Only the project owner can invite members"), 403, "FORBIDDEN"),
            (ConflictError("An invitation is already pending for this user"), 409, "CONFLICT"),
            (RejectedOperationError("Invitation is no longer pending"), 400, "REJECTED_OPERATION"),
            (InvitationExpiredError("Invitation has expired"), 410, "EXPIRED"),
        ],
    )
    def test_renders_detail_and_code(self, error, status_code, code):
        from app.main import service_error_handler

        response = asyncio.run(service_error_handler(MagicMock(), error))

        assert response.status_code == status_code
        assert json.loads(response.body) == {"detail": error.message, "code": code}


class TestRoutes:
    def test_v1_routers_mounted(self):
        from app.main import app

        paths = {route.path for route in app.routes}
        assert "/api/v1/invitations/" in paths
        assert "/api/v1/invitations/{invitation_id}/accept" in paths
        assert "/api/v1/projects/{project_id}/members/{user_id}" in paths
        assert "/api/v1/notifications/read-all" in paths
        assert "/api/v1/mitigations/{mitigation_id}/complete" in paths
        assert "/health/ready" in paths
        assert "/metrics" in paths


class TestHealth:
    def test_live(self):
        from app.api.health import liveness

        assert asyncio.run(liveness()) == {"status": "alive"}

    def test_ready_without_client(self):
        from app.api.health import readiness

        with patch("app.api.health.db") as db:
            db.client = None
            response = asyncio.run(readiness())

        assert response.status_code == 503

    def test_ready_with_database(self):
        from app.api.health import readiness

        with patch("app.api.health.db") as db:
            db.client.admin.command = AsyncMock(return_value={"ok": 1})
            result = asyncio.run(readiness())

        assert result["status"] == "ready"
        assert result["components"]["database"] == "connected"
