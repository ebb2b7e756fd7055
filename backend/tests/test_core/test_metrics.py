"""Tests for the Prometheus middleware path normalization."""

from unittest.mock import MagicMock

from app.core.metrics import PrometheusMiddleware


def _middleware():
    return PrometheusMiddleware(app=MagicMock())


class TestNormalizePath:
    def test_uuid_replaced(self):
        path = "/api/v1/projects/550e8400-e29b-41d4-a716-446655440000/members"
        assert _middleware()._normalize_path(path) == "/api/v1/projects/{id}/members"

    def test_numeric_id_replaced(self):
        assert _middleware()._normalize_path("/api/v1/notifications/42/read") == "/api/v1/notifications/{id}/read"

    def test_static_path_unchanged(self):
        assert _middleware()._normalize_path("/api/v1/invitations/pending") == "/api/v1/invitations/pending"
