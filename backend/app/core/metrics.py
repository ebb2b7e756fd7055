"""
Prometheus Metrics Collection for the RiskBoard Backend

Every pod keeps its own metrics in the default registry; the scraper
aggregates them.
"""

import logging
import re
import time
from importlib.metadata import version as get_version
from typing import Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# =============================================================================
# Application Info Metrics
# =============================================================================

try:
    APP_VERSION = get_version("riskboard-backend")
except Exception:
    APP_VERSION = "unknown"

app_info = Info("riskboard_app", "Application information")
app_info.info(
    {
        "version": APP_VERSION,
        "app_name": "RiskBoard",
    }
)

# =============================================================================
# HTTP Request Metrics
# =============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# Invitation & Membership Metrics
# =============================================================================

invitations_created_total = Counter(
    "invitations_created_total",
    "Total project invitations created",
)

invitation_transitions_total = Counter(
    "invitation_transitions_total",
    "Total invitation state transitions by target status",
    ["status"],
)

membership_changes_total = Counter(
    "membership_changes_total",
    "Total project membership changes by operation",
    ["operation"],
)

# =============================================================================
# Notification Metrics
# =============================================================================

notifications_created_total = Counter(
    "notifications_created_total",
    "Total in-app notifications created by type",
    ["type"],
)

notifications_sent_total = Counter(
    "notifications_sent_total",
    "Total notification emails sent by type",
    ["type"],
)

notifications_failed_total = Counter(
    "notifications_failed_total",
    "Total notification email failures by type",
    ["type"],
)

# =============================================================================
# Housekeeping Metrics
# =============================================================================

housekeeping_runs_total = Counter(
    "housekeeping_runs_total",
    "Total housekeeping sweeps by result",
    ["result"],
)

# =============================================================================
# System Metrics
# =============================================================================

uptime_seconds = Gauge(
    "uptime_seconds",
    "Application uptime in seconds",
)

startup_time = time.time()


def update_uptime():
    """Update the uptime metric."""
    uptime_seconds.set(time.time() - startup_time)


# =============================================================================
# Prometheus Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint. Meant for in-cluster scraping only."""
    update_uptime()
    metrics_output = generate_latest(REGISTRY)
    return Response(content=metrics_output, media_type=CONTENT_TYPE_LATEST)


# =============================================================================
# Middleware for HTTP Metrics
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to automatically collect HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics for the /metrics endpoint itself to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_path(request.url.path)

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
        except Exception as e:
            logger.error(f"Error in PrometheusMiddleware: {e}")
            raise
        finally:
            duration = time.time() - start_time
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(duration)
            http_requests_total.labels(
                method=method, endpoint=endpoint, status=status
            ).inc()
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

        return response

    def _normalize_path(self, path: str) -> str:
        """
        Normalize URL paths to prevent cardinality explosion.

        Examples:
          /api/v1/projects/550e8400-e29b-41d4-a716-446655440000 -> /api/v1/projects/{id}
          /api/v1/notifications/123/read -> /api/v1/notifications/{id}/read
        """
        path = re.sub(
            r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
            "/{id}",
            path,
            flags=re.IGNORECASE,
        )
        path = re.sub(r"/\d+", "/{id}", path)
        path = re.sub(r"/[0-9a-f]{24}", "/{id}", path, flags=re.IGNORECASE)
        return path
