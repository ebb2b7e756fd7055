"""
API v1 Helper Functions

Shared helpers used by the endpoint modules.
"""

from app.api.v1.helpers.services import (
    get_invitation_service,
    get_membership_service,
    get_mitigation_service,
    get_notification_service,
    get_project_service,
)

__all__ = [
    "get_invitation_service",
    "get_membership_service",
    "get_mitigation_service",
    "get_notification_service",
    "get_project_service",
]
