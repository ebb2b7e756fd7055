"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import Dict, List

# Collection names
COLLECTION_PROJECTS = "projects"
COLLECTION_USERS = "users"
COLLECTION_INVITATIONS = "project_invitations"
COLLECTION_NOTIFICATIONS = "notifications"
COLLECTION_MITIGATIONS = "mitigations"
COLLECTION_SYSTEM_SETTINGS = "system_settings"

# Invitation error messages. Clients render different guidance for each,
# so keep them distinct.
MSG_ONLY_OWNER_CAN_INVITE = "Only the project owner can invite members"
MSG_ALREADY_MEMBER = "User is already a member of this project"
MSG_INVITATION_PENDING = "An invitation is already pending for this user"
MSG_INVITATION_NOT_PENDING = "Invitation is no longer pending"
MSG_INVITATION_EXPIRED = "Invitation has expired"
MSG_CANNOT_REMOVE_OWNER = "Cannot remove the project owner"

# Notification priorities
PRIORITY_LOW = "LOW"
PRIORITY_MEDIUM = "MEDIUM"
PRIORITY_HIGH = "HIGH"

NOTIFICATION_PRIORITIES: List[str] = [PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH]

# Risk severities that escalate a notification to HIGH priority
HIGH_PRIORITY_SEVERITIES: List[str] = ["CRITICAL", "HIGH"]

# Mitigation lifecycle
MITIGATION_STATUS_PLANNED = "PLANNED"
MITIGATION_STATUS_ACTIVE = "ACTIVE"
MITIGATION_STATUS_COMPLETED = "COMPLETED"

MITIGATION_STATUSES: List[str] = [
    MITIGATION_STATUS_PLANNED,
    MITIGATION_STATUS_ACTIVE,
    MITIGATION_STATUS_COMPLETED,
]

# Frontend routes used in notification action links, keyed by related entity type
ENTITY_ROUTES: Dict[str, str] = {
    "PROJECT": "/projects",
    "TASK": "/tasks",
    "RISK": "/risks",
    "MITIGATION": "/mitigations",
    "INVITATION": "/invitations",
}


def build_action_url(entity_type: str, entity_id: str) -> str:
    """Frontend route for a related entity, e.g. ``/mitigations/<id>``."""
    base = ENTITY_ROUTES.get(entity_type.upper(), f"/{entity_type.lower()}s")
    return f"{base}/{entity_id}"
