"""
Schema Exports

Centralized export of the request and response models used by the API.
"""

from app.schemas.error import ErrorResponse
from app.schemas.invitation import InvitationCreate, InvitationResponse
from app.schemas.mitigation import MitigationCreate, MitigationResponse, MitigationUpdate
from app.schemas.notification import BulkResult, NotificationResponse, UnreadCount
from app.schemas.project import MemberAdd, ProjectCreate, ProjectResponse
from app.schemas.user import UserSummary

__all__ = [
    "ErrorResponse",
    "InvitationCreate",
    "InvitationResponse",
    "MitigationCreate",
    "MitigationResponse",
    "MitigationUpdate",
    "BulkResult",
    "NotificationResponse",
    "UnreadCount",
    "MemberAdd",
    "ProjectCreate",
    "ProjectResponse",
    "UserSummary",
]
