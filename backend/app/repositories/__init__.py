"""
Repository Pattern for Database Access

Provides a clean abstraction layer over MongoDB collections,
centralizing database operations and reducing code duplication.
"""

from app.repositories.base import BaseRepository
from app.repositories.invitations import InvitationRepository
from app.repositories.mitigations import MitigationRepository
from app.repositories.notifications import NotificationRepository
from app.repositories.projects import ProjectRepository
from app.repositories.system_settings import SystemSettingsRepository
from app.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "InvitationRepository",
    "MitigationRepository",
    "NotificationRepository",
    "ProjectRepository",
    "SystemSettingsRepository",
    "UserRepository",
]
