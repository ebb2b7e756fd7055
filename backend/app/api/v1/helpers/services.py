"""
FastAPI dependency providers for the service layer.

Endpoints take services through these so tests can swap them with
``app.dependency_overrides``.
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.db.mongodb import get_database
from app.services.invitations import InvitationService
from app.services.membership import MembershipService
from app.services.mitigations import MitigationService
from app.services.notifications.service import NotificationService
from app.services.projects import ProjectService


def get_invitation_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> InvitationService:
    return InvitationService(db)


def get_membership_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> MembershipService:
    return MembershipService(db)


def get_project_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> ProjectService:
    return ProjectService(db)


def get_notification_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> NotificationService:
    return NotificationService(db)


def get_mitigation_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> MitigationService:
    return MitigationService(db)
