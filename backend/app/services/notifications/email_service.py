"""
Best-effort notification emails.

Every public method returns a bool and never raises: a failed email must not
turn the operation that triggered it into a failure.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import settings
from app.core.constants import build_action_url
from app.core.metrics import notifications_failed_total, notifications_sent_total
from app.models.system import SystemSettings
from app.repositories.system_settings import SystemSettingsRepository
from app.services.notifications.email_provider import EmailProvider
from app.services.notifications.templates import (
    get_mitigation_assigned_template,
    get_project_invitation_template,
)

logger = logging.getLogger(__name__)

EMAIL_PROJECT_INVITATION = "project_invitation"
EMAIL_MITIGATION_ASSIGNED = "mitigation_assigned"


def format_expiry(expires_at: datetime) -> str:
    return expires_at.strftime("%B %d, %Y")


class EmailService:
    def __init__(self, db: AsyncIOMotorDatabase, provider: Optional[EmailProvider] = None):
        self.settings_repo = SystemSettingsRepository(db)
        self.provider = provider or EmailProvider()

    def _link(self, system_settings: SystemSettings, entity_type: str, entity_id: str) -> str:
        base = (system_settings.dashboard_url or settings.FRONTEND_BASE_URL).rstrip("/")
        return f"{base}{build_action_url(entity_type, entity_id)}"

    async def _send(
        self,
        kind: str,
        destination: str,
        subject: str,
        message: str,
        render_html: Callable[[SystemSettings], str],
    ) -> bool:
        try:
            system_settings = await self.settings_repo.get()
            html_message = render_html(system_settings)
            sent = await self.provider.send(
                destination,
                subject,
                message,
                html_message=html_message,
                system_settings=system_settings,
            )
        except Exception as e:
            logger.error(f"Failed to send {kind} email to {destination}: {e}")
            sent = False

        if sent:
            notifications_sent_total.labels(type=kind).inc()
        else:
            notifications_failed_total.labels(type=kind).inc()
        return sent

    async def send_project_invitation_email(
        self,
        to_email: str,
        recipient_name: str,
        project_name: str,
        inviter_name: str,
        message: Optional[str],
        expires_at: datetime,
        invitation_id: str,
    ) -> bool:
        expires_on = format_expiry(expires_at)
        subject = f"You've been invited to join {project_name}"
        text = (
            f"Hello {recipient_name},\n\n"
            f"{inviter_name} has invited you to join the project {project_name}.\n"
        )
        if message:
            text += f"\n{message}\n"
        text += f"\nThis invitation expires on {expires_on}.\n"

        return await self._send(
            EMAIL_PROJECT_INVITATION,
            to_email,
            subject,
            text,
            lambda s: get_project_invitation_template(
                link=self._link(s, "INVITATION", invitation_id),
                instance_name=s.instance_name,
                recipient_name=recipient_name,
                project_name=project_name,
                inviter_name=inviter_name,
                expires_on=expires_on,
                message=message,
            ),
        )

    async def send_mitigation_assignment_email(
        self,
        to_email: str,
        recipient_name: str,
        mitigation_id: str,
        mitigation_title: str,
        project_name: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> bool:
        due_text = due_date.strftime("%Y-%m-%d") if due_date else None
        subject = f"New Mitigation Assigned: {mitigation_title}"
        text = f"Hello {recipient_name},\n\nYou have been assigned to mitigation '{mitigation_title}'"
        if project_name:
            text += f" in project '{project_name}'"
        text += ".\n"
        if due_text:
            text += f"Due date: {due_text}\n"

        return await self._send(
            EMAIL_MITIGATION_ASSIGNED,
            to_email,
            subject,
            text,
            lambda s: get_mitigation_assigned_template(
                link=self._link(s, "MITIGATION", mitigation_id),
                instance_name=s.instance_name,
                recipient_name=recipient_name,
                mitigation_title=mitigation_title,
                project_name=project_name,
                due_date=due_text,
            ),
        )
