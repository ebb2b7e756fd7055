import asyncio
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
import logging
from app.core.config import settings
from app.services.notifications.base import NotificationProvider
from app.models.system import SystemSettings
from typing import Optional

logger = logging.getLogger(__name__)


class EmailProvider(NotificationProvider):
    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.EMAIL_SEND_TIMEOUT_SECONDS

    async def send(self, destination: str, subject: str, message: str, html_message: str = None, system_settings: Optional[SystemSettings] = None) -> bool:
        if not system_settings:
            logger.warning("System settings not provided. Skipping email.")
            return False

        if not system_settings.smtp_host:
            logger.warning("SMTP_HOST not configured. Skipping email.")
            return False

        msg = MIMEMultipart("alternative")
        msg["From"] = system_settings.emails_from_email
        msg["To"] = destination
        msg["Subject"] = subject
        msg.attach(MIMEText(message, "plain"))
        if html_message:
            msg.attach(MIMEText(html_message, "html"))

        # smtplib blocks, so delivery runs in a worker thread with an upper bound
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._deliver, msg, system_settings),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Timed out after {self.timeout}s sending email to {destination}")
            return False
        except Exception as e:
            logger.error(f"Failed to send email to {destination}: {e}")
            return False

        logger.info(f"Email sent to {destination}")
        return True

    def _deliver(self, msg: MIMEMultipart, system_settings: SystemSettings) -> None:
        host = system_settings.smtp_host
        port = system_settings.smtp_port
        encryption = (system_settings.smtp_encryption or "starttls").lower()

        if encryption == "ssl":
            server = smtplib.SMTP_SSL(host, port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(host, port, timeout=self.timeout)

        with server:
            if encryption == "starttls":
                server.starttls()
            if system_settings.smtp_user and system_settings.smtp_password:
                server.login(system_settings.smtp_user, system_settings.smtp_password)
            server.send_message(msg)
