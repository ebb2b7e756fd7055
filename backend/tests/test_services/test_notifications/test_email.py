"""Tests for best-effort email delivery."""

import asyncio
import time
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

from prometheus_client import REGISTRY

from app.models.system import SystemSettings
from app.services.notifications.email_provider import EmailProvider
from app.services.notifications.email_service import (
    EMAIL_MITIGATION_ASSIGNED,
    EMAIL_PROJECT_INVITATION,
    EmailService,
    format_expiry,
)


def _sample(name, kind):
    return REGISTRY.get_sample_value(name, {"type": kind}) or 0


def _smtp_settings(**overrides):
    data = {"smtp_host": "smtp.example.com", "smtp_port": 587}
    data.update(overrides)
    return SystemSettings(**data)


class TestEmailProvider:
    def test_skips_without_settings(self):
        assert asyncio.run(EmailProvider().send("a@example.com", "s", "m")) is False

    def test_skips_without_smtp_host(self):
        result = asyncio.run(
            EmailProvider().send("a@example.com", "s", "m", system_settings=SystemSettings())
        )
        assert result is False

    def test_delivers_with_starttls_and_login(self):
        settings = _smtp_settings(smtp_user="mailer", smtp_password="secret")
        with patch("app.services.notifications.email_provider.smtplib.SMTP") as smtp:
            server = smtp.return_value
            server.__enter__.return_value = server
            result = asyncio.run(
                EmailProvider().send(
                    "a@example.com", "Subject", "Body", html_message="<p>Body</p>",
                    system_settings=settings,
                )
            )

        assert result is True
        smtp.assert_called_once_with("smtp.example.com", 587, timeout=EmailProvider().timeout)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        msg = server.send_message.call_args.args[0]
        assert msg["To"] == "a@example.com"
        assert msg["Subject"] == "Subject"

    def test_ssl_uses_smtp_ssl(self):
        settings = _smtp_settings(smtp_encryption="ssl", smtp_port=465)
        with patch("app.services.notifications.email_provider.smtplib.SMTP_SSL") as smtp_ssl:
            server = smtp_ssl.return_value
            server.__enter__.return_value = server
            result = asyncio.run(
                EmailProvider().send("a@example.com", "s", "m", system_settings=settings)
            )

        assert result is True
        server.starttls.assert_not_called()
        server.login.assert_not_called()

    def test_delivery_error_returns_false(self):
        provider = EmailProvider()
        provider._deliver = MagicMock(side_effect=OSError("connection refused"))

        result = asyncio.run(provider.send("a@example.com", "s", "m", system_settings=_smtp_settings()))

        assert result is False

    def test_slow_delivery_times_out(self):
        provider = EmailProvider(timeout=0.05)
        provider._deliver = MagicMock(side_effect=lambda *args: time.sleep(0.5))

        started = time.monotonic()
        result = asyncio.run(provider.send("a@example.com", "s", "m", system_settings=_smtp_settings()))

        assert result is False
        assert provider._deliver.called
        assert time.monotonic() - started < 5


class TestEmailService:
    def test_invitation_email_content(self, fake_db):
        provider = MagicMock()
        provider.send = AsyncMock(return_value=True)
        service = EmailService(fake_db, provider=provider)
        expires_at = datetime(2026, 10, 26, tzinfo=timezone.utc)

        sent = asyncio.run(
            service.send_project_invitation_email(
                "victor@example.com", "Victor Vance", "Apollo", "olivia", "Join us", expires_at, "inv-1"
            )
        )

        assert sent is True
        args = provider.send.call_args
        assert args.args[0] == "victor@example.com"
        assert args.args[1] == "You've been invited to join Apollo"
        assert "Join us" in args.args[2]
        assert "October 26, 2026" in args.args[2]
        assert "http://localhost:5173/invitations/inv-1" in args.kwargs["html_message"]
        assert args.kwargs["system_settings"].instance_name == "RiskBoard"

    def test_dashboard_url_overrides_frontend_base(self, fake_db):
        asyncio.run(
            fake_db["system_settings"].insert_one(
                {"_id": "current", "dashboard_url": "https://risk.example.com/"}
            )
        )
        provider = MagicMock()
        provider.send = AsyncMock(return_value=True)
        service = EmailService(fake_db, provider=provider)

        asyncio.run(
            service.send_mitigation_assignment_email(
                "victor@example.com", "Victor Vance", "mit-1", "Rotate keys", project_name="Apollo"
            )
        )

        args = provider.send.call_args
        assert args.args[1] == "New Mitigation Assigned: Rotate keys"
        assert "in project 'Apollo'" in args.args[2]
        assert "https://risk.example.com/mitigations/mit-1" in args.kwargs["html_message"]

    def test_counts_sent_and_failed(self, fake_db):
        provider = MagicMock()
        provider.send = AsyncMock(side_effect=[True, False])
        service = EmailService(fake_db, provider=provider)
        sent_before = _sample("notifications_sent_total", EMAIL_MITIGATION_ASSIGNED)
        failed_before = _sample("notifications_failed_total", EMAIL_MITIGATION_ASSIGNED)

        asyncio.run(service.send_mitigation_assignment_email("a@example.com", "a", "m1", "T"))
        asyncio.run(service.send_mitigation_assignment_email("a@example.com", "a", "m2", "T"))

        assert _sample("notifications_sent_total", EMAIL_MITIGATION_ASSIGNED) == sent_before + 1
        assert _sample("notifications_failed_total", EMAIL_MITIGATION_ASSIGNED) == failed_before + 1

    def test_never_raises(self, fake_db):
        provider = MagicMock()
        provider.send = AsyncMock(side_effect=RuntimeError("boom"))
        service = EmailService(fake_db, provider=provider)
        failed_before = _sample("notifications_failed_total", EMAIL_PROJECT_INVITATION)

        sent = asyncio.run(
            service.send_project_invitation_email(
                "a@example.com", "a", "Apollo", "olivia", None,
                datetime(2026, 1, 1, tzinfo=timezone.utc), "inv-1",
            )
        )

        assert sent is False
        assert _sample("notifications_failed_total", EMAIL_PROJECT_INVITATION) == failed_before + 1

    def test_format_expiry(self):
        assert format_expiry(datetime(2026, 3, 5, tzinfo=timezone.utc)) == "March 05, 2026"
