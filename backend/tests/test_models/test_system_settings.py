"""Tests for the SystemSettings model."""

from app.models.system import SystemSettings


class TestSystemSettings:
    def test_defaults(self):
        s = SystemSettings()
        assert s.id == "current"
        assert s.smtp_host is None
        assert s.smtp_port == 587
        assert s.smtp_encryption == "starttls"

    def test_load_from_document(self):
        s = SystemSettings(**{"_id": "current", "smtp_host": "mail.example.com", "smtp_port": 465})
        assert s.smtp_host == "mail.example.com"
        assert s.smtp_port == 465

    def test_dump_uses_underscore_id(self):
        assert SystemSettings().model_dump(by_alias=True)["_id"] == "current"
