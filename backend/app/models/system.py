from pydantic import BaseModel, Field
from typing import Optional

class SystemSettings(BaseModel):
    id: str = Field(default="current", alias="_id")

    # General
    instance_name: str = "RiskBoard"
    dashboard_url: Optional[str] = None

    # Email / SMTP
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_encryption: str = "starttls" # starttls, ssl, none
    emails_from_email: str = "noreply@riskboard.local"

    class Config:
        populate_by_name = True
