from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "RiskBoard"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    MONGODB_URL: str
    DATABASE_NAME: str = "riskboard"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Invitations
    INVITATION_EXPIRY_DAYS: int = 7

    # Notifications
    NOTIFICATION_RETENTION_DAYS: int = 30
    NOTIFICATION_LONG_RETENTION_DAYS: int = 90
    EMAIL_SEND_TIMEOUT_SECONDS: float = 10.0

    # Housekeeping
    HOUSEKEEPING_INTERVAL_MINUTES: int = 5

    # Frontend
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
