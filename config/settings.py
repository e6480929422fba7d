import os
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    # Application Info
    APP_NAME: str = "Online Learning Readiness Survey"
    VERSION: str = "1.0.0"
    DEBUG: bool = _env_bool("DEBUG", "False")

    # Server Configuration
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", 5001))

    # CORS
    CORS_ORIGINS: list = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database Configuration
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_USERNAME: str = os.getenv("MONGODB_USERNAME", "admin")
    MONGODB_PASSWORD: str = os.getenv("MONGODB_PASSWORD", "")
    MONGODB_HOST: str = os.getenv("MONGODB_HOST", "localhost")
    MONGODB_PORT: int = int(os.getenv("MONGODB_PORT", 27017))
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "student_survey")

    # Mail Resend API Key
    MAIL_RESEND_API_KEY: str = os.getenv("MAIL_RESEND_API_KEY", "")
    MAIL_FROM: str = os.getenv("MAIL_FROM", "Student Survey <noreply@example.com>")

    # Daily email quota
    QUOTA_BACKEND: str = os.getenv("QUOTA_BACKEND", "mongodb")
    QUOTA_COLLECTION: str = os.getenv("QUOTA_COLLECTION", "metadata")
    QUOTA_DOCUMENT_ID: str = os.getenv("QUOTA_DOCUMENT_ID", "emailCount")
    QUOTA_DAILY_LIMIT: int = int(os.getenv("QUOTA_DAILY_LIMIT", 90))
    QUOTA_TIMEZONE: str = os.getenv("QUOTA_TIMEZONE", "UTC")
    QUOTA_MAX_RETRIES: int = int(os.getenv("QUOTA_MAX_RETRIES", 5))

    # Timestamps in emails
    REFERENCE_TIMEZONE: str = os.getenv("REFERENCE_TIMEZONE", "America/New_York")

    # Dispatch profile
    NOTIFY_STUDENT_TOO: bool = _env_bool("NOTIFY_STUDENT_TOO", "True")
    REQUIRE_RESPONSES: bool = _env_bool("REQUIRE_RESPONSES", "True")

    # Validation settings
    LIKERT_MIN: int = int(os.getenv("LIKERT_MIN", 1))
    LIKERT_MAX: int = int(os.getenv("LIKERT_MAX", 5))

    def validate(self):
        """Validate settings before serving traffic"""
        for name in ("QUOTA_TIMEZONE", "REFERENCE_TIMEZONE"):
            try:
                ZoneInfo(getattr(self, name))
            except (ZoneInfoNotFoundError, ValueError):
                raise ValueError(f"{name} is not a known timezone: {getattr(self, name)!r}")

        if self.QUOTA_BACKEND not in ("mongodb", "memory"):
            raise ValueError(f"Unsupported QUOTA_BACKEND: {self.QUOTA_BACKEND!r}")

        if self.is_production():
            if not self.MAIL_RESEND_API_KEY:
                raise ValueError("MAIL_RESEND_API_KEY is required for production!")
            if self.QUOTA_BACKEND == "memory":
                raise ValueError("The memory quota backend is not shared between workers, use mongodb in production!")

    def get_mongodb_uri(self) -> str:
        if self.MONGODB_URI:
            return self.MONGODB_URI
        if self.MONGODB_PASSWORD:
            return (
                f"mongodb://{self.MONGODB_USERNAME}:{self.MONGODB_PASSWORD}"
                f"@{self.MONGODB_HOST}:{self.MONGODB_PORT}/{self.MONGODB_DATABASE}?authSource=admin"
            )
        return f"mongodb://{self.MONGODB_HOST}:{self.MONGODB_PORT}/{self.MONGODB_DATABASE}"

    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT.lower() == "development"

    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENVIRONMENT.lower() == "production"

    def log_config_summary(self):
        """Log configuration summary (secrets masked)"""
        uri = self.get_mongodb_uri()
        logger.info(
            "Configuration Summary: %s v%s | env=%s | host=%s:%s | debug=%s | "
            "quota=%s (%s/day, %s) | mongodb=%s | resend=%s | notify_student=%s | require_responses=%s",
            self.APP_NAME, self.VERSION, self.ENVIRONMENT, self.HOST, self.PORT, self.DEBUG,
            self.QUOTA_BACKEND, self.QUOTA_DAILY_LIMIT, self.QUOTA_TIMEZONE,
            uri.split('@')[-1] if '@' in uri else uri,
            'configured' if self.MAIL_RESEND_API_KEY else 'NOT SET',
            self.NOTIFY_STUDENT_TOO, self.REQUIRE_RESPONSES,
        )

# Create global settings instance
settings = Settings()
