"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "PlateShare API"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_mask_emails: bool = False  # Mask user emails (donors, charities) in log output

    # Firebase/GCP
    gcp_project_id: str = ""
    use_firebase_emulator: bool = False

    # Firestore
    firestore_emulator_host: str = "localhost:8080"
    firestore_database: str = "(default)"

    # Payments (Stripe)
    stripe_secret_key: str = ""
    payment_currency: str = "usd"

    # API
    api_prefix: str = ""
    # CORS_ORIGINS_STR env var should be comma-separated list of allowed origins
    cors_origins_str: str = "http://localhost:5173"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "300/minute"
    rate_limit_writes: str = "30/minute"

    # Bootstrap admins
    initial_admin_emails_str: str = Field(
        default="", validation_alias="INITIAL_ADMIN_EMAILS"
    )  # Comma-separated admin emails

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def initial_admin_emails(self) -> list[str]:
        """Parse initial admin emails from comma-separated string."""
        if not self.initial_admin_emails_str:
            return []
        return [
            email.strip().lower()
            for email in self.initial_admin_emails_str.split(",")
            if email.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
