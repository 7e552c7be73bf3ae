"""Configuration management for taskvault."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Session signing
    secret_key: str | None = Field(default=None, description="Server secret used to sign session tokens")
    session_max_age_seconds: int = Field(
        default=30 * 24 * 60 * 60, description="Lifetime of a session token in seconds (default 30 days)"
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./taskvault.db", description="Path to the SQLite database file")
    db_operation_timeout_seconds: float = Field(
        default=10.0, description="Upper bound for a single store operation before it fails"
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    environment: str = Field(default="development", description="Deployment environment name")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # Pagination Defaults
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_LIMIT: int = 10

    # Field limits
    MAX_NAME_LENGTH: int = 50
    MAX_TITLE_LENGTH: int = 200
    MAX_DESCRIPTION_LENGTH: int = 2000
    MIN_PASSWORD_LENGTH: int = 6

    # Session token
    SESSION_SALT: str = "session"
    AUTH_SCHEME: str = "Bearer"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
