"""Application configuration loaded from environment variables.

Settings for database, API, authentication, object storage and wizard
sessions. Uses pydantic-settings for validation and .env file support.
"""

import uuid

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "nexus_dev_password"  # nosec B105

# Minimum length for AUTH_SECRET in production (256 bits = 32 bytes)
_MIN_AUTH_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "nexus"
    database_user: str = "nexus_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD
    # Full async URL, e.g. "sqlite+aiosqlite:///./nexus.db". Wins over the
    # individual database_* fields when set.
    database_url_override: str = ""

    # CORS (Security)
    # CRITICAL: Never set to ["*"] when allow_credentials=True
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Authentication
    # Local mode: DEFAULT_USER_ID provides user context without JWT
    # Hosted mode: auth_enabled=True, JWT cookie required on every request
    default_user_id: uuid.UUID | None = None
    auth_enabled: bool = False
    auth_secret: SecretStr = SecretStr("")
    auth_issuer: str = "nexus"
    auth_audience: str = "nexus"
    auth_cookie_name: str = "nexus.session-token"

    # Object storage
    # Public URLs are issued as {public_base_url}/api/v1/files/{bucket}/{path}
    public_base_url: str = "http://localhost:8000"
    upload_max_size_mb: int = 10

    # Wizard sessions
    wizard_session_ttl_minutes: int = 60

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def upload_max_size_bytes(self) -> int:
        """Maximum accepted upload size in bytes."""
        return self.upload_max_size_mb * 1024 * 1024

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate production security requirements.

        Security: Prevents deployment with known insecure defaults.
        Checks:
        - CORS must not use wildcard origin (incompatible with credentials)
        - Database password must not be the default in production
        - AUTH_SECRET must be set and >= 32 chars when auth is enabled in production
        """
        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "This application uses credentials (cookies) which are "
                "incompatible with wildcard CORS origins."
            )
            raise ValueError(msg)

        if self.wizard_session_ttl_minutes <= 0:
            msg = (
                "WIZARD_SESSION_TTL_MINUTES must be positive. "
                f"Got: {self.wizard_session_ttl_minutes}"
            )
            raise ValueError(msg)

        if self.environment == "production":
            if (
                not self.database_url_override
                and self.database_password == _INSECURE_DEFAULT_PASSWORD
            ):
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            if self.auth_enabled:
                secret_value = self.auth_secret.get_secret_value()
                if len(secret_value) < _MIN_AUTH_SECRET_LENGTH:
                    msg = (
                        f"AUTH_SECRET must be at least {_MIN_AUTH_SECRET_LENGTH} "
                        "characters when AUTH_ENABLED=true in production."
                    )
                    raise ValueError(msg)

        return self


settings = Settings()
