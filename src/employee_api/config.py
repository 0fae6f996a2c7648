"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Employee Management API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8081
    log_level: Literal["critical", "error", "warning", "info", "debug"] = "info"

    # Database (required - no default)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_schema: str = Field(default="employee", pattern=r"^[a-z_][a-z0-9_]*$")
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    # Upper bound for a single statement, in seconds
    database_command_timeout: float = Field(default=30.0, gt=0)

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for production safety."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = str(self.database_url)

        # In production, require SSL/TLS unless connecting over a local network
        is_local = "@postgres:" in url or "@localhost:" in url or "@127.0.0.1:" in url
        if self.environment == "production" and not is_local and "sslmode=" not in url:
            raise ValueError(
                "DATABASE_URL must include sslmode parameter in production "
                "(e.g., sslmode=require or sslmode=verify-full)"
            )

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility:
        - sslmode=disable -> ssl=disable
        - sslmode=require -> ssl=require
        """
        url = str(self.database_url)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
