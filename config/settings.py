"""
Configuration settings for the Projecost quoting API.

Uses pydantic-settings for environment variable management with validation.
Supports multi-environment deployments (development, staging, production).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    name: str = "projecost"
    user: str = "postgres"
    password: SecretStr = SecretStr("postgres")
    pool_size: int = 20
    max_overflow: int = 10

    # Full SQLAlchemy async URL, takes precedence over the parts above
    url: str | None = None

    @property
    def async_url(self) -> str:
        """Construct async database URL."""
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:"
            f"{self.password.get_secret_value()}@"
            f"{self.host}:{self.port}/{self.name}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.async_url.startswith("sqlite")


class AuthSettings(BaseSettings):
    """Authentication and security configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr("your-super-secret-key-change-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30
    password_min_length: int = 6
    bcrypt_rounds: int = 12
    allow_admin_registration: bool = False


class QuoteSettings(BaseSettings):
    """Quote lifecycle configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QUOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    validity_days: int = 30
    enforce_transitions: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Projecost API"
    app_version: str = "2.0.0"
    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 4

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Reference data
    seed_countries_on_startup: bool = False

    # Sub-configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    quotes: QuoteSettings = Field(default_factory=QuoteSettings)


@lru_cache()
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()


# Convenience export
settings = get_settings()
