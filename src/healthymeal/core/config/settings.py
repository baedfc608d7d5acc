"""Application configuration using Pydantic Settings with YAML support.

Configuration is organized by domain in ``config/base/*.yaml`` with
per-environment overrides, and secrets come from the environment only.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "HealthyMeal Recipe Modifier"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class AuthSettings(BaseModel):
    """Trusted-header identity settings.

    Sessions are terminated upstream; this service only reads the
    authenticated user id the gateway forwards.
    """

    user_id_header: str = "X-User-ID"


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "healthymeal"
    db_schema: str = "public"
    user: str | None = None
    min_pool_size: int = 2
    max_pool_size: int = 10
    command_timeout: float = 30.0
    ssl: bool = False


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class OpenRouterSettings(BaseModel):
    """OpenRouter chat-completions service configuration."""

    url: str = "https://openrouter.ai/api/v1"
    model: str = "google/gemini-2.0-flash-exp:free"
    timeout: float = Field(default=60.0, gt=0)
    app_referer: str | None = None
    app_title: str | None = None


class LLMSettings(BaseModel):
    """LLM configuration settings."""

    openrouter: OpenRouterSettings = OpenRouterSettings()


class ModificationSettings(BaseModel):
    """Generation parameters for recipe modification requests."""

    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=2000, gt=0)
    structured_output: bool = True
    response_excerpt_chars: int = Field(default=500, gt=0)
    audit_drain_timeout: float = Field(default=10.0, gt=0)


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables (nested via ``__``, e.g. ``LLM__OPENROUTER__MODEL``)
    3. ``.env`` file
    4. Environment-specific YAML (``config/environments/{APP_ENV}/``)
    5. Base YAML (``config/base/``)
    6. Defaults in code
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    llm: LLMSettings = LLMSettings()
    modification: ModificationSettings = ModificationSettings()

    # Secrets (env / .env only - never in YAML)
    OPENROUTER_API_KEY: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source between .env and Docker secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """PostgreSQL connection URL (without password)."""
        auth_part = f"{self.database.user}@" if self.database.user else ""
        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
