"""
NutriTrack configuration.

Values come from environment variables (case-insensitive) or a ``.env`` file
and are validated once at import time into the module-level ``settings``.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator


class Environment(str, Enum):
    """Deployment stage the process runs in"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Typed settings for the API process.

    Example:
        DATABASE_URL=sqlite:///./nutritrack.db JWT_SECRET=... uvicorn main:app
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Service identity
    app_name: str = Field(default="NutriTrack", description="Service name")
    app_version: str = Field(default="1.0.0", description="Service version")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = False

    # Uvicorn bind address
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # Storage
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/nutritrack",
        description="SQLAlchemy URL of the catalog and meal log database",
    )
    db_echo: bool = Field(default=False, description="Log every SQL statement")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Schema creation attempts at startup"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Pause between schema creation attempts"
    )

    # Bearer tokens
    jwt_secret: str = Field(
        default="change-me-in-production", description="HMAC key for access tokens"
    )
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = Field(default=120, ge=1, description="Token lifetime")

    # Food listing paging
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # OpenAPI
    api_prefix: str = ""
    api_title: str = "NutriTrack API"
    api_description: str = "Food catalog management and meal nutrition tracking"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return Environment(v.strip().lower())
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def check_page_sizes(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


settings = Settings()
