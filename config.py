# config.py
from __future__ import annotations
from typing import List, Optional, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, model_validator

class Settings(BaseSettings):
    # Read .env; ignore extra env vars to avoid crashes
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_prefix="",  # no automatic prefix
    )

    # --- Runtime env / debugging ---
    APP_ENV: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
    )
    DEBUG: bool = Field(
        default=False,
        validation_alias=AliasChoices("DEBUG", "debug"),
    )

    # --- Completion service ---
    OPENAI_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
    )
    OPENAI_MODEL: str = Field(
        default="gpt-3.5-turbo",
        validation_alias=AliasChoices("OPENAI_MODEL", "openai_model"),
    )
    OPENAI_BASE_URL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
    )
    OPENAI_TEMPERATURE: float = Field(
        default=0.7,
        ge=0,
        le=2,
        validation_alias=AliasChoices("OPENAI_TEMPERATURE", "openai_temperature"),
    )
    OPENAI_TIMEOUT_SECONDS: float = Field(
        default=60.0,
        gt=0,
        validation_alias=AliasChoices("OPENAI_TIMEOUT_SECONDS", "openai_timeout_seconds"),
    )
    # The SDK retries twice by default; this service does not retry.
    OPENAI_MAX_RETRIES: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("OPENAI_MAX_RETRIES", "openai_max_retries"),
    )

    # Use the local generator when the completion call itself fails
    FALLBACK_ON_UPSTREAM_ERROR: bool = Field(
        default=False,
        validation_alias=AliasChoices("FALLBACK_ON_UPSTREAM_ERROR", "fallback_on_upstream_error"),
    )

    # Longest trip the planner will generate, in days
    MAX_TRIP_DAYS: int = Field(
        default=30,
        ge=1,
        validation_alias=AliasChoices("MAX_TRIP_DAYS", "max_trip_days"),
    )

    # --- Server Settings ---
    PORT: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "port"),
    )
    HOST: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
    )
    SERVE_STATIC: bool = Field(
        default=False,
        validation_alias=AliasChoices("SERVE_STATIC", "serve_static"),
    )
    STATIC_DIR: str = Field(
        default=".",
        validation_alias=AliasChoices("STATIC_DIR", "static_dir"),
    )

    # --- Logging ---
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # --- CORS (env-driven) ---
    CORS_ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
    )
    # Optional comma-separated alternative that overrides the above
    FRONTEND_ORIGINS: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("FRONTEND_ORIGINS", "frontend_origins"),
    )
    CORS_ALLOW_METHODS: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "OPTIONS"],
        validation_alias=AliasChoices("CORS_ALLOW_METHODS", "cors_allow_methods"),
    )
    CORS_ALLOW_HEADERS: List[str] = Field(
        default_factory=lambda: ["Accept", "Content-Type", "X-Request-Id"],
        validation_alias=AliasChoices("CORS_ALLOW_HEADERS", "cors_allow_headers"),
    )
    CORS_EXPOSE_HEADERS: List[str] = Field(
        default_factory=lambda: ["X-Request-Id"],
        validation_alias=AliasChoices("CORS_EXPOSE_HEADERS", "cors_expose_headers"),
    )

    @model_validator(mode="after")
    def _merge_frontend_origins(self) -> "Settings":
        if self.FRONTEND_ORIGINS:
            parts = [p.strip() for p in self.FRONTEND_ORIGINS.split(",") if p.strip()]
            if parts:
                self.CORS_ALLOW_ORIGINS = parts
        return self

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "Settings":
        """Refuse to boot a production instance that can never reach the completion service."""
        if self.APP_ENV == "production" and not self.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY must be set in production.")
        return self

    @property
    def is_dev(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

settings = Settings()
