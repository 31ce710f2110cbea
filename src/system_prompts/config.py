"""
Configuration management using Pydantic Settings.

This module handles all environment-based configuration for the system prompt
store, covering the HTTP API, logging, authentication and the on-disk
location of the prompts collection.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    The CLI only needs the store and logging fields; the HTTP app additionally
    requires ``api_secret_key``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_title: str = Field(default="System Prompts", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")

    # Environment
    environment: str = Field(
        default="development",
        description="Deployment environment",
        pattern="^(development|staging|production|test)$",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="json",
        description="Logging format",
        pattern="^(json|standard)$",
    )

    # Prompt store location
    prompts_config_dir: Path | None = Field(
        default=None,
        description="Directory holding the prompts file (platform config dir when unset)",
    )
    prompts_file_name: str = Field(
        default="system_prompts.yaml",
        description="File name of the prompts collection inside the config directory",
        min_length=1,
    )

    # Secret key authentication
    api_secret_key: str | None = Field(
        default=None,
        description="Shared secret expected in the secret key header (required by the HTTP API)",
    )
    secret_key_header: str = Field(
        default="X-Secret-Key",
        description="Header carrying the shared secret",
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=False,  # Must be False when using wildcard
        description="Allow CORS credentials",
    )
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed CORS methods",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "X-Secret-Key", "X-Request-ID"],
        description="Allowed CORS headers",
    )

    # Request Validation
    max_request_body_size: int = Field(
        default=1048576,  # 1 MB in bytes
        description="Maximum request body size in bytes",
        ge=1024,  # Minimum 1 KB
        le=10485760,  # Maximum 10 MB
    )

    # Security Headers Configuration
    enable_security_headers: bool = Field(
        default=True,
        description="Enable security headers (X-Content-Type-Options, X-Frame-Options, HSTS, X-XSS-Protection)",
    )
