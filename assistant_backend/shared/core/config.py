"""
Configuration management for the assistant backend.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.
    Uses pydantic-settings for automatic env var loading and validation,
    e.g. ASSISTANT_PORT overrides ``port``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ASSISTANT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AI Writing Assistant"
    environment: str = "production"
    version: str = "1.0.0"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 1

    # Provider configuration
    provider_config_file: str = "configs/providers.yaml"
    default_model: Optional[str] = None

    # API settings
    api_prefix: str = "/api"
    request_timeout: float = 60.0

    # Conversation settings
    max_turns: int = Field(default=20, ge=1)

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "text"  # json or text

    # CORS settings
    cors_origins: str = "*"  # Comma-separated list
    cors_allow_credentials: bool = True
    cors_max_age: int = 600

    # HTTP client pool
    http_max_connections: int = 100
    http_keepalive_connections: int = 20

    # Monitoring
    enable_metrics: bool = True

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment.lower() in ("development", "dev")
