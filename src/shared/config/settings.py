"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from datetime import timedelta, timezone
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class PrometheusSettings(BaseSettings):
    """Prometheus server connection."""

    model_config = SettingsConfigDict(env_prefix="PROMETHEUS_")

    url: str = Field(
        default="http://localhost:9090",
        description="Prometheus base URL",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for a single Prometheus request",
    )
    query_timeout_seconds: float = Field(
        default=30.0,
        description="Deadline shared by all queries of one aggregation call",
    )
    health_timeout_seconds: float = Field(
        default=5.0,
        description="Deadline for the health check query",
    )

    @field_validator("timeout_seconds", "query_timeout_seconds", "health_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Timeouts must be positive."""
        if v <= 0:
            raise ValueError("timeout must be greater than zero")
        return v


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., PROMETHEUS_URL).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="gpu-monitoring", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    debug: bool = Field(default=False, description="Enable debug mode")
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="CORS allowed origins",
    )

    # Capture timestamps on GPU records (JST by default)
    timestamp_utc_offset_hours: int = Field(
        default=9,
        ge=-12,
        le=14,
        description="UTC offset used for record capture timestamps",
    )

    # Nested settings
    prometheus: PrometheusSettings = Field(default_factory=PrometheusSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def display_timezone(self) -> timezone:
        """Timezone for capture timestamps."""
        return timezone(timedelta(hours=self.timestamp_utc_offset_hours))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
