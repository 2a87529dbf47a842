"""Configuration management for the User Directory service."""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "User Directory"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API Configuration
    api_prefix: str = "/api/v1"
    health_check_path: str = "/health"
    readiness_check_path: str = "/ready"

    # Redis Configuration (preference store)
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0
    redis_url: Optional[str] = Field(None, validate_default=True)
    redis_max_connections: int = Field(8, gt=0)
    redis_socket_timeout: float = Field(2.0, gt=0)
    preferences_key: str = "userdirectory:preferences"

    # Simulated data source
    dataset_size: int = Field(24, gt=0)
    default_page_size: int = Field(6, gt=0)
    max_page_size: int = Field(100, gt=0)
    latency_min_seconds: float = Field(0.2, gt=0)
    latency_max_seconds: float = Field(0.4, gt=0)
    failure_rate: float = Field(0.0, ge=0.0, le=1.0)

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_json: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    @field_validator("redis_url", mode="before")
    @classmethod
    def build_redis_url(cls, v, info: ValidationInfo):
        """Build Redis URL from components if not provided."""
        if v:
            return v

        host = info.data.get("redis_host", "redis")
        port = info.data.get("redis_port", 6379)
        password = info.data.get("redis_password")
        db = info.data.get("redis_db", 0)

        if password:
            return f"redis://:{password}@{host}:{port}/{db}"
        return f"redis://{host}:{port}/{db}"

    @field_validator("latency_max_seconds")
    @classmethod
    def check_latency_bounds(cls, v, info: ValidationInfo):
        """Upper latency bound may not be below the lower one."""
        low = info.data.get("latency_min_seconds")
        if low is not None and v < low:
            raise ValueError("latency_max_seconds must be >= latency_min_seconds")
        return v

    @property
    def latency_range(self) -> tuple:
        return (self.latency_min_seconds, self.latency_max_seconds)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function for getting settings
settings = get_settings()
