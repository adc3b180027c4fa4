"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with .env file support.
"""

from typing import Optional

from pydantic_settings import BaseSettings

from order_pacing.config.constants import DEFAULT_TIMEZONE
from order_pacing.models.busy_time import TimeframeMode


class Settings(BaseSettings):
    """Application configuration."""

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    environment: str = "development"

    # Redis Store Configuration
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_max_connections: int = 10
    redis_socket_timeout: float = 5.0
    key_prefix: str = ""

    # Engine Configuration
    timeframe_mode: TimeframeMode = TimeframeMode.BEFORE_ONLY
    timezone: str = DEFAULT_TIMEZONE
    rules_file: Optional[str] = None
    allow_empty_rules: bool = False

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Create a global settings instance
settings = Settings()
