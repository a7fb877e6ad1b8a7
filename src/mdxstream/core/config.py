"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Hydration settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="MDX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Streaming
    stream_batch_size: int = Field(
        default=20, gt=0, description="New characters accumulated before a frame is emitted"
    )

    # Parsing
    max_nesting_depth: int = Field(
        default=64, ge=1, le=128, description="Deepest allowed element nesting"
    )

    # Monitoring
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
