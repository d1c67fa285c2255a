"""
Configuration management for the intake service.
"""

import logging
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: Literal["dev", "prod"] = Field(default="dev", description="Application environment")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # API configuration
    HOST: str = Field(default="0.0.0.0", description="Bind address for the API server")
    PORT: int = Field(default=8000, description="Port for the API server")
    API_PREFIX: str = Field(default="/api/v1", description="Prefix for all HTTP routes")
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")

    LOG_RESULTS: bool = Field(default=False, description="Log every orchestrator result served over HTTP")

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @computed_field
    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if not isinstance(level, int):
            logger.warning(f"Unknown LOG_LEVEL '{self.LOG_LEVEL}', falling back to INFO")
            return logging.INFO
        return level


settings = Settings()
