"""
Configuration for redoscope.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from redoscope.models import InvokerOptions


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # Analysis
    ANALYSIS_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    ENABLE_DIAGNOSTICS: bool = Field(default=True)
    BATCH_CONCURRENCY: int = Field(default=4, ge=1)

    # Reporting
    MAX_SUGGESTIONS: int = Field(default=3, ge=0)
    MAX_PATTERN_LENGTH: int = Field(default=50_000)
    PATTERN_GLOB: str = Field(default="**/*.regex")

    def invoker_options(self) -> InvokerOptions:
        """Options for the deadline-bounded invoker built from these settings."""
        return InvokerOptions(
            timeout=self.ANALYSIS_TIMEOUT_SECONDS,
            enable_diagnostics=self.ENABLE_DIAGNOSTICS,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger("redoscope")
