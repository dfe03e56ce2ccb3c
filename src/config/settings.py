"""Application settings using Pydantic Settings.

Centralized configuration for the tax estimator service. Every value can
be overridden with a TAX_ENGINE_-prefixed environment variable or a .env
file, e.g. TAX_ENGINE_DEFAULT_TAX_YEAR=2024.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TAX_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    name: str = Field(default="Tax Estimator", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    # Calculation settings
    default_tax_year: int = Field(default=2025, description="Tax year used when a request names none")
    choose_larger_deduction: bool = Field(
        default=False,
        description="When itemizing is elected, use the larger of standard and itemized",
    )
    tax_parameters_dir: Optional[Path] = Field(
        default=None,
        description="Directory of tax_year_<year>.yaml files; defaults to the bundled set",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
