# src/files_client/config/settings.py
import re
from functools import lru_cache
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

API_VERSION_PATTERN = re.compile(r"^v\d+\.\d+$")


class Settings(BaseSettings):
    """
    Single source of truth for the request builder settings.

    Configuration precedence:
    1. Environment variables prefixed with FILES_CLIENT_ (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from files_client.config.settings import get_settings
        settings = get_settings()
        version = settings.api_version
    """

    # API Settings
    api_version: str = Field(
        default="v62.0",
        description="REST API version segment, e.g. v62.0"
    )

    services_path: str = Field(
        default="/services/data",
        description="Root of the versioned REST API"
    )

    # Connect headers
    chatter_entity_encoding: bool = Field(
        default=False,
        description="Value sent in the X-Chatter-Entity-Encoding header"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("api_version", mode="before")
    @classmethod
    def normalize_api_version(cls, v):
        """Accept versions given without the leading 'v' (e.g. 62.0)."""
        if v is None:
            return v
        v = str(v).strip()
        if v and not v.startswith("v"):
            v = f"v{v}"
        return v

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v):
        if not API_VERSION_PATTERN.match(v):
            raise ValueError(f"Invalid api_version: {v}. Expected the form v<major>.<minor>")
        return v

    @field_validator("services_path")
    @classmethod
    def normalize_services_path(cls, v):
        return "/" + v.strip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v

    def get_environment_dict(self) -> Dict[str, Any]:
        """Get configuration as a dictionary of environment variables.

        Returns:
            Dictionary of environment variables
        """
        return {
            "FILES_CLIENT_API_VERSION": self.api_version,
            "FILES_CLIENT_SERVICES_PATH": self.services_path,
            "FILES_CLIENT_CHATTER_ENTITY_ENCODING": str(self.chatter_entity_encoding).lower(),
            "FILES_CLIENT_LOG_LEVEL": self.log_level,
        }

    model_config = SettingsConfigDict(
        env_prefix="FILES_CLIENT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
