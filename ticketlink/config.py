"""Configuration loading for the ticketlink adapter.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Build the core AdapterConfig from the loaded settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ticketlink.core.models import AdapterConfig, Credentials


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Adapter identity
    adapter_id: str = Field(
        default="servicenow",
        description="Identifier reported in ONLINE/OFFLINE events",
    )

    # ServiceNow connection
    servicenow_url: str = Field(
        default="https://dev00000.service-now.com",
        description="ServiceNow instance URL",
    )
    servicenow_username: str = Field(
        default="admin",
        description="ServiceNow login username",
    )
    servicenow_password: str = Field(
        default="",
        description="ServiceNow login password",
    )
    servicenow_table: str = Field(
        default="change_request",
        description="ServiceNow table holding change requests",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single ServiceNow request in seconds",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """Ensure request timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @field_validator("adapter_id")
    @classmethod
    def validate_adapter_id(cls, v: str) -> str:
        """Ensure adapter id is not blank."""
        if not v.strip():
            raise ValueError("adapter_id must be a non-empty string")
        return v

    def to_adapter_config(self) -> AdapterConfig:
        """Build the adapter's connection properties from these settings."""
        return AdapterConfig(
            url=self.servicenow_url,
            credentials=Credentials(
                username=self.servicenow_username,
                password=self.servicenow_password,
            ),
            table_name=self.servicenow_table,
        )


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
