"""Configuration loading for the hbreport notifier.

This module provides centralized configuration management:
- Load settings from HONEYBADGER_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://api.honeybadger.io/v1/notices"
DEFAULT_NOTIFIER_NAME = "hbreport"
DEFAULT_NOTIFIER_URL = "https://pypi.org/project/hbreport/"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Notifier configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="HONEYBADGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(
        default="",
        description="Project API key sent with every notice",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="URL notices are posted to",
    )
    notifier_name: str = Field(
        default=DEFAULT_NOTIFIER_NAME,
        description="Name of the library sending notices",
    )
    notifier_url: str = Field(
        default=DEFAULT_NOTIFIER_URL,
        description="Homepage of the library sending notices",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Deadline for one delivery request in seconds",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Ensure the endpoint is an http(s) URL."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("endpoint must start with http:// or https://")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure the delivery deadline is positive."""
        if v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load notifier settings from environment.

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


__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_NOTIFIER_NAME",
    "DEFAULT_NOTIFIER_URL",
    "DEFAULT_TIMEOUT",
    "Settings",
    "load_settings",
]
