import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REGISTRY_URL = "http://127.0.0.1:8080"


class Settings(BaseSettings):
    """Settings loaded from CLIMB_* environment variables and .env.

    target_cli is the program discovered when the first token is one of the
    registry keywords or when no token is given at all. Leaving it empty is
    a configuration error at discovery time, not at load time.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIMB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Default target program
    target_cli: str = "mcpjungle"

    # Help and look-ahead probes
    help_timeout_seconds: float = 8.0

    # Registry fast-path
    registry_binary: str = "mcpjungle"
    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout_seconds: float = 30.0
    usage_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "WARNING"
    debug: bool = False

    @field_validator("target_cli", "registry_binary", "registry_url", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator(
        "help_timeout_seconds",
        "registry_timeout_seconds",
        "usage_timeout_seconds",
    )
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return level


def get_settings() -> Settings:
    return Settings()
