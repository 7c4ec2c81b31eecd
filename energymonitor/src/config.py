"""
Summary service configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every value has a default so the service starts without any environment;
a ``.env`` file in the working directory is honoured.

CHANGELOG:
- 2026-10-16: Initial creation (STORY-007)

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings


class SummarySettings(BaseSettings):
    """Summary service configuration.

    Attributes:
        log_level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Emit one JSON object per log line when true, plain text
            otherwise.
        cors_allow_origins: Comma-separated list of dashboard origins allowed
            to call the API. Empty disables CORS.
    """

    log_level: str = "INFO"
    log_json: bool = True
    cors_allow_origins: str = ""

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate and upper-case the log level name."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(
                f"LOG_LEVEL must be a standard logging level name (got: '{v}')"
            )
        return level

    @property
    def cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [
            origin.strip()
            for origin in self.cors_allow_origins.split(",")
            if origin.strip()
        ]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
