"""Configuration management for the volleyball tracker with safe test defaults."""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""
    TEST = "TEST"
    DEV = "DEV"
    PROD = "PROD"


class LogFormat(str, Enum):
    """Supported log renderers."""
    JSON = "json"
    TEXT = "text"
    STRUCTURED = "structured"


class AppSettings(BaseSettings):
    """Application settings with dotenv support.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # ===================
    # Environment
    # ===================
    ENV: Environment = Field(
        default=Environment.DEV,
        description='Application environment: TEST, DEV, or PROD'
    )

    # ===================
    # Local storage
    # ===================
    DB_URI: str = Field(
        default='sqlite:///volley_tracker.db',
        description='SQLAlchemy URI of the local snapshot store'
    )
    SESSION_ID: Optional[str] = Field(
        default=None,
        description='Fixed 6-digit game id; generated when unset'
    )

    # ===================
    # Game rules
    # ===================
    MAX_SETS: int = Field(default=5, ge=1, description='Highest selectable set number')
    TOP_RESULTS_LIMIT: int = Field(default=10, ge=1, description='Rows in the top results panel')
    PLAYER_TOP_RESULTS_LIMIT: int = Field(default=8, ge=1, description='Rows in the per-player top results list')

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = Field(default='INFO', description='Logging level')
    LOG_FORMAT: LogFormat = Field(default=LogFormat.TEXT, description='Log format: json, text, or structured')
    LOG_FILE: Optional[Path] = Field(default=None, description='Log file path')

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator('ENV', mode='before')
    @classmethod
    def validate_env(cls, v) -> Environment:
        """Validate and normalize environment value."""
        if isinstance(v, Environment):
            return v
        if isinstance(v, str):
            v_upper = v.upper()
            if v_upper in ('TEST', 'TESTING'):
                return Environment.TEST
            elif v_upper in ('DEV', 'DEVELOPMENT', 'LOCAL'):
                return Environment.DEV
            elif v_upper in ('PROD', 'PRODUCTION'):
                return Environment.PROD
        raise ValueError(f"ENV must be TEST, DEV, or PROD (got: {v})")

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.ENV == Environment.TEST


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings.

    Loads settings from:
    1. Environment variables
    2. .env file (if exists)
    3. Default values
    """
    return AppSettings()
