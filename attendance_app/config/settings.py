"""
Environment configuration for the attendance analytics system.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

VALID_OFF_DAY_STRATEGIES = {"calendar", "roster_excused"}


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application configuration
    APP_NAME: str = Field(default="School Attendance Analytics", alias="PROJECT_NAME")
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False
    LOG_JSON: bool = False

    # Database configuration (persistence adapters only)
    DATABASE_URL: str = "sqlite:///./attendance.db"
    DATABASE_ECHO: bool = False

    # Analytics
    OFF_DAY_STRATEGY: str = "calendar"
    DEFAULT_HISTORY_DAYS: int = Field(default=30, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    # Validators
    @field_validator('OFF_DAY_STRATEGY', mode='before')
    @classmethod
    def validate_off_day_strategy(cls, v: str) -> str:
        """Normalise and check the off-day strategy name"""
        if isinstance(v, str):
            v = v.strip().lower().replace("-", "_")
        if v not in VALID_OFF_DAY_STRATEGIES:
            raise ValueError(
                f"OFF_DAY_STRATEGY must be one of: {sorted(VALID_OFF_DAY_STRATEGIES)}"
            )
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Upper-case the log level name"""
        return v.upper() if isinstance(v, str) else v

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
