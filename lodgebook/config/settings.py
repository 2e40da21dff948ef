"""
Configuration Management

Centralized configuration management using Pydantic Settings for type safety
and environment variable integration.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    extra="ignore",
)


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")  # json or text
    LOG_FILE: Optional[str] = Field(default=None)
    LOG_FILE_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    LOG_FILE_BACKUP_COUNT: int = Field(default=5)

    model_config = _ENV_CONFIG

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of {valid_levels}')
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ('json', 'text'):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class StorageSettings(BaseSettings):
    """Snapshot storage configuration"""

    STORAGE_BACKEND: str = Field(default="file")  # memory, file or database
    STORAGE_DIR: str = Field(default="data")
    DATABASE_URL: str = Field(default="sqlite:///./lodgebook.db")
    DATABASE_ECHO: bool = Field(default=False)

    model_config = _ENV_CONFIG

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def validate_backend(cls, v):
        valid_backends = ['memory', 'file', 'database']
        if v.lower() not in valid_backends:
            raise ValueError(f'Storage backend must be one of {valid_backends}')
        return v.lower()


class DefaultsSettings(BaseSettings):
    """Seed values used when storage holds no snapshot yet"""

    DEFAULT_ROOM_NUMBERS: List[str] = Field(default=["101", "102"])
    DEFAULT_ROOM_CAPACITY: int = Field(default=2, ge=1)
    DEFAULT_MESS_RATE: int = Field(default=2000, ge=0)
    DEFAULT_MESS_ACTIVE: bool = Field(default=True)

    model_config = _ENV_CONFIG


class Settings(BaseSettings):
    """Main application settings"""

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Project information
    PROJECT_NAME: str = Field(default="Lodgebook")
    TIMEZONE: str = Field(default="UTC")

    # Include all sub-settings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    defaults: DefaultsSettings = Field(default_factory=DefaultsSettings)

    model_config = _ENV_CONFIG

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'staging', 'production', 'testing']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of {valid_envs}')
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()
