"""
Configuration management for the Wezo property-management shell.
Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShellSettings(BaseSettings):
    """Application shell: routing, navigation hooks and dialogs."""

    base_path: str = Field(
        default="/",
        validation_alias=AliasChoices("SHELL_BASE_PATH", "APP_BASE", "base_path"),
    )
    initial_route: str = "home"
    title: str = "Wezo.ae"
    footer_max_items: int = Field(default=4, ge=1)

    # None keeps a stalled before-navigate chain suspended until superseded.
    hook_timeout: Optional[float] = Field(default=None, gt=0)
    after_hook_timeout: float = Field(default=5.0, gt=0)
    dialog_timeout: Optional[float] = Field(default=None, gt=0)
    max_redirects: int = Field(default=10, ge=1)
    history_limit: int = Field(default=50, ge=1)

    state_file: str = "data/shell-state.json"
    restore_last_address: bool = True

    model_config = SettingsConfigDict(env_prefix="SHELL_", populate_by_name=True)

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, v):
        v = v.strip() or "/"
        if not v.startswith("/"):
            raise ValueError("Base path must start with '/'")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="LOG_")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v):
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    app_name: str = "Wezo"
    app_version: str = "0.1.0"
    environment: str = "development"

    # Sub-configurations
    shell: ShellSettings = Field(default_factory=ShellSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="WEZO_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ["development", "staging", "production", "test"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v.lower()


# Global settings instance
settings = Settings()
