"""Configuration and settings management using pydantic-settings."""
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Operational settings with environment variable loading.

    The migration itself (tools, dependencies, file names) is fixed; only the
    knobs that control how the run behaves live here.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOW_MIGRATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Log level")
    log_json: bool = Field(
        default=False,
        description="Emit logs as JSON lines instead of plain text",
    )

    # Converter driver
    prompt_idle_timeout_s: float = Field(
        default=300.0,
        description="Seconds without converter output before the pending prompt is treated as unrecognized",
    )
    converter_timeout_s: float = Field(
        default=1800.0,
        description="Total seconds the converter may run before it is killed",
    )
    prompts_file: Path | None = Field(
        default=None,
        description="YAML file overriding the built-in prompt table",
    )
    strict_converter_exit: bool = Field(
        default=False,
        description="Fail the conversion step when the converter exits non-zero",
    )

    # Package manager
    package_manager_timeout_s: float = Field(
        default=600.0,
        description="Budget in seconds for each package manager command",
    )

    @field_validator(
        "prompt_idle_timeout_s", "converter_timeout_s", "package_manager_timeout_s"
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Timeouts must be positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
