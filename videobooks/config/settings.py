"""
Configuration Management for Video Editor Books

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The only real choice the application has is where the data document
lives, plus a couple of report presentation knobs.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Location of the persisted JSON document."""

    model_config = SettingsConfigDict(
        env_prefix="VIDEOBOOKS_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the data document"
    )
    file_name: str = Field(
        default="videobooks.json",
        min_length=1,
        description="File name of the data document"
    )

    @field_validator('file_name')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """The document must be a plain file name, not a path."""
        if Path(v).name != v:
            raise ValueError(f"file_name must not contain directories: {v}")
        return v

    @property
    def document_path(self) -> Path:
        """Full path of the data document."""
        return self.data_dir / self.file_name


class ReportSettings(BaseSettings):
    """Spreadsheet report configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VIDEOBOOKS_REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    unknown_client_label: str = Field(
        default="Unknown client",
        description="Name shown for payments whose client no longer exists"
    )
    date_format: str = Field(
        default="yyyy-mm-dd",
        description="Excel number format applied to date cells"
    )
    money_format: str = Field(
        default="#,##0.00",
        description="Excel number format applied to money cells"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Show full tracebacks alongside storage errors in the UI"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def reports(self) -> ReportSettings:
        return ReportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "reports", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
