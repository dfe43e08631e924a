"""Application settings for book_author."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseSettings):
    """Paths and limits read from ``BOOK_AUTHOR_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOOK_AUTHOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".book_author")
    autosave_keep: int = Field(5, ge=1)
    recent_limit: int = Field(10, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got '{value}'")
        return value

    @property
    def autosave_dir(self) -> Path:
        return self.data_dir / "autosave"

    @property
    def recent_file(self) -> Path:
        return self.data_dir / "recent.json"

    @property
    def kdp_dir(self) -> Path:
        return self.data_dir / "kdp"
