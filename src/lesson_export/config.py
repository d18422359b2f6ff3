"""Configuration management for Lesson Export."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INSTITUTION_NAME = "EDUCATIONAL INSTITUTION NAME"
DEFAULT_TEACHER_NAME = "____________________"
DEFAULT_PERIOD = "1"
DEFAULT_DATE_PLACEHOLDER = "____________________"
DEFAULT_EMPTY_MATERIALS_TEXT = "No materials required."


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Header placeholders printed on every lesson plan
    institution_name: str = Field(
        default=DEFAULT_INSTITUTION_NAME,
        alias="LESSON_EXPORT_INSTITUTION",
    )
    teacher_name: str = Field(
        default=DEFAULT_TEACHER_NAME,
        alias="LESSON_EXPORT_TEACHER",
    )
    period: str = Field(
        default=DEFAULT_PERIOD,
        alias="LESSON_EXPORT_PERIOD",
    )
    date_placeholder: str = Field(
        default=DEFAULT_DATE_PLACEHOLDER,
        alias="LESSON_EXPORT_DATE",
    )
    empty_materials_text: str = Field(
        default=DEFAULT_EMPTY_MATERIALS_TEXT,
        alias="LESSON_EXPORT_EMPTY_MATERIALS",
    )

    # Delivery settings
    output_dir: Path = Field(
        default=Path("."),
        alias="LESSON_EXPORT_OUTPUT_DIR",
    )
    export_delay: float = Field(
        default=0.0,
        ge=0.0,
        alias="LESSON_EXPORT_DELAY",
    )


@dataclass(frozen=True)
class HeaderPlaceholders:
    """Fixed values printed in the header table and empty sections.

    Renderers receive these explicitly instead of reading settings.

    Attributes:
        institution_name: School name on the first header row
        teacher_name: Instructor name on the last header row
        period: Value of the PERIODS cell
        date_placeholder: Value of the DATE/TIMELINE cell
        empty_materials_text: Line shown when a plan lists no materials
    """

    institution_name: str = DEFAULT_INSTITUTION_NAME
    teacher_name: str = DEFAULT_TEACHER_NAME
    period: str = DEFAULT_PERIOD
    date_placeholder: str = DEFAULT_DATE_PLACEHOLDER
    empty_materials_text: str = DEFAULT_EMPTY_MATERIALS_TEXT

    @classmethod
    def from_settings(cls, settings: Settings) -> "HeaderPlaceholders":
        return cls(
            institution_name=settings.institution_name,
            teacher_name=settings.teacher_name,
            period=settings.period,
            date_placeholder=settings.date_placeholder,
            empty_materials_text=settings.empty_materials_text,
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
