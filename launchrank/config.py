import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from launchrank.catalog import default_catalog_path
from launchrank.constants import DEFAULT_MAX_RESULTS, DEFAULT_PRECISION, MID_BONUS, PRECISION_LEVELS


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LAUNCHRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    # Catalog file (.yaml/.yml/.json); defaults to the bundled catalog
    catalog_path: Path | None = None

    # Minimum raw match score for a fuzzy hit: 0-100 or regular/low/none
    precision: int = DEFAULT_PRECISION

    # Score bonuses; name_bonus unset means "derive from the matcher's score range"
    name_bonus: int | None = None
    mid_bonus: int = Field(default=MID_BONUS, ge=0)

    # Hide entries not available on this OS build
    os_build: int | None = None

    # Optional leading word stripped from queries, e.g. "ws display"
    action_keyword: str | None = None

    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1)
    log_level: str = "INFO"

    @field_validator("precision", mode="before")
    @classmethod
    def _resolve_precision(cls, v):
        if isinstance(v, str) and v.strip().lower() in PRECISION_LEVELS:
            return PRECISION_LEVELS[v.strip().lower()]
        return v

    @field_validator("precision")
    @classmethod
    def _validate_precision(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"precision must be 0-100, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("action_keyword", mode="before")
    @classmethod
    def _normalize_action_keyword(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def catalog_file(self) -> Path:
        return self.catalog_path or default_catalog_path()
