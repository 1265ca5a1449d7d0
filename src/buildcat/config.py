"""Configuration management for buildcat."""

import tomllib
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Self

import tomli_w
from pydantic import BaseModel, Field, ValidationError, model_validator

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_ACTIVE_WINDOW_DAYS,
    DEFAULT_BASE_URL,
    DEFAULT_DEPRECATION_WINDOW_DAYS,
    MAX_WINDOW_DAYS,
)
from .errors import ConfigError


class DuplicatePolicy(str, Enum):
    """How to resolve repeated identifiers within one platform batch."""

    LATEST_PUBLISHED = "latest_published"  # later published_at wins, ties go to last seen
    LAST_SEEN = "last_seen"
    FIRST_SEEN = "first_seen"


class SupportPolicy(BaseModel):
    """Classification thresholds and flag policy.

    Windows are measured from the moment a build's successor was published:
    a superseded build is active for ``active_window_days``, deprecated until
    ``deprecation_window_days`` and end-of-life after that.

    ``recommendation_threshold_days`` limits how long an upstream
    recommendation stays honored once a newer build exists. None means the
    upstream signal never lapses.
    """

    active_window_days: int = Field(
        default=DEFAULT_ACTIVE_WINDOW_DAYS, ge=0, le=MAX_WINDOW_DAYS
    )
    deprecation_window_days: int = Field(
        default=DEFAULT_DEPRECATION_WINDOW_DAYS, ge=0, le=MAX_WINDOW_DAYS
    )
    recommendation_threshold_days: int | None = Field(default=None, ge=0, le=MAX_WINDOW_DAYS)
    critical_versions: list[str] = Field(
        default_factory=list, description="Versions to flag as critical regardless of upstream"
    )
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LATEST_PUBLISHED

    @model_validator(mode="after")
    def validate_windows(self) -> Self:
        """Deprecation cannot end before the active window does."""
        if self.deprecation_window_days < self.active_window_days:
            raise ValueError(
                "deprecation_window_days must be >= active_window_days "
                f"({self.deprecation_window_days} < {self.active_window_days})"
            )
        return self

    @property
    def active_window(self) -> timedelta:
        return timedelta(days=self.active_window_days)

    @property
    def deprecation_window(self) -> timedelta:
        return timedelta(days=self.deprecation_window_days)

    @property
    def recommendation_threshold(self) -> timedelta | None:
        if self.recommendation_threshold_days is None:
            return None
        return timedelta(days=self.recommendation_threshold_days)

    def support_schedule(self) -> dict[str, str]:
        """Human-readable schedule, as published alongside query results."""
        recommended = (
            f"{self.recommendation_threshold_days} days after next release"
            if self.recommendation_threshold_days is not None
            else "until upstream withdraws the recommendation"
        )
        return {
            "recommended": recommended,
            "active": f"{self.active_window_days} days after next release",
            "deprecated": f"{self.deprecation_window_days} days after next release",
            "eol": f"more than {self.deprecation_window_days} days after next release",
        }


class UrlsConfig(BaseModel):
    """Download URL settings."""

    base_url: str = DEFAULT_BASE_URL


class CatalogConfig(BaseModel):
    """Root configuration for buildcat."""

    policy: SupportPolicy = Field(default_factory=SupportPolicy)
    urls: UrlsConfig = Field(default_factory=UrlsConfig)


def load_config(config_path: Path) -> CatalogConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to buildcat.toml

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    if not config_path.exists():
        return CatalogConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return CatalogConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError, OSError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(directory: Path) -> Path:
    """Write default buildcat.toml template.

    Args:
        directory: Directory to write the config into

    Returns:
        Path to the written config file
    """
    config_path = directory / CONFIG_FILENAME
    template = {
        "policy": {
            "active_window_days": DEFAULT_ACTIVE_WINDOW_DAYS,
            "deprecation_window_days": DEFAULT_DEPRECATION_WINDOW_DAYS,
            # recommendation_threshold_days is omitted: upstream recommendations never lapse
            "critical_versions": [],
            "duplicate_policy": DuplicatePolicy.LATEST_PUBLISHED.value,
        },
        "urls": {"base_url": DEFAULT_BASE_URL},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
