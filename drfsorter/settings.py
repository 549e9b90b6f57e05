############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# settings.py: Library configuration and environment settings
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Library settings using Pydantic Settings."""

import math
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_version() -> str:
    """Read version from pyproject.toml (single source of truth)."""
    try:
        from importlib.metadata import version
        return version("drfsorter")
    except Exception:
        pass
    # Fallback: read pyproject.toml directly (works in dev without pip install)
    try:
        import tomllib
        toml_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except Exception:
        return "0.0.0"


class Settings(BaseSettings):
    """Sorter configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRFSORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "drfsorter"
    app_version: str = Field(default_factory=_get_version)
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    # Sorter
    sorter_default_weight: float = 1.0
    sorter_log_order: bool = False  # log the full order on every sort()

    @field_validator("log_format")
    @classmethod
    def parse_log_format(cls, v):
        """Accept only the renderers setup_logging() knows about."""
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v

    @field_validator("sorter_default_weight")
    @classmethod
    def check_default_weight(cls, v):
        """Weights divide the dominant share, so they must be positive."""
        if not math.isfinite(v) or v <= 0:
            raise ValueError("sorter_default_weight must be a finite positive number")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
