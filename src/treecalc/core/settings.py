"""
Configuration for treecalc.

Settings are loaded from the [treecalc] table of treecalc.toml and can be
overridden through environment variables:

    TREECALC_MAX_DEPTH   maximum nesting depth accepted by the parser
    TREECALC_LOG_LEVEL   logging level used by the CLI

Usage:
    from treecalc.core.settings import load_settings

    settings = load_settings()
    parse(tokens, max_depth=settings.max_depth)
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from treecalc.core.expression_lang.parser import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "treecalc.toml"

MAX_DEPTH_ENV_VAR = "TREECALC_MAX_DEPTH"
LOG_LEVEL_ENV_VAR = "TREECALC_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalcSettings(BaseModel):
    """Runtime configuration."""

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper().strip()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings(toml_path: Path | None = None) -> CalcSettings:
    """
    Load settings from treecalc.toml, then apply environment overrides.

    Args:
        toml_path: Path to the config file. Defaults to ./treecalc.toml.

    Returns:
        CalcSettings with values from file, environment, or defaults
    """
    path = toml_path if toml_path is not None else Path.cwd() / DEFAULT_CONFIG_FILE
    data = _read_section(path)

    env_max_depth = os.environ.get(MAX_DEPTH_ENV_VAR, "").strip()
    if env_max_depth:
        data["max_depth"] = env_max_depth
    env_log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if env_log_level:
        data["log_level"] = env_log_level

    try:
        return CalcSettings.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid treecalc settings (%s). Using defaults.", e)
        return CalcSettings()


def _read_section(path: Path) -> dict[str, Any]:
    """Read the [treecalc] table, or an empty dict if unavailable."""
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Could not read %s (%s). Using defaults.", path, e)
        return {}

    section = data.get("treecalc", {})
    if not isinstance(section, dict):
        logger.warning("[treecalc] in %s is not a table. Using defaults.", path)
        return {}
    return dict(section)
