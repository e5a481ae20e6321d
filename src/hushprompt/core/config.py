"""Reader settings loaded from a TOML file and environment overrides."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "HUSHPROMPT_HOME"
CONFIG_FILENAME = "config.toml"

# Environment variable -> settings field.
ENV_OVERRIDES: dict[str, str] = {
    "HUSHPROMPT_ECHO_SYMBOL": "echo_symbol",
    "HUSHPROMPT_MASK": "mask",
    "HUSHPROMPT_REQUIRE_INPUT": "require_input",
    "HUSHPROMPT_MAX_ATTEMPTS": "max_attempts",
}


class ConfigurationError(RuntimeError):
    """Raised when reader settings cannot be loaded or validated."""


class ReaderSettings(BaseModel):
    """Persisted password reader preferences."""

    echo_symbol: str | None = None
    mask: bool = True
    require_input: bool = False
    max_attempts: int | None = None

    @field_validator("echo_symbol", mode="before")
    @classmethod
    def _empty_symbol_means_hidden(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("echo_symbol")
    @classmethod
    def _single_character(cls, value: str | None) -> str | None:
        if value is not None and len(value) != 1:
            raise ValueError("echo_symbol must be exactly one character")
        return value

    @field_validator("max_attempts")
    @classmethod
    def _positive_attempts(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("max_attempts must be at least 1")
        return value


def default_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    return Path(env.get(HOME_ENV_VAR) or Path.home() / ".hushprompt")


def load_settings(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ReaderSettings:
    """Load settings from ``config_path`` (or the default home) plus environment overrides.

    A missing default config file is not an error; a missing explicit
    ``config_path`` is.
    """
    env = os.environ if environ is None else environ
    if config_path is None:
        path = default_config_dir(env) / CONFIG_FILENAME
        data = _read_config_dict(path) if path.exists() else {}
    else:
        path = config_path.expanduser()
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        data = _read_config_dict(path)

    for env_name, field in ENV_OVERRIDES.items():
        raw = env.get(env_name)
        if raw is not None:
            logger.debug("Applying %s override from environment", field)
            data[field] = raw if field == "echo_symbol" else raw.strip()

    try:
        return ReaderSettings(**data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def _read_config_dict(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to load config from {path}: {exc}") from exc
    logger.debug("Loaded reader settings from %s", path)
    return data


__all__ = [
    "CONFIG_FILENAME",
    "ConfigurationError",
    "ENV_OVERRIDES",
    "HOME_ENV_VAR",
    "ReaderSettings",
    "default_config_dir",
    "load_settings",
]
