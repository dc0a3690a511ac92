"""Configuration for wordnet-dict.

Values are resolved from, lowest to highest precedence: the ``Settings``
defaults, an optional YAML file, environment variables, and explicit
overrides (command-line flags).

Environment variables
=====================

- ``WORDNET_DICT_DB_PATH`` (or ``DB_PATH``): SQLite database file.
- ``WORDNET_DICT_DIR``: WordNet ``dict/`` directory with index/data files.
- ``HOST`` / ``PORT``: HTTP bind address.
- ``WORDNET_DICT_LOG_LEVEL``: logging level name.

A YAML file is a mapping using the ``Settings`` field names::

    db_path: /var/lib/wordnet/wordnet.sqlite
    dict_dir: /usr/share/wordnet/dict
    port: 8080
    batch_size: 1000
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from wordnet_dict.exceptions import ConfigError

_ENV_VARS: dict[str, tuple[str, ...]] = {
    "db_path": ("WORDNET_DICT_DB_PATH", "DB_PATH"),
    "dict_dir": ("WORDNET_DICT_DIR",),
    "host": ("HOST",),
    "port": ("PORT",),
    "log_level": ("WORDNET_DICT_LOG_LEVEL",),
}

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    db_path: str = "wordnet.sqlite"
    dict_dir: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    batch_size: int = 750
    log_level: str = "INFO"
    encoding: str = "utf-8"

    def validate(self) -> Settings:
        """Check value ranges, returning ``self`` for chaining."""
        if self.port <= 0 or self.port > 65535:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.batch_size <= 0:
            raise ConfigError(f"batch_size must be positive, got {self.batch_size}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level!r}")
        return self


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML configuration mapping from a file."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_num = mark.line + 1 if mark else None
        raise ConfigError(f"Invalid YAML: {e}", line=line_num) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")
    return data


def _coerce(values: Mapping[str, Any], source: str) -> dict[str, Any]:
    """Check keys against ``Settings`` and convert values to field types."""
    known = {f.name for f in fields(Settings)}
    result: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown setting {key!r} in {source}")
        if value is None:
            continue
        if key in ("port", "batch_size"):
            try:
                value = int(value)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Setting {key!r} in {source} must be an integer") from e
        else:
            value = str(value)
        result[key] = value
    return result


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, names in _ENV_VARS.items():
        for name in names:
            raw = env.get(name)
            if raw is not None and raw.strip():
                values[key] = raw.strip()
                break
    return values


def load_settings(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Resolve settings from defaults, a YAML file, the environment and overrides."""
    settings = Settings()
    if config_path is not None:
        path = Path(config_path)
        settings = replace(settings, **_coerce(_load_yaml_file(path), str(path)))
    settings = replace(settings, **_coerce(_from_env(os.environ if env is None else env), "environment"))
    if overrides:
        settings = replace(settings, **_coerce(overrides, "overrides"))
    return settings.validate()
