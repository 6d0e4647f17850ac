"""
Configuration for the snip database location.

The database path is resolved once at startup, in order:

1. an explicit path (``--db`` / ``SNIP_DB``)
2. ``[database] path`` in the config file
3. ``$HOME/.snip.sqlite3``

The config file is optional TOML, read from ``SNIP_CONFIG`` or
``$HOME/.config/snip/snip.toml``::

    [database]
    path = "~/notes/snip.sqlite3"

    [logging]
    ops_log = true
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .errors import ConfigError

DB_FILENAME = ".snip.sqlite3"
CONFIG_FILENAME = "snip.toml"

DB_ENV = "SNIP_DB"
CONFIG_ENV = "SNIP_CONFIG"


@dataclass
class SnipConfig:
    """Resolved configuration."""
    db_path: Path
    ops_log: bool = True
    config_path: Optional[Path] = None


def _home(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME")
    if not home:
        raise ConfigError(
            f"HOME is not set; set {DB_ENV} or pass --db to choose a database"
        )
    return Path(home)


def _expand(value: str, environ: Mapping[str, str]) -> Path:
    """Expand a leading ~ against the given environment's HOME."""
    if value == "~" or value.startswith("~/"):
        return _home(environ) / value[2:]
    return Path(value)


def get_config_path(environ: Optional[Mapping[str, str]] = None) -> tuple[Path, bool]:
    """
    Locate the config file.

    Returns:
        (path, explicit) where explicit is True when SNIP_CONFIG named it
    """
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_ENV)
    if override:
        return _expand(override, environ), True
    return _home(environ) / ".config" / "snip" / CONFIG_FILENAME, False


def load_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read and validate a TOML config file.

    Raises:
        ConfigError: If the file can't be read, isn't TOML, or has wrong types
    """
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e.strerror or e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    for section in ("database", "logging"):
        if not isinstance(data.get(section, {}), dict):
            raise ConfigError(f"{config_path}: [{section}] must be a table")

    db_path = data.get("database", {}).get("path")
    if db_path is not None and not isinstance(db_path, str):
        raise ConfigError(f"{config_path}: [database] path must be a string")

    ops_log = data.get("logging", {}).get("ops_log", True)
    if not isinstance(ops_log, bool):
        raise ConfigError(f"{config_path}: [logging] ops_log must be true or false")

    return {"db_path": db_path, "ops_log": ops_log}


def load_config(
    db_path: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SnipConfig:
    """
    Resolve the configuration.

    This is the main entry point for config management.

    Args:
        db_path: Explicit database path, overriding everything else
        environ: Environment to read (defaults to os.environ)

    Raises:
        ConfigError: If the config file is invalid, or HOME is needed
            but not set
    """
    environ = os.environ if environ is None else environ

    if db_path is None and environ.get(DB_ENV):
        db_path = environ[DB_ENV]

    settings: dict[str, Any] = {"db_path": None, "ops_log": True}
    config_path: Optional[Path] = None
    if environ.get(CONFIG_ENV) or environ.get("HOME"):
        candidate, explicit = get_config_path(environ)
        if explicit or candidate.exists():
            settings = load_config_file(candidate)
            config_path = candidate

    if db_path is not None:
        resolved = Path(db_path) if str(db_path) == ":memory:" else _expand(str(db_path), environ)
    elif settings["db_path"]:
        resolved = _expand(settings["db_path"], environ)
    else:
        resolved = _home(environ) / DB_FILENAME

    return SnipConfig(
        db_path=resolved,
        ops_log=settings["ops_log"],
        config_path=config_path,
    )
