"""Configuration file management for cashboard."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from cashboard.store.schema import get_db_path

DEFAULT_SETTINGS: dict[str, Any] = {
    "currency_symbol": "£",
    "log_level": "WARNING",
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "cashboard" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_SETTINGS), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load settings with defaults filled in.

    A missing config file is not an error; defaults are used.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings dictionary with every key of DEFAULT_SETTINGS present.
    """
    settings = dict(DEFAULT_SETTINGS)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    return settings


def resolve_db_path(settings: dict[str, Any]) -> Path:
    """Get the database path, honouring a db_path override in settings."""
    override = settings.get("db_path")
    if override:
        return Path(override).expanduser()
    return get_db_path()
