"""Filesystem locations and environment overrides."""

import os
from pathlib import Path

CONFIG_DIR_ENV = "TKIT_CONFIG_DIR"
TOKEN_ENV = "TKIT_GITHUB_TOKEN"
DEBUG_ENV = "TKIT_DEBUG"

CONFIG_FILENAME = "config.yaml"
CREDENTIALS_FILENAME = "credentials.yaml"
BACKUP_SUFFIX = ".backup"


def get_config_dir() -> Path:
    """Resolve the per-user tkit configuration directory.

    Priority:
    1. TKIT_CONFIG_DIR env var (explicit override, ~ expanded)
    2. $XDG_CONFIG_HOME/tkit
    3. ~/.config/tkit
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        return Path(os.path.expanduser(explicit))

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tkit"
    return Path.home() / ".config" / "tkit"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def get_credentials_path() -> Path:
    return get_config_dir() / CREDENTIALS_FILENAME


def get_backup_path(config_path: Path) -> Path:
    return config_path.with_name(config_path.name + BACKUP_SUFFIX)


def get_env_token() -> str | None:
    token = os.environ.get(TOKEN_ENV, "").strip()
    return token or None
