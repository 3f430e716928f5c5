"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from yadb.modules.buster.models import (
    DEFAULT_DEPTH,
    DEFAULT_HEURISTIC,
    DEFAULT_METHOD,
    DEFAULT_THREADS,
    DEFAULT_TIMEOUT,
    ConfigError,
)

from .env_loader import load_global_config, load_project_config

ENV_PREFIX = "YADB_"


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .yadb.env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key (e.g. YADB_THREADS)
        project_dir: Optional directory holding .yadb.env (defaults to cwd)
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    # 3. Check global config, either flat keys or a "scan" section
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]
    section = global_config.get("scan")
    if isinstance(section, dict) and key.startswith(ENV_PREFIX):
        short = key[len(ENV_PREFIX) :].lower()
        if short in section:
            return section[short]

    # 4. Return default
    return default


def get_int(key: str, default: int, project_dir: Path | None = None) -> int:
    """Get an integer setting, rejecting malformed values."""
    value = get_config(key, project_dir, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer (got {value!r})") from None


def get_float(key: str, default: float, project_dir: Path | None = None) -> float:
    """Get a float setting, rejecting malformed values."""
    value = get_config(key, project_dir, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number (got {value!r})") from None


def get_scan_defaults(project_dir: Path | None = None) -> dict[str, Any]:
    """Resolve scan defaults from the environment and config files."""
    return {
        "threads": get_int("YADB_THREADS", DEFAULT_THREADS, project_dir),
        "max_depth": get_int("YADB_DEPTH", DEFAULT_DEPTH, project_dir),
        "timeout": get_float("YADB_TIMEOUT", DEFAULT_TIMEOUT, project_dir),
        "method": str(get_config("YADB_METHOD", project_dir, DEFAULT_METHOD)).upper(),
        "directory_heuristic": str(
            get_config("YADB_HEURISTIC", project_dir, DEFAULT_HEURISTIC)
        ).lower(),
        "user_agent": get_config("YADB_USER_AGENT", project_dir),
        "proxy": get_config("YADB_PROXY", project_dir),
    }
