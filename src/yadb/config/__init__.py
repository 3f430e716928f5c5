"""
Configuration management for yadb.

Supports multiple configuration sources in order of priority:
1. Command-line options
2. Environment variables
3. Project .env file (./.yadb.env)
4. Global config file (~/.yadb/config.yml)
5. Default values (lowest priority)
"""

from .env_loader import (
    PROJECT_ENV_FILE,
    get_global_config_path,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import get_config, get_float, get_int, get_scan_defaults

__all__ = [
    # env_loader
    "PROJECT_ENV_FILE",
    "get_global_config_path",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_config",
    "get_float",
    "get_int",
    "get_scan_defaults",
]
