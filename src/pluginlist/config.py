"""Configuration resolution for pluginlist.

Paths and the fetch timeout can be set through environment variables;
CLI options take precedence over both.
"""

import os
from pathlib import Path

from pluginlist.remote import DEFAULT_FETCH_TIMEOUT

DEFAULT_REGISTRY_FILE = "plugins.json"
DEFAULT_MANIFEST_FILE = "package.json"

REGISTRY_ENV_VAR = "PLUGINLIST_REGISTRY"
MANIFEST_ENV_VAR = "PLUGINLIST_MANIFEST"
FETCH_TIMEOUT_ENV_VAR = "PLUGINLIST_FETCH_TIMEOUT"


def _path_from_env(env_var: str, default: str) -> Path:
    env_value = os.environ.get(env_var)
    if env_value:
        return Path(env_value).expanduser()
    return Path.cwd() / default


def get_registry_path() -> Path:
    """Get the registry file path.

    Resolution order:
    1. PLUGINLIST_REGISTRY environment variable (if set)
    2. Default: plugins.json in the current directory
    """
    return _path_from_env(REGISTRY_ENV_VAR, DEFAULT_REGISTRY_FILE)


def get_manifest_path() -> Path:
    """Get the target manifest path.

    Resolution order:
    1. PLUGINLIST_MANIFEST environment variable (if set)
    2. Default: package.json in the current directory
    """
    return _path_from_env(MANIFEST_ENV_VAR, DEFAULT_MANIFEST_FILE)


def get_fetch_timeout() -> float:
    """Get the remote fetch timeout in seconds.

    Raises:
        ValueError: If PLUGINLIST_FETCH_TIMEOUT is not a positive number.
    """
    env_value = os.environ.get(FETCH_TIMEOUT_ENV_VAR)
    if not env_value:
        return DEFAULT_FETCH_TIMEOUT

    try:
        timeout = float(env_value)
    except ValueError as e:
        msg = f"{FETCH_TIMEOUT_ENV_VAR} must be a number, got '{env_value}'"
        raise ValueError(msg) from e

    if timeout <= 0:
        msg = f"{FETCH_TIMEOUT_ENV_VAR} must be positive, got '{env_value}'"
        raise ValueError(msg)
    return timeout
