"""Registry file loading for pluginlist.

Reads plugins.json (or a YAML equivalent) and returns the raw plugin
entries for validation.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from pluginlist.errors import RegistryLoadError

YAML_SUFFIXES = (".yaml", ".yml")


def _parse(path: Path, content: str) -> Any:
    if path.suffix in YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in '{path}': {e}"
            raise RegistryLoadError(msg) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in '{path}': {e}"
        raise RegistryLoadError(msg) from e


def load_registry(path: Path) -> list[Any]:
    """Load the plugin list from a registry file.

    The file must hold an object with a top-level ``plugins`` list.
    Entries are returned as-is; checking them is the validator's job.

    Args:
        path: Path to plugins.json, plugins.yaml or plugins.yml.

    Returns:
        The raw plugin entries in declaration order.

    Raises:
        RegistryLoadError: If the file is missing, unparsable, or has no
            ``plugins`` list.
    """
    if not path.is_file():
        msg = f"Registry file not found at {path}"
        raise RegistryLoadError(msg)

    data = _parse(path, path.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        msg = f"Invalid registry '{path}': expected an object with a 'plugins' list"
        raise RegistryLoadError(msg)

    plugins = data.get("plugins")
    if not isinstance(plugins, list):
        msg = f"Invalid registry '{path}': 'plugins' must be a list"
        raise RegistryLoadError(msg)

    return plugins
