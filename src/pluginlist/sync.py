"""Copy the registry's plugin list into the packaging manifest.

No validation happens here; the validator is expected to have run.
"""

import json
from pathlib import Path
from typing import Any

from pluginlist.errors import ManifestSyncError


def _read_json(path: Path) -> Any:
    if not path.is_file():
        msg = f"File not found: {path}"
        raise ManifestSyncError(msg)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in '{path}': {e}"
        raise ManifestSyncError(msg) from e


def sync_manifest(source: Path, target: Path) -> int:
    """Overwrite the target manifest's ``plugins`` field with the source's.

    Every other key of the target is kept, in its original order.

    Args:
        source: Registry file (plugins.json).
        target: Manifest file to update (package.json).

    Returns:
        Number of plugins copied.

    Raises:
        ManifestSyncError: If either file is missing or not a JSON object,
            or the source has no ``plugins`` list.
    """
    source_data = _read_json(source)
    target_data = _read_json(target)

    if not isinstance(source_data, dict) or not isinstance(source_data.get("plugins"), list):
        msg = f"'{source}' has no 'plugins' list"
        raise ManifestSyncError(msg)
    if not isinstance(target_data, dict):
        msg = f"'{target}' is not a JSON object"
        raise ManifestSyncError(msg)

    target_data["plugins"] = source_data["plugins"]
    target.write_text(json.dumps(target_data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return len(source_data["plugins"])
