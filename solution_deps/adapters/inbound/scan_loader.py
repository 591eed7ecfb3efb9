"""
Solution Scan Loader

Reads a materialised solution scan from disk. The scan is produced by the
metadata collaborator and has the shape:

    components:   [{id, name, logicalName, type, isManaged}, ...]
    dependencies: [{fromId, toId}, ...]
    payloads:     {componentId: {formxml | fetchxml | dependsOn | ...}}

``.yaml`` / ``.yml`` files are read with PyYAML, anything else as JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("components",)


def load_scan(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and shape-check a scan document.

    Raises:
        FileNotFoundError: if *path* does not exist.
        ValueError: if the document cannot be parsed or is not a mapping
            with a ``components`` list.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ValueError(f"Cannot parse scan file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Scan file {path} must contain a mapping at the top level")
    for key in REQUIRED_KEYS:
        if key not in data:
            raise ValueError(f"Scan file {path} is missing the '{key}' key")

    data.setdefault("dependencies", [])
    logger.info(
        "Loaded scan %s: %d components, %d dependency facts",
        path.name, len(data["components"]) if isinstance(data["components"], list) else 0,
        len(data["dependencies"]) if isinstance(data["dependencies"], list) else 0,
    )
    return data
