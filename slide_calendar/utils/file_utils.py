"""Reading calendar descriptions and themes, writing run reports."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def _existing(path: str | Path, kind: str) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    return path


def load_yaml(path: str | Path, kind: str = "YAML") -> dict[str, Any]:
    """Load a YAML mapping. An empty file loads as ``{}``.

    ``kind`` names the file in the not-found message ("Theme", "Calendar").
    """
    with open(_existing(path, kind), encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_json(path: str | Path, kind: str = "JSON") -> dict[str, Any]:
    with open(_existing(path, kind), encoding="utf-8") as f:
        return json.load(f)


def save_json(data: Any, path: str | Path, indent: int = 2) -> Path:
    """Write a build report, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str, ensure_ascii=False)
    return path


_LOADERS = {
    ".yaml": load_yaml,
    ".yml": load_yaml,
    ".json": load_json,
}


def load_mapping(path: str | Path) -> dict[str, Any]:
    """Load a calendar description from YAML or JSON, chosen by extension."""
    path = Path(path)
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        supported = ", ".join(sorted(_LOADERS))
        raise ValueError(f"Unsupported file format '{path.suffix}'. Supported: {supported}")
    logger.debug(f"Loading calendar description {path}")
    return loader(path, "Calendar")
