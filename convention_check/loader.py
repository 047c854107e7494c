"""
Schema document loading — JSON and YAML files, directories of them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from convention_check.config import SCHEMA_FILE_EXTENSIONS

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """A schema file could not be read or parsed into a mapping."""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


def _parse(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentLoadError(path, f"invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e
    if suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DocumentLoadError(path, f"invalid YAML: {e}") from e
    raise DocumentLoadError(path, f"unsupported file type '{path.suffix}' (expected one of {', '.join(SCHEMA_FILE_EXTENSIONS)})")


def load_document(path) -> Dict[str, Any]:
    """Read one schema file and return its top-level mapping."""
    path = Path(path)
    if not path.is_file():
        raise DocumentLoadError(path, "file not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(path, f"cannot read file: {e}") from e

    data = _parse(path, text)
    if not isinstance(data, dict):
        raise DocumentLoadError(path, f"top level must be a mapping, found {type(data).__name__}")
    logger.debug("Loaded %s (%d top-level keys)", path, len(data))
    return data


def iter_schema_files(paths: Iterable) -> List[Path]:
    """Expand files and directories into a sorted, de-duplicated file list.

    Directories are searched recursively for schema file extensions.
    Explicit file arguments are kept whatever their extension, so that an
    unsupported file is reported instead of silently skipped.
    """
    found: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            found.extend(
                sorted(f for f in p.rglob("*") if f.is_file() and f.suffix.lower() in SCHEMA_FILE_EXTENSIONS)
            )
        else:
            found.append(p)
    return list(dict.fromkeys(found))


def load_reference_hints(path) -> Dict[str, str]:
    """Load a pointer → referenced type mapping from a JSON or YAML file."""
    data = load_document(path)
    hints = {}
    for pointer, target in data.items():
        if not isinstance(target, str):
            raise DocumentLoadError(path, f"hint for '{pointer}' must be a type name string")
        hints[str(pointer)] = target
    return hints
