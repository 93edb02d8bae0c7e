"""JSON and TOML document loading."""

import json
import tomllib
from pathlib import Path
from typing import Any

from scconf.errors import SourceReadError

SUPPORTED_SUFFIXES: frozenset[str] = frozenset({".json", ".toml"})


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        SourceReadError: If the file is missing or the TOML syntax is invalid
    """
    if not file_path.exists():
        raise SourceReadError(f"File not found: {file_path}", path=str(file_path))

    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise SourceReadError(
            f"Invalid TOML in {file_path}: {exc}", path=str(file_path), cause=exc
        ) from exc


def load_json(file_path: Path) -> dict[str, Any]:
    """Load a JSON file whose root is an object.

    Raises:
        SourceReadError: If the file is missing, invalid, or not an object
    """
    if not file_path.exists():
        raise SourceReadError(f"File not found: {file_path}", path=str(file_path))

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise SourceReadError(
            f"Invalid JSON in {file_path}: {exc}", path=str(file_path), cause=exc
        ) from exc

    if not isinstance(data, dict):
        raise SourceReadError(
            f"Root of {file_path} must be an object, got {type(data).__name__}",
            path=str(file_path),
        )
    return data


def load_document(file_path: Path) -> dict[str, Any]:
    """Load a JSON or TOML document, chosen by file extension."""
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return load_json(file_path)
    if suffix == ".toml":
        return load_toml(file_path)
    raise SourceReadError(
        f"Unsupported format '{file_path.suffix}' for {file_path}; "
        f"expected one of {sorted(SUPPORTED_SUFFIXES)}",
        path=str(file_path),
    )
