"""Deploy-config loading.

The deploy config is a nested document mirroring the schema's shape. Only
the properties it mentions are overridden; it never adds new properties.
"""

import os
from pathlib import Path
from typing import Any

from scconf.errors import SourceReadError
from scconf.observability.logging import get_logger
from scconf.sources.files import load_document

logger = get_logger(__name__)


def resolve_location(location: Any, base_dir: Path | None = None) -> Path:
    """Turn a located deploy-config reference into a file path.

    Relative paths are resolved against ``base_dir`` (default: cwd).

    Raises:
        SourceReadError: If the location is not a usable path
    """
    if isinstance(location, bool) or not isinstance(location, (str, os.PathLike)):
        raise SourceReadError(
            f"Deploy config location must be a path, got {location!r}"
        )
    if not os.fspath(location):
        raise SourceReadError("Deploy config location is empty")
    path = Path(location)
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path
    return path


def read_deploy_config(
    location: str | os.PathLike[str],
    base_dir: Path | None = None,
) -> dict[str, Any]:
    """Load the deploy-config tree from a JSON or TOML file.

    Args:
        location: Path as found by the location chain
        base_dir: Directory that relative paths are resolved against

    Returns:
        The deploy-config tree

    Raises:
        SourceReadError: If the file is missing, malformed, or unsupported
    """
    path = resolve_location(location, base_dir)
    document = load_document(path)

    logger.info(
        "deploy_config_loaded",
        path=str(path),
        key_count=len(document),
    )

    return document
