"""Host manifest reading.

The manifest may name the deploy config:

- ``package.json``: top-level ``"deployConfig"`` field
- ``pyproject.toml``: ``[tool.scconf]`` table, ``deploy-config`` or ``deployConfig``

``package.json`` wins when both exist.
"""

from pathlib import Path
from typing import Any

from scconf.observability.logging import get_logger
from scconf.sources.files import load_json, load_toml

logger = get_logger(__name__)

PACKAGE_JSON = "package.json"
PYPROJECT_TOML = "pyproject.toml"
TOOL_TABLE = "scconf"


def _from_pyproject(path: Path) -> dict[str, Any]:
    tool = load_toml(path).get("tool", {})
    table = dict(tool.get(TOOL_TABLE, {})) if isinstance(tool, dict) else {}
    if "deploy-config" in table and "deployConfig" not in table:
        table["deployConfig"] = table["deploy-config"]
    return table


def read_manifest(directory: Path | str | None = None) -> dict[str, Any]:
    """Read the host manifest from a directory.

    Args:
        directory: Directory holding the manifest (default: cwd)

    Returns:
        The manifest mapping, or an empty dict if there is none

    Raises:
        SourceReadError: If a manifest exists but cannot be parsed
    """
    base = Path.cwd() if directory is None else Path(directory)

    package_json = base / PACKAGE_JSON
    if package_json.exists():
        manifest = load_json(package_json)
        logger.debug(
            "manifest_loaded",
            path=str(package_json),
            has_deploy_config="deployConfig" in manifest,
        )
        return manifest

    pyproject = base / PYPROJECT_TOML
    if pyproject.exists():
        manifest = _from_pyproject(pyproject)
        logger.debug(
            "manifest_loaded",
            path=str(pyproject),
            has_deploy_config="deployConfig" in manifest,
        )
        return manifest

    return {}
