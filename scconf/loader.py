"""Resolve configuration for the running process.

Gathers argv, the environment, and the host manifest with the source
readers, then hands them to the resolution engine.
"""

import sys
from collections import Counter
from collections.abc import Mapping, Sequence
from functools import partial
from pathlib import Path
from typing import Any

from scconf.observability.logging import get_logger
from scconf.resolution.engine import resolve_with_provenance
from scconf.resolution.precedence import SourceKind
from scconf.schema.nodes import Branch
from scconf.sources.argv import parse_argv
from scconf.sources.deploy_config import read_deploy_config
from scconf.sources.environment import read_environment
from scconf.sources.manifest import read_manifest

logger = get_logger(__name__)


def load_config_with_provenance(
    schema: Mapping[str, Any] | Branch,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
) -> tuple[dict[str, Any], dict[str, SourceKind]]:
    """Resolve a schema from process inputs, reporting each value's source.

    Args:
        schema: Raw schema mapping or compiled Branch
        argv: Command-line tokens (default: ``sys.argv[1:]``)
        environ: Environment variables (default: ``os.environ``)
        cwd: Directory holding the manifest and relative deploy-config paths

    Returns:
        (tree, provenance)
    """
    base_dir = Path.cwd() if cwd is None else Path(cwd)
    command_line = parse_argv(sys.argv[1:] if argv is None else argv)
    environment = read_environment(environ)
    manifest = read_manifest(base_dir)

    tree, provenance = resolve_with_provenance(
        schema,
        command_line,
        environment,
        manifest=manifest,
        load_deploy_config=partial(read_deploy_config, base_dir=base_dir),
    )

    sources = Counter(source.value for source in provenance.values())
    logger.info(
        "config_resolved",
        property_count=len(provenance),
        sources=dict(sources),
    )

    return tree, provenance


def load_config(
    schema: Mapping[str, Any] | Branch,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | str | None = None,
) -> dict[str, Any]:
    """Resolve a schema from argv, the environment, and the deploy config.

    Example:
        config = load_config(SCHEMA)
        config["server"]["port"]
    """
    tree, _ = load_config_with_provenance(schema, argv, environ, cwd)
    return tree
