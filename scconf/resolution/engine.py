"""Resolution engine.

Turns a schema plus raw inputs into a resolved config tree:

1. Locate the deploy config (flag -> env var -> manifest -> absent) and load it
2. Compile the schema into tagged nodes
3. Walk the root branch with an empty scope

The first error aborts resolution; no partial tree is returned.
"""

import os
from collections.abc import Callable, Mapping
from typing import Any

from scconf.errors import SourceReadError
from scconf.resolution.computed import Scope
from scconf.resolution.precedence import Candidate, SourceKind, first_present
from scconf.resolution.values import RawInputs
from scconf.resolution.walker import walk_branch
from scconf.schema.compiler import compile_schema
from scconf.schema.nodes import Branch
from scconf.sources.deploy_config import read_deploy_config

DEPLOY_CONFIG_ARGS: tuple[str, ...] = ("deployConfig", "dc")
DEPLOY_CONFIG_ENV_VAR = "SC_DEPLOY_CONFIG"
MANIFEST_DEPLOY_CONFIG_FIELD = "deployConfig"

DeployConfigLoader = Callable[[str | os.PathLike[str]], Mapping[str, Any]]


def locate_deploy_config(
    command_line: Mapping[str, Any],
    environment: Mapping[str, str],
    manifest: Mapping[str, Any] | None = None,
) -> tuple[SourceKind, Any] | None:
    """Find where the deploy config lives.

    Order: ``--deployConfig`` / ``--dc`` flag, ``SC_DEPLOY_CONFIG``, then the
    manifest's ``deployConfig`` field.

    Returns:
        (source, location) of the first present candidate, or None
    """
    candidates = [
        Candidate(SourceKind.COMMAND_LINE, command_line, arg) for arg in DEPLOY_CONFIG_ARGS
    ]
    candidates.append(Candidate(SourceKind.ENVIRONMENT, environment, DEPLOY_CONFIG_ENV_VAR))
    candidates.append(
        Candidate(SourceKind.MANIFEST, manifest or {}, MANIFEST_DEPLOY_CONFIG_FIELD)
    )
    return first_present(candidates)


def _effective_deploy_config(
    deploy_config: Mapping[str, Any] | None,
    command_line: Mapping[str, Any],
    environment: Mapping[str, str],
    manifest: Mapping[str, Any] | None,
    load_deploy_config: DeployConfigLoader | None,
) -> Mapping[str, Any]:
    if deploy_config is None:
        located = locate_deploy_config(command_line, environment, manifest)
        if located is None:
            return {}
        _, location = located
        loader = load_deploy_config or read_deploy_config
        deploy_config = loader(location)

    if not isinstance(deploy_config, Mapping):
        raise SourceReadError(
            f"Deploy config must be a mapping, got {type(deploy_config).__name__}"
        )
    return deploy_config


def resolve_with_provenance(
    schema: Mapping[str, Any] | Branch,
    command_line: Mapping[str, Any] | None = None,
    environment: Mapping[str, str] | None = None,
    deploy_config: Mapping[str, Any] | None = None,
    *,
    manifest: Mapping[str, Any] | None = None,
    load_deploy_config: DeployConfigLoader | None = None,
) -> tuple[dict[str, Any], dict[str, SourceKind]]:
    """Resolve a schema and report which source supplied each value.

    Returns:
        (tree, provenance) where provenance maps dotted paths to SourceKind
    """
    command_line = command_line or {}
    environment = environment or {}
    effective = _effective_deploy_config(
        deploy_config, command_line, environment, manifest, load_deploy_config
    )
    root = compile_schema(schema)

    provenance: dict[str, SourceKind] = {}
    tree = walk_branch(
        root,
        RawInputs(command_line=command_line, environment=environment),
        effective,
        Scope(pending=root.children),
        provenance,
    )
    return tree, provenance


def resolve(
    schema: Mapping[str, Any] | Branch,
    command_line: Mapping[str, Any] | None = None,
    environment: Mapping[str, str] | None = None,
    deploy_config: Mapping[str, Any] | None = None,
    *,
    manifest: Mapping[str, Any] | None = None,
    load_deploy_config: DeployConfigLoader | None = None,
) -> dict[str, Any]:
    """Resolve a schema against the raw input maps.

    Args:
        schema: Raw schema mapping or compiled Branch
        command_line: Flat camelCase map of parsed command-line arguments
        environment: Flat map of environment variables
        deploy_config: Deploy-config tree; located and loaded when None
        manifest: Host manifest, consulted for ``deployConfig``
        load_deploy_config: Loader for a located deploy-config path

    Returns:
        The resolved config tree

    Raises:
        SchemaShapeError: If the schema is malformed
        InvalidEnumValue: If a sourced value is not allowed
        MalformedEnvValue: If an environment parser fails
        SourceReadError: If the deploy config cannot be loaded
    """
    tree, _ = resolve_with_provenance(
        schema,
        command_line,
        environment,
        deploy_config,
        manifest=manifest,
        load_deploy_config=load_deploy_config,
    )
    return tree
