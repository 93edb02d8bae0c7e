"""Value resolution for a single leaf property.

Precedence, highest first:
1. Command-line map at ``commandLineArg`` (when declared)
2. Environment map at ``envVar`` (when declared), parsed by ``envVarParser``
3. Deploy-config value at the leaf's position
4. The leaf's default
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from scconf.errors import InvalidEnumValue, MalformedEnvValue
from scconf.resolution.precedence import Candidate, SourceKind, first_present
from scconf.schema.nodes import LeafDefinition, PropertyPath, format_path, is_allowed_value


@dataclass(frozen=True)
class RawInputs:
    """Flat input maps shared by every leaf of one resolution."""

    command_line: Mapping[str, Any] = field(default_factory=dict)
    environment: Mapping[str, str] = field(default_factory=dict)


def _candidates(
    definition: LeafDefinition,
    name: str,
    inputs: RawInputs,
    deploy_tree: Mapping[str, Any],
) -> list[Candidate]:
    candidates: list[Candidate] = []
    if definition.command_line_arg:
        candidates.append(
            Candidate(SourceKind.COMMAND_LINE, inputs.command_line, definition.command_line_arg)
        )
    if definition.env_var:
        candidates.append(
            Candidate(SourceKind.ENVIRONMENT, inputs.environment, definition.env_var)
        )
    candidates.append(Candidate(SourceKind.DEPLOY_CONFIG, deploy_tree, name))
    return candidates


def parse_env_value(definition: LeafDefinition, raw: str, path: PropertyPath) -> Any:
    """Parse a raw environment string with the leaf's parser.

    Raises:
        MalformedEnvValue: If the parser raises
    """
    parser = definition.env_var_parser
    if parser is None:
        return raw
    try:
        return parser.parse(raw)
    except Exception as exc:
        raise MalformedEnvValue(
            key=format_path(path),
            env_var=definition.env_var or "",
            raw=raw,
            cause=exc,
        ) from exc


def resolve_leaf(
    definition: LeafDefinition,
    path: PropertyPath,
    inputs: RawInputs,
    deploy_tree: Mapping[str, Any],
) -> tuple[Any, SourceKind]:
    """Resolve one leaf to a concrete value.

    Args:
        definition: The leaf being resolved
        path: Full path of the leaf; the last element is its name
        inputs: Command-line and environment maps
        deploy_tree: Deploy-config subtree of the leaf's branch

    Returns:
        (value, source) for the winning source; value is a deep copy, so
        the output tree never shares objects with the schema or the inputs

    Raises:
        InvalidEnumValue: If a sourced value is not an allowed value
        MalformedEnvValue: If the environment parser fails
    """
    found = first_present(_candidates(definition, path[-1], inputs, deploy_tree))
    if found is None:
        return copy.deepcopy(definition.default), SourceKind.DEFAULT

    source, value = found
    if source is SourceKind.ENVIRONMENT:
        value = parse_env_value(definition, value, path)

    allowed = definition.allowed_values
    if allowed is not None and not is_allowed_value(value, allowed):
        raise InvalidEnumValue(
            key=format_path(path),
            value=value,
            allowed=allowed,
            source=source.value,
        )
    return copy.deepcopy(value), source
