"""Classify raw schema structures into tagged nodes.

Raw schemas are authored as nested dicts and functions:

    {
        "server": {
            "port": {"default": 8081, "envVar": "PORT", "envVarParser": int},
            "url": lambda scope: f"http://localhost:{scope['port']}",
        }
    }

Classification rules, applied once before resolution:
1. Tagged nodes (LeafDefinition, Branch, Computed) are kept as they are
2. Callables become Computed nodes
3. Mappings with any leaf key become LeafDefinition
4. Empty mappings become a leaf whose default is an empty dict
5. Mappings whose values are all nodes become a Branch
6. Anything else is a SchemaShapeError
"""

from collections.abc import Mapping
from typing import Any

from scconf.errors import ForwardReferenceError, SchemaShapeError
from scconf.schema.nodes import (
    LEAF_KEYS,
    Branch,
    Computed,
    LeafDefinition,
    PropertyPath,
    build_leaf,
    format_path,
)


def compile_schema(schema: Mapping[str, Any] | Branch) -> Branch:
    """Compile a schema into a tree of tagged nodes.

    The root is always a Branch. Compiling an already-compiled schema
    re-checks it and returns an equivalent tree.

    Args:
        schema: Raw schema mapping or a compiled Branch

    Returns:
        The root Branch

    Raises:
        SchemaShapeError: If any node cannot be classified
        ForwardReferenceError: If a computed node depends on a later name
    """
    if isinstance(schema, Branch):
        return _compile_branch(schema.children, (), frozenset())
    if not isinstance(schema, Mapping):
        raise SchemaShapeError(
            f"schema root must be a mapping, got {type(schema).__name__}"
        )
    return _compile_branch(schema, (), frozenset())


def _is_node_like(value: Any) -> bool:
    if isinstance(value, (Mapping, LeafDefinition, Branch, Computed)):
        return True
    return callable(value)


def _compile_branch(
    children: Mapping[str, Any],
    path: PropertyPath,
    visible: frozenset[str],
) -> Branch:
    names = list(children)
    compiled: dict[str, Any] = {}
    for index, name in enumerate(names):
        if not isinstance(name, str):
            raise SchemaShapeError(
                f"property names must be strings, got {name!r}",
                path=format_path(path),
            )
        compiled[name] = _compile_node(
            children[name],
            path + (name,),
            visible | frozenset(names[:index]),
        )
    return Branch(children=compiled)


def _compile_node(raw: Any, path: PropertyPath, visible: frozenset[str]) -> Any:
    if isinstance(raw, LeafDefinition):
        return raw
    if isinstance(raw, Branch):
        return _compile_branch(raw.children, path, visible)
    if isinstance(raw, Computed):
        _check_dependencies(raw, path, visible)
        return raw
    if isinstance(raw, Mapping):
        return _compile_mapping(raw, path, visible)
    if callable(raw):
        return Computed(fn=raw)
    raise SchemaShapeError(
        f"cannot classify {type(raw).__name__} value as a schema node",
        path=format_path(path),
    )


def _compile_mapping(
    raw: Mapping[str, Any],
    path: PropertyPath,
    visible: frozenset[str],
) -> Any:
    leaf_keys = LEAF_KEYS.intersection(raw)
    if leaf_keys:
        nested = sorted(
            key for key in raw if key not in LEAF_KEYS and _is_node_like(raw[key])
        )
        if nested:
            raise SchemaShapeError(
                f"mixes leaf fields {sorted(leaf_keys)} with nested nodes {nested}",
                path=format_path(path),
            )
        return build_leaf(dict(raw), path)

    if not raw:
        return LeafDefinition(default={})

    unknown = sorted(str(key) for key, value in raw.items() if not _is_node_like(value))
    if unknown:
        raise SchemaShapeError(
            f"keys {unknown} are neither leaf fields nor nested nodes",
            path=format_path(path),
        )
    return _compile_branch(raw, path, visible)


def _check_dependencies(
    node: Computed,
    path: PropertyPath,
    visible: frozenset[str],
) -> None:
    for name in node.depends_on:
        if name not in visible:
            raise ForwardReferenceError(name, path=format_path(path))
