"""Schema definitions and compilation.

Usage:
    from scconf.schema import compile_schema, leaf

    root = compile_schema({"port": leaf(default=8081, envVar="PORT", envVarParser=int)})
"""

from scconf.schema.compiler import compile_schema
from scconf.schema.nodes import (
    LEAF_KEYS,
    Branch,
    Computed,
    DelimiterParser,
    EnvVarParser,
    LeafDefinition,
    PropertyPath,
    SchemaNode,
    TransformParser,
    build_leaf,
    computed,
    format_path,
    is_allowed_value,
    leaf,
)

__all__ = [
    "LEAF_KEYS",
    "Branch",
    "Computed",
    "DelimiterParser",
    "EnvVarParser",
    "LeafDefinition",
    "PropertyPath",
    "SchemaNode",
    "TransformParser",
    "build_leaf",
    "compile_schema",
    "computed",
    "format_path",
    "is_allowed_value",
    "leaf",
]
