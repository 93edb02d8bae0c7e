"""Schema-driven configuration resolution.

A schema declares each property's default, allowed values, and where it may
be overridden from. Resolution picks, per property, the first present of:
command line, environment, deploy config, default. Computed properties are
then derived from the values declared before them.

Usage:
    from scconf import load_config

    SCHEMA = {
        "server": {
            "protocol": {"default": "ws", "values": ["ws", "wss"], "envVar": "PROTOCOL"},
            "host": {"default": "localhost", "commandLineArg": "host"},
            "port": {"default": 8081, "envVar": "PORT", "envVarParser": int},
            "url": lambda s: f"{s['protocol']}://{s['host']}:{s['port']}",
        }
    }

    config = load_config(SCHEMA)
"""

from scconf.errors import (
    ComputedPropertyError,
    ConfigError,
    ForwardReferenceError,
    InvalidEnumValue,
    MalformedEnvValue,
    SchemaShapeError,
    SourceReadError,
)
from scconf.loader import load_config, load_config_with_provenance
from scconf.resolution import (
    Scope,
    SourceKind,
    locate_deploy_config,
    resolve,
    resolve_with_provenance,
)
from scconf.schema import (
    Branch,
    Computed,
    DelimiterParser,
    LeafDefinition,
    TransformParser,
    compile_schema,
    computed,
    leaf,
)

__all__ = [
    "Branch",
    "Computed",
    "ComputedPropertyError",
    "ConfigError",
    "DelimiterParser",
    "ForwardReferenceError",
    "InvalidEnumValue",
    "LeafDefinition",
    "MalformedEnvValue",
    "SchemaShapeError",
    "Scope",
    "SourceKind",
    "SourceReadError",
    "TransformParser",
    "compile_schema",
    "computed",
    "leaf",
    "load_config",
    "load_config_with_provenance",
    "locate_deploy_config",
    "resolve",
    "resolve_with_provenance",
]
