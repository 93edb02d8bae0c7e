"""Resolution engine: schema walk, source precedence, computed properties."""

from scconf.resolution.computed import Scope, evaluate_computed
from scconf.resolution.engine import (
    DEPLOY_CONFIG_ARGS,
    DEPLOY_CONFIG_ENV_VAR,
    MANIFEST_DEPLOY_CONFIG_FIELD,
    locate_deploy_config,
    resolve,
    resolve_with_provenance,
)
from scconf.resolution.precedence import Candidate, SourceKind, first_present
from scconf.resolution.values import RawInputs, parse_env_value, resolve_leaf
from scconf.resolution.walker import walk_branch

__all__ = [
    "DEPLOY_CONFIG_ARGS",
    "DEPLOY_CONFIG_ENV_VAR",
    "MANIFEST_DEPLOY_CONFIG_FIELD",
    "Candidate",
    "RawInputs",
    "Scope",
    "SourceKind",
    "evaluate_computed",
    "first_present",
    "locate_deploy_config",
    "parse_env_value",
    "resolve",
    "resolve_leaf",
    "resolve_with_provenance",
    "walk_branch",
]
