"""Source readers: the raw inputs handed to the resolution engine.

These are the only parts of scconf that touch argv, the process
environment, or the filesystem.
"""

from scconf.sources.argv import POSITIONAL_KEY, camel_case, coerce_scalar, parse_argv
from scconf.sources.deploy_config import read_deploy_config, resolve_location
from scconf.sources.environment import read_environment
from scconf.sources.files import load_document, load_json, load_toml
from scconf.sources.manifest import read_manifest

__all__ = [
    "POSITIONAL_KEY",
    "camel_case",
    "coerce_scalar",
    "load_document",
    "load_json",
    "load_toml",
    "parse_argv",
    "read_deploy_config",
    "read_environment",
    "read_manifest",
    "resolve_location",
]
