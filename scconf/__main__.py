"""Print the resolved configuration for a schema.

Usage:
    python -m scconf [--explain] [--show-secrets] [--cwd DIR] module:ATTR [app args...]

Application arguments after the schema reference are resolved exactly as the
application would see them, e.g.:

    python -m scconf --explain myapp.config:SCHEMA --port 9000 --dc deploy.json
"""

import argparse
import importlib
import json
import sys
from collections.abc import Sequence
from typing import Any

from scconf.config import get_settings
from scconf.errors import ConfigError
from scconf.loader import load_config_with_provenance
from scconf.observability.logging import SecretRedactor, get_logger, setup_logging

logger = get_logger(__name__)


def import_schema(reference: str) -> Any:
    """Import a schema from a ``module:attribute`` reference."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Schema reference must look like 'module:attribute', got {reference!r}")

    target: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        target = getattr(target, part)
    return target


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="scconf",
        description="Resolve a configuration schema and print the result as JSON.",
    )
    parser.add_argument("schema", help="Schema reference as module:attribute")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Also print which source supplied each value",
    )
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Do not redact secret-looking values",
    )
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory holding the manifest (default: current directory)",
    )
    parser.add_argument(
        "app_args",
        nargs=argparse.REMAINDER,
        help="Arguments resolved as the application's command line",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit status."""
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        format=settings.log_format,
        redact_secrets=settings.redact_secrets,
    )

    args = build_parser().parse_args(argv)
    app_args = list(args.app_args)
    if app_args[:1] == ["--"]:
        app_args = app_args[1:]

    try:
        schema = import_schema(args.schema)
    except (ImportError, AttributeError, ValueError) as exc:
        logger.error("schema_import_failed", reference=args.schema, error=str(exc))
        return 2

    try:
        tree, provenance = load_config_with_provenance(schema, argv=app_args, cwd=args.cwd)
    except ConfigError as exc:
        logger.error("config_resolution_failed", error_type=type(exc).__name__, error=exc.message)
        return 1

    if settings.redact_secrets and not args.show_secrets:
        tree = SecretRedactor().redact(tree)

    sys.stdout.write(json.dumps(tree, indent=2, default=str) + "\n")

    if args.explain:
        width = max((len(path) for path in provenance), default=0)
        for path, source in provenance.items():
            sys.stdout.write(f"{path.ljust(width)}  {source.value}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
