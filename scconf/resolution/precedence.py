"""Precedence chains over raw input maps.

A chain is an ordered list of candidates. The first candidate whose key is
present in its mapping supplies the value; later candidates are not consulted.
Both per-property resolution and deploy-config location use this.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SourceKind(str, Enum):
    """Where a resolved value came from."""

    COMMAND_LINE = "command_line"
    ENVIRONMENT = "environment"
    DEPLOY_CONFIG = "deploy_config"
    MANIFEST = "manifest"
    DEFAULT = "default"
    COMPUTED = "computed"


@dataclass(frozen=True)
class Candidate:
    """One entry of a precedence chain."""

    source: SourceKind
    mapping: Mapping[str, Any]
    key: str


def first_present(candidates: Iterable[Candidate]) -> tuple[SourceKind, Any] | None:
    """Return the source and value of the first present candidate.

    Presence means the key exists in the mapping; a stored None still counts.

    Returns:
        (source, value) of the winning candidate, or None if none is present
    """
    for candidate in candidates:
        if candidate.key in candidate.mapping:
            return candidate.source, candidate.mapping[candidate.key]
    return None
