"""Recursive walk of a compiled schema.

Children are resolved strictly in declaration order. Each resolved value is
added to the branch scope before the next sibling, so computed nodes see
every property declared before them and nothing after.
"""

from collections.abc import Mapping
from typing import Any

from scconf.resolution.computed import Scope, evaluate_computed
from scconf.resolution.precedence import SourceKind
from scconf.resolution.values import RawInputs, resolve_leaf
from scconf.schema.nodes import Branch, Computed, format_path


def _subtree(deploy_tree: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = deploy_tree.get(name)
    return value if isinstance(value, Mapping) else {}


def walk_branch(
    branch: Branch,
    inputs: RawInputs,
    deploy_tree: Mapping[str, Any],
    scope: Scope,
    provenance: dict[str, SourceKind] | None = None,
) -> dict[str, Any]:
    """Resolve every child of a branch.

    Args:
        branch: Compiled branch to resolve
        inputs: Command-line and environment maps
        deploy_tree: Deploy-config subtree at this branch
        scope: Scope for this branch with all children still pending
        provenance: Optional dict receiving dotted path -> source per leaf

    Returns:
        Resolved values keyed in declaration order
    """
    resolved: dict[str, Any] = {}

    for name, node in branch.children.items():
        path = scope.path + (name,)

        if isinstance(node, Branch):
            value = walk_branch(
                node,
                inputs,
                _subtree(deploy_tree, name),
                scope.child(name, node.children),
                provenance,
            )
        else:
            if isinstance(node, Computed):
                value = evaluate_computed(node, scope, path)
                source = SourceKind.COMPUTED
            else:
                value, source = resolve_leaf(node, path, inputs, deploy_tree)
            if provenance is not None:
                provenance[format_path(path)] = source

        resolved[name] = value
        scope = scope.with_value(name, value)

    return resolved
