"""Computed property evaluation.

Computed nodes receive a Scope: a read-only mapping of the values resolved
before them in their branch, falling back to ancestor branches. Reading a
name that is declared later raises ForwardReferenceError instead of
returning a partial result.

Values are read by item (`scope["port"]`). Attribute names on a Scope belong
to the Mapping API and the engine helpers, so a property called `path` or
`items` is still reachable as `scope["path"]`.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from scconf.errors import ComputedPropertyError, ConfigError, ForwardReferenceError
from scconf.schema.nodes import Computed, PropertyPath, format_path


class Scope(Mapping[str, Any]):
    """Values resolved so far at one level of the tree.

    Iteration, ``len`` and equality cover this level only. Item lookups fall
    through to the parent scope.
    """

    __slots__ = ("_values", "_pending", "_parent", "_path")

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        pending: Iterable[str] = (),
        parent: "Scope | None" = None,
        path: PropertyPath = (),
    ) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._pending: frozenset[str] = frozenset(pending)
        self._parent = parent
        self._path = path

    @property
    def parent(self) -> "Scope | None":
        """Scope of the enclosing branch, if any."""
        return self._parent

    @property
    def path(self) -> PropertyPath:
        """Path of the branch this scope belongs to."""
        return self._path

    def __getitem__(self, key: str) -> Any:
        if key in self._values:
            return self._values[key]
        if key in self._pending:
            raise ForwardReferenceError(key, path=format_path(self._path))
        if self._parent is not None:
            return self._parent[key]
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if key in self._values:
            return True
        if key in self._pending or self._parent is None:
            return False
        return key in self._parent

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(
            f"Scope has no attribute '{name}'; values are read by item, e.g. scope[{name!r}]"
        )

    def __repr__(self) -> str:
        return f"Scope(path={format_path(self._path)!r}, values={self._values!r})"

    def with_value(self, name: str, value: Any) -> "Scope":
        """Return a new scope with ``name`` resolved to ``value``."""
        return Scope(
            values={**self._values, name: value},
            pending=self._pending - {name},
            parent=self._parent,
            path=self._path,
        )

    def child(self, name: str, pending: Iterable[str]) -> "Scope":
        """Return an empty scope for the nested branch ``name``."""
        return Scope(pending=pending, parent=self, path=self._path + (name,))


def evaluate_computed(node: Computed, scope: Scope, path: PropertyPath = ()) -> Any:
    """Evaluate a computed node against the scope at its position.

    The return value is used as-is.

    Raises:
        ForwardReferenceError: If the function reads a later property
        ComputedPropertyError: If the function raises anything else
    """
    try:
        return node.fn(scope)
    except ConfigError:
        raise
    except Exception as exc:
        raise ComputedPropertyError(key=format_path(path), cause=exc) from exc
