"""Schema node models.

A schema is a tree of three node kinds, each tagged with a ``kind`` literal:

- LeafDefinition: one configurable property and its sourcing rules
- Branch: a namespace grouping child nodes
- Computed: a property derived from already-resolved values

Raw, untagged schemas (plain dicts and functions) are turned into these
models by ``scconf.schema.compiler.compile_schema``.
"""

from collections.abc import Callable
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from scconf.errors import SchemaShapeError

PropertyPath = tuple[str, ...]

# Authoring keys that mark a mapping as a leaf definition
LEAF_KEYS: frozenset[str] = frozenset({
    "description",
    "default",
    "values",
    "commandLineArg",
    "envVar",
    "envVarParser",
    "allowed_values",
    "command_line_arg",
    "env_var",
    "env_var_parser",
})


def format_path(path: PropertyPath) -> str:
    """Render a property path as a dotted key."""
    return ".".join(path)


def _same_kind(value: Any, candidate: Any) -> bool:
    # bool is an int and 1 == 1.0, so equality alone would mix them up
    for kind in (bool, float):
        if isinstance(value, kind) or isinstance(candidate, kind):
            return isinstance(value, kind) and isinstance(candidate, kind)
    return True


def is_allowed_value(value: Any, allowed: tuple[Any, ...]) -> bool:
    """Check membership in an allowed-values set without bool/int/float mixing."""
    return any(_same_kind(value, candidate) and value == candidate for candidate in allowed)


class TransformParser(BaseModel):
    """Environment parser that calls a function on the raw string."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transform"] = "transform"
    fn: Callable[[str], Any] = Field(..., description="Transform applied to the raw value")

    def parse(self, raw: str) -> Any:
        """Apply the transform to a raw environment value."""
        return self.fn(raw)


class DelimiterParser(BaseModel):
    """Environment parser that splits the raw string on a delimiter."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["delimiter"] = "delimiter"
    delimiter: str = Field(..., min_length=1, description="Separator between items")

    def parse(self, raw: str) -> list[str]:
        """Split a raw environment value into its ordered parts."""
        return raw.split(self.delimiter)


EnvVarParser = Annotated[TransformParser | DelimiterParser, Field(discriminator="kind")]


class LeafDefinition(BaseModel):
    """A single configurable property.

    Field aliases follow the authoring convention (``commandLineArg``,
    ``envVar``, ``envVarParser``, ``values``); snake_case names are accepted
    as well.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    kind: Literal["leaf"] = "leaf"
    description: str | None = Field(default=None, description="Human readable summary")
    default: Any = Field(default=None, description="Last-resort value")
    allowed_values: tuple[Any, ...] | None = Field(
        default=None,
        alias="values",
        description="Allowed values; unrestricted when unset",
    )
    command_line_arg: str | None = Field(
        default=None,
        alias="commandLineArg",
        description="Key in the command-line map",
    )
    env_var: str | None = Field(
        default=None,
        alias="envVar",
        description="Environment variable name",
    )
    env_var_parser: EnvVarParser | None = Field(
        default=None,
        alias="envVarParser",
        description="Parser for raw environment values",
    )

    @field_validator("env_var_parser", mode="before")
    @classmethod
    def _tag_parser(cls, value: Any) -> Any:
        """Turn a bare delimiter or function into its tagged parser variant."""
        if isinstance(value, str):
            return {"kind": "delimiter", "delimiter": value}
        if callable(value) and not isinstance(value, BaseModel):
            return {"kind": "transform", "fn": value}
        return value

    @model_validator(mode="after")
    def _check_default(self) -> "LeafDefinition":
        """A declared default must itself be an allowed value."""
        if (
            self.allowed_values is not None
            and "default" in self.model_fields_set
            and not is_allowed_value(self.default, self.allowed_values)
        ):
            raise ValueError(
                f"default {self.default!r} is not one of {list(self.allowed_values)!r}"
            )
        return self


class Computed(BaseModel):
    """A property derived from previously resolved values.

    ``fn`` receives a read-only Scope of the values resolved before it.
    ``depends_on`` is optional; when given, the names are checked against
    declaration order when the schema is compiled.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["computed"] = "computed"
    fn: Callable[[Any], Any]
    depends_on: tuple[str, ...] = ()
    description: str | None = None


class Branch(BaseModel):
    """A namespace of child nodes, kept in declaration order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["branch"] = "branch"
    children: dict[str, "SchemaNode"] = Field(default_factory=dict)


SchemaNode = Annotated[LeafDefinition | Branch | Computed, Field(discriminator="kind")]

Branch.model_rebuild()


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'leaf'}: {error['msg']}"
        for error in exc.errors()
    )


def build_leaf(fields: dict[str, Any], path: PropertyPath = ()) -> LeafDefinition:
    """Validate leaf fields, reporting problems as SchemaShapeError.

    Args:
        fields: Leaf definition fields in authoring or snake_case form
        path: Location of the leaf in the schema, for error messages

    Returns:
        The validated LeafDefinition

    Raises:
        SchemaShapeError: If the fields do not form a valid leaf
    """
    try:
        return LeafDefinition.model_validate(fields)
    except ValidationError as exc:
        raise SchemaShapeError(
            f"invalid leaf definition ({_describe_errors(exc)})",
            path=format_path(path),
            cause=exc,
        ) from exc


def leaf(**fields: Any) -> LeafDefinition:
    """Author a leaf definition explicitly.

    Example:
        leaf(default="ws", values=["ws", "wss"], envVar="PROTOCOL")
    """
    return build_leaf(fields)


def computed(
    fn: Callable[[Any], Any],
    *,
    depends_on: tuple[str, ...] | list[str] = (),
    description: str | None = None,
) -> Computed:
    """Author a computed property explicitly."""
    return Computed(fn=fn, depends_on=tuple(depends_on), description=description)
