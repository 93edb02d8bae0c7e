"""Unit tests for schema node models."""

import pytest
from pydantic import ValidationError

from scconf.errors import SchemaShapeError
from scconf.schema import (
    Computed,
    DelimiterParser,
    LeafDefinition,
    TransformParser,
    computed,
    format_path,
    is_allowed_value,
    leaf,
)


class TestLeafDefinition:
    """Tests for LeafDefinition model."""

    def test_defaults(self) -> None:
        """All fields are absent by default and default is None."""
        definition = LeafDefinition()
        assert definition.kind == "leaf"
        assert definition.default is None
        assert definition.allowed_values is None
        assert definition.command_line_arg is None
        assert definition.env_var is None
        assert definition.env_var_parser is None

    def test_accepts_authoring_aliases(self) -> None:
        """camelCase authoring keys populate the snake_case fields."""
        definition = LeafDefinition.model_validate({
            "commandLineArg": "port",
            "envVar": "PORT",
            "values": [1, 2],
            "default": 1,
        })
        assert definition.command_line_arg == "port"
        assert definition.env_var == "PORT"
        assert definition.allowed_values == (1, 2)

    def test_accepts_field_names(self) -> None:
        """snake_case field names are accepted too."""
        definition = LeafDefinition(command_line_arg="port", env_var="PORT")
        assert definition.command_line_arg == "port"
        assert definition.env_var == "PORT"

    def test_string_parser_becomes_delimiter(self) -> None:
        """A string envVarParser is tagged as a DelimiterParser."""
        definition = LeafDefinition.model_validate({"envVarParser": ","})
        assert isinstance(definition.env_var_parser, DelimiterParser)
        assert definition.env_var_parser.delimiter == ","

    def test_callable_parser_becomes_transform(self) -> None:
        """A callable envVarParser is tagged as a TransformParser."""
        definition = LeafDefinition.model_validate({"envVarParser": int})
        assert isinstance(definition.env_var_parser, TransformParser)
        assert definition.env_var_parser.parse("42") == 42

    def test_tagged_parser_kept(self) -> None:
        """An explicit parser variant is kept unchanged."""
        parser = DelimiterParser(delimiter=":")
        definition = LeafDefinition(env_var_parser=parser)
        assert definition.env_var_parser == parser

    def test_empty_delimiter_rejected(self) -> None:
        """An empty delimiter cannot split anything."""
        with pytest.raises(ValidationError):
            LeafDefinition.model_validate({"envVarParser": ""})

    def test_unknown_key_rejected(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            LeafDefinition.model_validate({"default": 1, "envvar": "X"})

    def test_default_outside_values_rejected(self) -> None:
        """A declared default must be an allowed value."""
        with pytest.raises(ValidationError):
            LeafDefinition.model_validate({"default": "http", "values": ["ws", "wss"]})

    def test_bool_default_outside_int_values_rejected(self) -> None:
        """A bool default does not pass for an int allowed value."""
        with pytest.raises(ValidationError):
            LeafDefinition.model_validate({"default": True, "values": [0, 1]})

    def test_implicit_none_default_with_values(self) -> None:
        """The implicit None default is exempt from the values check."""
        definition = LeafDefinition.model_validate({"values": ["ws", "wss"]})
        assert definition.default is None

    def test_frozen(self) -> None:
        """Leaf definitions are immutable."""
        definition = LeafDefinition(default=1)
        with pytest.raises(ValidationError):
            definition.default = 2  # type: ignore[misc]


class TestParsers:
    """Tests for the envVarParser variants."""

    def test_delimiter_split(self) -> None:
        """Delimiter parser produces ordered substrings."""
        assert DelimiterParser(delimiter=",").parse("a,b,c") == ["a", "b", "c"]

    def test_delimiter_keeps_empty_parts(self) -> None:
        """Empty segments are preserved, as a plain split would."""
        assert DelimiterParser(delimiter=",").parse("a,,b") == ["a", "", "b"]

    def test_transform_calls_function(self) -> None:
        """Transform parser returns the function result."""
        parser = TransformParser(fn=lambda raw: raw.upper())
        assert parser.parse("abc") == "ABC"


class TestHelpers:
    """Tests for leaf() and computed() helpers."""

    def test_leaf_builds_definition(self) -> None:
        """leaf() accepts authoring keys."""
        definition = leaf(default="ws", values=["ws", "wss"], envVar="PROTOCOL")
        assert definition.default == "ws"
        assert definition.env_var == "PROTOCOL"

    def test_leaf_wraps_validation_errors(self) -> None:
        """leaf() reports invalid fields as SchemaShapeError."""
        with pytest.raises(SchemaShapeError) as exc_info:
            leaf(default="http", values=["ws", "wss"])
        assert isinstance(exc_info.value.cause, ValidationError)

    def test_computed_builds_node(self) -> None:
        """computed() records the function and dependencies."""
        node = computed(len, depends_on=["a", "b"], description="count")
        assert isinstance(node, Computed)
        assert node.depends_on == ("a", "b")
        assert node.description == "count"

    def test_format_path(self) -> None:
        """Paths render as dotted keys."""
        assert format_path(("server", "port")) == "server.port"
        assert format_path(()) == ""

    @pytest.mark.parametrize(
        ("value", "allowed", "expected"),
        [
            ("ws", ("ws", "wss"), True),
            (1, (0, 1), True),
            (True, (0, 1), False),
            (1, (True, False), False),
            (1.0, (1, 2), False),
            (0.5, (0.5, 1.5), True),
            ([1], ([1], [2]), True),
        ],
    )
    def test_is_allowed_value(self, value: object, allowed: tuple, expected: bool) -> None:
        """Membership does not mix bool, int and float."""
        assert is_allowed_value(value, allowed) is expected
