"""Command-line argument parsing into a flat map.

Rules:
- ``--name value`` / ``--name=value``  -> {"name": value}
- ``--flag``                           -> {"flag": True}
- ``--no-flag``                        -> {"flag": False}
- ``-x value`` / ``-abc``              -> {"x": value} / {"a": True, "b": True, "c": True}
- kebab-case names become camelCase    (``--deploy-config`` -> ``deployConfig``)
- numeric values become int or float
- repeated keys collect into a list
- positionals go under ``"_"``; tokens after ``--`` are kept verbatim there
"""

import re
from collections.abc import Sequence
from typing import Any

POSITIONAL_KEY = "_"

_INT_PATTERN = re.compile(r"^[-+]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$")


def camel_case(name: str) -> str:
    """Convert a kebab-case option name to camelCase."""
    head, *rest = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def coerce_scalar(value: str) -> Any:
    """Convert numeric-looking strings to numbers; leave others untouched."""
    if _INT_PATTERN.match(value):
        return int(value)
    if _FLOAT_PATTERN.match(value):
        return float(value)
    return value


def _is_option(token: str) -> bool:
    return token.startswith("-") and len(token) > 1 and not _FLOAT_PATTERN.match(token)


def _store(parsed: dict[str, Any], name: str, value: Any) -> None:
    key = camel_case(name)
    if key not in parsed:
        parsed[key] = value
    elif isinstance(parsed[key], list):
        parsed[key].append(value)
    else:
        parsed[key] = [parsed[key], value]


def parse_argv(argv: Sequence[str]) -> dict[str, Any]:
    """Parse command-line tokens into a flat camelCase map.

    Args:
        argv: Tokens without the program name (e.g. ``sys.argv[1:]``)

    Returns:
        Map of option name to value, with positionals under ``"_"``
    """
    parsed: dict[str, Any] = {}
    positionals: list[Any] = []
    tokens = list(argv)
    index = 0

    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            positionals.extend(tokens[index:])
            break

        if token.startswith("--"):
            body = token[2:]
            if "=" in body:
                name, value = body.split("=", 1)
                _store(parsed, name, coerce_scalar(value))
            elif body.startswith("no-"):
                _store(parsed, body[3:], False)
            elif index < len(tokens) and not _is_option(tokens[index]):
                _store(parsed, body, coerce_scalar(tokens[index]))
                index += 1
            else:
                _store(parsed, body, True)
            continue

        if _is_option(token):
            letters = token[1:]
            if "=" in letters:
                name, value = letters.split("=", 1)
                _store(parsed, name, coerce_scalar(value))
            elif len(letters) == 1 and index < len(tokens) and not _is_option(tokens[index]):
                _store(parsed, letters, coerce_scalar(tokens[index]))
                index += 1
            else:
                for letter in letters:
                    _store(parsed, letter, True)
            continue

        positionals.append(coerce_scalar(token))

    parsed[POSITIONAL_KEY] = positionals
    return parsed
