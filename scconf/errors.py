"""Error hierarchy for configuration resolution.

Every error raised by scconf derives from ConfigError, so callers can catch
the whole family at the entry point. All errors are fatal to the resolution
call that raised them; no partial tree is ever returned.
"""

from typing import Any


class ConfigError(Exception):
    """Base exception for all scconf errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class SchemaShapeError(ConfigError):
    """Raised when a schema node cannot be classified or is self-contradictory.

    Examples:
        - A mapping mixing leaf fields with nested nodes
        - Unknown keys on a leaf definition
        - An empty envVarParser delimiter
        - A declared default outside the allowed values

    This is an authoring defect in the schema, not a problem with user input.
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message, cause=cause)


class ForwardReferenceError(SchemaShapeError):
    """Raised when a computed property reads a value declared after it."""

    def __init__(self, name: str, path: str = "") -> None:
        self.name = name
        super().__init__(
            f"'{name}' is not resolved yet; computed properties may only "
            "reference properties declared before them",
            path=path,
        )


class InvalidEnumValue(ConfigError):
    """Raised when a sourced value is not in the leaf's allowed values."""

    def __init__(
        self,
        key: str,
        value: Any,
        allowed: tuple[Any, ...],
        source: str | None = None,
    ) -> None:
        self.key = key
        self.value = value
        self.allowed = allowed
        self.source = source
        origin = f" (from {source})" if source else ""
        super().__init__(
            f"Invalid value {value!r} for '{key}'{origin}; "
            f"expected one of {list(allowed)!r}"
        )


class ComputedPropertyError(ConfigError):
    """Raised when a computed property's function fails.

    The function's own exception is kept as ``cause`` and chained as
    ``__cause__``.
    """

    def __init__(self, key: str, cause: Exception) -> None:
        self.key = key
        super().__init__(
            f"Computed property '{key}' failed: {type(cause).__name__}: {cause}",
            cause=cause,
        )


class MalformedEnvValue(ConfigError):
    """Raised when a custom envVarParser fails on a raw environment value.

    The parser's own exception is kept as ``cause`` and chained as
    ``__cause__``.
    """

    def __init__(
        self,
        key: str,
        env_var: str,
        raw: str,
        cause: Exception,
    ) -> None:
        self.key = key
        self.env_var = env_var
        self.raw = raw
        super().__init__(
            f"Could not parse environment variable {env_var}={raw!r} "
            f"for '{key}': {cause}",
            cause=cause,
        )


class SourceReadError(ConfigError):
    """Raised when a manifest or deploy-config document cannot be used.

    Examples:
        - Deploy-config file not found
        - Invalid JSON/TOML syntax
        - Unsupported file extension
        - Document root is not a mapping
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        super().__init__(message, cause=cause)
