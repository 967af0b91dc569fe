"""Foundation types for the config module.

Provides exception classes, the analysis mode enum and the Secret wrapper type.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Analysis mode
# ---------------------------------------------------------------------------


class AnalysisMode(str, Enum):
    """Mode of the analysis the configuration is resolved for."""

    publish = "publish"
    preview = "preview"
    issues = "issues"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors."""


class MalformedMultiValueError(ConfigError):
    """Raised when a multi-valued property is not a valid CSV value."""

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Property: '{key}' doesn't contain a valid CSV value: '{value}'")


class SecretDecodeError(ConfigError):
    """Raised when an encrypted value cannot be decrypted."""

    def __init__(self, key: str | None = None, reason: str = "") -> None:
        self.key = key
        self.reason = reason
        if key is None:
            message = "Unable to decrypt value"
        else:
            message = f"Unable to decrypt the value of property '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidValueError(ConfigError):
    """Raised when a property value cannot be cast to the requested type."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"The value of property '{key}' is not a valid {expected}: '{value}'")


class DuplicatePropertyError(ConfigError):
    """Raised when two property definitions claim the same key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Property '{key}' is declared more than once.")


# ---------------------------------------------------------------------------
# Secret
# ---------------------------------------------------------------------------


class Secret(Generic[T]):
    """Wraps a value so it is redacted in ``repr`` / ``str`` output.

    Access the real value via ``.secret_value``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    @property
    def secret_value(self) -> T:
        return self._value  # type: ignore[return-value]

    # -- redaction ----------------------------------------------------------

    def __repr__(self) -> str:
        return "Secret('***')"

    def __str__(self) -> str:
        return "***"

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Secret):
            return bool(self._value == other._value)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)
