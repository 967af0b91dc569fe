"""Resolution of property values against their declarations.

Lookup order for every query:
1. Raw value in the property store
2. Declared default value
3. Absent (``None`` for scalar reads, ``[]`` for array reads)

Resolved values are decrypted when they are encrypted. Reading a declared
multi-valued property as a scalar, or a declared single-valued property as an
array, is tolerated and logged as a warning.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

from ._casters import CASTERS
from ._csv import parse_multi_values
from ._definitions import PropertyDefinitions
from ._encryption import Encryption, SecretCodec
from ._types import (
    AnalysisMode,
    InvalidValueError,
    MalformedMultiValueError,
    Secret,
    SecretDecodeError,
)

_SCALAR_ACCESS_TO_MULTI_VALUED = (
    "Access to the multi-valued property '%s' should be made using 'getStringArray' method. "
    "The SonarQube plugin using this property should be updated."
)
_ARRAY_ACCESS_TO_SINGLE_VALUED = (
    "Property '%s' is not declared as multi-valued but was read using 'getStringArray' method. "
    "The SonarQube plugin declaring this property should be updated."
)


class Configuration:
    """Read-only view over a property store, checked against declarations.

    Parameters
    ----------
    definitions:
        Declared properties. Undeclared keys can still be read.
    properties:
        Raw key/value store. Kept by reference and never modified.
    encryption:
        Codec used to decrypt encrypted values. Defaults to an ``Encryption``
        without secret key, which only understands ``{b64}`` values.
    analysis_mode:
        Mode of the analysis this configuration belongs to.
    logger:
        Destination of the access mismatch warnings. Defaults to this
        module's logger.
    """

    def __init__(
        self,
        definitions: PropertyDefinitions,
        properties: Mapping[str, str],
        encryption: SecretCodec | None = None,
        *,
        analysis_mode: AnalysisMode | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._definitions = definitions
        self._properties = MappingProxyType(properties)
        self._encryption = encryption if encryption is not None else Encryption()
        self._analysis_mode = analysis_mode
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def analysis_mode(self) -> AnalysisMode | None:
        return self._analysis_mode

    # -- public API ---------------------------------------------------------

    def has_key(self, key: str) -> bool:
        """Return whether *key* has a value, either stored or declared default."""
        _, raw = self._resolve(self._definitions.valid_key(key))
        return raw is not None

    def get(self, key: str) -> str | None:
        """Return the decrypted value of *key*, or ``None`` when absent.

        Multi-valued properties are returned unsplit.
        """
        effective_key = self._definitions.valid_key(key)
        from_store, raw = self._resolve(effective_key)
        if raw is None:
            return None

        definition = self._definitions.get(effective_key)
        if from_store and definition is not None and definition.multi_values:
            self._logger.warning(_SCALAR_ACCESS_TO_MULTI_VALUED, key)

        return self._decrypt(effective_key, raw)

    def get_string_array(self, key: str) -> list[str]:
        """Return the fields of *key*, or an empty list when absent.

        The value is decrypted before it is split. Raises
        ``MalformedMultiValueError`` when it is not a valid CSV value.
        """
        effective_key = self._definitions.valid_key(key)
        definition = self._definitions.get(effective_key)
        if definition is not None and not definition.multi_values:
            self._logger.warning(_ARRAY_ACCESS_TO_SINGLE_VALUED, key)

        _, raw = self._resolve(effective_key)
        if raw is None:
            return []

        decrypted = self._decrypt(effective_key, raw)
        try:
            return parse_multi_values(decrypted, effective_key)
        except MalformedMultiValueError:
            # Report the stored text, never the decrypted secret.
            raise MalformedMultiValueError(effective_key, raw) from None

    def get_secret(self, key: str) -> Secret[str] | None:
        """Like ``get`` but wraps the value so it is redacted when printed."""
        value = self.get(key)
        return Secret(value) if value is not None else None

    def get_bool(self, key: str) -> bool | None:
        return self._get_cast(key, "boolean")

    def get_int(self, key: str) -> int | None:
        return self._get_cast(key, "integer")

    def get_float(self, key: str) -> float | None:
        return self._get_cast(key, "float")

    # -- internals ----------------------------------------------------------

    def _resolve(self, key: str) -> tuple[bool, str | None]:
        """Return ``(from_store, raw_value)`` for an already translated key."""
        value = self._properties.get(key)
        if value is not None:
            return True, value

        definition = self._definitions.get(key)
        if definition is None:
            return False, None

        if definition.deprecated_key is not None:
            value = self._properties.get(definition.deprecated_key)
            if value is not None:
                return True, value

        return False, self._definitions.default_value(key)

    def _decrypt(self, key: str, raw: str) -> str:
        if not self._encryption.is_encrypted(raw):
            return raw
        try:
            return self._encryption.decrypt(raw)
        except SecretDecodeError as exc:
            raise SecretDecodeError(key, exc.reason) from exc

    def _get_cast(self, key: str, expected: str) -> Any:
        value = self.get(key)
        if value is None:
            return None
        caster: Callable[[str], Any] = CASTERS[expected]
        try:
            return caster(value)
        except ValueError as exc:
            raise InvalidValueError(key, value, expected) from exc
