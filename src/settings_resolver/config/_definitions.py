"""Property declarations and the catalog they are looked up in.

Declarations are immutable Pydantic models::

    definitions = PropertyDefinitions([
        PropertyDefinition(key="sonar.exclusions", multi_values=True),
        PropertyDefinition(key="sonar.host.url", default_value="http://localhost:9000"),
    ])
    definitions.get("sonar.exclusions").multi_values   # True
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, field_validator

from ._types import DuplicatePropertyError


class PropertyDefinition(BaseModel):
    """Declared shape of a single property."""

    model_config = ConfigDict(frozen=True)

    key: str
    multi_values: bool = False
    default_value: str | None = None
    deprecated_key: str | None = None
    name: str | None = None
    description: str | None = None

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Property key must not be blank")
        return value

    @field_validator("deprecated_key")
    @classmethod
    def _deprecated_key_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("Deprecated key must not be blank")
        return value


class PropertyDefinitions:
    """Read-only catalog of property definitions keyed by property key.

    Lookups are exact and case-sensitive. A key that is not declared is not an
    error: ``get`` simply returns ``None``.
    """

    def __init__(self, definitions: Iterable[PropertyDefinition] = ()) -> None:
        by_key: dict[str, PropertyDefinition] = {}
        deprecated: dict[str, str] = {}

        for definition in definitions:
            if definition.key in by_key or definition.key in deprecated:
                raise DuplicatePropertyError(definition.key)
            by_key[definition.key] = definition

            old_key = definition.deprecated_key
            if old_key is not None:
                if old_key in by_key or old_key in deprecated:
                    raise DuplicatePropertyError(old_key)
                deprecated[old_key] = definition.key

        self._definitions = MappingProxyType(by_key)
        self._deprecated_keys = MappingProxyType(deprecated)

    def get(self, key: str) -> PropertyDefinition | None:
        return self._definitions.get(key)

    def default_value(self, key: str) -> str | None:
        definition = self._definitions.get(key)
        return definition.default_value if definition is not None else None

    def valid_key(self, key: str) -> str:
        """Return the current key for *key*, translating deprecated keys."""
        return self._deprecated_keys.get(key, key)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[PropertyDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"PropertyDefinitions({list(self._definitions)!r})"
