"""Cast helpers for the typed getters of ``Configuration``.

These callables transform resolved string values into the desired Python
types and raise ``ValueError`` when the text cannot be converted.
"""

from __future__ import annotations

from typing import Any, Callable

# ---------------------------------------------------------------------------
# Bool caster
# ---------------------------------------------------------------------------

_TRUTHY = frozenset({"1", "true", "yes", "on", "t", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "f", "n", ""})


def _cast_bool(value: str) -> bool:
    """Cast a string to ``bool``, handling common representations.

    Raises ``ValueError`` for unrecognised strings.
    """
    lower = value.strip().lower()
    if lower in _TRUTHY:
        return True
    if lower in _FALSY:
        return False
    raise ValueError(f"Cannot cast {value!r} to bool")


# ---------------------------------------------------------------------------
# Numeric casters
# ---------------------------------------------------------------------------


def _cast_int(value: str) -> int:
    return int(value.strip())


def _cast_float(value: str) -> float:
    return float(value.strip())


CASTERS: dict[str, Callable[[str], Any]] = {
    "boolean": _cast_bool,
    "integer": _cast_int,
    "float": _cast_float,
}
