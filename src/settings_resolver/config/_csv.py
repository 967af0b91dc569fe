"""Parsing and formatting of multi-valued property values.

A multi-valued property is stored as a single string holding comma separated
fields. Fields may be wrapped in double quotes to keep commas and surrounding
whitespace; a doubled quote inside a quoted field is a literal quote::

    >>> parse_multi_values('a , "b,c", " d "', "hosts")
    ['a', 'b,c', ' d ']
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable

from ._types import MalformedMultiValueError

_DELIMITER = ","
_QUOTE = '"'


class _State(Enum):
    FIELD_START = auto()
    UNQUOTED = auto()
    QUOTED = auto()
    QUOTE_SEEN = auto()  # a quote inside a quoted field: closing or escaped
    AFTER_QUOTE = auto()


def parse_multi_values(value: str, key: str) -> list[str]:
    """Split *value* into its fields.

    *key* is only used to build the error message.

    Raises ``MalformedMultiValueError`` when a quoted field is not closed or
    is followed by anything but whitespace before the next comma.
    """
    if value == "":
        return []

    fields: list[str] = []
    chars: list[str] = []
    state = _State.FIELD_START

    for char in value:
        if state is _State.QUOTE_SEEN:
            if char == _QUOTE:
                chars.append(_QUOTE)
                state = _State.QUOTED
                continue
            state = _State.AFTER_QUOTE

        if state is _State.FIELD_START:
            if char == _DELIMITER:
                fields.append("".join(chars).strip())
                chars = []
            elif char == _QUOTE:
                chars = []
                state = _State.QUOTED
            else:
                chars.append(char)
                if not char.isspace():
                    state = _State.UNQUOTED

        elif state is _State.UNQUOTED:
            if char == _DELIMITER:
                fields.append("".join(chars).strip())
                chars = []
                state = _State.FIELD_START
            else:
                chars.append(char)

        elif state is _State.QUOTED:
            if char == _QUOTE:
                state = _State.QUOTE_SEEN
            else:
                chars.append(char)

        elif state is _State.AFTER_QUOTE:
            if char == _DELIMITER:
                fields.append("".join(chars))
                chars = []
                state = _State.FIELD_START
            elif not char.isspace():
                raise MalformedMultiValueError(key, value)

    if state is _State.QUOTED:
        raise MalformedMultiValueError(key, value)
    if state in (_State.QUOTE_SEEN, _State.AFTER_QUOTE):
        fields.append("".join(chars))
    else:
        fields.append("".join(chars).strip())
    return fields


def _needs_quoting(field: str) -> bool:
    return field == "" or field != field.strip() or _DELIMITER in field or _QUOTE in field


def format_multi_values(values: Iterable[str]) -> str:
    """Join *values* into a string that ``parse_multi_values`` splits back.

    >>> format_multi_values(["a", "b,c", 'x"y'])
    'a,"b,c","x""y"'
    """
    formatted = []
    for field in values:
        if _needs_quoting(field):
            field = _QUOTE + field.replace(_QUOTE, _QUOTE * 2) + _QUOTE
        formatted.append(field)
    return _DELIMITER.join(formatted)
