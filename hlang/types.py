"""Runtime value helpers for hlang.

hlang has five kinds of runtime value. Numbers are Python floats,
strings are Python strings, booleans are Python bools, and the null
value is represented by :class:`NoneVal`. Functions are represented by
``FunctionValue`` (user-defined, see :mod:`hlang.interpreter`) and
``BuiltinFunction`` (see :mod:`hlang.builtin_function`). Values are never
mutated once constructed; operators always build new values.
"""

from __future__ import annotations

from typing import Any, Union
import math


NULL_MARKER = 'null'
FUNCTION_PLACEHOLDER = '<function>'

# Spellings a strict float parser accepts for the infinities
_FLOAT_SPECIALS = {'inf', '+inf', '-inf', 'infinity', '+infinity', '-infinity'}


class NoneVal:
    """Marker object for the hlang null value."""
    def __repr__(self) -> str:
        return NULL_MARKER

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoneVal)

    def __hash__(self) -> int:
        return hash(NoneVal)


def coerce_literal(text: str) -> Union[float, str]:
    """Turn the raw text of a literal into a runtime value.

    The text becomes a number whenever it parses as one, regardless of
    whether it came from a number or a string token. Anything a strict
    float parser would reject (surrounding whitespace, digit separators,
    non-ASCII digits, out-of-range magnitudes) stays a string.
    """
    if not text.isascii() or text.strip() != text or '_' in text:
        return text
    try:
        value = float(text)
    except ValueError:
        return text
    if math.isinf(value) and text.lower() not in _FLOAT_SPECIALS:
        return text
    # only the unsigned spelling names NaN
    if math.isnan(value) and text.lower() != 'nan':
        return text
    return value


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return '+Inf' if value > 0 else '-Inf'
    if value == int(value):
        return str(int(value))
    return repr(value)


def type_name(value: Any) -> str:
    """Return the hlang type name of a runtime value."""
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, NoneVal):
        return 'null'
    return 'function'


def to_string(value: Any) -> str:
    """Convert an hlang value to its display form.

    Used both by ``bol`` and by ``+`` when the operands are not both
    numbers.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NoneVal):
        return NULL_MARKER
    return FUNCTION_PLACEHOLDER
