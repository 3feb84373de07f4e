"""Expression values and their coercion rules.

Template expressions evaluate to one of::

    str | int | float | bool | list | dict | None

``None`` stands for an absent/undefined value. Python's own implicit
conversions are never relied on: every place that needs a string, a number,
a truth value or an equality test goes through the functions below, which
reproduce the loose semantics template authors expect:

    to_text       absent -> "", booleans -> "true"/"false", 2.0 -> "2"
    to_number     longest numeric prefix ("12px" -> 12.0), else NaN
    is_truthy     absent, "", False, 0 and NaN are falsy
    loose_equals  "2" == 2, True == 1, "" == 0, absent == absent only
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Union

ExpressionValue = Union[str, int, float, bool, list, dict, None]

OBJECT_PLACEHOLDER = "[object]"

# Float-parse prefix: optional sign, digits with optional fraction, exponent
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY_PREFIX = re.compile(r"^\s*([+-]?)Infinity")
# Strict whole-string number (used by loose equality)
_STRICT_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_MAX_PLAIN_INTEGER = 1e21
_MIN_PLAIN_FRACTION = 1e-6


def format_number(number: int | float) -> str:
    """Render a number in its canonical template form.

    Integral values drop the fraction, NaN and infinities are spelled out.

    Examples:
        >>> format_number(14.0)
        '14'
        >>> format_number(0.15)
        '0.15'
        >>> format_number(float('nan'))
        'NaN'
    """
    if isinstance(number, bool):
        return "true" if number else "false"
    if isinstance(number, int):
        return str(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < _MAX_PLAIN_INTEGER:
        return str(int(number))

    text = repr(number)
    if "e" in text and abs(number) >= _MIN_PLAIN_FRACTION:
        return format(Decimal(text), "f")
    if "e" in text:
        mantissa, exponent = text.split("e")
        sign = "-" if exponent.startswith("-") else "+"
        text = f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"
    return text


def to_text(value: ExpressionValue) -> str:
    """Coerce a value to its output (string) form."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, list):
        return ",".join(to_text(item) for item in value)
    return OBJECT_PLACEHOLDER


def to_number(value: ExpressionValue) -> float:
    """Coerce a value to a float using float-parse semantics.

    The longest numeric prefix of the text form is parsed; anything without
    one (including booleans and absent values) becomes NaN.

    Examples:
        >>> to_number('12px')
        12.0
        >>> math.isnan(to_number('abc'))
        True
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)

    text = to_text(value)
    match = _NUMERIC_PREFIX.match(text)
    if match:
        return float(match.group(1))
    infinity = _INFINITY_PREFIX.match(text)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    return math.nan


def _strict_number(text: str) -> float:
    """Whole-string numeric conversion: "" is 0, any trailing junk is NaN."""
    stripped = text.strip()
    if not stripped:
        return 0.0
    if _STRICT_NUMBER.match(stripped):
        return float(stripped)
    return math.nan


def _primitive(value: ExpressionValue) -> ExpressionValue:
    """Reduce lists and mappings to their text form for comparisons."""
    if isinstance(value, (list, dict)):
        return to_text(value)
    return value


def loose_equals(left: ExpressionValue, right: ExpressionValue) -> bool:
    """Type-coercing equality.

    Examples:
        >>> loose_equals('2', 2)
        True
        >>> loose_equals(True, 1)
        True
        >>> loose_equals(None, '')
        False
    """
    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, list) and isinstance(right, list):
        return left is right
    if isinstance(left, dict) and isinstance(right, dict):
        return left is right

    left = _primitive(left)
    right = _primitive(right)

    if isinstance(left, bool):
        left = 1.0 if left else 0.0
    if isinstance(right, bool):
        right = 1.0 if right else 0.0

    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, str):
        left = _strict_number(left)
    if isinstance(right, str):
        right = _strict_number(right)
    return float(left) == float(right)  # type: ignore[arg-type]


def is_truthy(value: ExpressionValue) -> bool:
    """Truth test: absent, empty string, False, 0 and NaN are falsy."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    return True
