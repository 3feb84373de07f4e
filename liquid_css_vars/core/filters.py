"""Liquid filters supported by the expression evaluator.

Each filter receives the current value, the raw argument text (or None)
and an ``evaluate`` callback that resolves argument expressions in the
caller's bindings. Unknown filters return the value unchanged.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable

from liquid_css_vars.core.values import (
    ExpressionValue,
    to_number,
    to_text,
)

Evaluate = Callable[[str], ExpressionValue]
Filter = Callable[[ExpressionValue, str | None, Evaluate], ExpressionValue]

_FILTER_SYNTAX = re.compile(r"^([\w_]+)(?::\s*(.+))?$", re.DOTALL)
_REPLACE_ARGS = re.compile(r"""['"]([^'"]*)['"]\s*,\s*(.+)""", re.DOTALL)
_OUTER_QUOTES = re.compile(r"""^['"]|['"]$""")
_QUOTED = re.compile(r"""^['"].*['"]$""", re.DOTALL)
_NATURAL_CHUNK = re.compile(r"(\d+)")

_ROUNDING_FACTOR = 100000


def _round5(number: float) -> float:
    """Round half up to 5 decimals to hide floating point noise."""
    if math.isinf(number):
        return number
    return math.floor(number * _ROUNDING_FACTOR + 0.5) / _ROUNDING_FACTOR


def _numeric_argument(arg: str | None, evaluate: Evaluate, default: float) -> float:
    if not arg:
        return default
    return to_number(evaluate(arg))


def split(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    delimiter = ","
    if arg:
        delimiter = _OUTER_QUOTES.sub("", arg.strip())
    text = to_text(value)
    if delimiter == "":
        return list(text)
    return text.split(delimiter)


def replace(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    if not arg:
        return value
    match = _REPLACE_ARGS.match(arg)
    if not match:
        return value

    search, replacement_expr = match.group(1), match.group(2).strip()
    replacement = evaluate(replacement_expr)
    if replacement == replacement_expr and _QUOTED.match(replacement_expr):
        replacement = _OUTER_QUOTES.sub("", replacement_expr)

    replacement_text = to_text(replacement)
    return re.sub(re.escape(search), lambda _m: replacement_text, to_text(value))


def append(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    suffix = evaluate(arg) if arg else ""
    return to_text(value) + to_text(suffix)


def times(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    result = to_number(value) * _numeric_argument(arg, evaluate, 1)
    if math.isnan(result):
        return 0
    return _round5(result)


def divided_by(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    divisor = _numeric_argument(arg, evaluate, 1)
    if divisor == 0:
        return 0
    result = to_number(value) / divisor
    if math.isnan(result):
        return 0
    return _round5(result)


def minus(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    result = to_number(value) - _numeric_argument(arg, evaluate, 0)
    return 0 if math.isnan(result) else result


def plus(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    result = to_number(value) + _numeric_argument(arg, evaluate, 0)
    return 0 if math.isnan(result) else result


def _is_plain_number(item: ExpressionValue) -> bool:
    return isinstance(item, (int, float)) and not isinstance(item, bool)


def _same_item(item: ExpressionValue, seen: ExpressionValue) -> bool:
    """Identity for ``uniq``: numbers by value, everything else by type and value."""
    if _is_plain_number(item) and _is_plain_number(seen):
        return item == seen
    return item is seen or (type(item) is type(seen) and item == seen)


def uniq(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    if not isinstance(value, list):
        return value
    unique: list[ExpressionValue] = []
    for item in value:
        if not any(_same_item(item, seen) for seen in unique):
            unique.append(item)
    return unique


def _natural_key(item: ExpressionValue) -> list[tuple[int, int | str]]:
    """Sort key comparing digit runs numerically and text case-insensitively."""
    key: list[tuple[int, int | str]] = []
    for chunk in _NATURAL_CHUNK.split(to_text(item)):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk.casefold()))
    return key


def sort_natural(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    if not isinstance(value, list):
        return value
    return sorted(value, key=_natural_key)


def find_index(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    """Position of the argument in a list; numeric fallback handles "048" vs "48"."""
    if not isinstance(value, list):
        return -1
    search = to_text(evaluate(arg) if arg else "")

    for index, item in enumerate(value):
        if isinstance(item, str) and item == search:
            return index

    search_number = to_number(search)
    if not math.isnan(search_number):
        for index, item in enumerate(value):
            if to_number(item) == search_number:
                return index
    return -1


def passthrough(value: ExpressionValue, arg: str | None, evaluate: Evaluate) -> ExpressionValue:
    """Filters that depend on the storefront renderer (fonts) are not emulated."""
    return value


FILTERS: dict[str, Filter] = {
    "split": split,
    "replace": replace,
    "append": append,
    "times": times,
    "divided_by": divided_by,
    "minus": minus,
    "plus": plus,
    "uniq": uniq,
    "sort_natural": sort_natural,
    "find_index": find_index,
    "font_modify": passthrough,
    "font_face": passthrough,
}


def apply_filter(value: ExpressionValue, filter_text: str, evaluate: Evaluate) -> ExpressionValue:
    """Apply one ``name[: argument]`` filter segment to a value.

    Args:
        value: Current value of the expression.
        filter_text: Filter segment without the leading pipe.
        evaluate: Resolves argument expressions in the caller's bindings.

    Returns:
        Filtered value; malformed or unknown filters leave it unchanged.
    """
    match = _FILTER_SYNTAX.match(filter_text.strip())
    if not match:
        return value
    name, arg = match.group(1), match.group(2)
    handler = FILTERS.get(name, passthrough)
    return handler(value, arg, evaluate)
