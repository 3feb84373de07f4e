"""Liquid expression evaluation.

An expression is a base value followed by a pipe-delimited filter chain::

    font_sizes | split: ',' | find_index: settings.body_size

The base value is resolved in this order:

    1. quoted literal            'a,b,c'
    2. bracketed index           sizes[i]        settings[key_var]
    3. dotted access             settings.radius forloop.index
    4. bare identifier           my_var          (unbound -> literal text)
    5. numeric literal           1.5
    6. anything else             text, with [name] placeholders substituted

Evaluation is best effort and never raises: unsupported idioms come back
as their original text.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, cast

from liquid_css_vars.core.filters import apply_filter
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.values import ExpressionValue, to_number, to_text

Bindings = dict[str, ExpressionValue]

SETTINGS_OBJECT = "settings"

_INDEX_ACCESS = re.compile(r"^([\w_]+)\[([^\]]+)\]$")
_DOTTED_ACCESS = re.compile(r"^([\w_]+)((?:\.[\w_]+)+)$")
_IDENTIFIER = re.compile(r"^[A-Za-z_][\w]*$")
_NUMERIC_LITERAL = re.compile(r"^-?\d+(\.\d+)?$")
_PLACEHOLDER = re.compile(r"""'?\[([^\]]+)\]'?""")

_KEYWORDS: dict[str, ExpressionValue] = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
}


def split_pipes(expr: str) -> list[str]:
    """Split an expression on ``|`` outside of quoted strings.

    A quote preceded by a backslash does not open or close a string.

    Examples:
        >>> split_pipes("'a|b' | append: 'c'")
        ["'a|b'", "append: 'c'"]
    """
    parts: list[str] = []
    current: list[str] = []
    quote_char: str | None = None

    for index, char in enumerate(expr):
        escaped = index > 0 and expr[index - 1] == "\\"
        if char in ("'", '"') and not escaped:
            if quote_char is None:
                quote_char = char
            elif char == quote_char:
                quote_char = None
            current.append(char)
        elif char == "|" and quote_char is None:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    tail = "".join(current)
    if tail:
        parts.append(tail.strip())
    return parts


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"')


def _lookup_attribute(value: Any, attributes: list[str]) -> tuple[bool, Any]:
    """Descend through mappings; report whether every attribute was found."""
    for attribute in attributes:
        if not isinstance(value, Mapping) or attribute not in value:
            return False, None
        value = cast(Mapping[str, Any], value)[attribute]
    return True, value


def _resolve_index(
    name: str,
    index_expr: str,
    bindings: Bindings,
    resolver: SettingsResolver,
) -> ExpressionValue:
    index = evaluate_expression(index_expr, bindings, resolver)

    if name == SETTINGS_OBJECT:
        setting = resolver.get_setting(to_text(index))
        return "" if setting is None else setting

    array = bindings.get(name)
    if not isinstance(array, list):
        return ""

    number = to_number(index)
    if math.isnan(number) or math.isinf(number):
        return None
    position = math.trunc(number)
    if 0 <= position < len(array):
        return cast(ExpressionValue, array[position])
    return None


def _resolve_dotted(
    text: str,
    name: str,
    path: str,
    bindings: Bindings,
    resolver: SettingsResolver,
) -> ExpressionValue:
    if name == SETTINGS_OBJECT:
        setting = resolver.get_setting(path)
        return "" if setting is None else setting

    found, value = _lookup_attribute(bindings.get(name), path.split("."))
    return cast(ExpressionValue, value) if found else text


def _substitute_placeholders(text: str, bindings: Bindings) -> str:
    """Replace ``[name]`` / ``'[name]'`` tokens with bound values."""
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1).strip("'\"")
        return to_text(bindings.get(name))

    return _PLACEHOLDER.sub(_replace, text)


def _resolve_base(text: str, bindings: Bindings, resolver: SettingsResolver) -> ExpressionValue:
    if _is_quoted(text):
        return text[1:-1]

    index_match = _INDEX_ACCESS.match(text)
    if index_match:
        return _resolve_index(index_match.group(1), index_match.group(2), bindings, resolver)

    dotted_match = _DOTTED_ACCESS.match(text)
    if dotted_match:
        return _resolve_dotted(
            text, dotted_match.group(1), dotted_match.group(2)[1:], bindings, resolver,
        )

    if _IDENTIFIER.match(text):
        if text in bindings:
            return bindings[text]
        if text in _KEYWORDS:
            return _KEYWORDS[text]
        return text

    if _NUMERIC_LITERAL.match(text):
        number = float(text)
        return int(number) if number.is_integer() and "." not in text else number

    return _substitute_placeholders(text, bindings)


def evaluate_expression(
    expr: str,
    bindings: Bindings,
    resolver: SettingsResolver,
) -> ExpressionValue:
    """Evaluate a Liquid expression with its filter chain.

    Args:
        expr: Expression text such as ``settings.radius | times: 2``.
        bindings: Variables visible to the expression.
        resolver: Setting lookup context for the current scan.

    Returns:
        The evaluated value; unresolvable input comes back as text.
    """
    parts = split_pipes(expr.strip())
    if not parts:
        return ""

    value = _resolve_base(parts[0], bindings, resolver)

    def _evaluate_argument(argument: str) -> ExpressionValue:
        return evaluate_expression(argument, bindings, resolver)

    for filter_text in parts[1:]:
        value = apply_filter(value, filter_text, _evaluate_argument)
    return value
