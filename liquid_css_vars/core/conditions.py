"""Condition evaluation for ``if`` / ``elsif`` / ``unless`` tags.

Two evaluators live here:

* ``evaluate_condition`` runs inside executed ``{% liquid %}`` code and sees
  the block's variable bindings.
* ``evaluate_setting_condition`` decides static ``{% if settings.x ... %}``
  regions of raw stylesheet text, where only settings are available.
"""

from __future__ import annotations

import math
import re

from liquid_css_vars.core.expressions import Bindings, evaluate_expression
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.values import (
    ExpressionValue,
    is_truthy,
    loose_equals,
    to_number,
    to_text,
)

_CONTAINS = " contains "
# First operator occurrence wins; operands containing '<' or '>' can misparse.
_COMPARISON = re.compile(r"(.+?)\s*(>=|<=|>|<|==)\s*(.+)", re.DOTALL)

_SETTING_COMPARISON = re.compile(
    r"""settings\.([\w.]+)\s*(==|!=|<=|>=|<|>)\s*(?:(['"])(.*?)\3|(\S+))""",
)
_SETTING_REFERENCE = re.compile(r"settings\.([\w.]+)")
_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$")


def compare_values(left: ExpressionValue, operator: str, right: ExpressionValue) -> bool:
    """Apply a comparison operator with loose template semantics.

    ``==`` and ``!=`` use loose equality; ordering operators compare the
    numeric coercions of both sides (NaN never compares true).
    """
    if operator == "==":
        return loose_equals(left, right)
    if operator == "!=":
        return not loose_equals(left, right)

    left_number = to_number(left)
    right_number = to_number(right)
    if math.isnan(left_number) or math.isnan(right_number):
        return False
    if operator == ">=":
        return left_number >= right_number
    if operator == "<=":
        return left_number <= right_number
    if operator == ">":
        return left_number > right_number
    if operator == "<":
        return left_number < right_number
    return False


def evaluate_condition(
    condition: str,
    bindings: Bindings,
    resolver: SettingsResolver,
) -> bool:
    """Evaluate a runtime condition against block bindings.

    Supports ``a contains b``, one comparison (``>= <= > < ==``) and plain
    truthiness.
    """
    if _CONTAINS in condition:
        parts = condition.split(_CONTAINS)
        left = to_text(evaluate_expression(parts[0].strip(), bindings, resolver))
        right = to_text(evaluate_expression(parts[1].strip(), bindings, resolver))
        return right in left

    match = _COMPARISON.search(condition)
    if match:
        left_value = evaluate_expression(match.group(1).strip(), bindings, resolver)
        right_value = evaluate_expression(match.group(3).strip(), bindings, resolver)
        return compare_values(left_value, match.group(2), right_value)

    return is_truthy(evaluate_expression(condition, bindings, resolver))


def _literal(quote: str | None, raw: str) -> ExpressionValue:
    """Interpret the right-hand side of a static setting comparison."""
    if quote:
        return raw
    if raw in ("true", "false"):
        return raw == "true"
    if _NUMBER.match(raw):
        return float(raw)
    return raw


def evaluate_setting_condition(condition: str, resolver: SettingsResolver) -> bool:
    """Evaluate the condition of a static ``{% if %}`` region.

    Handles ``settings.path OP value`` and bare ``settings.path`` presence
    checks (false, absent and empty string are falsy). Anything that does
    not reference a setting is false.
    """
    condition = condition.strip()

    match = _SETTING_COMPARISON.search(condition)
    if match:
        setting = resolver.get_setting(match.group(1))
        quote = match.group(3)
        raw = match.group(4) if quote else match.group(5)
        return compare_values(setting, match.group(2), _literal(quote, raw))

    reference = _SETTING_REFERENCE.search(condition)
    if reference:
        setting = resolver.get_setting(reference.group(1))
        return setting is not None and setting is not False and setting != ""

    return False
