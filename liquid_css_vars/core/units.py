"""rem <-> px conversion helpers used when presenting variable values."""

from __future__ import annotations

import math
import re

from liquid_css_vars.core.values import ExpressionValue, to_number

DEFAULT_BASE_FONT_SIZE = 16.0

_REM_VALUE = re.compile(r"([\d.]+)\s*rem")
_PX_VALUE = re.compile(r"([\d.]+)\s*px")


def _trim(number: float, decimals: int) -> str:
    text = f"{number:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def rem_to_px(value: ExpressionValue, base_font_size: float = DEFAULT_BASE_FONT_SIZE) -> str | None:
    """Convert a rem amount to px (2 decimals, trailing zeros trimmed).

    Examples:
        >>> rem_to_px('1.5rem')
        '24'
        >>> rem_to_px('auto') is None
        True
    """
    number = to_number(value)
    if math.isnan(number):
        return None
    return _trim(number * base_font_size, 2)


def px_to_rem(value: ExpressionValue, base_font_size: float = DEFAULT_BASE_FONT_SIZE) -> str | None:
    """Convert a px amount to rem (4 decimals, trailing zeros trimmed).

    Examples:
        >>> px_to_rem('12px')
        '0.75'
    """
    number = to_number(value)
    if math.isnan(number) or base_font_size == 0:
        return None
    return _trim(number / base_font_size, 4)


def conversion_hint(value: str, base_font_size: float = DEFAULT_BASE_FONT_SIZE) -> str | None:
    """Convert the first rem (or, failing that, px) length found in a value.

    Returns:
        ``"24px"`` for a rem value, ``"0.75rem"`` for a px value, else None.
    """
    rem_match = _REM_VALUE.search(value)
    if rem_match:
        px = rem_to_px(rem_match.group(1), base_font_size)
        return f"{px}px" if px else None

    px_match = _PX_VALUE.search(value)
    if px_match:
        rem = px_to_rem(px_match.group(1), base_font_size)
        return f"{rem}rem" if rem else None
    return None
