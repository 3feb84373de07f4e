"""Hex color decoding for ``.rgb`` / ``.rgba`` color accessors."""

from __future__ import annotations

import re
from typing import NamedTuple

from liquid_css_vars.core.values import format_number

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_SHORT_HEX_LENGTH = 3
_HEX_LENGTH = 6
_HEX_ALPHA_LENGTH = 8


class Rgba(NamedTuple):
    """Decoded color channels (0-255) plus alpha (0-1)."""

    r: int
    g: int
    b: int
    a: float

    def as_rgba(self) -> str:
        """Render as ``r, g, b, a`` (the form used inside ``rgba(...)``)."""
        return f"{self.r}, {self.g}, {self.b}, {format_number(self.a)}"

    def as_rgb(self) -> str:
        """Render as space-separated ``r g b`` channels."""
        return f"{self.r} {self.g} {self.b}"


def hex_to_rgba(hex_color: object, alpha: float = 1) -> Rgba | None:
    """Decode a 3-, 6- or 8-digit hex color.

    8-digit colors carry their own alpha byte; otherwise ``alpha`` is used.

    Args:
        hex_color: Color such as ``#fff``, ``#121212`` or ``#12121280``.
        alpha: Alpha for colors without an alpha byte.

    Returns:
        Decoded channels, or None for anything that is not a valid hex color.

    Examples:
        >>> hex_to_rgba('#fff')
        Rgba(r=255, g=255, b=255, a=1)
        >>> hex_to_rgba('#12345') is None
        True
    """
    if not isinstance(hex_color, str) or not hex_color:
        return None

    digits = hex_color.replace("#", "", 1)
    if len(digits) == _SHORT_HEX_LENGTH:
        digits = "".join(char * 2 for char in digits)

    if len(digits) not in (_HEX_LENGTH, _HEX_ALPHA_LENGTH):
        return None
    if not _HEX_DIGITS.fullmatch(digits):
        return None

    red = int(digits[0:2], 16)
    green = int(digits[2:4], 16)
    blue = int(digits[4:6], 16)
    if len(digits) == _HEX_ALPHA_LENGTH:
        alpha = int(digits[6:8], 16) / 255

    return Rgba(red, green, blue, alpha)
