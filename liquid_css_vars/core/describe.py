"""Human-readable description of a registered variable."""

from __future__ import annotations

from liquid_css_vars.core.registry import CssVariableEntry
from liquid_css_vars.core.units import DEFAULT_BASE_FONT_SIZE, conversion_hint


def describe_variable(
    entry: CssVariableEntry,
    rem_to_px_conversion: bool = True,
    base_font_size: float = DEFAULT_BASE_FONT_SIZE,
) -> list[str]:
    """Describe a variable the way an editor hover would.

    Args:
        entry: Registry entry to describe.
        rem_to_px_conversion: Add a rem/px conversion line when applicable.
        base_font_size: Root font size for the conversion.

    Returns:
        Lines: name, value, source, media variants, conversion.
    """
    lines = [
        f"CSS Variable: {entry.name}",
        f"Value: {entry.value}",
        f"Source: {entry.file} ({entry.source_file})",
    ]

    if entry.media:
        lines.append("Media Query Variants:")
        lines.extend(f"  @media {variant.query}: {variant.value}" for variant in entry.media)

    if rem_to_px_conversion:
        hint = conversion_hint(entry.value.strip(), base_font_size)
        if hint:
            target = "px" if hint.endswith("px") else "rem"
            lines.append(f"Convert to {target}: {hint}")

    return lines
