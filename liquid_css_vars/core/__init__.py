"""Template evaluation and CSS variable extraction."""

from liquid_css_vars.core.expressions import evaluate_expression
from liquid_css_vars.core.registry import CssVariableEntry, MediaVariant, VariableRegistry
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.scanner import CssVariableScanner, scan_sources
from liquid_css_vars.core.settings_store import SettingsStore
from liquid_css_vars.core.transform import liquid_to_css
from liquid_css_vars.core.units import px_to_rem, rem_to_px

__all__ = [
    "CssVariableEntry",
    "CssVariableScanner",
    "MediaVariant",
    "SettingsResolver",
    "SettingsStore",
    "VariableRegistry",
    "evaluate_expression",
    "liquid_to_css",
    "px_to_rem",
    "rem_to_px",
    "scan_sources",
]
