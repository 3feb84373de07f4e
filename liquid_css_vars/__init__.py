"""
Liquid CSS Variables

Extracts CSS custom properties from Shopify-style Liquid theme files,
resolving template variables, loops, filters and conditionals against the
theme's settings so the extracted values are the ones that would render.
"""

__version__ = "0.1.0"

from liquid_css_vars.core.scanner import CssVariableScanner, scan_sources

__all__ = [
    "CssVariableScanner",
    "scan_sources",
]
