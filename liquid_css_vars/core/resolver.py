"""Setting resolution for one scan.

A ``SettingsResolver`` wraps an immutable SettingsStore together with the
memo caches that are only valid for that store (setting lookups and hex
color decoding). A new resolver is created for every scan, so a settings
change can never be served from a stale cache.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from liquid_css_vars.core.colors import Rgba, hex_to_rgba
from liquid_css_vars.core.settings_store import SettingsStore
from liquid_css_vars.core.values import (
    OBJECT_PLACEHOLDER,
    ExpressionValue,
    format_number,
)

_RGBA_ACCESSOR = "rgba"
_RGB_ACCESSOR = "rgb"
_MISSING = object()


def resolve_path(data: Mapping[str, Any], dotted_path: str) -> Any:
    """Walk a dotted path through nested mappings.

    Returns None as soon as a segment is missing or a non-mapping is reached
    before the path is exhausted.

    Examples:
        >>> resolve_path({'a': {'b': 1}}, 'a.b')
        1
        >>> resolve_path({'a': 'text'}, 'a.b') is None
        True
    """
    value: Any = data
    for segment in dotted_path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = cast(Mapping[str, Any], value).get(segment)
        if value is None:
            return None
    return value


def format_value(value: Any) -> str:
    """Render a setting value for stylesheet text; never raises."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    return OBJECT_PLACEHOLDER


class SettingsResolver:
    """Per-scan lookup context over a SettingsStore."""

    def __init__(self, store: SettingsStore | None = None) -> None:
        self.store = store if store is not None else SettingsStore.empty()
        self._setting_cache: dict[str, Any] = {}
        self._color_cache: dict[tuple[str, float], Rgba | None] = {}

    def get_setting(self, key: str) -> ExpressionValue:
        """Look a setting up in current values, then in schema defaults.

        Dotted keys descend into nested current values; schema defaults are
        matched by the full key only.
        """
        cached = self._setting_cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cast(ExpressionValue, cached)

        value = resolve_path(self.store.current, key)
        if value is None:
            value = self.store.schema_defaults.get(key)

        self._setting_cache[key] = value
        return cast(ExpressionValue, value)

    def hex_to_rgba(self, hex_color: str, alpha: float = 1) -> Rgba | None:
        """Memoized hex color decoding."""
        cache_key = (hex_color, alpha)
        if cache_key not in self._color_cache:
            self._color_cache[cache_key] = hex_to_rgba(hex_color, alpha)
        return self._color_cache[cache_key]

    # ------------------------------------------------------------------
    # Template substitution helpers
    # ------------------------------------------------------------------

    def _format_color(self, value: str, accessor: str) -> str:
        rgba = self.hex_to_rgba(value)
        if rgba is None:
            return value
        if accessor == _RGB_ACCESSOR:
            return rgba.as_rgb()
        return rgba.as_rgba()

    def render_setting(self, path: str) -> str:
        """Render ``{{ settings.<path> }}``.

        A trailing ``.rgb`` / ``.rgba`` accessor converts a hex color;
        unresolvable paths render as ``[path]`` so they stay visible.
        """
        segments = path.split(".")
        accessor = segments[-1]
        if len(segments) > 1 and accessor in (_RGB_ACCESSOR, _RGBA_ACCESSOR):
            base = self.get_setting(".".join(segments[:-1]))
            if isinstance(base, str) and base.startswith("#"):
                return self._format_color(base, accessor)

        value = self.get_setting(path)
        if value is None:
            return f"[{path}]"
        return format_value(value)

    def first_scheme_id(self) -> str | None:
        """Identifier of the first declared color scheme."""
        first = self.store.first_color_scheme()
        return first[0] if first else None

    def render_scheme_setting(self, path: str) -> str:
        """Render ``{{ scheme.settings.<path> }}`` from the first color scheme.

        Hex colors render as ``r, g, b, a`` unless the path ends in ``.rgb``.
        """
        first = self.store.first_color_scheme()
        settings = first[1].get("settings") if first else None
        if not isinstance(settings, Mapping):
            return f"[scheme.{path}]"

        segments = path.split(".")
        value: Any = settings
        for segment in segments:
            if not isinstance(value, Mapping):
                break
            value = cast(Mapping[str, Any], value).get(segment)

        if isinstance(value, str) and value.startswith("#"):
            return self._format_color(value, segments[-1])
        if value is None:
            return f"[scheme.{path}]"
        return format_value(value)
