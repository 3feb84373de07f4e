"""Theme settings documents.

Two JSON documents feed setting lookups:

    config/settings_data.json    {"current": {...}} - the values in use.
                                 May start with a /* ... */ banner comment.
    config/settings_schema.json  [{"settings": [{"id": ..., "default": ...}]}]
                                 - flattened into id -> default.

Loading never aborts a scan: a document that cannot be read or parsed is
reported and treated as empty, so CSS-only variables are still extracted.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from liquid_css_vars.helpers.helpers_logging import print_warning

SETTINGS_DATA_FILE = Path("config") / "settings_data.json"
SETTINGS_SCHEMA_FILE = Path("config") / "settings_schema.json"

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")


class SettingsLoadError(Exception):
    """Raised when a settings document cannot be read or parsed."""


@dataclass(frozen=True)
class SettingsStore:
    """Immutable snapshot of both settings sources for one scan.

    Attributes:
        current: Values in use (may be nested mappings).
        schema_defaults: Flat id -> default from the settings schema.
    """

    current: Mapping[str, Any] = field(default_factory=dict)
    schema_defaults: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> SettingsStore:
        """Store used when no settings are available."""
        return cls()

    @property
    def color_schemes(self) -> Mapping[str, Any]:
        """Color schemes in declaration order (empty when undefined)."""
        schemes = self.current.get("color_schemes")
        if isinstance(schemes, Mapping):
            return cast(Mapping[str, Any], schemes)
        return {}

    def first_color_scheme(self) -> tuple[str, Mapping[str, Any]] | None:
        """Return ``(scheme_id, scheme)`` for the first declared scheme."""
        for scheme_id, scheme in self.color_schemes.items():
            if isinstance(scheme, Mapping):
                return scheme_id, cast(Mapping[str, Any], scheme)
            return scheme_id, {}
        return None


def strip_block_comments(text: str) -> str:
    """Remove ``/* ... */`` comments from a JSON-ish document."""
    return _BLOCK_COMMENT.sub("", text)


def _read_json(path: Path, strip_comments: bool) -> object:
    """Read and decode one JSON document.

    Raises:
        SettingsLoadError: If the file cannot be read or decoded.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SettingsLoadError(f"Cannot read {path}: {exc}") from exc

    if strip_comments:
        content = strip_block_comments(content)

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"Invalid JSON in {path}: {exc}") from exc


def parse_settings_data(data: object) -> dict[str, Any]:
    """Extract the ``current`` settings object from a settings_data document.

    When ``current`` names a preset, the preset's values are used.
    """
    if not isinstance(data, dict):
        return {}

    document = cast(dict[str, Any], data)
    current = document.get("current")
    if isinstance(current, str):
        presets = document.get("presets")
        if isinstance(presets, dict):
            current = cast(dict[str, Any], presets).get(current)

    if isinstance(current, dict):
        return cast(dict[str, Any], current)
    return {}


def parse_settings_schema(data: object) -> dict[str, Any]:
    """Flatten a settings_schema document into ``{id: default}``.

    Entries without a ``default`` key are skipped; an explicit ``null``
    default is kept.
    """
    defaults: dict[str, Any] = {}
    if not isinstance(data, list):
        return defaults

    for section in cast(list[object], data):
        if not isinstance(section, dict):
            continue
        settings = cast(dict[str, Any], section).get("settings")
        if not isinstance(settings, list):
            continue
        for setting in cast(list[object], settings):
            if not isinstance(setting, dict):
                continue
            entry = cast(dict[str, Any], setting)
            setting_id = entry.get("id")
            if setting_id and "default" in entry:
                defaults[str(setting_id)] = entry["default"]

    return defaults


def read_settings_data(path: Path) -> dict[str, Any]:
    """Load ``current`` values from a settings_data.json file.

    Raises:
        SettingsLoadError: If the file cannot be read or parsed.
    """
    return parse_settings_data(_read_json(path, strip_comments=True))


def read_settings_schema(path: Path) -> dict[str, Any]:
    """Load schema defaults from a settings_schema.json file.

    Raises:
        SettingsLoadError: If the file cannot be read or parsed.
    """
    return parse_settings_schema(_read_json(path, strip_comments=False))


def load_settings_store(project_root: Path) -> SettingsStore:
    """Build a SettingsStore from a theme project's config directory.

    Missing files are silently treated as empty; unreadable or invalid ones
    are reported and treated as empty.

    Args:
        project_root: Theme root containing ``config/``.

    Returns:
        Fresh store for one scan.
    """
    current: dict[str, Any] = {}
    defaults: dict[str, Any] = {}

    data_path = project_root / SETTINGS_DATA_FILE
    if data_path.exists():
        try:
            current = read_settings_data(data_path)
        except SettingsLoadError as exc:
            print_warning(str(exc))

    schema_path = project_root / SETTINGS_SCHEMA_FILE
    if schema_path.exists():
        try:
            defaults = read_settings_schema(schema_path)
        except SettingsLoadError as exc:
            print_warning(str(exc))

    return SettingsStore(current=current, schema_defaults=defaults)
