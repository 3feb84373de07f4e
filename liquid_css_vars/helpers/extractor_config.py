"""Extractor configuration.

Loaded from ``liquid-css-vars.yaml`` in the project root. Keys may be
written in camelCase (the editor setting names) or snake_case:

    includePatterns:
      - "**/*.liquid"
    excludePatterns:
      - "**/node_modules/**"
    remToPxConversion: true
    baseFontSize: 16
    onlyRoot: true

Invalid values are reported and replaced by their defaults; a missing file
simply yields the default configuration.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, cast

from liquid_css_vars.helpers.helpers_logging import print_warning
from liquid_css_vars.helpers.yaml_loader import ConfigFileError, load_yaml_file

CONFIG_FILE_NAME = "liquid-css-vars.yaml"

DEFAULT_INCLUDE_PATTERNS = (
    "**/*.liquid",
    "**/snippets/theme-styles-*.liquid",
    "**/snippets/color-schemes.liquid",
)
DEFAULT_EXCLUDE_PATTERNS = ("**/node_modules/**",)
DEFAULT_BASE_FONT_SIZE = 16.0

# yaml key -> (dataclass field, expected kind)
_KEYS: dict[str, tuple[str, str]] = {
    "includePatterns": ("include_patterns", "patterns"),
    "include_patterns": ("include_patterns", "patterns"),
    "excludePatterns": ("exclude_patterns", "patterns"),
    "exclude_patterns": ("exclude_patterns", "patterns"),
    "remToPxConversion": ("rem_to_px_conversion", "bool"),
    "rem_to_px_conversion": ("rem_to_px_conversion", "bool"),
    "baseFontSize": ("base_font_size", "number"),
    "base_font_size": ("base_font_size", "number"),
    "onlyRoot": ("only_root", "bool"),
    "only_root": ("only_root", "bool"),
}


@dataclass(frozen=True)
class ExtractorConfig:
    """Immutable extractor options.

    Attributes:
        include_patterns: Globs selecting candidate source files.
        exclude_patterns: Globs rejecting files even when included.
        rem_to_px_conversion: Whether descriptions add rem/px hints.
        base_font_size: Root font size used by rem/px conversion.
        only_root: Restrict extraction to ``:root`` rules (skip class rules).
    """

    include_patterns: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    rem_to_px_conversion: bool = True
    base_font_size: float = DEFAULT_BASE_FONT_SIZE
    only_root: bool = True
    source: Path | None = field(default=None, compare=False)

    def with_overrides(self, **overrides: Any) -> "ExtractorConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in ("include_patterns", "exclude_patterns"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes) if changes else self


def _coerce(key: str, kind: str, raw: object) -> object | None:
    """Validate one raw YAML value; return None when it must be ignored."""
    if kind == "patterns":
        if isinstance(raw, str):
            return (raw,)
        if isinstance(raw, list) and all(isinstance(p, str) for p in cast(list[object], raw)):
            return tuple(cast(list[str], raw))
        print_warning(f"Config '{key}' must be a list of glob strings, using default")
        return None

    if kind == "bool":
        if isinstance(raw, bool):
            return raw
        print_warning(f"Config '{key}' must be true or false, using default")
        return None

    # number
    if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw > 0:
        return float(raw)
    print_warning(f"Config '{key}' must be a positive number, using default")
    return None


def parse_config(data: dict[str, Any], source: Path | None = None) -> ExtractorConfig:
    """Build an ExtractorConfig from a raw mapping.

    Args:
        data: Raw configuration mapping (camelCase or snake_case keys).
        source: File the mapping was read from, if any.

    Returns:
        Validated configuration; unknown keys are reported and ignored.
    """
    values: dict[str, object] = {}
    for key, raw in data.items():
        known = _KEYS.get(str(key))
        if known is None:
            print_warning(f"Unknown config key '{key}' ignored")
            continue
        field_name, kind = known
        value = _coerce(str(key), kind, raw)
        if value is not None:
            values[field_name] = value

    return ExtractorConfig(source=source, **cast(dict[str, Any], values))


def load_config(project_root: Path, config_path: Path | None = None) -> ExtractorConfig:
    """Load the extractor configuration for a project.

    Args:
        project_root: Directory holding ``liquid-css-vars.yaml``.
        config_path: Explicit config file, overriding the default location.

    Returns:
        Parsed configuration, or defaults when no usable file exists.
    """
    path = config_path if config_path is not None else project_root / CONFIG_FILE_NAME
    if not path.exists():
        if config_path is not None:
            print_warning(f"Config file not found: {path}, using defaults")
        return ExtractorConfig()

    try:
        data = load_yaml_file(path)
    except (ConfigFileError, OSError) as exc:
        print_warning(f"{exc}; using default configuration")
        return ExtractorConfig()

    return parse_config(data, source=path)
