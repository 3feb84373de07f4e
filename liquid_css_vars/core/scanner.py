"""Project scanning.

``scan_sources`` is the pure extraction entry point: sources and settings
in, frozen registry out. ``CssVariableScanner`` adds the project plumbing
(settings documents, file discovery, reading) and keeps the latest result.

Every scan builds a new SettingsResolver (fresh memo caches) and a new
registry; the scanner then publishes both in a single ``ScanState``
assignment, so readers never see a half-built registry.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from liquid_css_vars.core.extractor import extract_css_variables
from liquid_css_vars.core.registry import CssVariableEntry, RegistryBuilder, VariableRegistry
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.settings_store import SettingsStore, load_settings_store
from liquid_css_vars.helpers.extractor_config import ExtractorConfig
from liquid_css_vars.helpers.helpers_logging import print_warning
from liquid_css_vars.helpers.helpers_pattern_matcher import discover_files


@dataclass(frozen=True)
class ScanState:
    """Result of one scan, published as a unit."""

    registry: VariableRegistry = field(default_factory=VariableRegistry)
    store: SettingsStore = field(default_factory=SettingsStore.empty)


def scan_sources(
    sources: Iterable[tuple[str | Path, str]],
    store: SettingsStore | None = None,
    only_root: bool = True,
) -> VariableRegistry:
    """Extract CSS variables from in-memory sources.

    Args:
        sources: ``(path, text)`` pairs, processed in the given order.
        store: Settings for template resolution (empty when None).
        only_root: Skip class rules when True.

    Returns:
        Frozen registry of everything found.
    """
    resolver = SettingsResolver(store)
    builder = RegistryBuilder()
    for path, text in sources:
        extract_css_variables(text, str(path), resolver, builder, only_root=only_root)
    return builder.freeze()


def read_sources(paths: Iterable[Path]) -> list[tuple[Path, str]]:
    """Read files as UTF-8; unreadable files are reported and skipped."""
    sources: list[tuple[Path, str]] = []
    for path in paths:
        try:
            sources.append((path, path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as exc:
            print_warning(f"Error reading file {path}: {exc}")
    return sources


class CssVariableScanner:
    """Keeps the CSS variable registry of one theme project up to date."""

    def __init__(self, project_root: Path, config: ExtractorConfig | None = None) -> None:
        self.project_root = project_root
        self.config = config if config is not None else ExtractorConfig()
        self._state = ScanState()

    @property
    def registry(self) -> VariableRegistry:
        return self._state.registry

    @property
    def store(self) -> SettingsStore:
        return self._state.store

    def get(self, name: str) -> CssVariableEntry | None:
        """Look up a variable by name (with or without the leading ``--``)."""
        if not name.startswith("--"):
            name = f"--{name}"
        return self._state.registry.get(name)

    def source_files(self) -> list[Path]:
        """Files matched by the include/exclude patterns."""
        return discover_files(
            self.project_root,
            self.config.include_patterns,
            self.config.exclude_patterns,
        )

    def rescan(self) -> int:
        """Rebuild the registry from disk.

        Settings documents are reloaded, so a changed settings file is
        reflected immediately.

        Returns:
            Number of variables found.
        """
        store = load_settings_store(self.project_root)
        registry = scan_sources(
            read_sources(self.source_files()),
            store,
            only_root=self.config.only_root,
        )
        self._state = ScanState(registry, store)
        return len(registry)

    def clear(self) -> None:
        """Forget the current registry and settings."""
        self._state = ScanState()
