"""Shared fixtures for the liquid-css-vars test suite.

Provides a composable ``make_theme_dir`` factory that lays out a minimal
theme project (``config/settings_data.json``, ``config/settings_schema.json``
and Liquid files) under ``tmp_path``, plus a ``resolver_factory`` for tests
that only need in-memory settings.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from theme_builders import (
    DEFAULT_CURRENT,
    DEFAULT_FILES,
    DEFAULT_SCHEMA,
    write_files,
    write_settings_data,
    write_settings_schema,
)

from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.settings_store import SettingsStore

# ---------------------------------------------------------------------------
# Theme projects
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_theme_dir(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture that builds a theme project under ``tmp_path``.

    Args (of the returned callable):
        files: Relative path -> content of Liquid files to create.
        current: ``current`` settings (defaults to DEFAULT_CURRENT).
        schema: Settings schema (defaults to DEFAULT_SCHEMA).
        with_settings: Write the config documents at all.

    Returns:
        The theme root directory.
    """

    def _factory(
        files: dict[str, str] | None = None,
        current: dict[str, Any] | None = None,
        schema: list[dict[str, Any]] | None = None,
        with_settings: bool = True,
    ) -> Path:
        root = tmp_path / "theme"
        root.mkdir(exist_ok=True)

        if with_settings:
            write_settings_data(root, current if current is not None else DEFAULT_CURRENT)
            write_settings_schema(root, schema if schema is not None else DEFAULT_SCHEMA)

        write_files(root, files if files is not None else DEFAULT_FILES)
        return root

    return _factory


@pytest.fixture()
def theme_dir(make_theme_dir: Callable[..., Path]) -> Path:
    """Theme project with default settings and the two default snippets."""
    return make_theme_dir()


# ---------------------------------------------------------------------------
# In-memory settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def resolver_factory() -> Callable[..., SettingsResolver]:
    """Build a SettingsResolver from in-memory settings."""

    def _factory(
        current: dict[str, Any] | None = None,
        schema_defaults: dict[str, Any] | None = None,
    ) -> SettingsResolver:
        store = SettingsStore(current=current or {}, schema_defaults=schema_defaults or {})
        return SettingsResolver(store)

    return _factory


@pytest.fixture()
def resolver(resolver_factory: Callable[..., SettingsResolver]) -> SettingsResolver:
    """Resolver over DEFAULT_CURRENT with page_width/radius schema defaults."""
    return resolver_factory(DEFAULT_CURRENT, {"page_width": 1200, "radius": 6})
