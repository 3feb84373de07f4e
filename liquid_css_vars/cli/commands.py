#!/usr/bin/env python3
"""liquid-css-vars CLI - Main Entry Point.

Usage:
    liquid-css-vars <command> [options]

Commands:
    scan      Scan a theme and list every CSS variable found
    show      Describe one CSS variable (value, source, media variants)
    convert   Convert a rem value to px or a px value to rem

Examples:
    liquid-css-vars scan ./my-theme
    liquid-css-vars scan ./my-theme --all-selectors --format yaml
    liquid-css-vars show color-background ./my-theme
    liquid-css-vars convert 1.5rem --base 16
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml

from liquid_css_vars.core.describe import describe_variable
from liquid_css_vars.core.scanner import CssVariableScanner
from liquid_css_vars.core.units import conversion_hint
from liquid_css_vars.helpers.extractor_config import ExtractorConfig, load_config
from liquid_css_vars.helpers.helpers_logging import (
    print_detail,
    print_header,
    print_info,
    print_success,
)

_EXIT_ABORTED = 130
_OUTPUT_FORMATS = ("text", "json", "yaml")

_ROOT_ARGUMENT = click.argument(
    "root",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: <root>/liquid-css-vars.yaml)",
)


def _build_scanner(
    root: Path,
    config_path: Path | None,
    **overrides: object,
) -> CssVariableScanner:
    """Load configuration, apply CLI overrides and return a scanner."""
    config: ExtractorConfig = load_config(root, config_path).with_overrides(**overrides)
    return CssVariableScanner(root, config)


def _print_registry(scanner: CssVariableScanner, output_format: str) -> None:
    registry = scanner.registry

    if output_format == "json":
        click.echo(json.dumps(registry.to_dict(), indent=2, ensure_ascii=False))
        return
    if output_format == "yaml":
        click.echo(yaml.dump(
            registry.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            indent=2,
            allow_unicode=True,
        ), nl=False)
        return

    files = registry.source_files()
    print_success(f"Found {len(registry)} CSS variables from {len(files)} Liquid file(s)")
    for name, entry in registry.items():
        print_info(f"{name}: {entry.value}")
        print_detail(f"    {entry.file}")
        for variant in entry.media:
            print_detail(f"    @media {variant.query}: {variant.value}")


@click.group(invoke_without_command=True)
@click.version_option(package_name="liquid-css-vars")
@click.pass_context
def _click_cli(ctx: click.Context) -> int:
    """Extract CSS custom properties from Liquid theme files."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
    return 0


@_click_cli.command(name="scan", help="Scan a theme and list its CSS variables")
@_ROOT_ARGUMENT
@_CONFIG_OPTION
@click.option("--include", "include_patterns", multiple=True,
              help="Include glob (repeatable, replaces configured patterns)")
@click.option("--exclude", "exclude_patterns", multiple=True,
              help="Exclude glob (repeatable, replaces configured patterns)")
@click.option("--all-selectors", is_flag=True,
              help="Also extract variables declared in class rules")
@click.option("--format", "output_format", type=click.Choice(_OUTPUT_FORMATS),
              default="text", show_default=True, help="Output format")
def scan_cmd(
    root: Path,
    config_path: Path | None,
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    all_selectors: bool,
    output_format: str,
) -> int:
    scanner = _build_scanner(
        root,
        config_path,
        include_patterns=include_patterns or None,
        exclude_patterns=exclude_patterns or None,
        only_root=False if all_selectors else None,
    )
    scanner.rescan()
    _print_registry(scanner, output_format)
    return 0


@_click_cli.command(name="show", help="Describe one CSS variable")
@click.argument("name")
@_ROOT_ARGUMENT
@_CONFIG_OPTION
def show_cmd(name: str, root: Path, config_path: Path | None) -> int:
    scanner = _build_scanner(root, config_path)
    scanner.rescan()

    entry = scanner.get(name)
    if entry is None:
        raise click.ClickException(f"CSS variable '{name}' not found in {root}")

    lines = describe_variable(
        entry,
        rem_to_px_conversion=scanner.config.rem_to_px_conversion,
        base_font_size=scanner.config.base_font_size,
    )
    print_header(lines[0])
    for line in lines[1:]:
        print_info(line)
    return 0


@_click_cli.command(name="convert", help="Convert between rem and px")
@click.argument("value")
@click.option("--base", "base_font_size", type=float, default=16.0, show_default=True,
              help="Root font size in px")
def convert_cmd(value: str, base_font_size: float) -> int:
    if base_font_size <= 0:
        raise click.BadParameter("must be positive", param_hint="--base")

    hint = conversion_hint(value, base_font_size)
    if hint is None:
        raise click.ClickException(f"No rem or px length found in '{value}'")
    click.echo(hint)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    try:
        result = _click_cli.main(
            args=args,
            prog_name="liquid-css-vars",
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return _EXIT_ABORTED
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return 0 if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
