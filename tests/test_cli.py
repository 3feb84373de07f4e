"""Tests for the liquid-css-vars command line interface."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import click
import pytest
import yaml
from click.testing import CliRunner, Result

from liquid_css_vars.cli import commands


def _invoke(*args: str) -> Result:
    runner = CliRunner(env={"NO_COLOR": "1"})
    return runner.invoke(commands._click_cli, list(args))


class TestScanCommand:
    """``scan`` output formats and options."""

    def test_text_output(self, theme_dir: Path) -> None:
        result = _invoke("scan", str(theme_dir))

        assert result.exit_code == 0, result.output
        assert "✓ Found 6 CSS variables from 2 Liquid file(s)" in result.output
        assert "--button-radius: 14px" in result.output
        assert "@media screen and (min-width: 750px): 2rem" in result.output

    def test_json_output(self, theme_dir: Path) -> None:
        result = _invoke("scan", str(theme_dir), "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["--page-width"]["value"] == "1200px"
        assert data["--page-width"]["file"] == "theme-styles-variables.liquid"
        assert data["--spacing"]["media"] == [
            {"query": "screen and (min-width: 750px)", "value": "2rem"},
        ]

    def test_yaml_output(self, theme_dir: Path) -> None:
        result = _invoke("scan", str(theme_dir), "--format", "yaml")

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(result.output)
        assert list(data)[0] == "--color-background"
        assert data["--color-foreground"]["value"] == "18 18 18"

    def test_include_override(self, theme_dir: Path) -> None:
        result = _invoke(
            "scan", str(theme_dir),
            "--include", "snippets/color-schemes.liquid",
            "--format", "json",
        )

        assert result.exit_code == 0, result.output
        assert sorted(json.loads(result.output)) == ["--color-background", "--color-foreground"]

    def test_exclude_override(self, theme_dir: Path) -> None:
        result = _invoke("scan", str(theme_dir), "--exclude", "**/color-*.liquid", "--format", "json")

        assert result.exit_code == 0, result.output
        assert "--color-background" not in json.loads(result.output)

    def test_all_selectors(self, make_theme_dir: Callable[..., Path]) -> None:
        root = make_theme_dir(files={
            "a.liquid": "{% style %}:root { --a: 1; }\n.btn {\n  --pad: 4px;\n}{% endstyle %}",
        })

        plain = _invoke("scan", str(root), "--format", "json")
        everything = _invoke("scan", str(root), "--all-selectors", "--format", "json")

        assert "--pad" not in json.loads(plain.output)
        assert json.loads(everything.output)["--pad"]["value"] == "4px"

    def test_config_file(self, theme_dir: Path) -> None:
        config = theme_dir / "liquid-css-vars.yaml"
        config.write_text(
            yaml.dump({"includePatterns": ["**/theme-styles-*.liquid"]}),
            encoding="utf-8",
        )
        result = _invoke("scan", str(theme_dir), "--format", "json")

        assert result.exit_code == 0, result.output
        assert "--color-background" not in json.loads(result.output)
        assert "--button-radius" in json.loads(result.output)

    def test_missing_root(self, tmp_path: Path) -> None:
        result = _invoke("scan", str(tmp_path / "nope"))
        assert result.exit_code == 2


class TestShowCommand:
    """``show`` descriptions."""

    def test_describes_variable(self, theme_dir: Path) -> None:
        result = _invoke("show", "spacing", str(theme_dir))

        assert result.exit_code == 0, result.output
        assert "CSS Variable: --spacing" in result.output
        assert "Value: 1rem" in result.output
        assert "Source: theme-styles-variables.liquid" in result.output
        assert "  @media screen and (min-width: 750px): 2rem" in result.output
        assert "Convert to px: 16px" in result.output

    def test_name_with_dashes_after_separator(self, theme_dir: Path) -> None:
        result = _invoke("show", "--", "--button-radius", str(theme_dir))

        assert result.exit_code == 0, result.output
        assert "Value: 14px" in result.output

    def test_rem_conversion_disabled_by_config(self, theme_dir: Path) -> None:
        (theme_dir / "liquid-css-vars.yaml").write_text("remToPxConversion: false\n", encoding="utf-8")
        result = _invoke("show", "spacing", str(theme_dir))

        assert result.exit_code == 0, result.output
        assert "Convert to" not in result.output

    def test_unknown_variable(self, theme_dir: Path) -> None:
        result = _invoke("show", "nope", str(theme_dir))

        assert result.exit_code == 1
        assert "CSS variable 'nope' not found" in result.output


class TestConvertCommand:
    """``convert`` hints."""

    def test_rem_to_px(self) -> None:
        result = _invoke("convert", "1.5rem")
        assert result.exit_code == 0
        assert result.output.strip() == "24px"

    def test_px_to_rem_with_base(self) -> None:
        result = _invoke("convert", "12px", "--base", "12")
        assert result.output.strip() == "1rem"

    def test_no_length(self) -> None:
        result = _invoke("convert", "auto")
        assert result.exit_code == 1
        assert "No rem or px length found" in result.output

    def test_invalid_base(self) -> None:
        result = _invoke("convert", "1rem", "--base", "0")
        assert result.exit_code == 2


class TestCommandsMain:
    """Top-level ``main()`` exit codes."""

    def test_success_returns_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert commands.main(["convert", "1rem"]) == 0
        assert "16px" in capsys.readouterr().out

    def test_click_exception_exit_code(
        self,
        theme_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert commands.main(["show", "nope", str(theme_dir)]) == 1
        assert "Error: CSS variable 'nope' not found" in capsys.readouterr().err

    def test_abort_returns_130(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(commands._click_cli, "main", side_effect=click.Abort()):
            result = commands.main(["scan"])

        assert result == 130
        assert "Cancelled by user" in capsys.readouterr().out

    def test_reads_sys_argv(self) -> None:
        with patch("sys.argv", ["liquid-css-vars", "convert", "16px"]):
            assert commands.main() == 0
