"""Tests for rem/px conversion and variable descriptions."""

from __future__ import annotations

import pytest

from liquid_css_vars.core.describe import describe_variable
from liquid_css_vars.core.registry import CssVariableEntry, MediaVariant
from liquid_css_vars.core.units import conversion_hint, px_to_rem, rem_to_px


class TestRemToPx:
    """rem -> px, two decimals."""

    @pytest.mark.parametrize(
        ("value", "base", "expected"),
        [
            ("1.5rem", 16, "24"),
            (0.875, 16, "14"),
            ("1.3333rem", 16, "21.33"),
            ("2", 10, "20"),
        ],
    )
    def test_converts(self, value: object, base: float, expected: str) -> None:
        assert rem_to_px(value, base) == expected  # type: ignore[arg-type]

    def test_non_numeric(self) -> None:
        assert rem_to_px("auto") is None


class TestPxToRem:
    """px -> rem, four decimals."""

    @pytest.mark.parametrize(
        ("value", "base", "expected"),
        [
            ("12px", 16, "0.75"),
            (1, 16, "0.0625"),
            ("5", 3, "1.6667"),
            ("0", 16, "0"),
        ],
    )
    def test_converts(self, value: object, base: float, expected: str) -> None:
        assert px_to_rem(value, base) == expected  # type: ignore[arg-type]

    def test_zero_base(self) -> None:
        assert px_to_rem("12px", 0) is None

    def test_non_numeric(self) -> None:
        assert px_to_rem("none") is None

    @pytest.mark.parametrize("base", [16, 18, 10])
    @pytest.mark.parametrize("px", [1, 12, 14, 16, 18, 24, 37, 100])
    def test_round_trip(self, px: int, base: float) -> None:
        rem = px_to_rem(px, base)
        assert rem is not None
        back = rem_to_px(rem, base)
        assert back is not None
        assert float(back) == pytest.approx(px, abs=0.01)


class TestConversionHint:
    """First length found in a value."""

    def test_rem_value(self) -> None:
        assert conversion_hint("1.5rem") == "24px"

    def test_px_value(self) -> None:
        assert conversion_hint("12px") == "0.75rem"

    def test_rem_preferred(self) -> None:
        assert conversion_hint("calc(4px + 1rem)") == "16px"

    def test_custom_base(self) -> None:
        assert conversion_hint("2rem", 10) == "20px"

    def test_no_length(self) -> None:
        assert conversion_hint("255, 255, 255, 1") is None


class TestDescribeVariable:
    """Hover-style descriptions."""

    def test_full_description(self) -> None:
        entry = CssVariableEntry(
            "--spacing",
            "1rem",
            "/theme/snippets/vars.liquid",
            (MediaVariant("(min-width: 750px)", "2rem"),),
        )
        assert describe_variable(entry) == [
            "CSS Variable: --spacing",
            "Value: 1rem",
            "Source: vars.liquid (/theme/snippets/vars.liquid)",
            "Media Query Variants:",
            "  @media (min-width: 750px): 2rem",
            "Convert to px: 16px",
        ]

    def test_px_hint(self) -> None:
        entry = CssVariableEntry("--r", "12px", "a.liquid")
        assert describe_variable(entry)[-1] == "Convert to rem: 0.75rem"

    def test_conversion_disabled(self) -> None:
        entry = CssVariableEntry("--r", "12px", "a.liquid")
        lines = describe_variable(entry, rem_to_px_conversion=False)
        assert not any(line.startswith("Convert") for line in lines)

    def test_no_hint_for_colors(self) -> None:
        entry = CssVariableEntry("--bg", "255, 255, 255, 1", "a.liquid")
        assert len(describe_variable(entry)) == 3
