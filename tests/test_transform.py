"""Tests for the template-to-stylesheet stages."""

from __future__ import annotations

from collections.abc import Callable

from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.transform import (
    BARE_OUTPUT_FALLBACK,
    STAGES,
    expand_first_color_scheme,
    keep_then_branches,
    liquid_to_css,
    run_liquid_blocks,
    strip_assign_tags,
    strip_leftover_tags,
    substitute_bare_outputs,
    substitute_scheme_settings,
    substitute_settings,
)


class TestStageOrder:
    """The stage list is explicit and ordered."""

    def test_stage_names(self) -> None:
        assert [name for name, _stage in STAGES] == [
            "liquid_blocks",
            "color_scheme_loop",
            "assign_tags",
            "static_conditionals",
            "optimistic_conditionals",
            "scheme_settings",
            "settings",
            "bare_outputs",
            "leftover_tags",
        ]


class TestLiquidBlocks:
    """``{% liquid %}`` execution."""

    def test_block_output_is_inlined(self, resolver: SettingsResolver) -> None:
        text = "a {% liquid\n  assign n = 2\n  echo n | times: 3\n%} b"
        assert run_liquid_blocks(text, resolver) == "a 6 b"

    def test_dash_delimiters(self, resolver: SettingsResolver) -> None:
        text = "{%- liquid\n  echo '--x: 1px;'\n-%}"
        assert run_liquid_blocks(text, resolver) == "--x: 1px;"


class TestColorSchemeLoop:
    """First-iteration simulation of the color scheme loop."""

    def test_first_iteration(self, resolver: SettingsResolver) -> None:
        text = (
            "{% for scheme in settings.color_schemes %}"
            ".color-{{ scheme.id }} { --index: {{ forloop.index }}; }"
            "{% if forloop.index == 1 %}:root{% endif %}"
            "{% if forloop.index > 1 %}.other{% endif %}"
            "{% endfor %}"
        )
        assert expand_first_color_scheme(text, resolver) == ".color-scheme-main { --index: 1; }:root"

    def test_loop_variable_is_rewritten(self, resolver: SettingsResolver) -> None:
        text = "{% for s in settings.color_schemes %}{{ s.settings.background }}{% endfor %}"
        assert expand_first_color_scheme(text, resolver) == "{{ scheme.settings.background }}"

    def test_default_scheme_id(self, resolver_factory: Callable[..., SettingsResolver]) -> None:
        text = "{% for scheme in settings.color_schemes %}{{ scheme.id }}{% endfor %}"
        assert expand_first_color_scheme(text, resolver_factory()) == "scheme-1"


class TestSimpleStages:
    """Tag stripping and optimistic conditionals."""

    def test_strip_assign_tags(self, resolver: SettingsResolver) -> None:
        assert strip_assign_tags("{% assign x = 1 %}a{%- assign y = 'b' -%}", resolver) == "a"

    def test_keep_then_branches(self, resolver: SettingsResolver) -> None:
        text = "{% if opacity > 0 %}A{% else %}B{% endif %}|{% if n == 2 %}C{% endif %}"
        assert keep_then_branches(text, resolver) == "A|C"

    def test_keep_then_ignores_non_numeric_conditions(self, resolver: SettingsResolver) -> None:
        text = "{% if style == 'pill' %}A{% endif %}"
        assert keep_then_branches(text, resolver) == text

    def test_strip_leftover_tags(self, resolver: SettingsResolver) -> None:
        assert strip_leftover_tags("{% render 'x' %}a{{ product.title }}b", resolver) == "ab"


class TestSubstitution:
    """Setting and bare output substitution."""

    def test_settings(self, resolver: SettingsResolver) -> None:
        assert substitute_settings("{{ settings.radius }}px", resolver) == "14px"
        assert substitute_settings("{{- settings.radius -}}", resolver) == "14"

    def test_settings_with_append(self, resolver: SettingsResolver) -> None:
        assert substitute_settings("{{ settings.radius | append: 'px' }}", resolver) == "14px"

    def test_missing_setting_placeholder(self, resolver: SettingsResolver) -> None:
        assert substitute_settings("{{ settings.nope }}", resolver) == "[nope]"

    def test_scheme_settings(self, resolver: SettingsResolver) -> None:
        text = "rgba({{ scheme.settings.background }})"
        assert substitute_scheme_settings(text, resolver) == "rgba(255, 255, 255, 1)"

    def test_scheme_settings_with_append(self, resolver: SettingsResolver) -> None:
        text = "rgb({{ scheme.settings.foreground.rgb | append: ' / 0.5' }})"
        assert substitute_scheme_settings(text, resolver) == "rgb(18 18 18 / 0.5)"

    def test_bare_outputs_use_fallback(self, resolver: SettingsResolver) -> None:
        assert substitute_bare_outputs("{{ opacity_5_15 }}", resolver) == BARE_OUTPUT_FALLBACK
        assert substitute_bare_outputs("{{ a.b }}", resolver) == "{{ a.b }}"


class TestLiquidToCss:
    """The whole pipeline."""

    def test_setting_substitution(self, resolver_factory: Callable[..., SettingsResolver]) -> None:
        resolver = resolver_factory({"radius": 14})
        css = liquid_to_css(":root { --button-radius: {{ settings.radius }}px; }", resolver)
        assert css == ":root { --button-radius: 14px; }"

    def test_absent_flag_takes_else(self, resolver_factory: Callable[..., SettingsResolver]) -> None:
        text = "{% if settings.flag %}--a: 1px;{% else %}--a: 2px;{% endif %}"
        assert liquid_to_css(text, resolver_factory()) == "--a: 2px;"

    def test_conditional_runs_before_substitution(self, resolver: SettingsResolver) -> None:
        text = (
            "{% if settings.button_style == 'pill' %}"
            "--r: {{ settings.radius }}px;"
            "{% endif %}"
        )
        assert liquid_to_css(text, resolver) == "--r: 14px;"

    def test_everything_is_resolved_or_removed(self, resolver: SettingsResolver) -> None:
        text = """\
{%- liquid
  assign scale = settings.body_scale | divided_by: 100.0
  echo '--scale: ' | append: scale | append: ';'
-%}
{% assign unused = 1 %}
:root {
  --opacity: {{ opacity }};
  {% render 'icon' %}
}"""
        css = liquid_to_css(text, resolver)
        assert "--scale: 1;" in css
        assert "--opacity: 0.15;" in css
        assert "{%" not in css
        assert "{{" not in css
