"""Templated stylesheet -> plain stylesheet.

``liquid_to_css`` runs a fixed list of textual stages. Each stage assumes
the previous ones have already removed the constructs they own:

    liquid_blocks            {% liquid %} blocks executed, output inlined
    color_scheme_loop        first iteration of the color scheme loop kept
    assign_tags              {% assign %} tags removed
    static_conditionals      {% if settings... %} regions reduced
    optimistic_conditionals  leftover {% if x > 1 %} pairs keep "then"
    scheme_settings          {{ scheme.settings.* }} substituted
    settings                 {{ settings.* }} substituted
    bare_outputs             other {{ name }} outputs -> fallback value
    leftover_tags            every remaining tag / output removed

This is an approximation of the storefront renderer, not a Liquid engine:
only the first color scheme is materialized and unsupported conditionals
optimistically keep their then-branch.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from liquid_css_vars.core.conditional_reducer import reduce_conditional_blocks
from liquid_css_vars.core.interpreter import execute_liquid_block
from liquid_css_vars.core.resolver import SettingsResolver

Stage = Callable[[str, SettingsResolver], str]

DEFAULT_SCHEME_ID = "scheme-1"
BARE_OUTPUT_FALLBACK = "0.15"

_LIQUID_BLOCK = re.compile(r"{%-?\s*liquid\s+([\s\S]*?)-?%}", re.IGNORECASE)
_SCHEME_LOOP = re.compile(
    r"{%-?\s*for\s+(\w+)\s+in\s+settings\.color_schemes\s*-?%}([\s\S]*?){%-?\s*endfor\s*-?%}",
    re.IGNORECASE,
)
_FORLOOP_INDEX_OUTPUT = re.compile(r"\{\{-?\s*forloop\.index\s*-?\}\}")
_FIRST_ITERATION_GUARD = re.compile(
    r"{%-?\s*if\s+forloop\.index\s*==\s*1\s*-?%}([\s\S]*?){%-?\s*endif\s*-?%}",
    re.IGNORECASE,
)
_OTHER_ITERATION_GUARD = re.compile(
    r"{%-?\s*if\s+forloop\.index\s*[^%]+%}[\s\S]*?{%-?\s*endif\s*-?%}",
    re.IGNORECASE,
)
_ASSIGN_TAG = re.compile(r"{%-?\s*assign\s+[^%]+%}")
_SIMPLE_IF = re.compile(
    r"{%-?\s*if\s+[\w.]+\s*[<>=!]+\s*\d+\s*-?%}([\s\S]*?)"
    r"(?:{%-?\s*else\s*-?%}[\s\S]*?)?{%-?\s*endif\s*-?%}",
    re.IGNORECASE,
)
_APPEND_SUFFIX = r"""(?:\s*\|\s*append:\s*['"]([^'"]+)['"])?"""
_SCHEME_SETTING_OUTPUT = re.compile(
    r"\{\{-?\s*scheme\.settings\.([\w.]+)" + _APPEND_SUFFIX + r"\s*-?\}\}",
)
_SETTING_OUTPUT = re.compile(
    r"\{\{-?\s*settings\.([\w.]+)" + _APPEND_SUFFIX + r"\s*-?\}\}",
)
_BARE_OUTPUT = re.compile(r"\{\{-?\s*([\w_]+)\s*-?\}\}")
_ANY_TAG = re.compile(r"{%[^%]*%}")
_ANY_OUTPUT = re.compile(r"\{\{[^}]*\}\}")


def run_liquid_blocks(text: str, resolver: SettingsResolver) -> str:
    return _LIQUID_BLOCK.sub(lambda m: execute_liquid_block(m.group(1), resolver), text)


def expand_first_color_scheme(text: str, resolver: SettingsResolver) -> str:
    """Materialize only the first iteration of the color scheme loop."""
    scheme_id = resolver.first_scheme_id() or DEFAULT_SCHEME_ID

    def _first_iteration(match: re.Match[str]) -> str:
        loop_var = re.escape(match.group(1))
        body = match.group(2)
        body = re.sub(r"\{\{-?\s*" + loop_var + r"\.id\s*-?\}\}", lambda _m: scheme_id, body)
        body = re.sub(r"\b" + loop_var + r"\.settings\.", "scheme.settings.", body)
        body = _FORLOOP_INDEX_OUTPUT.sub("1", body)
        body = _FIRST_ITERATION_GUARD.sub(lambda m: m.group(1), body)
        return _OTHER_ITERATION_GUARD.sub("", body)

    return _SCHEME_LOOP.sub(_first_iteration, text)


def strip_assign_tags(text: str, resolver: SettingsResolver) -> str:
    return _ASSIGN_TAG.sub("", text)


def keep_then_branches(text: str, resolver: SettingsResolver) -> str:
    """Keep the then-branch of remaining simple numeric conditionals."""
    return _SIMPLE_IF.sub(lambda m: m.group(1), text)


def _with_suffix(rendered: str, suffix: str | None) -> str:
    return rendered + suffix if suffix else rendered


def substitute_scheme_settings(text: str, resolver: SettingsResolver) -> str:
    return _SCHEME_SETTING_OUTPUT.sub(
        lambda m: _with_suffix(resolver.render_scheme_setting(m.group(1)), m.group(2)),
        text,
    )


def substitute_settings(text: str, resolver: SettingsResolver) -> str:
    return _SETTING_OUTPUT.sub(
        lambda m: _with_suffix(resolver.render_setting(m.group(1)), m.group(2)),
        text,
    )


def substitute_bare_outputs(text: str, resolver: SettingsResolver) -> str:
    return _BARE_OUTPUT.sub(BARE_OUTPUT_FALLBACK, text)


def strip_leftover_tags(text: str, resolver: SettingsResolver) -> str:
    return _ANY_OUTPUT.sub("", _ANY_TAG.sub("", text))


STAGES: tuple[tuple[str, Stage], ...] = (
    ("liquid_blocks", run_liquid_blocks),
    ("color_scheme_loop", expand_first_color_scheme),
    ("assign_tags", strip_assign_tags),
    ("static_conditionals", reduce_conditional_blocks),
    ("optimistic_conditionals", keep_then_branches),
    ("scheme_settings", substitute_scheme_settings),
    ("settings", substitute_settings),
    ("bare_outputs", substitute_bare_outputs),
    ("leftover_tags", strip_leftover_tags),
)


def liquid_to_css(text: str, resolver: SettingsResolver) -> str:
    """Reduce a templated stylesheet block to plain stylesheet text.

    Args:
        text: Content of a ``{% style %}`` / ``<style>`` block.
        resolver: Setting lookup context for the current scan.

    Returns:
        Stylesheet text with every template construct resolved or removed.
    """
    for _name, stage in STAGES:
        text = stage(text, resolver)
    return text
