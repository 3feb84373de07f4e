"""Structural extraction of custom properties from templated source files.

For every style region (``{% style %}``, ``{% stylesheet %}``, ``<style>``)
that mentions ``:root``:

    1. the region is reduced to plain CSS (see transform.liquid_to_css);
    2. ``:root`` rules are located and their closing brace found with a
       depth counter, so arbitrarily nested ``@media`` rules stay inside;
    3. ``--name: value;`` declarations are registered (first write wins),
       and declarations inside nested ``@media`` rules add media variants;
    4. optionally, class rules are scanned the same way (no media variants).

A rule whose closing brace is missing is skipped on its own; the rest of
the file is still processed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from liquid_css_vars.core.registry import RegistryBuilder
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.transform import liquid_to_css

ROOT_MARKER = ":root"

_STYLE_REGIONS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("{% style %}", re.compile(r"{%-?\s*style\s*-?%}([\s\S]*?){%-?\s*endstyle\s*-?%}", re.IGNORECASE)),
    (
        "{% stylesheet %}",
        re.compile(r"{%-?\s*stylesheet\s*-?%}([\s\S]*?){%-?\s*endstylesheet\s*-?%}", re.IGNORECASE),
    ),
    ("<style>", re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)),
)
_ROOT_RULE = re.compile(r":root\s*(?:,\s*[.#][\w-]+\s*)*\{")
_MEDIA_RULE = re.compile(r"@media\s*([^{]+)\{")
_CLASS_RULE = re.compile(r"\.[\w-]+\s*\{")
_DECLARATION = re.compile(r"--([\w-]+)\s*:\s*([^;]+);")
_ECHO_DECLARATION = re.compile(r"""echo\s+['"]([^'"]*--[\w-]+\s*:[^'"]+)['"]""")
_ECHO_VARIABLE = re.compile(r"--([\w-]+)\s*:\s*([^;]+)")
_INTERPOLATION = re.compile(r"\[[\w-]+\]")


@dataclass(frozen=True)
class StyleRegion:
    """Content of one style block and where it starts in the file."""

    kind: str
    content: str
    start: int


def find_matching_brace(text: str, start: int) -> int:
    """Find the end of a rule whose opening brace precedes ``start``.

    Args:
        text: Stylesheet text.
        start: Index just after the opening ``{``.

    Returns:
        Index just after the matching ``}``, or -1 when it is missing.

    Examples:
        >>> find_matching_brace('a { b { } } c', 3)
        11
        >>> find_matching_brace('a { b {', 3)
        -1
    """
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return -1


def find_style_regions(text: str) -> list[StyleRegion]:
    """Locate style blocks containing ``:root``, in source order."""
    regions: list[StyleRegion] = []
    for kind, pattern in _STYLE_REGIONS:
        for match in pattern.finditer(text):
            if ROOT_MARKER in match.group(1):
                regions.append(StyleRegion(kind, match.group(1), match.start()))
    return sorted(regions, key=lambda region: region.start)


def _rule_bodies(text: str, opener: re.Pattern[str]) -> list[tuple[re.Match[str], str]]:
    """Brace-matched bodies of every rule whose opening matches ``opener``."""
    bodies: list[tuple[re.Match[str], str]] = []
    for match in opener.finditer(text):
        body_start = match.end()
        body_end = find_matching_brace(text, body_start)
        if body_end == -1:
            continue
        bodies.append((match, text[body_start:body_end - 1]))
    return bodies


def register_declarations(
    content: str,
    source_file: str,
    builder: RegistryBuilder,
    media_query: str | None = None,
) -> None:
    """Register every ``--name: value;`` declaration in ``content``."""
    for match in _DECLARATION.finditer(content):
        builder.declare(f"--{match.group(1)}", match.group(2).strip(), source_file, media_query)


def parse_media_blocks(content: str, source_file: str, builder: RegistryBuilder) -> None:
    """Register declarations of every ``@media`` rule as media variants."""
    for match, body in _rule_bodies(content, _MEDIA_RULE):
        register_declarations(body, source_file, builder, match.group(1).strip())


def parse_root_blocks(css: str, source_file: str, builder: RegistryBuilder) -> None:
    """Register declarations of every ``:root`` rule and its media rules."""
    for _match, body in _rule_bodies(css, _ROOT_RULE):
        register_declarations(body, source_file, builder)
        parse_media_blocks(body, source_file, builder)


def parse_class_blocks(css: str, source_file: str, builder: RegistryBuilder) -> None:
    """Register declarations found in class rules, line by line."""
    for _match, body in _rule_bodies(css, _CLASS_RULE):
        for line in body.split("\n"):
            stripped = line.strip()
            if stripped.startswith("/*") or stripped.startswith("@media"):
                continue
            register_declarations(line, source_file, builder)


def parse_echo_variables(css: str, source_file: str, builder: RegistryBuilder) -> None:
    """Register declarations left in literal ``echo '--x: ...'`` statements.

    Bracketed interpolations such as ``[font_size]`` are shown as ``...``.
    """
    for echo in _ECHO_DECLARATION.finditer(css):
        for match in _ECHO_VARIABLE.finditer(echo.group(1)):
            value = _INTERPOLATION.sub("...", match.group(2).strip())
            builder.declare(f"--{match.group(1)}", value, source_file)


def extract_css_variables(
    text: str,
    source_file: str,
    resolver: SettingsResolver,
    builder: RegistryBuilder,
    only_root: bool = True,
) -> int:
    """Extract the custom properties declared by one source file.

    Args:
        text: Raw file content.
        source_file: Path recorded as the declaring file.
        resolver: Setting lookup context for the current scan.
        builder: Registry being built for the current scan.
        only_root: Skip class rules when True.

    Returns:
        Number of variables this file added to the registry.
    """
    if ROOT_MARKER not in text:
        return 0

    before = len(builder)
    for region in find_style_regions(text):
        css = liquid_to_css(region.content, resolver)
        if ROOT_MARKER not in css:
            continue

        parse_echo_variables(css, source_file, builder)
        parse_root_blocks(css, source_file, builder)
        if not only_root:
            parse_class_blocks(css, source_file, builder)

    return len(builder) - before
