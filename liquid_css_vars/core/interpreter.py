"""Interpreter for ``{% liquid %}`` statement blocks.

A liquid block is a list of tag statements, one per line, without
delimiters::

    assign sizes = '12,14,16' | split: ','
    for size in sizes
      if forloop.index == 1
        echo '--font-size-base: ' | append: size | append: 'px;'
      endif
    endfor

Supported statements: ``comment``/``endcomment``, ``assign``,
``for``/``endfor``, ``if``/``elsif``/``else``/``endif``,
``unless``/``endunless`` and ``echo``. Block tags nest (depth is tracked per
tag); other lines and malformed tags are ignored. The result is the
concatenated echo output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from liquid_css_vars.core.conditions import evaluate_condition
from liquid_css_vars.core.expressions import Bindings, evaluate_expression
from liquid_css_vars.core.resolver import SettingsResolver
from liquid_css_vars.core.values import to_text

_ASSIGN = re.compile(r"^assign\s+([\w_]+)\s*=\s*(.+)$", re.DOTALL)
_FOR = re.compile(r"^for\s+([\w_]+)\s+in\s+([\w_]+)")
_IF = re.compile(r"^if\s+(.+)$")
_ELSIF = re.compile(r"^elsif\s+(.+)$")
_UNLESS = re.compile(r"^unless\s+(.+)$")

LOOP_BINDING = "forloop"


@dataclass
class _Branch:
    """One arm of an if/elsif/else chain (condition None for else)."""

    condition: str | None
    lines: list[str] = field(default_factory=list)


def _is_tag(line: str, tag: str) -> bool:
    """True when the line is ``tag`` alone or ``tag`` followed by arguments."""
    return line == tag or line.startswith(tag + " ")


def _collect_body(lines: list[str], start: int, opener: str, closer: str) -> tuple[list[str], int]:
    """Gather lines up to the matching closer, honoring nested openers.

    Args:
        lines: All statement lines.
        start: Index of the first body line (just after the opener).
        opener: Tag that increases depth (``for``, ``unless``).
        closer: Tag that decreases depth (``endfor``, ``endunless``).

    Returns:
        Body lines and the index just after the closer.
    """
    body: list[str] = []
    depth = 1
    index = start
    while index < len(lines):
        line = lines[index]
        if _is_tag(line, opener):
            depth += 1
        elif line.startswith(closer):
            depth -= 1
            if depth == 0:
                return body, index + 1
        body.append(line)
        index += 1
    return body, index


def _collect_branches(lines: list[str], start: int, condition: str) -> tuple[list[_Branch], int]:
    """Split an if block into branches; nested ifs stay inside their branch."""
    branches = [_Branch(condition)]
    depth = 1
    index = start
    while index < len(lines):
        line = lines[index]
        if _is_tag(line, "if"):
            depth += 1
        elif line.startswith("endif"):
            depth -= 1
            if depth == 0:
                return branches, index + 1
        elif depth == 1 and _is_tag(line, "elsif"):
            elsif = _ELSIF.match(line)
            if elsif:
                branches.append(_Branch(elsif.group(1).strip()))
            index += 1
            continue
        elif depth == 1 and line == "else":
            branches.append(_Branch(None))
            index += 1
            continue
        branches[-1].lines.append(line)
        index += 1
    return branches, index


class LiquidBlockInterpreter:
    """Executes the statements of one liquid block with its own bindings."""

    def __init__(self, resolver: SettingsResolver, bindings: Bindings | None = None) -> None:
        self.resolver = resolver
        self.bindings: Bindings = dict(bindings) if bindings else {}

    def evaluate(self, expr: str) -> str:
        return to_text(evaluate_expression(expr, self.bindings, self.resolver))

    def execute(self, code: str) -> str:
        """Run liquid block source and return its echo output."""
        lines = [line.strip() for line in code.split("\n")]
        return self.run([line for line in lines if line])

    def run(self, lines: list[str]) -> str:
        """Run already-trimmed statement lines."""
        output: list[str] = []
        index = 0
        in_comment = False

        while index < len(lines):
            line = lines[index]
            index += 1

            if in_comment:
                if line == "endcomment":
                    in_comment = False
                continue
            if _is_tag(line, "comment"):
                in_comment = True
                continue

            if _is_tag(line, "assign"):
                self._assign(line)
            elif _is_tag(line, "echo"):
                output.append(self.evaluate(line[len("echo"):].strip()))
            elif _is_tag(line, "for"):
                body, index = _collect_body(lines, index, "for", "endfor")
                output.append(self._run_for(line, body))
            elif _is_tag(line, "if"):
                match = _IF.match(line)
                if match:
                    branches, index = _collect_branches(lines, index, match.group(1).strip())
                    output.append(self._run_if(branches))
            elif _is_tag(line, "unless"):
                body, index = _collect_body(lines, index, "unless", "endunless")
                output.append(self._run_unless(line, body))

        return "".join(output)

    def _assign(self, line: str) -> None:
        match = _ASSIGN.match(line)
        if match:
            name, expression = match.groups()
            self.bindings[name] = evaluate_expression(expression.strip(), self.bindings, self.resolver)

    def _run_for(self, line: str, body: list[str]) -> str:
        match = _FOR.match(line)
        if not match:
            return ""
        item_name, array_name = match.groups()
        items = self.bindings.get(array_name)
        if not isinstance(items, list):
            return ""

        output: list[str] = []
        length = len(items)
        for position, item in enumerate(items):
            self.bindings[item_name] = item
            self.bindings[LOOP_BINDING] = {
                "index": position + 1,
                "index0": position,
                "first": position == 0,
                "last": position == length - 1,
                "length": length,
            }
            output.append(self.run(body))
        return "".join(output)

    def _run_if(self, branches: list[_Branch]) -> str:
        for branch in branches:
            if branch.condition is None or evaluate_condition(
                branch.condition, self.bindings, self.resolver,
            ):
                return self.run(branch.lines)
        return ""

    def _run_unless(self, line: str, body: list[str]) -> str:
        match = _UNLESS.match(line)
        if not match:
            return ""
        if evaluate_condition(match.group(1).strip(), self.bindings, self.resolver):
            return ""
        return self.run(body)


def execute_liquid_block(
    code: str,
    resolver: SettingsResolver,
    bindings: Bindings | None = None,
) -> str:
    """Execute a ``{% liquid %}`` block body and return its output.

    Args:
        code: Statement lines of the block (tag delimiters removed).
        resolver: Setting lookup context for the current scan.
        bindings: Optional initial variables; the caller's dict is not modified.

    Returns:
        Concatenated echo output in document order.
    """
    return LiquidBlockInterpreter(resolver, bindings).execute(code)
