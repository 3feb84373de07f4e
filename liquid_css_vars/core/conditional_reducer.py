"""Static reduction of settings-gated stylesheet regions.

Theme stylesheets often switch whole declaration groups on a setting::

    {% if settings.button_style == 'pill' %}
      --button-radius: 999px;
    {% elsif settings.button_style == 'square' %}
      --button-radius: 0;
    {% else %}
      --button-radius: 6px;
    {% endif %}

The reducer keeps the raw text of the first branch whose condition holds
(or the else branch) and drops the rest. It runs on unexecuted text, before
any ``{{ settings.* }}`` substitution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from liquid_css_vars.core.conditions import evaluate_setting_condition
from liquid_css_vars.core.resolver import SettingsResolver

# Non-greedy: the first endif closes the region (nested ifs are not paired).
_IF_REGION = re.compile(
    r"{%-?\s*if\s+([\s\S]*?)-?%}([\s\S]*?){%-?\s*endif\s*-?%}",
    re.IGNORECASE,
)
_BRANCH_BOUNDARY = re.compile(
    r"{%-?\s*(?:elsif\s+([\s\S]*?)|else)\s*-?%}",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ConditionalBranch:
    """Raw text of one branch; ``condition`` is None for else."""

    condition: str | None
    content: str


def split_branches(condition: str, body: str) -> list[ConditionalBranch]:
    """Split the body of an if region at its elsif/else boundaries.

    Args:
        condition: Condition of the opening ``if`` tag.
        body: Text between the ``if`` tag and ``endif``.

    Returns:
        Branches in document order.
    """
    branches: list[ConditionalBranch] = []
    current_condition: str | None = condition.strip()
    position = 0

    for boundary in _BRANCH_BOUNDARY.finditer(body):
        branches.append(ConditionalBranch(current_condition, body[position:boundary.start()]))
        elsif_condition = boundary.group(1)
        current_condition = elsif_condition.strip() if elsif_condition is not None else None
        position = boundary.end()

    branches.append(ConditionalBranch(current_condition, body[position:]))
    return branches


def select_branch(branches: list[ConditionalBranch], resolver: SettingsResolver) -> str:
    """Return the content of the first matching branch, or empty text."""
    for branch in branches:
        if branch.condition is None:
            return branch.content
        if evaluate_setting_condition(branch.condition, resolver):
            return branch.content
    return ""


def reduce_conditional_blocks(text: str, resolver: SettingsResolver) -> str:
    """Replace every ``{% if %}...{% endif %}`` region by its selected branch.

    Args:
        text: Raw templated stylesheet text.
        resolver: Setting lookup context for the current scan.

    Returns:
        Text with all top-level conditional regions resolved.
    """
    def _reduce(match: re.Match[str]) -> str:
        return select_branch(split_branches(match.group(1), match.group(2)), resolver)

    return _IF_REGION.sub(_reduce, text)
