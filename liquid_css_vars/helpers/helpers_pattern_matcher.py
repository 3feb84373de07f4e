"""Glob-based source file discovery.

Include patterns are expanded with ``Path.glob`` from the project root, so
``**/`` also matches files directly under the root. Exclude patterns are
checked with ``fnmatch`` against POSIX paths relative to the root. Both
accept ``{a,b}`` alternation, which is expanded before matching.
"""

import re
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")
_ANY_DIRS_PREFIX = "**/"


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternation into plain glob patterns.

    Args:
        pattern: Glob pattern, possibly containing brace groups

    Returns:
        One pattern per alternative, in order

    Examples:
        >>> expand_braces('**/*.{liquid,css}')
        ['**/*.liquid', '**/*.css']
        >>> expand_braces('snippets/*.liquid')
        ['snippets/*.liquid']
    """
    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]

    expanded: list[str] = []
    for option in match.group(1).split(","):
        candidate = pattern[:match.start()] + option + pattern[match.end():]
        expanded.extend(expand_braces(candidate))
    return expanded


def is_excluded(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a relative POSIX path against exclude patterns.

    A leading ``**/`` may also match zero directories, so
    ``**/node_modules/**`` rejects ``node_modules/x.liquid`` as well.

    Examples:
        >>> is_excluded('node_modules/x/a.liquid', ['**/node_modules/**'])
        True
        >>> is_excluded('snippets/a.liquid', ['**/node_modules/**'])
        False
    """
    for pattern in patterns:
        for candidate in expand_braces(pattern):
            if fnmatch(relative_path, candidate):
                return True
            if candidate.startswith(_ANY_DIRS_PREFIX) and fnmatch(
                relative_path, candidate[len(_ANY_DIRS_PREFIX):]
            ):
                return True
    return False


def discover_files(
    root: Path,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str] = (),
) -> list[Path]:
    """Find files under ``root`` matching include but not exclude patterns.

    Each file is returned once even when several include patterns match it.

    Args:
        root: Project root directory
        include_patterns: Glob patterns a file must match (at least one)
        exclude_patterns: Glob patterns that reject a file

    Returns:
        Sorted list of file paths under ``root``
    """
    if not root.is_dir():
        return []

    exclude = list(exclude_patterns)
    found: set[Path] = set()

    for pattern in include_patterns:
        for candidate in expand_braces(pattern):
            if not candidate:
                continue
            for path in root.glob(candidate):
                if not path.is_file():
                    continue
                if is_excluded(path.relative_to(root).as_posix(), exclude):
                    continue
                found.add(path)

    return sorted(found)
