"""Console output helpers for the CSS variable extractor.

Every user-facing message goes through these functions so the scanner,
the settings loader and the CLI share one look. Colors are dropped when
``NO_COLOR`` is set in the environment.
"""

import os


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    ENDC = '\033[0m'


def _paint(color: str, text: str) -> str:
    """Wrap text in a color code unless colors are disabled."""
    if os.environ.get("NO_COLOR"):
        return text
    return f"{color}{text}{Colors.ENDC}"


def print_header(msg: str) -> None:
    """Print a header message."""
    print(_paint(Colors.HEADER + Colors.BOLD, msg))


def print_info(msg: str) -> None:
    """Print an info message."""
    print(_paint(Colors.CYAN, msg))


def print_detail(msg: str) -> None:
    """Print a dimmed secondary line (sources, media variants)."""
    print(_paint(Colors.DIM, msg))


def print_success(msg: str) -> None:
    """Print a success message."""
    print(_paint(Colors.GREEN, f"✓ {msg}"))


def print_warning(msg: str) -> None:
    """Print a warning message."""
    print(_paint(Colors.YELLOW, f"⚠️  {msg}"))


def print_error(msg: str) -> None:
    """Print an error message."""
    print(_paint(Colors.RED, f"❌ {msg}"))
