"""
CLI module for liquid-css-vars.

Provides the ``liquid-css-vars`` console script entry point.
"""

from .commands import main

__all__ = ["main"]
