"""Utility functions for git-worktree-cli."""

from .logging import setup_logging, get_logger, ColoredFormatter

__all__ = [
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
]
