"""
git-worktree-cli - Jump between branches and worktrees, or create them from pull requests
"""

from .__version__ import __version__
from .core import WorkspaceManager
from .cli.main import main

__all__ = ["WorkspaceManager", "main", "__version__"]
