"""Version information for git-worktree-cli."""

try:
    from git_worktree_cli._version import __version__
except ImportError:
    # Fallback for development without tags or when running from source
    __version__ = "0.0.0+unknown"
