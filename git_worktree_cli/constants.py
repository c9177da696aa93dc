"""Shared constants for git-worktree-cli."""

DEFAULT_REMOTE = "origin"

# Worktree names are flat directory names
WORKTREE_NAME_SEPARATOR = "/"
WORKTREE_NAME_REPLACEMENT = "_"

# Environment variables searched for a GitHub token, in order
GITHUB_TOKEN_ENV_VARS = ("WORKTREE_CLI_GITHUB_TOKEN", "GITHUB_TOKEN")

# Picker decoration
BRANCH_ICON = "\ue0a0"  # powerline branch glyph
DETACHED_LABEL = "(detached)"

# Picker hints
HINT_WORKTREE = "Worktree branch"
HINT_BRANCH = "Branch"
HINT_PULL_REQUEST = "Pull request"

# Process exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_SOFTWARE = 70  # sysexits EX_SOFTWARE, used for the dirty workspace guard
EXIT_CANCELLED = 130
