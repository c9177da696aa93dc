"""Configuration handling for git-worktree-cli"""

from dataclasses import dataclass
from typing import Optional

from git_worktree_cli.constants import DEFAULT_REMOTE


@dataclass
class Config:
    """Configuration for git-worktree-cli with validation."""

    # Remote used for fetching, remote branch names and owner/repo discovery
    remote_name: str = DEFAULT_REMOTE

    # GitHub integration
    github_token: Optional[str] = None
    max_prs_to_fetch: int = 500

    # Pull request sync
    pr_state: str = "open"  # open, closed, all
    pr_kind: str = "all"  # draft, open, all
    selection_mode: str = "all"  # all, single, multiple

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_max_prs()
        self._validate_choice("pr_state", ["open", "closed", "all"])
        self._validate_choice("pr_kind", ["draft", "open", "all"])
        self._validate_choice("selection_mode", ["all", "single", "multiple"])

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_max_prs(self):
        """Validate max_prs_to_fetch is positive."""
        if self.max_prs_to_fetch <= 0:
            raise ValueError(f"max_prs_to_fetch must be positive, got {self.max_prs_to_fetch}")

    def _validate_choice(self, name: str, allowed: list):
        value = getattr(self, name)
        if value not in allowed:
            raise ValueError(f"{name} must be one of {allowed}, got '{value}'")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote_name": self.remote_name,
            "github_token": self.github_token,
            "max_prs_to_fetch": self.max_prs_to_fetch,
            "pr_state": self.pr_state,
            "pr_kind": self.pr_kind,
            "selection_mode": self.selection_mode,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "remote_name",
            "github_token",
            "max_prs_to_fetch",
            "pr_state",
            "pr_kind",
            "selection_mode",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
