"""Services for git-worktree-cli."""
