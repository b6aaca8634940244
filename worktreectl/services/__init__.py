"""Services for worktreectl."""
