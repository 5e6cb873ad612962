"""Exception hierarchy for git-wt."""

from __future__ import annotations

from pathlib import Path


class WtError(Exception):
    """Base exception for all git-wt errors."""

    pass


class ConfigError(WtError):
    """Raised when persisted settings are malformed or invalid."""

    pass


class ValidationError(WtError):
    """Raised when input validation fails."""

    pass


class MaxAttemptsExceededError(WtError):
    """Raised when no unoccupied worktree path could be found."""

    def __init__(self, candidate: Path, attempts: int) -> None:
        self.candidate = candidate
        self.attempts = attempts
        super().__init__(
            f"Could not generate unique path for {candidate} "
            f"after {attempts} attempts"
        )


class NoMatchesError(WtError):
    """Raised when a query matches none of the candidates."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No matches found for query: {query}")


class NoItemsError(WtError):
    """Raised when there is nothing to select from."""

    def __init__(self) -> None:
        super().__init__("No items to select from")


class SelectionCancelledError(WtError):
    """Raised when the user cancels a selection. Not a failure."""

    def __init__(self) -> None:
        super().__init__("Selection cancelled")


class OutOfRangeError(WtError):
    """Raised when a numeric choice falls outside the valid range."""

    def __init__(self, value: int, maximum: int, minimum: int = 1) -> None:
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Number out of range: {value} (expected {minimum}-{maximum})"
        )


class InvalidSelectionError(WtError):
    """Raised when selection input is not a number."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid input: {value}")


class PickerError(WtError):
    """Raised when an external picker fails for a reason other than cancel."""

    def __init__(self, tool: str, message: str, diagnostic: str = "") -> None:
        self.tool = tool
        self.diagnostic = diagnostic
        error_msg = f"{tool} failed: {message}"
        if diagnostic:
            error_msg += f": {diagnostic}"
        super().__init__(error_msg)


class GitCommandError(WtError):
    """Raised when a required git command fails."""

    def __init__(self, args: list[str], stderr: str = "") -> None:
        self.args_list = args
        self.stderr = stderr
        error_msg = f"git {args[0] if args else ''} failed"
        if stderr:
            error_msg += f": {stderr}"
        super().__init__(error_msg)


class GhNotFoundError(WtError):
    """Raised when the GitHub CLI is not installed."""

    def __init__(self) -> None:
        super().__init__(
            "GitHub CLI (gh) not found\n\n"
            "Installation:\n"
            "  macOS: brew install gh\n"
            "  Linux: https://cli.github.com/\n\n"
            "Authentication: gh auth login"
        )


class GhCommandError(WtError):
    """Raised when a gh command fails."""

    def __init__(self, operation: str, output: str = "") -> None:
        self.operation = operation
        self.output = output
        error_msg = f"gh {operation} failed"
        if output:
            error_msg += f": {output}"
        super().__init__(error_msg)


class TmuxError(WtError):
    """Raised when a tmux session cannot be set up."""

    pass


class EditorNotFoundError(WtError):
    """Raised when no editor could be found."""

    def __init__(self) -> None:
        super().__init__(
            "No editor found. Please set WT_EDITOR, VISUAL, or EDITOR "
            "environment variable"
        )


class BranchInUseError(WtError):
    """Raised when a branch is already checked out in another worktree."""

    def __init__(self, branch: str, path: Path) -> None:
        self.branch = branch
        self.path = path
        super().__init__(
            f"Branch '{branch}' is already in use at {path}.\n"
            f"Navigate: wt go {branch}\n"
            f"Open: wt open {branch}"
        )


class NoWorktreesError(WtError):
    """Raised when the repository has no worktrees."""

    def __init__(self) -> None:
        super().__init__("No worktrees found")


class NoRemovableWorktreesError(WtError):
    """Raised when only the main worktree exists."""

    def __init__(self) -> None:
        super().__init__(
            "No removable worktrees found (main worktree cannot be removed)"
        )


class ShellFunctionNotConfiguredError(WtError):
    """Raised when --cd is used without the shell function installed."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot change directory: shell function not configured.\n\n"
            "To enable directory navigation with --cd flag, configure your shell:\n\n"
            "  Bash:   echo 'eval \"$(wt hook bash)\"' >> ~/.bashrc\n"
            "  Zsh:    echo 'eval \"$(wt hook zsh)\"' >> ~/.zshrc\n"
            "  Fish:   wt hook fish > ~/.config/fish/functions/wt.fish\n\n"
            "Then restart your shell or run: exec $SHELL"
        )
