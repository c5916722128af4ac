"""Exception hierarchy for sesh.

Every user-facing failure carries a message and an optional suggestion.
"""


class SeshError(Exception):
    """Base exception for all sesh errors.

    All domain-specific exceptions inherit from this base class,
    enabling consistent error handling in the CLI.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class UserAbort(SeshError):
    """User cancelled a prompt or picker. Not a failure of the tool."""

    pass


class SessionError(SeshError):
    """Session operation failed."""

    pass


class SessionNotFoundError(SessionError):
    """Named session (or toggle target) does not exist."""

    pass


class TmuxError(SeshError):
    """Tmux query or mutation failed."""

    pass


class GitError(SeshError):
    """Git operation failed."""

    pass


class ConfigError(SeshError):
    """Configuration is invalid."""

    pass


class SelectorInterrupted(SeshError):
    """Picker was interrupted by a signal after restoring the terminal."""

    def __init__(self, signum: int) -> None:
        super().__init__(f"Interrupted by signal {signum}")
        self.signum = signum
