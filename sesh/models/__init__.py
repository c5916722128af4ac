"""Data models for sesh."""

from .session import (
    DISPLAY_DELIMITER,
    SessionRecord,
    SessionStatus,
    identifier_of,
    sanitize_name,
)
from .exceptions import (
    SeshError,
    UserAbort,
    SessionError,
    SessionNotFoundError,
    TmuxError,
    GitError,
    ConfigError,
    SelectorInterrupted,
)

__all__ = [
    # Session models
    "DISPLAY_DELIMITER",
    "SessionRecord",
    "SessionStatus",
    "identifier_of",
    "sanitize_name",
    # Exceptions
    "SeshError",
    "UserAbort",
    "SessionError",
    "SessionNotFoundError",
    "TmuxError",
    "GitError",
    "ConfigError",
    "SelectorInterrupted",
]
