"""Session record model for sesh."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Separator between a picker line's session name and its decoration.
# Sanitized names never contain whitespace, so this cannot occur inside one.
DISPLAY_DELIMITER = "  "

# tmux parses '.' and ':' inside targets even with exact-match addressing.
_RESERVED_CHARS = re.compile(r"[.:\s]")


class SessionStatus(Enum):
    """Liveness of the agent inside a tmux session."""

    ACTIVE = "active"  # Agent process is in the foreground
    IDLE = "idle"  # Pane alive, agent not running (e.g. shell prompt)
    DEAD = "dead"  # Session gone or every pane exited


@dataclass
class SessionRecord:
    """A tmux session as seen right now. Never persisted."""

    name: str
    path: str = ""
    agent_kind: str | None = None
    status: SessionStatus = SessionStatus.DEAD

    @property
    def status_label(self) -> str:
        return f"[{self.status.value}]"


def sanitize_name(name: str) -> str:
    """Rewrite characters tmux treats as target separators to '_'."""
    return _RESERVED_CHARS.sub("_", name.strip())


def identifier_of(option: str) -> str:
    """Extract the session name from a picker display line."""
    return option.split(DISPLAY_DELIMITER, 1)[0].strip()
