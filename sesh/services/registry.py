"""SessionRegistry: enumerate tmux sessions and build picker lines."""

from __future__ import annotations

import logging
from pathlib import Path

from ..models.session import DISPLAY_DELIMITER, SessionRecord
from .status import AGENT_ENV, classify_session
from .tmux import TmuxService


logger = logging.getLogger(__name__)

# Session environment variable holding the project path
PATH_ENV = "SESH_PATH"


def shorten_home(path: str, home: Path | None = None) -> str:
    """Display a path with the home directory replaced by '~'."""
    if not path:
        return path
    home_str = str(home or Path.home())
    if path == home_str:
        return "~"
    if path.startswith(home_str + "/"):
        return "~" + path[len(home_str):]
    return path


class SessionRegistry:
    """Builds fresh SessionRecords from tmux on every call."""

    def __init__(self, tmux: TmuxService, home: Path | None = None):
        self._tmux = tmux
        self._home = home

    def names(self) -> list[str]:
        """Session names in tmux order."""
        return self._tmux.list_sessions()

    def resolve_path(self, name: str) -> str:
        """Live pane path, else the path injected at creation."""
        path = self._tmux.get_session_cwd(name)
        if path is None:
            path = self._tmux.get_env(name, PATH_ENV) or ""
        return shorten_home(path, self._home)

    def record(self, name: str) -> SessionRecord:
        """Assemble one record. Status is always queried, never cached."""
        return SessionRecord(
            name=name,
            path=self.resolve_path(name),
            agent_kind=self._tmux.get_env(name, AGENT_ENV),
            status=classify_session(self._tmux, name),
        )

    def list(self) -> list[SessionRecord]:
        """All sessions, empty when none exist (not an error)."""
        records = [self.record(name) for name in self.names()]
        logger.debug(f"Listed {len(records)} sessions")
        return records

    @staticmethod
    def display_lines(records: list[SessionRecord]) -> list[str]:
        """Column-aligned picker lines: name, path, agent, status.

        Widths are computed from this batch only.
        """
        if not records:
            return []

        name_width = max(len(r.name) for r in records)
        path_width = max(len(r.path) for r in records)
        agent_width = max(len(r.agent_kind or "-") for r in records)

        lines = []
        for r in records:
            columns = [
                r.name.ljust(name_width),
                r.path.ljust(path_width),
                (r.agent_kind or "-").ljust(agent_width),
                r.status_label,
            ]
            lines.append(DISPLAY_DELIMITER.join(columns))
        return lines
