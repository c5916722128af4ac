"""LastSessionTracker: two-slot (current, previous) ring for toggling."""

import logging
from pathlib import Path
from typing import Callable

from ..models.exceptions import SessionNotFoundError


logger = logging.getLogger(__name__)


def default_state_dir() -> Path:
    """~/.local/state/sesh"""
    return Path.home() / ".local" / "state" / "sesh"


class LastSessionTracker:
    """Persists the current and previous session names as two small files.

    Read-then-write without locking: two terminals racing on a toggle may
    leave the pair inconsistent, which only affects the next toggle.
    """

    LAST_FILE = "last"
    SECOND_LAST_FILE = "second_last"

    def __init__(self, state_dir: Path | None = None):
        self._state_dir = state_dir or default_state_dir()
        self._last_file = self._state_dir / self.LAST_FILE
        self._second_last_file = self._state_dir / self.SECOND_LAST_FILE

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    @property
    def current(self) -> str | None:
        return self._read(self._last_file)

    @property
    def previous(self) -> str | None:
        return self._read(self._second_last_file)

    def track(self, name: str) -> bool:
        """Record name as current, rotating the old current to previous.

        Returns False (and writes nothing) when name is already current.
        """
        current = self.current or ""
        if name == current:
            return False

        self._state_dir.mkdir(parents=True, exist_ok=True)
        self._second_last_file.write_text(current)
        self._last_file.write_text(name)
        logger.debug(f"Tracked session {name} (previous {current or '-'})")
        return True

    def toggle(self, exists: Callable[[str], bool]) -> str:
        """Resolve the previous session and make it current.

        Args:
            exists: Returns True if a session with the given name is live

        Returns:
            Name of the session to attach to

        Raises:
            SessionNotFoundError: No previous session, or it has vanished.
                State files are left untouched.
        """
        target = self.previous
        if not target:
            raise SessionNotFoundError("No previous session to toggle to.")
        if not exists(target):
            raise SessionNotFoundError(f"Previous session '{target}' no longer exists.")

        self.track(target)
        return target
