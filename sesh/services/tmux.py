"""TmuxService: Low-level tmux operations."""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class TmuxResult:
    """Result of a tmux operation."""

    success: bool
    output: str = ""
    error: str = ""


@dataclass
class PaneStatus:
    """Foreground command and exit flag of one pane."""

    command: str
    is_dead: bool


def session_target(name: str) -> str:
    """Exact-match target for a session (no prefix matching)."""
    return f"={name}"


def pane_target(name: str) -> str:
    """Exact-match target for the active pane of a session."""
    return f"={name}:"


class TmuxService:
    """Low-level tmux operations. No business logic."""

    DEFAULT_TIMEOUT = 5

    def __init__(self, socket_path: Path | None = None):
        """Initialize with optional dedicated socket."""
        self._socket = socket_path
        self._timeout = self.DEFAULT_TIMEOUT

    def _base_cmd(self) -> list[str]:
        """Base tmux command with optional socket."""
        if self._socket:
            return ["tmux", "-S", str(self._socket)]
        return ["tmux"]

    def _run(
        self,
        args: list[str],
        timeout: int | None = None,
    ) -> TmuxResult:
        """Run a tmux command with proper error handling."""
        cmd = self._base_cmd() + args
        timeout = timeout or self._timeout
        logger.debug(f"tmux {' '.join(args)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            return TmuxResult(
                success=result.returncode == 0,
                output=result.stdout,
                error=result.stderr.strip(),
            )
        except subprocess.TimeoutExpired:
            return TmuxResult(success=False, error="Operation timed out")
        except FileNotFoundError:
            return TmuxResult(success=False, error="tmux not found")
        except OSError as e:
            return TmuxResult(success=False, error=str(e))

    @staticmethod
    def inside_tmux() -> bool:
        """True when this process runs inside a tmux client."""
        return bool(os.environ.get("TMUX"))

    def list_sessions(self) -> list[str]:
        """List all tmux session names."""
        result = self._run(["list-sessions", "-F", "#{session_name}"])
        if result.success and result.output.strip():
            return result.output.strip().split("\n")
        return []

    def session_exists(self, name: str) -> bool:
        """Check if a tmux session exists."""
        result = self._run(["has-session", "-t", session_target(name)])
        return result.success

    def create_session(self, name: str, working_dir: Path) -> TmuxResult:
        """Create a new detached session. Fails if the name is taken."""
        if not working_dir.is_dir():
            return TmuxResult(
                success=False,
                error=f"Working directory does not exist: {working_dir}",
            )
        return self._run([
            "new-session",
            "-d",  # Detached
            "-s", name,
            "-c", str(working_dir),
        ])

    def attach(self, name: str) -> TmuxResult:
        """Attach the terminal to a session, or switch client if inside tmux.

        Runs in the foreground with the terminal inherited; returns after
        the user detaches.
        """
        verb = "switch-client" if self.inside_tmux() else "attach-session"
        cmd = self._base_cmd() + [verb, "-t", session_target(name)]
        logger.debug(f"tmux {verb} -t {name}")
        try:
            returncode = subprocess.run(cmd).returncode
        except FileNotFoundError:
            return TmuxResult(success=False, error="tmux not found")
        return TmuxResult(success=returncode == 0)

    def send_keys(self, name: str, text: str) -> TmuxResult:
        """Type a command line into the session's active pane and press Enter."""
        return self._run(["send-keys", "-t", pane_target(name), text, "C-m"])

    def set_env(self, name: str, key: str, value: str) -> TmuxResult:
        """Set a session environment variable."""
        return self._run(["set-environment", "-t", session_target(name), key, value])

    def get_env(self, name: str, key: str) -> str | None:
        """Read a session environment variable. None if unset or removed."""
        result = self._run(["show-environment", "-t", session_target(name), key])
        if not result.success:
            return None
        line = result.output.strip()
        # Removed variables are reported as "-KEY"
        if not line or line.startswith("-"):
            return None
        _, _, value = line.partition("=")
        return value

    def set_remain_on_exit(self, name: str, enabled: bool = True) -> TmuxResult:
        """Keep panes visible after their process exits."""
        value = "on" if enabled else "off"
        return self._run(["set-option", "-t", session_target(name), "remain-on-exit", value])

    def set_pane_died_hook(self, name: str, action: str) -> TmuxResult:
        """Run a tmux command whenever a pane of the session dies."""
        return self._run(["set-hook", "-t", session_target(name), "pane-died", action])

    def query_pane_status(self, name: str) -> list[PaneStatus]:
        """Foreground command and dead flag for every pane, in one query.

        Returns an empty list when the session does not exist.
        """
        result = self._run([
            "list-panes", "-s",
            "-t", session_target(name),
            "-F", "#{pane_current_command}\t#{pane_dead}",
        ])
        if not result.success:
            return []

        panes: list[PaneStatus] = []
        for line in result.output.splitlines():
            if not line.strip():
                continue
            command, _, dead = line.rpartition("\t")
            panes.append(PaneStatus(command=command, is_dead=dead.strip() == "1"))
        return panes

    def get_session_cwd(self, name: str) -> str | None:
        """Current working directory of the session's active pane."""
        result = self._run([
            "display-message", "-p", "-t", pane_target(name), "#{pane_current_path}"
        ])
        if result.success and result.output.strip():
            return result.output.strip()
        return None

    def get_current_path(self) -> str | None:
        """Working directory of the pane this process runs in."""
        result = self._run(["display-message", "-p", "#{pane_current_path}"])
        if result.success and result.output.strip():
            return result.output.strip()
        return None

    def kill_session(self, name: str) -> TmuxResult:
        """Kill a tmux session."""
        return self._run(["kill-session", "-t", session_target(name)])
