"""SessionOrchestrator: decides whether to create, attach or pick a session."""

import logging
import os
from pathlib import Path
from typing import Callable

import click

from ..models.exceptions import ConfigError, SessionNotFoundError, TmuxError, UserAbort
from ..models.session import SessionRecord, sanitize_name
from ..terminal.prompt import Prompter
from ..terminal.selector import Selected, SelectionResult, select
from .agents import AgentProfile, get_profile
from .commands import build_launch_command
from .config import Config
from .discovery import DiscoveryService
from .git import GitService, repo_name_from_url
from .last_session import LastSessionTracker
from .registry import PATH_ENV, SessionRegistry
from .status import AGENT_ENV
from .tmux import TmuxResult, TmuxService


logger = logging.getLogger(__name__)

# Session environment variable holding the session's own name
SESSION_ENV = "SESH_SESSION"

# tmux command run when a pane's process dies
RESPAWN_ACTION = "respawn-pane -k"

Selector = Callable[..., SelectionResult]


class SessionOrchestrator:
    """Top-level session policy on top of tmux, the registry and the tracker."""

    SELECT_PROMPT = "Select a session:"
    KILL_PROMPT = "Kill a session:"

    def __init__(
        self,
        tmux: TmuxService,
        config: Config,
        tracker: LastSessionTracker | None = None,
        registry: SessionRegistry | None = None,
        discovery: DiscoveryService | None = None,
        prompter: Prompter | None = None,
        selector: Selector | None = None,
        echo: Callable[[str], None] | None = None,
        cwd: Path | None = None,
    ):
        self._tmux = tmux
        self._config = config
        self._tracker = tracker or LastSessionTracker(config.effective_state_dir)
        self._registry = registry or SessionRegistry(tmux)
        self._discovery = discovery or DiscoveryService()
        self._prompter = prompter or Prompter()
        self._selector = selector or select
        self._echo = echo or click.echo
        self._cwd = cwd or Path.cwd()

    def _profile(self, agent: str | None) -> AgentProfile:
        kind = agent or self._config.agent
        profile = get_profile(kind)
        if profile is None:
            raise ConfigError(f"Unknown agent kind '{kind}'")
        return profile

    def _check(self, result: TmuxResult, action: str) -> None:
        if not result.success:
            raise TmuxError(f"Failed to {action}: {result.error or 'tmux error'}")

    def _resolve_dir(self, path: str | Path) -> Path:
        return self._cwd / Path(path).expanduser()

    # --- picking ---

    def _kill_from_picker(self, name: str) -> None:
        result = self._tmux.kill_session(name)
        if not result.success:
            logger.warning(f"Failed to kill session {name}: {result.error}")

    def pick(self, prompt: str, records: list[SessionRecord]) -> SelectionResult:
        """Show records in the picker with in-place kill enabled."""
        lines = self._registry.display_lines(records)
        return self._selector(
            prompt,
            lines,
            on_delete=self._kill_from_picker,
            escape_timeout=self._config.escape_timeout,
        )

    # --- attach / create ---

    def _attach(self, name: str) -> None:
        self._check(self._tmux.attach(name), f"attach to session '{name}'")

    def attach(self, name: str) -> None:
        """Record name as the current session and attach (or switch) to it."""
        self._echo(f"Attaching to session: {name}")
        self._tracker.track(name)
        self._attach(name)

    def create(
        self,
        name: str,
        project_path: Path,
        prompt: str = "",
        agent: str | None = None,
    ) -> None:
        """Create a detached session running the agent, then attach."""
        profile = self._profile(agent)
        command = build_launch_command(profile, project_path, prompt, self._config.command)

        self._echo(f"Creating new session '{name}' at {project_path}")
        self._check(self._tmux.create_session(name, project_path), f"create session '{name}'")

        # Context for child processes and for status/path lookups
        for key, value in (
            (SESSION_ENV, name),
            (PATH_ENV, str(project_path)),
            (AGENT_ENV, profile.kind),
        ):
            self._check(self._tmux.set_env(name, key, value), f"set {key}")

        # Crash resilience: keep exited panes and respawn them
        self._check(self._tmux.set_remain_on_exit(name, True), "set remain-on-exit")
        self._check(self._tmux.set_pane_died_hook(name, RESPAWN_ACTION), "set pane-died hook")

        self._check(self._tmux.send_keys(name, command), f"start {profile.label}")
        logger.info(f"Created session {name} running {command}")

        self._tracker.track(name)
        self._attach(name)

    def smart(
        self,
        name: str | None = None,
        path: str | None = None,
        prompt: str = "",
        agent: str | None = None,
    ) -> None:
        """Default action: attach, pick or create depending on what exists."""
        if name:
            name = sanitize_name(name)
            if not path:
                resolved = self._discovery.resolve(name)
                if resolved is not None:
                    path = str(resolved)

        if not name:
            # Count and picker lines come from the same listing
            records = self._registry.list()
            if len(records) == 1:
                return self.attach(records[0].name)
            if len(records) > 1:
                result = self.pick(self.SELECT_PROMPT, records)
                if not isinstance(result, Selected):
                    raise UserAbort("Cancelled.")
                return self.attach(result.identifier)

            default_name = GitService.default_session_name(self._cwd)
            name = sanitize_name(self._prompter.ask("Session name", default_name))
            path = self._prompter.ask("Project path", str(self._cwd))

        if self._tmux.session_exists(name):
            self._echo(f"Attaching to existing session: {name}")
            self._tracker.track(name)
            return self._attach(name)

        if not path:
            path = self._prompter.ask("Project path", str(self._cwd))

        project_path = self._resolve_dir(path)
        if not project_path.is_dir():
            if not self._prompter.confirm(f"Directory '{project_path}' does not exist. Create it?"):
                raise UserAbort("Aborted.")
            project_path.mkdir(parents=True, exist_ok=True)
            self._echo(f"Created directory: {project_path}")

        self.create(name, project_path, prompt, agent)

    # --- subcommands ---

    def toggle(self) -> str:
        """Attach to the previous session. Returns its name."""
        target = self._tracker.toggle(self._tmux.session_exists)
        self._echo(f"Attaching to session: {target}")
        self._attach(target)
        return target

    def records(self) -> list[SessionRecord]:
        return self._registry.list()

    def clone(self, url: str, name: str | None = None) -> None:
        """Clone a repository into the cwd and open a session on it."""
        if not url:
            raise SessionNotFoundError("Missing clone URL.", suggestion="sesh clone <url> [name]")
        name = name or repo_name_from_url(url)
        dest = self._cwd / name

        self._echo(f"Cloning {url}...")
        GitService.clone(url, dest)
        self.smart(name, str(dest))

    def kill(self, name: str | None = None, kill_all: bool = False) -> list[str]:
        """Kill one, all, or interactively chosen sessions.

        Returns the names killed outside the picker.
        """
        if kill_all:
            return self._kill_all()

        if name:
            name = sanitize_name(name)
            if not self._tmux.session_exists(name):
                raise SessionNotFoundError(f"Session '{name}' not found.")
            self._check(self._tmux.kill_session(name), f"kill session '{name}'")
            self._echo(f"Killed session: {name}")
            return [name]

        records = self._registry.list()
        if not records:
            self._echo("No sessions to kill.")
            return []

        result = self.pick(self.KILL_PROMPT, records)
        if not isinstance(result, Selected):
            return []
        target = result.identifier
        self._check(self._tmux.kill_session(target), f"kill session '{target}'")
        self._echo(f"Killed session: {target}")
        return [target]

    def _kill_all(self) -> list[str]:
        names = self._tmux.list_sessions()
        if not names:
            self._echo("No sessions to kill.")
            return []

        killed = []
        for session in names:
            if self._tmux.kill_session(session).success:
                self._echo(f"Killed session: {session}")
                killed.append(session)
        return killed

    def launch_here(self, prompt: str = "", agent: str | None = None) -> None:
        """Replace this process with the agent, in the current directory."""
        profile = self._profile(agent)
        project_path = self._cwd
        if self._tmux.inside_tmux():
            project_path = Path(self._tmux.get_current_path() or self._cwd)

        command = build_launch_command(profile, project_path, prompt, self._config.command)
        shell = os.environ.get("SHELL") or "/bin/sh"
        self._echo(f"Starting {profile.label}...")
        os.execvp(shell, [shell, "-c", command])
