"""sesh: smart tmux session manager for coding agents.

Service wiring and startup checks.
"""

import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from sesh.services.agents import AGENT_PROFILES, binary_for
from sesh.services.config import ConfigManager
from sesh.services.discovery import DiscoveryService
from sesh.services.last_session import LastSessionTracker
from sesh.services.orchestrator import SessionOrchestrator
from sesh.services.registry import SessionRegistry
from sesh.services.tmux import TmuxService


@dataclass
class Services:
    """Application service container for dependency injection."""

    tmux: TmuxService
    config: ConfigManager
    tracker: LastSessionTracker
    registry: SessionRegistry
    discovery: DiscoveryService
    orchestrator: SessionOrchestrator

    @classmethod
    def create(
        cls,
        working_dir: Path | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> "Services":
        """Wire up all services with proper dependencies.

        Args:
            working_dir: Directory new sessions default to (defaults to cwd)
            echo: Where user-facing progress messages go (defaults to click.echo)

        Returns:
            Services container with all dependencies injected
        """
        working_dir = working_dir or Path.cwd()

        # Core services (no dependencies)
        tmux = TmuxService()
        config = ConfigManager()
        discovery = DiscoveryService()

        tracker = LastSessionTracker(config.config.effective_state_dir)
        registry = SessionRegistry(tmux)

        orchestrator = SessionOrchestrator(
            tmux=tmux,
            config=config.config,
            tracker=tracker,
            registry=registry,
            discovery=discovery,
            echo=echo,
            cwd=working_dir,
        )

        return cls(
            tmux=tmux,
            config=config,
            tracker=tracker,
            registry=registry,
            discovery=discovery,
            orchestrator=orchestrator,
        )


def check_dependencies(agent: str | None = None) -> None:
    """Check for required and optional dependencies on startup.

    Exits with error if tmux is missing.
    Prints a warning if the selected agent's CLI is not on PATH.
    """
    if not shutil.which("tmux"):
        print("Error: tmux is not installed or not in PATH", file=sys.stderr)
        print("  - tmux: https://github.com/tmux/tmux", file=sys.stderr)
        sys.exit(1)

    profile = AGENT_PROFILES.get(agent or "")
    if profile and not shutil.which(binary_for(profile)):
        print(
            f"Warning: {binary_for(profile)} not found - {profile.label} sessions won't start",
            file=sys.stderr,
        )
