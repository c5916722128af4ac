"""Services for sesh."""

from sesh.services.tmux import TmuxService, TmuxResult, PaneStatus
from sesh.services.status import classify_session
from sesh.services.registry import SessionRegistry
from sesh.services.last_session import LastSessionTracker
from sesh.services.commands import build_launch_command
from sesh.services.orchestrator import SessionOrchestrator

__all__ = [
    "TmuxService",
    "TmuxResult",
    "PaneStatus",
    "classify_session",
    "SessionRegistry",
    "LastSessionTracker",
    "build_launch_command",
    "SessionOrchestrator",
]
