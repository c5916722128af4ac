"""Status classification: Pure function for detecting agent liveness.

Separates detection logic from listing and display.
"""

from ..models.session import SessionStatus
from .agents import FALLBACK_PROCESS_NAME, get_profile
from .tmux import TmuxService

# Session environment variable holding the agent kind
AGENT_ENV = "SESH_AGENT"


def expected_process_name(tmux: TmuxService, name: str) -> str:
    """Process name that indicates the session's agent is running."""
    profile = get_profile(tmux.get_env(name, AGENT_ENV))
    if profile is None:
        return FALLBACK_PROCESS_NAME
    return profile.process_name


def classify_session(tmux: TmuxService, name: str) -> SessionStatus:
    """Classify a session as active, idle or dead.

    Pane commands and dead flags come from one combined query, so a
    session closing mid-check cannot produce a mixed answer.

    Args:
        tmux: Tmux service for querying session state
        name: Name of the tmux session

    Returns:
        SessionStatus, never None
    """
    panes = tmux.query_pane_status(name)

    # Session doesn't exist (or has no panes)
    if not panes:
        return SessionStatus.DEAD

    process_name = expected_process_name(tmux, name)
    if any(pane.command == process_name for pane in panes):
        return SessionStatus.ACTIVE

    # remain-on-exit keeps exited panes around, so "all dead" is visible
    if all(pane.is_dead for pane in panes):
        return SessionStatus.DEAD

    return SessionStatus.IDLE
