"""Agent profiles: how each supported coding agent is launched and detected."""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class AgentProfile:
    """Static launch and liveness description of one agent kind."""

    kind: str
    command: str  # Default launch command (may contain fixed flags)
    resume_flag: str | None  # Appended when marker_dir exists in the project
    prompt_flag: str | None  # None means the prompt is passed positionally
    process_name: str  # pane_current_command while the agent runs
    marker_dir: str  # Per-project state directory written by the agent
    label: str


DEFAULT_AGENT = "claude"

# Process name assumed when a session has no (or an unknown) recorded agent
FALLBACK_PROCESS_NAME = "node"

AGENT_PROFILES: MappingProxyType[str, AgentProfile] = MappingProxyType({
    "claude": AgentProfile(
        kind="claude",
        command="claude --dangerously-skip-permissions",
        resume_flag="--continue",
        prompt_flag=None,  # -p is print mode: answers once and exits
        process_name="node",
        marker_dir=".claude",
        label="Claude Code",
    ),
    "codex": AgentProfile(
        kind="codex",
        command="codex",
        resume_flag=None,
        prompt_flag=None,
        process_name="codex",
        marker_dir=".codex",
        label="Codex",
    ),
    "gemini": AgentProfile(
        kind="gemini",
        command="gemini",
        resume_flag=None,
        prompt_flag="-i",
        process_name="node",
        marker_dir=".gemini",
        label="Gemini CLI",
    ),
})


def get_profile(kind: str | None) -> AgentProfile | None:
    """Look up a profile by kind. Returns None for unknown or empty kinds."""
    if not kind:
        return None
    return AGENT_PROFILES.get(kind)


def binary_for(profile: AgentProfile) -> str:
    """First word of the launch command, used for PATH checks."""
    return profile.command.split()[0]
