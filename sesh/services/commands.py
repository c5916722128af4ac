"""Launch command building for agent sessions."""

import shlex
from pathlib import Path

from .agents import AgentProfile


def build_launch_command(
    profile: AgentProfile,
    project_path: Path,
    initial_prompt: str = "",
    override: str | None = None,
) -> str:
    """Build the shell command line that starts an agent.

    Args:
        profile: Agent to launch
        project_path: Project directory; its marker dir enables resume
        initial_prompt: Optional first prompt (arbitrary user text)
        override: Replaces the profile's default command when set

    Returns:
        Command string to type into the session
    """
    args = [override or profile.command]

    if profile.resume_flag and (project_path / profile.marker_dir).is_dir():
        args.append(profile.resume_flag)

    # Only the prompt is untrusted; it becomes a single quoted token
    if initial_prompt:
        if profile.prompt_flag:
            args.append(profile.prompt_flag)
        args.append(shlex.quote(initial_prompt))

    return " ".join(args)
