"""CLI entry point for sesh.

Invoked as::

    sesh [OPTIONS] [NAME [PATH [PROMPT]]]
    sesh COMMAND [ARGS]...

Commands
--------
- (default)  Attach, pick or create a session
- new        Interactive session creation wizard
- last       Toggle to the previous session
- list, ls   Non-interactive session listing
- clone      git clone + create session
- kill       Kill a named session, all sessions, or pick one
- agent      Start the agent in the current directory
"""

from __future__ import annotations

import logging
import sys
from functools import wraps
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sesh import __version__
from sesh.app import Services, check_dependencies
from sesh.models.exceptions import SelectorInterrupted, SeshError, UserAbort
from sesh.models.session import SessionStatus
from sesh.services.git import GitService

console = Console()
err_console = Console(stderr=True)

_STATUS_STYLES = {
    SessionStatus.ACTIVE: "green",
    SessionStatus.IDLE: "yellow",
    SessionStatus.DEAD: "red",
}


class DefaultCommandGroup(click.Group):
    """Group that falls back to a default command for unknown first words.

    ``sesh myproject ~/code`` behaves like ``sesh open myproject ~/code``.
    """

    default_command_name = "open"

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and self.get_command(ctx, args[0]) is None:
            args = [self.default_command_name, *args]
        return super().resolve_command(ctx, args)


def _services(ctx: click.Context) -> Services:
    obj = ctx.find_object(dict)
    if "services" not in obj:
        obj["services"] = Services.create(working_dir=Path.cwd(), echo=_echo)
    return obj["services"]


def handle_errors(func):
    """Map sesh exceptions to a message and exit status, no traceback."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UserAbort as e:
            console.print(e.message, markup=False, highlight=False)
            sys.exit(1)
        except SelectorInterrupted as e:
            sys.exit(128 + e.signum)
        except SeshError as e:
            err_console.print(str(e), style="red", markup=False, highlight=False)
            sys.exit(1)

    return wrapper


def _echo(message: str) -> None:
    console.print(message, markup=False, highlight=False)


@click.group(
    cls=DefaultCommandGroup,
    invoke_without_command=True,
    context_settings={"ignore_unknown_options": True, "help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="sesh")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Smart tmux session manager for coding agents.

    With no arguments: attach to the only session, pick from several, or
    create a new one.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    if ctx.invoked_subcommand is None:
        ctx.invoke(open_session)


@cli.command("open")
@click.argument("name", required=False)
@click.argument("path", required=False)
@click.argument("prompt", required=False)
@click.option("--session", "-s", "session_opt", default=None, help="Session name.")
@click.option("--path", "-p", "path_opt", default=None, help="Project directory.")
@click.option("--message", "-m", "message_opt", default=None, help="Initial prompt for the agent.")
@click.option("--agent", "-a", default=None, help="Agent kind (claude, codex, gemini).")
@click.pass_context
@handle_errors
def open_session(
    ctx: click.Context,
    name: str | None,
    path: str | None,
    prompt: str | None,
    session_opt: str | None,
    path_opt: str | None,
    message_opt: str | None,
    agent: str | None,
) -> None:
    """Create or attach to session NAME at PATH, optionally sending PROMPT."""
    services = _services(ctx)
    check_dependencies(agent or services.config.config.agent)
    services.orchestrator.smart(
        name=session_opt or name,
        path=path_opt or path,
        prompt=message_opt or prompt or "",
        agent=agent,
    )


@cli.command("new")
@click.option("--agent", "-a", default=None, help="Preselected agent kind.")
@click.pass_context
@handle_errors
def new_session(ctx: click.Context, agent: str | None) -> None:
    """Interactive session creation wizard."""
    from sesh.screens.new_session import NewSessionApp

    services = _services(ctx)
    check_dependencies(agent or services.config.config.agent)
    cwd = Path.cwd()
    app = NewSessionApp(
        default_name=GitService.default_session_name(cwd),
        default_path=cwd,
        default_agent=agent or services.config.config.agent,
    )
    request = app.run()
    if request is None:
        raise UserAbort("Cancelled.")

    services.orchestrator.smart(
        name=request.name,
        path=request.path,
        prompt=request.prompt,
        agent=request.agent,
    )


@cli.command("last")
@click.pass_context
@handle_errors
def last_session(ctx: click.Context) -> None:
    """Toggle to the previous session."""
    services = _services(ctx)
    services.orchestrator.toggle()


@cli.command("list")
@click.pass_context
@handle_errors
def list_sessions(ctx: click.Context) -> None:
    """List sessions with path, agent and status."""
    records = _services(ctx).orchestrator.records()
    if not records:
        console.print("No active sessions.")
        return

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("SESSION")
    table.add_column("PATH")
    table.add_column("AGENT")
    table.add_column("STATUS")
    for record in records:
        table.add_row(
            record.name,
            record.path,
            record.agent_kind or "-",
            Text(record.status_label, style=_STATUS_STYLES[record.status]),
        )
    console.print(table)


cli.add_command(list_sessions, name="ls")


@cli.command("clone")
@click.argument("url")
@click.argument("name", required=False)
@click.pass_context
@handle_errors
def clone_repo(ctx: click.Context, url: str, name: str | None) -> None:
    """git clone URL into the current directory and open a session on it."""
    services = _services(ctx)
    services.orchestrator.clone(url, name)


@cli.command("kill")
@click.argument("name", required=False)
@click.option("--all", "-a", "kill_all", is_flag=True, default=False, help="Kill every session.")
@click.pass_context
@handle_errors
def kill_session(ctx: click.Context, name: str | None, kill_all: bool) -> None:
    """Kill session NAME, all sessions, or pick one interactively."""
    services = _services(ctx)
    services.orchestrator.kill(name=name, kill_all=kill_all)


@cli.command("agent")
@click.option("--message", "-m", default="", help="Initial prompt for the agent.")
@click.option("--agent", "-a", default=None, help="Agent kind (claude, codex, gemini).")
@click.pass_context
@handle_errors
def run_agent(ctx: click.Context, message: str, agent: str | None) -> None:
    """Start the agent in the current directory (use inside a session)."""
    _services(ctx).orchestrator.launch_here(prompt=message, agent=agent)


def main() -> None:
    """Run the sesh CLI."""
    cli(prog_name="sesh")


if __name__ == "__main__":
    main()
