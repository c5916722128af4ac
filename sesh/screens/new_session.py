"""NewSessionApp: interactive wizard for creating a session."""

from dataclasses import dataclass
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Select, Static

from ..models.session import sanitize_name
from ..services.agents import AGENT_PROFILES, DEFAULT_AGENT


@dataclass
class NewSessionRequest:
    """Values collected by the wizard."""

    name: str
    path: str
    agent: str = DEFAULT_AGENT
    prompt: str = ""


def build_request(
    name: str,
    path: str,
    agent: str | None,
    prompt: str,
    default_name: str,
    default_path: str,
) -> NewSessionRequest:
    """Normalize raw form values, filling blanks with defaults."""
    return NewSessionRequest(
        name=sanitize_name(name.strip() or default_name),
        path=path.strip() or default_path,
        agent=agent if agent in AGENT_PROFILES else DEFAULT_AGENT,
        prompt=prompt.strip(),
    )


class NewSessionApp(App[NewSessionRequest | None]):
    """Small form: name, path, agent, initial prompt."""

    TITLE = "sesh new"

    CSS = """
    Screen {
        align: center middle;
    }

    #dialog {
        width: 72;
        height: auto;
        border: round $primary;
        padding: 1 2;
    }

    .dialog-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .dialog-hint {
        color: $text-muted;
        margin-top: 1;
    }

    Input, Select {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        default_name: str,
        default_path: Path,
        default_agent: str = DEFAULT_AGENT,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._default_name = default_name
        self._default_path = str(default_path)
        self._default_agent = default_agent

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("new session", classes="dialog-title")
            yield Input(placeholder=self._default_name, id="name-input")
            yield Input(placeholder=self._default_path, id="path-input")
            yield Select(
                [(profile.label, kind) for kind, profile in AGENT_PROFILES.items()],
                value=self._default_agent,
                allow_blank=False,
                id="agent-select",
            )
            yield Input(placeholder="initial prompt (optional)", id="prompt-input")
            yield Static("enter create · esc cancel", classes="dialog-hint")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in any field submits the form."""
        agent = self.query_one("#agent-select", Select).value
        self.exit(build_request(
            name=self.query_one("#name-input", Input).value,
            path=self.query_one("#path-input", Input).value,
            agent=agent if isinstance(agent, str) else None,
            prompt=self.query_one("#prompt-input", Input).value,
            default_name=self._default_name,
            default_path=self._default_path,
        ))

    def action_cancel(self) -> None:
        self.exit(None)
