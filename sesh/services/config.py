"""Configuration management for sesh.

Read-only JSON file at ~/.config/sesh/config.json (or $SESH_CONFIG).
Environment variables take precedence over the file:

- SESH_CMD overrides the agent launch command
- SESH_AGENT_KIND selects the default agent kind

Resolution order: command-line flag > environment > file > defaults
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..models.exceptions import ConfigError
from .agents import AGENT_PROFILES, DEFAULT_AGENT
from .last_session import default_state_dir


logger = logging.getLogger(__name__)

DEFAULT_ESCAPE_TIMEOUT = 0.1


@dataclass
class Config:
    """sesh configuration."""

    command: str | None = None  # Launch command override for every agent
    agent: str = DEFAULT_AGENT  # Default agent kind for new sessions
    state_dir: Path | None = None  # Where the last-session files live
    escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT  # Seconds to wait after ESC

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        state_dir = Path(data["state_dir"]).expanduser() if data.get("state_dir") else None
        return cls(
            command=data.get("command") or None,
            agent=data.get("agent", DEFAULT_AGENT),
            state_dir=state_dir,
            escape_timeout=float(data.get("escape_timeout", DEFAULT_ESCAPE_TIMEOUT)),
        )

    @property
    def effective_state_dir(self) -> Path:
        return self.state_dir or default_state_dir()


class ConfigManager:
    """Loads and resolves the configuration file."""

    def __init__(self, config_file: Path | None = None, environ: dict | None = None):
        self._environ = os.environ if environ is None else environ
        if config_file is None:
            override = self._environ.get("SESH_CONFIG")
            config_file = (
                Path(override).expanduser() if override
                else Path.home() / ".config" / "sesh" / "config.json"
            )
        self._config_file = config_file
        self._config: Config | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self._resolve(self._load_config())
        return self._config

    def _load_config(self) -> Config:
        """Load config from disk. Corrupt files fall back to defaults."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                return Config.from_dict(data)
            except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
                logger.warning(f"Ignoring invalid config {self._config_file}: {e}")
        return Config()

    def _resolve(self, config: Config) -> Config:
        """Apply environment overrides and validate."""
        if self._environ.get("SESH_CMD"):
            config.command = self._environ["SESH_CMD"]
        if self._environ.get("SESH_AGENT_KIND"):
            config.agent = self._environ["SESH_AGENT_KIND"]

        if config.agent not in AGENT_PROFILES:
            raise ConfigError(
                f"Unknown agent kind '{config.agent}'",
                suggestion=f"choose one of: {', '.join(AGENT_PROFILES)}",
            )
        return config

