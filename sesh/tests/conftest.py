"""Shared test fixtures for sesh."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from sesh.services.config import Config
from sesh.services.last_session import LastSessionTracker
from sesh.services.tmux import TmuxService, TmuxResult


@pytest.fixture
def mock_tmux() -> MagicMock:
    """Create a mock TmuxService with no sessions."""
    tmux = MagicMock(spec=TmuxService)
    tmux.list_sessions.return_value = []
    tmux.session_exists.return_value = False
    tmux.create_session.return_value = TmuxResult(success=True)
    tmux.attach.return_value = TmuxResult(success=True)
    tmux.send_keys.return_value = TmuxResult(success=True)
    tmux.set_env.return_value = TmuxResult(success=True)
    tmux.get_env.return_value = None
    tmux.set_remain_on_exit.return_value = TmuxResult(success=True)
    tmux.set_pane_died_hook.return_value = TmuxResult(success=True)
    tmux.query_pane_status.return_value = []
    tmux.get_session_cwd.return_value = None
    tmux.kill_session.return_value = TmuxResult(success=True)
    tmux.inside_tmux.return_value = False
    return tmux


@pytest.fixture
def tracker(tmp_path: Path) -> LastSessionTracker:
    """LastSessionTracker writing into a temp state directory."""
    return LastSessionTracker(tmp_path / "state")


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Default config with state under tmp_path."""
    return Config(state_dir=tmp_path / "state")


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    """Create a temporary working directory."""
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    return work_dir
