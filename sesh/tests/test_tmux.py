"""Tests for TmuxService."""

import pytest
from pathlib import Path
from unittest.mock import patch, MagicMock
import subprocess

from sesh.services.tmux import PaneStatus, TmuxService, TmuxResult


class TestTmuxService:
    """Tests for TmuxService."""

    @pytest.fixture
    def tmux(self) -> TmuxService:
        """Create a TmuxService instance."""
        return TmuxService()

    @pytest.fixture
    def tmux_with_socket(self, tmp_path: Path) -> TmuxService:
        """Create a TmuxService with dedicated socket."""
        return TmuxService(socket_path=tmp_path / "test.sock")

    def test_base_cmd_default(self, tmux: TmuxService):
        assert tmux._base_cmd() == ["tmux"]

    def test_base_cmd_with_socket(self, tmux_with_socket: TmuxService, tmp_path: Path):
        assert tmux_with_socket._base_cmd() == ["tmux", "-S", str(tmp_path / "test.sock")]

    def test_session_exists_uses_exact_match(self, tmux: TmuxService):
        """has-session targets '=name' so 'api' never matches 'api-v2'."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            assert tmux.session_exists("api") is True
            assert mock_run.call_args[0][0] == ["tmux", "has-session", "-t", "=api"]

    def test_session_exists_false(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="can't find session")
            assert tmux.session_exists("api") is False

    def test_create_session_success(self, tmux: TmuxService, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            result = tmux.create_session("api", tmp_path)
            assert result.success is True
            assert mock_run.call_args[0][0] == [
                "tmux", "new-session", "-d", "-s", "api", "-c", str(tmp_path)
            ]

    def test_create_session_duplicate(self, tmux: TmuxService, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=1, stdout="", stderr="duplicate session: api\n"
            )
            result = tmux.create_session("api", tmp_path)
            assert result.success is False
            assert result.error == "duplicate session: api"

    def test_create_session_missing_dir(self, tmux: TmuxService, tmp_path: Path):
        """Missing working directory fails without calling tmux."""
        with patch("subprocess.run") as mock_run:
            result = tmux.create_session("api", tmp_path / "missing")
            assert result.success is False
            assert "does not exist" in result.error
            mock_run.assert_not_called()

    def test_timeout(self, tmux: TmuxService, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="tmux", timeout=5)
            result = tmux.create_session("api", tmp_path)
            assert result.success is False
            assert "timed out" in result.error

    def test_tmux_not_found(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError()
            assert tmux.list_sessions() == []
            assert tmux.kill_session("api").error == "tmux not found"

    def test_list_sessions(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="api\nweb\n", stderr="")
            assert tmux.list_sessions() == ["api", "web"]

    def test_list_sessions_no_server(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="no server running")
            assert tmux.list_sessions() == []

    def test_query_pane_status(self, tmux: TmuxService):
        """One list-panes call covers every pane in every window."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=0, stdout="node\t0\nzsh\t1\n\n", stderr=""
            )
            panes = tmux.query_pane_status("api")
            assert panes == [PaneStatus("node", False), PaneStatus("zsh", True)]
            args = mock_run.call_args[0][0]
            assert args[:5] == ["tmux", "list-panes", "-s", "-t", "=api"]
            assert args[-1] == "#{pane_current_command}\t#{pane_dead}"
            assert mock_run.call_count == 1

    def test_query_pane_status_missing_session(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="can't find")
            assert tmux.query_pane_status("ghost") == []

    @pytest.mark.parametrize("stdout,expected", [
        ("SESH_AGENT=claude\n", "claude"),
        ("SESH_PATH=/a=b\n", "/a=b"),
        ("-SESH_AGENT\n", None),
        ("", None),
    ])
    def test_get_env(self, tmux: TmuxService, stdout, expected):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout=stdout, stderr="")
            assert tmux.get_env("api", "SESH_AGENT") == expected

    def test_get_env_unknown_variable(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="unknown variable")
            assert tmux.get_env("api", "SESH_AGENT") is None

    def test_send_keys_targets_pane(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            tmux.send_keys("api", "claude 'hi there'")
            assert mock_run.call_args[0][0] == [
                "tmux", "send-keys", "-t", "=api:", "claude 'hi there'", "C-m"
            ]

    def test_attach_outside_tmux(self, tmux: TmuxService, monkeypatch):
        monkeypatch.delenv("TMUX", raising=False)
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert tmux.attach("api").success is True
            assert mock_run.call_args[0][0] == ["tmux", "attach-session", "-t", "=api"]

    def test_attach_inside_tmux_switches(self, tmux: TmuxService, monkeypatch):
        monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,123,0")
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            tmux.attach("api")
            assert mock_run.call_args[0][0] == ["tmux", "switch-client", "-t", "=api"]

    def test_crash_resilience_options(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            tmux.set_remain_on_exit("api")
            assert mock_run.call_args[0][0] == [
                "tmux", "set-option", "-t", "=api", "remain-on-exit", "on"
            ]
            tmux.set_pane_died_hook("api", "respawn-pane -k")
            assert mock_run.call_args[0][0] == [
                "tmux", "set-hook", "-t", "=api", "pane-died", "respawn-pane -k"
            ]

    def test_get_session_cwd(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="/src/api\n", stderr="")
            assert tmux.get_session_cwd("api") == "/src/api"

    def test_kill_session(self, tmux: TmuxService):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            result = tmux.kill_session("api")
            assert result == TmuxResult(success=True)
            assert mock_run.call_args[0][0] == ["tmux", "kill-session", "-t", "=api"]
