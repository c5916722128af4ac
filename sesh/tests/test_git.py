"""Tests for GitService and DiscoveryService."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sesh.models.exceptions import GitError
from sesh.services.discovery import DiscoveryService
from sesh.services.git import GitService, repo_name_from_url


class TestRepoNameFromUrl:
    """Tests for repo_name_from_url."""

    @pytest.mark.parametrize("url,name", [
        ("https://github.com/acme/widgets.git", "widgets"),
        ("https://github.com/acme/widgets", "widgets"),
        ("https://github.com/acme/widgets/", "widgets"),
        ("git@github.com:acme/widgets.git", "widgets"),
        ("host:widgets.git", "widgets"),
    ])
    def test_names(self, url, name):
        assert repo_name_from_url(url) == name


def _git_responder(responses: dict[str, str | None]):
    """Fake subprocess.run answering git queries by their first argument."""

    def run(cmd, **kwargs):
        key = " ".join(cmd[1:3])
        out = responses.get(key)
        if out is None:
            return MagicMock(returncode=128, stdout="", stderr="fatal")
        return MagicMock(returncode=0, stdout=out + "\n", stderr="")

    return run


class TestDefaultSessionName:
    """Tests for GitService.default_session_name."""

    def test_remote_name_preferred(self, tmp_path: Path):
        responses = {
            "rev-parse --is-inside-work-tree": "true",
            "remote get-url": "git@github.com:acme/api-server.git",
            "rev-parse --show-toplevel": "/src/checkout",
        }
        with patch("subprocess.run", side_effect=_git_responder(responses)):
            assert GitService.default_session_name(tmp_path) == "api-server"

    def test_root_name_without_remote(self, tmp_path: Path):
        responses = {
            "rev-parse --is-inside-work-tree": "true",
            "rev-parse --show-toplevel": "/src/checkout",
        }
        with patch("subprocess.run", side_effect=_git_responder(responses)):
            assert GitService.default_session_name(tmp_path) == "checkout"

    def test_directory_name_outside_git(self, tmp_path: Path):
        with patch("subprocess.run", side_effect=_git_responder({})):
            assert GitService.default_session_name(tmp_path) == tmp_path.name

    def test_git_missing(self, tmp_path: Path):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            assert GitService.default_session_name(tmp_path) == tmp_path.name


class TestClone:
    """Tests for GitService.clone."""

    def test_clone_success(self, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            GitService.clone("https://x/y.git", tmp_path / "y")
            assert mock_run.call_args[0][0] == ["git", "clone", "https://x/y.git", str(tmp_path / "y")]

    def test_clone_failure(self, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=128)
            with pytest.raises(GitError, match="Clone failed"):
                GitService.clone("https://x/y.git", tmp_path / "y")


class TestDiscoveryService:
    """Tests for zoxide lookups."""

    def test_unavailable(self):
        with patch("shutil.which", return_value=None):
            assert DiscoveryService().resolve("api") is None

    def test_resolve(self):
        with patch("shutil.which", return_value="/usr/bin/zoxide"), \
                patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="/home/dev/code/api\n")
            assert DiscoveryService().resolve("api") == Path("/home/dev/code/api")
            assert mock_run.call_args[0][0] == ["zoxide", "query", "api"]

    def test_no_match(self):
        with patch("shutil.which", return_value="/usr/bin/zoxide"), \
                patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="")
            assert DiscoveryService().resolve("nothing") is None
