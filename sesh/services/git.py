"""Git operations for sesh: cloning and default session names."""

import logging
import subprocess
from pathlib import Path

from ..models.exceptions import GitError


logger = logging.getLogger(__name__)


def repo_name_from_url(url: str) -> str:
    """Repository name from a clone URL: last path segment without .git."""
    name = url.rstrip("/").rsplit("/", 1)[-1]
    # scp-style URLs without a slash (host:repo.git)
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


class GitService:
    """Centralized git operations for sesh.

    All methods are static and accept a working directory.
    Queries fail gracefully, returning None.
    """

    TIMEOUT = 5  # seconds for git queries

    @staticmethod
    def _query(args: list[str], cwd: Path) -> str | None:
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=GitService.TIMEOUT,
            )
            if result.returncode == 0 and result.stdout.strip():
                return result.stdout.strip()
        except (subprocess.TimeoutExpired, OSError):
            pass
        return None

    @staticmethod
    def is_work_tree(cwd: Path) -> bool:
        return GitService._query(["rev-parse", "--is-inside-work-tree"], cwd) == "true"

    @staticmethod
    def remote_name(cwd: Path) -> str | None:
        """Repository name derived from the origin remote URL."""
        url = GitService._query(["remote", "get-url", "origin"], cwd)
        if url:
            return repo_name_from_url(url) or None
        return None

    @staticmethod
    def root_name(cwd: Path) -> str | None:
        """Basename of the repository top-level directory."""
        root = GitService._query(["rev-parse", "--show-toplevel"], cwd)
        if root:
            return Path(root).name
        return None

    @staticmethod
    def default_session_name(cwd: Path) -> str:
        """Origin repo name, else git root name, else directory name."""
        name = None
        if GitService.is_work_tree(cwd):
            name = GitService.remote_name(cwd) or GitService.root_name(cwd)
        return name or cwd.name

    @staticmethod
    def clone(url: str, dest: Path) -> None:
        """Clone url into dest with output shown to the user.

        Raises:
            GitError: git is missing or the clone failed
        """
        logger.debug(f"git clone {url} {dest}")
        try:
            result = subprocess.run(["git", "clone", url, str(dest)])
        except FileNotFoundError:
            raise GitError("git not found", suggestion="install git")
        if result.returncode != 0:
            raise GitError("Clone failed.")
