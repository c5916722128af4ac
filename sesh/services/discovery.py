"""Directory discovery: resolve a session name to a project path via zoxide."""

import shutil
import subprocess
from pathlib import Path


class DiscoveryService:
    """Name-to-path lookups backed by zoxide's frecency database."""

    TIMEOUT = 3

    def __init__(self, binary: str = "zoxide"):
        self._binary = binary

    @property
    def available(self) -> bool:
        return shutil.which(self._binary) is not None

    def resolve(self, name: str) -> Path | None:
        """Best directory match for name, or None."""
        if not name or not self.available:
            return None
        try:
            result = subprocess.run(
                [self._binary, "query", name],
                capture_output=True,
                text=True,
                timeout=self.TIMEOUT,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None
        if result.returncode == 0 and result.stdout.strip():
            return Path(result.stdout.strip().splitlines()[0])
        return None
