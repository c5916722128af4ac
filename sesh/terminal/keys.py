"""Key decoding for the terminal picker."""

import os
import select
from enum import Enum


ESC = "\x1b"


class Key(Enum):
    """Logical keys understood by the picker."""

    ENTER = "enter"
    CANCEL = "cancel"  # q / Q
    UP = "up"
    DOWN = "down"
    DELETE = "delete"  # d / D
    ABORT = "abort"  # Bare escape or end of input
    OTHER = "other"


_PLAIN_KEYS = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "q": Key.CANCEL,
    "Q": Key.CANCEL,
    "k": Key.UP,
    "j": Key.DOWN,
    "d": Key.DELETE,
    "D": Key.DELETE,
}

_ARROWS = {"A": Key.UP, "B": Key.DOWN}


class EscapeDecoder:
    """Reads bytes from a file descriptor and decodes them into Keys.

    After an ESC byte, up to two more bytes are read, each with a
    select() timeout, so a lone ESC is told apart from an arrow sequence.
    """

    def __init__(self, fd: int, escape_timeout: float = 0.1):
        self.fd = fd
        self.escape_timeout = escape_timeout

    def _read_char(self, timeout: float | None = None) -> str | None:
        """Read one byte. None on timeout or end of input."""
        if timeout is not None:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if not ready:
                return None
        data = os.read(self.fd, 1)
        if not data:
            return None
        return data.decode("latin-1")

    def read_key(self) -> Key:
        """Block until one logical key is available."""
        ch = self._read_char()
        if ch is None:
            return Key.ABORT
        if ch == ESC:
            return self._read_escape_sequence()
        return _PLAIN_KEYS.get(ch, Key.OTHER)

    def _read_escape_sequence(self) -> Key:
        first = self._read_char(self.escape_timeout)
        if first is None:
            return Key.ABORT
        second = self._read_char(self.escape_timeout)
        if first in ("[", "O") and second in _ARROWS:
            return _ARROWS[second]
        # Unknown sequence: consumed and ignored
        return Key.OTHER
