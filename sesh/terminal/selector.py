"""TerminalSelector: in-place redrawing list picker driven by single keys.

The terminal is put in cbreak mode (no line buffering, no echo) with the
cursor hidden for the duration of run(). One cleanup routine restores
both, and it runs on every exit path: selection, cancel, bare escape,
deleting the last option, exceptions and SIGINT/SIGTERM/SIGHUP.
"""

from __future__ import annotations

import os
import signal
import sys
import termios
import threading
import tty
from dataclasses import dataclass
from typing import Callable, TextIO

from ..models.exceptions import SelectorInterrupted
from ..models.session import identifier_of
from .keys import EscapeDecoder, Key


HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"

FOOTER = "[↑/↓: navigate | enter: select | q: cancel]"
FOOTER_WITH_DELETE = "[↑/↓: navigate | enter: select | d: kill | q: cancel]"

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


def cursor_up(lines: int) -> str:
    return f"\x1b[{lines}A"


def _is_terminal(fd: int) -> bool:
    return os.isatty(fd)


@dataclass(frozen=True)
class Selected:
    """The user picked an option."""

    option: str
    index: int

    @property
    def identifier(self) -> str:
        """Session name portion of the option."""
        return identifier_of(self.option)


@dataclass(frozen=True)
class Cancelled:
    """The picker closed without a selection."""

    reason: str = "cancelled"


SelectionResult = Selected | Cancelled


class TerminalSelector:
    """Interactive picker over a list of display strings.

    Args:
        prompt: Bold title line
        options: Non-empty list of display lines
        on_delete: Called with the identifier of the highlighted option
            when 'd' is pressed. Deletion is disabled when None.
        input_fd: File descriptor to read keys from (default stdin)
        output: Stream to draw on (default stdout)
        escape_timeout: Seconds to wait for bytes after ESC
    """

    def __init__(
        self,
        prompt: str,
        options: list[str],
        on_delete: Callable[[str], object] | None = None,
        input_fd: int | None = None,
        output: TextIO | None = None,
        escape_timeout: float = 0.1,
    ):
        if not options:
            raise ValueError("TerminalSelector needs at least one option")
        self.prompt = prompt
        self.options = list(options)
        self.cursor = 0
        self.prior_rendered_count = 0
        self.raw_mode_active = False

        self._on_delete = on_delete
        self._fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._out = output or sys.stdout
        self._decoder = EscapeDecoder(self._fd, escape_timeout)
        self._saved_attrs: list | None = None
        self._saved_handlers: dict[int, object] = {}
        self._drawn = False

    @property
    def delete_enabled(self) -> bool:
        return self._on_delete is not None

    def run(self) -> SelectionResult:
        """Show the picker until a selection, cancel or signal."""
        try:
            self._enter()
            self._render(redraw=False)
            return self._loop()
        finally:
            self._cleanup()

    # --- terminal state ---

    def _enter(self) -> None:
        if threading.current_thread() is threading.main_thread():
            for signum in HANDLED_SIGNALS:
                self._saved_handlers[signum] = signal.signal(signum, self._on_signal)

        if _is_terminal(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        self.raw_mode_active = True
        self._write(HIDE_CURSOR)

    def _on_signal(self, signum: int, frame) -> None:
        raise SelectorInterrupted(signum)

    def _cleanup(self) -> None:
        """Restore cursor, terminal mode and signal handlers. Idempotent."""
        if self.raw_mode_active:
            if self._drawn:
                self._write("\r\n")
            self._write(SHOW_CURSOR)
            if self._saved_attrs is not None:
                termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
                self._saved_attrs = None
            self.raw_mode_active = False

        for signum, handler in self._saved_handlers.items():
            signal.signal(signum, handler)
        self._saved_handlers = {}

    # --- key handling ---

    def _loop(self) -> SelectionResult:
        while True:
            key = self._decoder.read_key()

            if key is Key.ENTER:
                return Selected(option=self.options[self.cursor], index=self.cursor)
            if key is Key.CANCEL:
                return Cancelled()
            if key is Key.ABORT:
                return Cancelled(reason="aborted")

            if key is Key.UP:
                self.move(-1)
            elif key is Key.DOWN:
                self.move(1)
            elif key is Key.DELETE and self.delete_enabled:
                if not self.delete_current():
                    return Cancelled(reason="empty")

            self._render(redraw=True)

    def move(self, step: int) -> None:
        """Move the highlight with wraparound."""
        self.cursor = (self.cursor + step) % len(self.options)

    def delete_current(self) -> bool:
        """Remove the highlighted option. Returns False once the list is empty.

        The external removal happens before the list changes, so a crash in
        between leaves the next listing consistent with tmux.
        """
        if not self.options or self._on_delete is None:
            return bool(self.options)

        self._on_delete(identifier_of(self.options[self.cursor]))
        del self.options[self.cursor]

        if not self.options:
            return False
        if self.cursor >= len(self.options):
            self.cursor = len(self.options) - 1
        return True

    # --- drawing ---

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _render(self, redraw: bool) -> None:
        parts: list[str] = []
        if redraw and self._drawn:
            # Cursor rests on the footer: options plus the prompt line above it
            parts.append(cursor_up(self.prior_rendered_count + 1))

        parts.append(f"{CLEAR_LINE}\r{BOLD}{self.prompt}{RESET}\r\n")
        for i, option in enumerate(self.options):
            parts.append(f"{CLEAR_LINE}\r")
            if i == self.cursor:
                parts.append(f"  {REVERSE}{BOLD} > {option} {RESET}")
            else:
                parts.append(f"  {DIM}   {option}{RESET}")
            parts.append("\r\n")

        footer = FOOTER_WITH_DELETE if self.delete_enabled else FOOTER
        parts.append(f"{CLEAR_LINE}\r{DIM}  {footer}{RESET}")

        # Lines left over from a longer previous draw
        stale = self.prior_rendered_count - len(self.options)
        if stale > 0:
            parts.append(f"\r\n{CLEAR_LINE}" * stale)
            parts.append(cursor_up(stale))

        self.prior_rendered_count = len(self.options)
        self._drawn = True
        self._write("".join(parts))


def select(
    prompt: str,
    options: list[str],
    on_delete: Callable[[str], object] | None = None,
    escape_timeout: float = 0.1,
) -> SelectionResult:
    """Run a picker on the controlling terminal."""
    return TerminalSelector(
        prompt,
        options,
        on_delete=on_delete,
        escape_timeout=escape_timeout,
    ).run()
