"""Terminal control helpers for the interactive picker.

Owns the raw-mode lifecycle and alternate-screen switching.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator

from loguru import logger

from termassist.errors import TerminalUnavailableError

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw-mode transitions of the controlling terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalUnavailableError("interactive mode needs a terminal on stdin") from exc

    def enable_raw_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_raw_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Bracket code with raw-mode enter/exit; the saved state is restored on every exit path."""
        try:
            self.enable_raw_mode()
        except (termios.error, OSError) as exc:
            self._restore_after_failed_enter()
            raise TerminalUnavailableError(f"cannot switch terminal to raw mode: {exc}") from exc
        logger.debug("terminal.raw_mode_entered fd={}", self.stdin_fd)
        try:
            yield
        finally:
            self.disable_raw_mode()
            logger.debug("terminal.raw_mode_left fd={}", self.stdin_fd)

    def _restore_after_failed_enter(self) -> None:
        # tty.setraw may have applied before the screen switch failed.
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            logger.debug("terminal.restore_failed fd={} error={}", self.stdin_fd, exc)
