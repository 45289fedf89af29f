"""Interactive terminal picker used by plugins."""

from __future__ import annotations

import sys

from loguru import logger

from termassist.ui.events import DEFAULT_TICK_INTERVAL, EventSource
from termassist.ui.render import SelectionRenderer
from termassist.ui.selection import SelectionController
from termassist.ui.terminal import TerminalController


class TerminalPicker:
    """Let the user pick one of ``items`` on the controlling terminal."""

    def __init__(
        self,
        *,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
    ) -> None:
        self._tick_interval = tick_interval
        self._stdin_fd = stdin_fd
        self._stdout_fd = stdout_fd

    def __call__(self, items: list[str], title: str) -> int | None:
        stdin_fd = sys.stdin.fileno() if self._stdin_fd is None else self._stdin_fd
        stdout_fd = sys.stdout.fileno() if self._stdout_fd is None else self._stdout_fd
        terminal = TerminalController(stdin_fd, stdout_fd)
        controller = SelectionController(
            terminal,
            lambda: EventSource.for_terminal(stdin_fd, tick_interval=self._tick_interval),
        )
        logger.debug("picker.started items={}", len(items))
        return controller.run(items, SelectionRenderer(terminal.write, title))
