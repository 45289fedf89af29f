"""Rich rendering of the selection list for a raw-mode terminal."""

from __future__ import annotations

import io
from collections.abc import Callable

from rich.console import Console
from rich.text import Text

from termassist.ui.selection import SelectionState

CLEAR_SCREEN = "\x1b[2J\x1b[H"
HINT = "up/down: move   enter: select   ctrl-c: cancel"


class SelectionRenderer:
    """Render callback for SelectionController."""

    def __init__(self, write: Callable[[str], None], title: str, *, width: int = 80) -> None:
        self._write = write
        self._title = title
        self._width = width

    def __call__(self, state: SelectionState) -> None:
        self._write(CLEAR_SCREEN + self.frame(state))

    def frame(self, state: SelectionState) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=True, color_system="standard", width=self._width)
        console.print(Text(self._title, style="bold"))
        console.print(Text(HINT, style="dim"))
        console.print()
        for index, label in enumerate(state.items):
            if index == state.cursor:
                console.print(Text(f"> {label}", style="reverse"))
            else:
                console.print(Text(f"  {label}"))
        # Raw mode does not translate LF into CR LF.
        return buffer.getvalue().replace("\n", "\r\n")
