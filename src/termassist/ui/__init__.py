"""Interactive selection engine."""

from termassist.ui.events import Event, EventSource, Input, Tick
from termassist.ui.picker import TerminalPicker
from termassist.ui.selection import Outcome, SelectionController, SelectionState

__all__ = [
    "Event",
    "EventSource",
    "Input",
    "Outcome",
    "SelectionController",
    "SelectionState",
    "TerminalPicker",
    "Tick",
]
