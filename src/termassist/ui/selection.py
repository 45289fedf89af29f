"""Selection-list state machine and the loop that drives it."""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from loguru import logger

from termassist.ui import keys
from termassist.ui.events import Event, Input

CANCEL_LABEL = "Exit"


class Outcome(Enum):
    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass
class SelectionState:
    """Cursor over a fixed item list whose last entry is a synthetic cancel entry.

    ``outcome`` only moves from RUNNING to CONFIRMED or CANCELLED; every
    transition after that is a no-op.
    """

    items: list[str]
    cursor: int = 0
    outcome: Outcome = Outcome.RUNNING
    selected: int | None = None

    @classmethod
    def new(cls, items: list[str], cancel_label: str = CANCEL_LABEL) -> SelectionState:
        return cls(items=[*items, cancel_label])

    @property
    def running(self) -> bool:
        return self.outcome is Outcome.RUNNING

    @property
    def confirmed_index(self) -> int | None:
        return self.selected if self.outcome is Outcome.CONFIRMED else None

    @property
    def last_index(self) -> int:
        return len(self.items) - 1

    def on_down(self) -> None:
        if self.running:
            self.cursor = min(self.cursor + 1, self.last_index)

    def on_up(self) -> None:
        if self.running:
            self.cursor = max(self.cursor - 1, 0)

    def on_cancel(self) -> None:
        if self.running:
            self.outcome = Outcome.CANCELLED

    def on_confirm(self) -> None:
        if not self.running:
            return
        if self.cursor == self.last_index:
            self.outcome = Outcome.CANCELLED
        else:
            self.outcome = Outcome.CONFIRMED
            self.selected = self.cursor


class EventStream(Protocol):
    def next(self) -> Event: ...

    def close(self) -> None: ...


class RawTerminal(Protocol):
    def raw_mode(self) -> contextlib.AbstractContextManager[None]: ...


_TRANSITIONS: dict[str, Callable[[SelectionState], None]] = {
    keys.DOWN: SelectionState.on_down,
    keys.UP: SelectionState.on_up,
    keys.ENTER: SelectionState.on_confirm,
    keys.CTRL_C: SelectionState.on_cancel,
}


class SelectionController:
    """Drive a SelectionState from an event stream until the user decides."""

    def __init__(self, terminal: RawTerminal, events_factory: Callable[[], EventStream]) -> None:
        self._terminal = terminal
        self._events_factory = events_factory

    def run(self, items: list[str], render: Callable[[SelectionState], None]) -> int | None:
        """Return the confirmed item index, or None when the user cancelled."""

        state = SelectionState.new(items)
        with self._terminal.raw_mode():
            events = self._events_factory()
            try:
                render(state)
                while state.running:
                    if self.apply(state, events.next()):
                        render(state)
            finally:
                events.close()
        logger.debug("picker.finished outcome={} selected={}", state.outcome.value, state.confirmed_index)
        return state.confirmed_index

    @staticmethod
    def apply(state: SelectionState, event: Event) -> bool:
        """Apply one event; return whether the state changed in a way worth re-rendering."""

        if not isinstance(event, Input):
            return False
        transition = _TRANSITIONS.get(event.key)
        if transition is None:
            return False
        transition(state)
        return True
