"""Merged keyboard-input and tick event stream."""

from __future__ import annotations

import functools
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from termassist.errors import EventSourceClosedError
from termassist.ui.keys import read_key

DEFAULT_TICK_INTERVAL = 0.2
INPUT_POLL_MS = 100


@dataclass(frozen=True)
class Input:
    """A key press."""

    key: str


@dataclass(frozen=True)
class Tick:
    """A periodic wake-up."""


type Event = Input | Tick

_PRODUCER_DONE = object()
_PRODUCERS = 2


class EventSource:
    """Two background producers feeding one consumer-owned queue.

    Events of one producer arrive in the order they were produced; the
    interleaving between the input and tick producers is unspecified.
    """

    def __init__(self, read_key: Callable[[], str], *, tick_interval: float = DEFAULT_TICK_INTERVAL) -> None:
        self._read_key = read_key
        self._tick_interval = tick_interval
        self._queue: queue.Queue[object] = queue.Queue()
        self._closed = threading.Event()
        self._finished_producers = 0
        self._input_thread = threading.Thread(target=self._input_loop, name="termassist-input", daemon=True)
        self._tick_thread = threading.Thread(target=self._tick_loop, name="termassist-tick", daemon=True)
        self._input_thread.start()
        self._tick_thread.start()

    @classmethod
    def for_terminal(cls, fd: int, *, tick_interval: float = DEFAULT_TICK_INTERVAL) -> EventSource:
        return cls(functools.partial(read_key, fd, INPUT_POLL_MS), tick_interval=tick_interval)

    def next(self) -> Event:
        """Block until the next event.

        Raises:
            EventSourceClosedError: both producers stopped and no event is left.
        """
        while True:
            if self._finished_producers >= _PRODUCERS:
                raise EventSourceClosedError("event producers have stopped")
            item = self._queue.get()
            if item is _PRODUCER_DONE:
                self._finished_producers += 1
                continue
            return item  # type: ignore[return-value]

    def close(self) -> None:
        """Drop the receiving side; producers stop at their next send."""
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def __enter__(self) -> EventSource:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()

    def _send(self, event: Event) -> bool:
        if self._closed.is_set():
            return False
        self._queue.put(event)
        return True

    def _input_loop(self) -> None:
        try:
            while not self._closed.is_set():
                try:
                    key = self._read_key()
                except EOFError:
                    logger.debug("events.input_eof")
                    return
                except OSError as exc:
                    logger.debug("events.input_error error={}", exc)
                    self._closed.wait(INPUT_POLL_MS / 1000.0)
                    continue
                if key and not self._send(Input(key)):
                    return
        finally:
            self._queue.put(_PRODUCER_DONE)

    def _tick_loop(self) -> None:
        try:
            while not self._closed.wait(self._tick_interval):
                if not self._send(Tick()):
                    return
        finally:
            self._queue.put(_PRODUCER_DONE)
