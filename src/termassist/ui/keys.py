"""Raw key decoding for the interactive picker."""

from __future__ import annotations

import os
import select

UP = "UP"
DOWN = "DOWN"
ENTER = "ENTER"
ESC = "ESC"
CTRL_C = "CTRL_C"

ESC_SEQUENCE_TIMEOUT_MS = 30

_ARROWS = {b"A": UP, b"B": DOWN}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    return ch or None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input and raises
    ``EOFError`` once the stream is exhausted.
    """
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return ""

    ch = os.read(fd, 1)
    if not ch:
        raise EOFError("end of terminal input")

    if ch == b"\x03":
        return CTRL_C
    if ch in {b"\r", b"\n"}:
        return ENTER
    if ch != b"\x1b":
        return _decode_utf8(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq not in {b"[", b"O"}:
        return ESC
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return ESC
    return _ARROWS.get(seq, ESC)


def _decode_utf8(fd: int, first: bytes) -> str:
    lead = first[0]
    if lead < 0x80:
        return first.decode("ascii")
    if lead >> 5 == 0b110:
        extra = 1
    elif lead >> 4 == 0b1110:
        extra = 2
    elif lead >> 3 == 0b11110:
        extra = 3
    else:
        extra = 0
    data = first
    for _ in range(extra):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")
