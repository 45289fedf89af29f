from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from termassist.ui import keys
from termassist.ui.keys import read_key


@pytest.fixture
def pipe() -> Iterator[tuple[int, int]]:
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        (b"\x1b[A", keys.UP),
        (b"\x1b[B", keys.DOWN),
        (b"\x1bOA", keys.UP),
        (b"\r", keys.ENTER),
        (b"\n", keys.ENTER),
        (b"\x03", keys.CTRL_C),
        (b"\x1b[C", keys.ESC),
        (b"\x1b[D", keys.ESC),
        (b"\t", "\t"),
        (b"q", "q"),
        ("é".encode(), "é"),
    ],
)
def test_decodes_keys(pipe: tuple[int, int], payload: bytes, expected: str) -> None:
    read_fd, write_fd = pipe
    os.write(write_fd, payload)

    assert read_key(read_fd, timeout_ms=100) == expected


def test_lone_escape(pipe: tuple[int, int]) -> None:
    read_fd, write_fd = pipe
    os.write(write_fd, b"\x1b")

    assert read_key(read_fd, timeout_ms=100) == keys.ESC


def test_reads_keys_one_at_a_time(pipe: tuple[int, int]) -> None:
    read_fd, write_fd = pipe
    os.write(write_fd, b"\x1b[Bj\r")

    assert [read_key(read_fd, timeout_ms=100) for _ in range(3)] == [keys.DOWN, "j", keys.ENTER]


def test_timeout_returns_empty(pipe: tuple[int, int]) -> None:
    read_fd, _ = pipe

    assert read_key(read_fd, timeout_ms=10) == ""


def test_end_of_input_raises(pipe: tuple[int, int]) -> None:
    read_fd, write_fd = pipe
    os.close(write_fd)

    with pytest.raises(EOFError):
        read_key(read_fd, timeout_ms=100)
