from __future__ import annotations

import os
import pty
import select
import termios
import threading
import time
from collections.abc import Iterator
from pathlib import Path

import pytest
from fixtures_plugins.sample_plugins import TODAY
from typer.testing import CliRunner

from termassist import cli
from termassist.errors import TerminalUnavailableError
from termassist.registry import PluginRegistry
from termassist.ui.picker import TerminalPicker
from termassist.ui.render import CLEAR_SCREEN, SelectionRenderer
from termassist.ui.selection import SelectionState
from termassist.ui.terminal import TerminalController


@pytest.fixture
def pipe_fds() -> Iterator[tuple[int, int]]:
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    os.close(read_fd)
    os.close(write_fd)


def test_frame_marks_cursor_and_uses_crlf() -> None:
    written: list[str] = []
    state = SelectionState.new(["buy milk", "call mom"])
    state.on_down()

    SelectionRenderer(written.append, "Pick one")(state)

    assert len(written) == 1
    frame = written[0]
    assert frame.startswith(CLEAR_SCREEN)
    assert "Pick one" in frame
    assert "  buy milk" in frame
    assert "> call mom" in frame
    assert "  Exit" in frame
    assert "\n" not in frame.replace("\r\n", "")


def test_controller_requires_a_terminal(pipe_fds: tuple[int, int]) -> None:
    read_fd, write_fd = pipe_fds

    with pytest.raises(TerminalUnavailableError):
        TerminalController(read_fd, write_fd)


def test_picker_fails_cleanly_without_terminal(pipe_fds: tuple[int, int]) -> None:
    read_fd, write_fd = pipe_fds
    picker = TerminalPicker(stdin_fd=read_fd, stdout_fd=write_fd)

    with pytest.raises(TerminalUnavailableError):
        picker(["a"], "title")


def test_interactive_done_without_terminal_reports_error(data_dir: Path, pipe_fds: tuple[int, int]) -> None:
    read_fd, write_fd = pipe_fds
    registry = PluginRegistry()
    registry.load_builtin_plugins(
        data_dir,
        picker=TerminalPicker(stdin_fd=read_fd, stdout_fd=write_fd),
        today=lambda: TODAY,
    )
    app = cli.create_cli_app(registry)
    runner = CliRunner()
    runner.invoke(app, ["todo", "add", "buy milk"])

    result = runner.invoke(app, ["todo", "done"])

    assert result.exit_code == 1
    assert "interactive mode needs a terminal" in result.output
    assert runner.invoke(app, ["todo", "list"]).output == "----- TODO ------\n  1. buy milk\n"


@pytest.fixture
def pty_fds() -> Iterator[tuple[int, int]]:
    master_fd, slave_fd = pty.openpty()
    yield master_fd, slave_fd
    os.close(master_fd)
    os.close(slave_fd)


def _in_raw_mode(fd: int) -> bool:
    return not termios.tcgetattr(fd)[3] & termios.ICANON


def _pick_on_pty(master_fd: int, slave_fd: int, items: list[str], typed: bytes) -> dict[str, object]:
    outcome: dict[str, object] = {}
    picker = TerminalPicker(tick_interval=0.05, stdin_fd=slave_fd, stdout_fd=slave_fd)

    def run() -> None:
        try:
            outcome["index"] = picker(items, "Pick one")
        except Exception as exc:
            outcome["error"] = exc

    worker = threading.Thread(target=run, daemon=True)
    worker.start()
    sent = False
    deadline = time.monotonic() + 5
    while worker.is_alive() and time.monotonic() < deadline:
        # Keys typed before raw mode would be flushed by the mode switch.
        if not sent and _in_raw_mode(slave_fd):
            os.write(master_fd, typed)
            sent = True
        ready, _, _ = select.select([master_fd], [], [], 0.02)
        if ready:
            os.read(master_fd, 4096)
    worker.join(timeout=1)
    return outcome


def test_picker_on_pty_confirms_second_item(pty_fds: tuple[int, int]) -> None:
    master_fd, slave_fd = pty_fds
    saved = termios.tcgetattr(slave_fd)

    outcome = _pick_on_pty(master_fd, slave_fd, ["buy milk", "call mom"], b"\x1b[B\r")

    assert outcome == {"index": 1}
    assert termios.tcgetattr(slave_fd) == saved


def test_picker_on_pty_cancelled_by_ctrl_c(pty_fds: tuple[int, int]) -> None:
    master_fd, slave_fd = pty_fds
    saved = termios.tcgetattr(slave_fd)

    outcome = _pick_on_pty(master_fd, slave_fd, ["buy milk", "call mom"], b"\x03")

    assert outcome == {"index": None}
    assert termios.tcgetattr(slave_fd) == saved


def test_failed_screen_switch_restores_tty(pty_fds: tuple[int, int], pipe_fds: tuple[int, int]) -> None:
    _, slave_fd = pty_fds
    read_fd, _ = pipe_fds
    saved = termios.tcgetattr(slave_fd)
    # The read end of a pipe rejects writes, so entering the alternate screen fails after setraw.
    terminal = TerminalController(slave_fd, read_fd)

    with pytest.raises(TerminalUnavailableError, match="cannot switch terminal to raw mode"):
        with terminal.raw_mode():
            pytest.fail("body must not run when raw mode cannot be entered")

    assert termios.tcgetattr(slave_fd) == saved
