"""Todo list plugin."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer
from loguru import logger

from termassist.errors import InvalidArgumentError, StoreError, UnknownCommandError
from termassist.hookspecs import CommandMatches, hookimpl
from termassist.plugins.base import forward, plugin_app
from termassist.store import TodoStore

PLUGIN_NAME = "todo"
HEADER = "----- TODO ------"
EMPTY_MESSAGE = "Nothing to do."
PICKER_TITLE = "Select the item you have done"


class TodoPlugin:
    """Ordered todo list stored in ``todo.yml``."""

    def __init__(self, path: Path, *, picker: Callable[[list[str], str], int | None] | None = None) -> None:
        self._store = TodoStore(path)
        self._picker = picker

    def name(self) -> str:
        return PLUGIN_NAME

    @hookimpl
    def register_cli(self, app: typer.Typer) -> None:
        todo_app = plugin_app(PLUGIN_NAME, help="Manage the todo list.")

        @todo_app.command("add")
        def add(
            ctx: typer.Context,
            message: str = typer.Argument(..., help="Item to add"),
        ) -> None:
            """Append an item to the todo list."""

            forward(ctx, PLUGIN_NAME, "add", message=message)

        @todo_app.command("done")
        def done(
            ctx: typer.Context,
            item_id: str | None = typer.Argument(None, metavar="[ID]", help="1-based item number; pick interactively when omitted"),
        ) -> None:
            """Remove a finished item."""

            forward(ctx, PLUGIN_NAME, "done", id=item_id)

        @todo_app.command("list")
        def list_items(ctx: typer.Context) -> None:
            """Print the todo list."""

            forward(ctx, PLUGIN_NAME, "list")

        app.add_typer(todo_app, name=PLUGIN_NAME)

    @hookimpl
    def show(self) -> str | None:
        try:
            messages = self._store.list()
        except StoreError as exc:
            return f"Error in todo show(): {exc}"
        if not messages:
            return None
        return render_todo(messages)

    @hookimpl
    def command(self, matches: CommandMatches) -> str | None:
        if matches.subcommand == "add":
            return self._add(str(matches.value_of("message", "")))
        if matches.subcommand == "done":
            return self._done(matches.value_of("id"))
        if matches.subcommand == "list":
            return self._listing()
        raise UnknownCommandError(f"{PLUGIN_NAME}: unknown subcommand {matches.subcommand!r}")

    def _add(self, message: str) -> str:
        if not message.strip():
            raise InvalidArgumentError("Message must not be empty")
        try:
            position = self._store.add(message)
        except StoreError as exc:
            return f"Cannot add item: {exc}"
        logger.info("todo.added position={}", position)
        return self._listing()

    def _done(self, raw_id: str | None) -> str:
        position = None if raw_id is None else parse_item_id(raw_id)
        try:
            if position is None:
                return self._pick_and_remove()
            removed = self._store.remove(position)
        except StoreError as exc:
            return f"Cannot remove item: {exc}"
        logger.info("todo.removed position={} message={!r}", position, removed)
        return self._listing()

    def _pick_and_remove(self) -> str:
        messages = self._store.list()
        if not messages:
            return EMPTY_MESSAGE
        if self._picker is None:
            raise InvalidArgumentError("ID is required when no interactive terminal is available")
        index = self._picker(messages, PICKER_TITLE)
        if index is None:
            return "Nothing removed."
        removed = self._store.remove(index + 1)
        logger.info("todo.removed position={} message={!r}", index + 1, removed)
        return self._listing()

    def _listing(self) -> str:
        try:
            messages = self._store.list()
        except StoreError as exc:
            return f"Cannot read todo list: {exc}"
        return render_todo(messages) if messages else EMPTY_MESSAGE


def render_todo(messages: list[str]) -> str:
    lines = [HEADER]
    lines.extend(f"  {position}. {message}" for position, message in enumerate(messages, start=1))
    return "\n".join(lines)


def parse_item_id(raw_id: str) -> int:
    """Validate a 1-based item id given on the command line."""

    try:
        position = int(raw_id.strip())
    except ValueError as exc:
        raise InvalidArgumentError("ID must be a number") from exc
    if position < 1:
        raise InvalidArgumentError("ID must be a positive number")
    return position
