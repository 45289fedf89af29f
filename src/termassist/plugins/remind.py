"""Dated reminders plugin."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path

import typer
from loguru import logger

from termassist.errors import InvalidArgumentError, StoreError, UnknownCommandError
from termassist.hookspecs import CommandMatches, hookimpl
from termassist.plugins.base import forward, plugin_app
from termassist.store import Reminder, ReminderStore, parse_date

PLUGIN_NAME = "remind"
HEADER = "----- REMINDERS ------"


class ReminderPlugin:
    """Reminders stored in ``remind.yml``; ``show`` reports the ones due today."""

    def __init__(self, path: Path, *, today: Callable[[], date] = date.today) -> None:
        self._store = ReminderStore(path)
        self._today = today

    def name(self) -> str:
        return PLUGIN_NAME

    @hookimpl
    def register_cli(self, app: typer.Typer) -> None:
        remind_app = plugin_app(PLUGIN_NAME, help="Manage dated reminders.")

        @remind_app.command("add")
        def add(
            ctx: typer.Context,
            date_: str = typer.Argument(..., metavar="DATE", help="Day to be reminded on, YYYY-MM-DD"),
            message: str = typer.Argument(..., help="Reminder text"),
        ) -> None:
            """Add a reminder for a day."""

            forward(ctx, PLUGIN_NAME, "add", date=date_, message=message)

        @remind_app.command("list")
        def list_reminders(ctx: typer.Context) -> None:
            """Print every stored reminder."""

            forward(ctx, PLUGIN_NAME, "list")

        app.add_typer(remind_app, name=PLUGIN_NAME)

    @hookimpl
    def show(self) -> str | None:
        try:
            due = self._store.due(self._today())
        except StoreError as exc:
            return f"Error in remind show(): {exc}"
        if not due:
            return None
        return "\n".join([HEADER, *(f"  {reminder.message}" for reminder in due)])

    @hookimpl
    def command(self, matches: CommandMatches) -> str | None:
        if matches.subcommand == "add":
            return self._add(str(matches.value_of("date", "")), str(matches.value_of("message", "")))
        if matches.subcommand == "list":
            return self._list()
        raise UnknownCommandError(f"{PLUGIN_NAME}: unknown subcommand {matches.subcommand!r}")

    def _add(self, raw_date: str, message: str) -> str:
        reminder = Reminder(date=parse_date(raw_date), message=message)
        if not message.strip():
            raise InvalidArgumentError("Message must not be empty")
        try:
            self._store.add(reminder)
        except StoreError as exc:
            return f"Cannot add reminder: {exc}"
        logger.info("remind.added date={}", reminder.date.isoformat())
        return f"Reminder added for {reminder.date.isoformat()}."

    def _list(self) -> str:
        try:
            reminders = self._store.list()
        except StoreError as exc:
            return f"Cannot read reminders: {exc}"
        if not reminders:
            return "No reminders."
        return "\n".join([HEADER, *(f"  {item.date.isoformat()}  {item.message}" for item in reminders)])
