from __future__ import annotations

from datetime import date

import typer

from termassist.hookspecs import CommandMatches, hookimpl

TODAY = date(2026, 10, 19)


class ScriptedPicker:
    """Stand-in for the terminal picker returning a fixed answer."""

    def __init__(self, answer: int | None) -> None:
        self.answer = answer
        self.calls: list[tuple[list[str], str]] = []

    def __call__(self, items: list[str], title: str) -> int | None:
        self.calls.append((list(items), title))
        return self.answer


class EchoPlugin:
    """In-memory plugin that echoes what it is asked to do."""

    def __init__(self, name: str = "echo", summary: str | None = "echo summary") -> None:
        self._name = name
        self.summary = summary
        self.received: list[CommandMatches] = []

    def name(self) -> str:
        return self._name

    @hookimpl
    def register_cli(self, app: typer.Typer) -> None:
        from termassist.plugins.base import forward, plugin_app

        group = plugin_app(self._name, help="Echo things.")
        name = self._name

        @group.command("say")
        def say(ctx: typer.Context, words: str) -> None:
            forward(ctx, name, "say", words=words)

        app.add_typer(group, name=self._name)

    @hookimpl
    def show(self) -> str | None:
        return self.summary

    @hookimpl
    def command(self, matches: CommandMatches) -> str | None:
        self.received.append(matches)
        return f"{self._name}: {matches.value_of('words')}"


class BrokenShowPlugin(EchoPlugin):
    @hookimpl
    def show(self) -> str | None:
        raise RuntimeError("show broke on purpose")


class ShowOnlyPlugin:
    """Plugin that contributes a summary but implements no commands."""

    def name(self) -> str:
        return "notes"

    @hookimpl
    def show(self) -> str | None:
        return "notes summary"
