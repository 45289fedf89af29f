"""Pluggy hook namespace and plugin hook specifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import pluggy
import typer

TERMASSIST_HOOK_NAMESPACE = "termassist"
hookspec = pluggy.HookspecMarker(TERMASSIST_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(TERMASSIST_HOOK_NAMESPACE)


@dataclass(frozen=True)
class CommandMatches:
    """Parsed invocation of one plugin subcommand."""

    plugin: str
    subcommand: str | None
    arguments: dict[str, Any] = field(default_factory=dict)

    def value_of(self, name: str, default: Any = None) -> Any:
        return self.arguments.get(name, default)


class TermassistHookSpecs:
    """Hook contract for termassist plugins."""

    @hookspec
    def register_cli(self, app: typer.Typer) -> None:
        """Add this plugin's subcommand grammar to the root Typer application."""

    @hookspec
    def show(self) -> str | None:
        """Render a summary block, or None when there is nothing to report."""

    @hookspec
    def command(self, matches: CommandMatches) -> str | None:
        """Execute one parsed subcommand and return an optional message."""


@runtime_checkable
class Plugin(Protocol):
    """Capability set every registered plugin object provides."""

    def name(self) -> str: ...

    def register_cli(self, app: typer.Typer) -> None: ...

    def show(self) -> str | None: ...

    def command(self, matches: CommandMatches) -> str | None: ...
