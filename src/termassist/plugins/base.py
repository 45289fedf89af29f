"""Typer glue shared by plugin subcommand groups."""

from __future__ import annotations

from typing import Any

import click
import typer
from typer.core import TyperGroup

from termassist.errors import AssistError
from termassist.hookspecs import CommandMatches
from termassist.registry import WRONG_PARAMS_MESSAGE, PluginRegistry


class FallbackGroup(TyperGroup):
    """Command group that answers unknown subcommands with a usage hint instead of failing."""

    def resolve_command(self, ctx: click.Context, args: list[str]) -> Any:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            typer.echo(WRONG_PARAMS_MESSAGE)
            ctx.exit(0)


def plugin_app(plugin_name: str, help: str) -> typer.Typer:
    """Create the subcommand group for one plugin.

    Invoking the group without a subcommand is forwarded with ``subcommand=None``.
    """

    group = typer.Typer(name=plugin_name, help=help, cls=FallbackGroup, add_completion=False)

    @group.callback(invoke_without_command=True)
    def _group(ctx: typer.Context) -> None:
        if ctx.invoked_subcommand is None:
            forward(ctx, plugin_name, None)

    return group


def forward(ctx: click.Context, plugin_name: str, subcommand: str | None, **arguments: Any) -> None:
    """Hand one parsed invocation to the registry and print what the plugin returns."""

    registry = ctx.find_object(PluginRegistry)
    if registry is None:
        raise RuntimeError("no plugin registry bound to the CLI context")
    try:
        message = registry.dispatch(CommandMatches(plugin=plugin_name, subcommand=subcommand, arguments=arguments))
    except AssistError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    if message:
        typer.echo(message)
