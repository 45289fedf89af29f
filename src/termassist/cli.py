"""termassist CLI bootstrap."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

import typer
from loguru import logger
from pydantic import ValidationError

from termassist import __version__
from termassist.config import Settings, get_settings, resolve_data_dir
from termassist.errors import ConfigurationError
from termassist.plugins.base import FallbackGroup
from termassist.registry import WRONG_PARAMS_MESSAGE, Picker, PluginRegistry
from termassist.ui.picker import TerminalPicker


def build_registry(
    settings: Settings,
    *,
    picker: Picker | None = None,
    today: Callable[[], date] = date.today,
    entry_points: bool = True,
) -> PluginRegistry:
    """Create the registry holding builtin and installed plugins."""

    data_dir = resolve_data_dir(settings)
    registry = PluginRegistry()
    registry.load_builtin_plugins(
        data_dir,
        picker=picker or TerminalPicker(tick_interval=settings.tick_interval),
        today=today,
    )
    if entry_points:
        registry.load_entrypoint_plugins()
    logger.debug("registry.ready plugins={} data_dir={}", registry.names(), data_dir)
    return registry


def create_cli_app(registry: PluginRegistry) -> typer.Typer:
    app = typer.Typer(
        name="termassist",
        help="Personal assistant for the terminal.",
        cls=FallbackGroup,
        add_completion=False,
    )

    @app.callback(invoke_without_command=True)
    def main_callback(
        ctx: typer.Context,
        version: bool = typer.Option(False, "--version", "-V", help="Print the version and exit"),
    ) -> None:
        if version:
            typer.echo(f"termassist {__version__}")
            raise typer.Exit()
        ctx.obj = registry
        if ctx.invoked_subcommand is None:
            typer.echo(WRONG_PARAMS_MESSAGE)

    @app.command("show")
    def show() -> None:
        """Render the termassist message."""

        for block in registry.show_all():
            typer.echo(block)

    @app.command("plugins")
    def list_plugins() -> None:
        """Show registered plugins and their hook implementations."""

        typer.echo(", ".join(registry.names()) or "(no plugins)")
        for hook_name, plugin_names in registry.hook_report().items():
            typer.echo(f"{hook_name}: {', '.join(plugin_names)}")

    return registry.build_cli(app)


def main() -> None:
    """Console-script entry point."""

    try:
        settings = get_settings()
        registry = build_registry(settings)
    except (ConfigurationError, ValidationError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    create_cli_app(registry)()
