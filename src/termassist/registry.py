"""Plugin registry: owns the plugins, builds the CLI and routes invocations."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pluggy
import typer
from loguru import logger

from termassist.errors import UnknownCommandError
from termassist.hook_runtime import HookRuntime
from termassist.hookspecs import TERMASSIST_HOOK_NAMESPACE, CommandMatches, Plugin, TermassistHookSpecs

WRONG_PARAMS_MESSAGE = "Wrong params. Use --help"

Picker = Callable[[list[str], str], int | None]


class PluginRegistry:
    """Registered plugins in registration order, keyed by ``name()``."""

    def __init__(self) -> None:
        self._plugin_manager = pluggy.PluginManager(TERMASSIST_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(TermassistHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)

    def register(self, plugin: Plugin) -> None:
        name = plugin.name()
        if self._plugin_manager.has_plugin(name):
            raise ValueError(f"plugin {name!r} is already registered")
        self._plugin_manager.register(plugin, name=name)
        logger.debug("plugin.registered name={}", name)

    def load_builtin_plugins(
        self,
        data_dir: Path,
        *,
        picker: Picker | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Register the todo and reminder plugins backed by ``data_dir``."""

        from termassist.plugins.remind import ReminderPlugin
        from termassist.plugins.todo import TodoPlugin

        self.register(TodoPlugin(data_dir / "todo.yml", picker=picker))
        self.register(ReminderPlugin(data_dir / "remind.yml", today=today))

    def load_entrypoint_plugins(self) -> int:
        """Register third-party plugins published under the ``termassist`` entry-point group."""

        loaded = 0
        for dist, entry_point in self._entry_points():
            try:
                plugin = entry_point.load()
                if isinstance(plugin, type):
                    plugin = plugin()
                self.register(plugin)
                loaded += 1
            except Exception:
                logger.opt(exception=True).warning("plugin.load_failed entry_point={} dist={}", entry_point.name, dist)
        return loaded

    def names(self) -> list[str]:
        return [name for name, _plugin in self._plugin_manager.list_name_plugin()]

    def get(self, name: str) -> Plugin | None:
        return self._plugin_manager.get_plugin(name)

    def build_cli(self, app: typer.Typer) -> typer.Typer:
        """Fold every plugin's ``register_cli`` into ``app``."""

        self._hook_runtime.call_many_sync("register_cli", app=app)
        return app

    def show_all(self) -> list[str]:
        """Collect each plugin's non-empty summary in registration order."""

        blocks: list[str] = []
        for plugin_name, block in self._hook_runtime.call_many_sync("show"):
            if block:
                blocks.append(block)
            else:
                logger.debug("plugin.show_empty name={}", plugin_name)
        return blocks

    def dispatch(self, matches: CommandMatches) -> str | None:
        """Route ``matches`` to the plugin whose name equals ``matches.plugin``."""

        if self.get(matches.plugin) is None:
            logger.info("dispatch.unknown_plugin name={}", matches.plugin)
            return WRONG_PARAMS_MESSAGE
        if matches.plugin not in self.hook_report().get("command", []):
            logger.info("dispatch.no_command_hook plugin={}", matches.plugin)
            return WRONG_PARAMS_MESSAGE
        try:
            return self._hook_runtime.call_one_sync(matches.plugin, "command", matches=matches)
        except UnknownCommandError:
            logger.info("dispatch.unknown_command plugin={} subcommand={}", matches.plugin, matches.subcommand)
            return WRONG_PARAMS_MESSAGE

    def hook_report(self) -> dict[str, list[str]]:
        return self._hook_runtime.hook_report()

    @staticmethod
    def _entry_points() -> list[tuple[str, Any]]:
        from importlib.metadata import entry_points

        return [
            (getattr(entry_point.dist, "name", "<unknown>"), entry_point)
            for entry_point in entry_points(group=TERMASSIST_HOOK_NAMESPACE)
        ]
