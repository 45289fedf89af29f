"""Hook execution runtime with per-plugin fault isolation."""

from __future__ import annotations

from typing import Any

import pluggy
from loguru import logger


class HookRuntime:
    """Safe wrapper around pluggy hook execution.

    Implementations are visited in plugin registration order.
    """

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager

    def call_many_sync(self, hook_name: str, **kwargs: Any) -> list[tuple[str, Any]]:
        """Run all implementations and collect ``(plugin_name, value)`` for each success."""

        results: list[tuple[str, Any]] = []
        for impl in self._iter_hookimpls(hook_name):
            call_kwargs = self._kwargs_for_impl(impl, kwargs)
            try:
                value = impl.function(**call_kwargs)
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.failed hook={} plugin={}",
                    hook_name,
                    impl.plugin_name or "<unknown>",
                )
                continue
            results.append((impl.plugin_name, value))
        return results

    def call_one_sync(self, plugin_name: str, hook_name: str, **kwargs: Any) -> Any:
        """Run the implementation owned by ``plugin_name``; errors propagate."""

        for impl in self._iter_hookimpls(hook_name):
            if impl.plugin_name != plugin_name:
                continue
            return impl.function(**self._kwargs_for_impl(impl, kwargs))
        raise LookupError(f"plugin {plugin_name!r} does not implement {hook_name!r}")

    def hook_report(self) -> dict[str, list[str]]:
        """Build a hook->plugins mapping for diagnostics."""

        report: dict[str, list[str]] = {}
        for hook_name, hook_caller in sorted(self._plugin_manager.hook.__dict__.items()):
            if hook_name.startswith("_") or not hasattr(hook_caller, "get_hookimpls"):
                continue
            plugin_names = [impl.plugin_name for impl in hook_caller.get_hookimpls()]
            if plugin_names:
                report[hook_name] = plugin_names
        return report

    def _iter_hookimpls(self, hook_name: str) -> list[Any]:
        hook = getattr(self._plugin_manager.hook, hook_name, None)
        if hook is None or not hasattr(hook, "get_hookimpls"):
            return []
        order = {name: index for index, name in enumerate(self._registration_order())}
        return sorted(hook.get_hookimpls(), key=lambda impl: order.get(impl.plugin_name, len(order)))

    def _registration_order(self) -> list[str]:
        return [name for name, _plugin in self._plugin_manager.list_name_plugin()]

    @staticmethod
    def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {name: kwargs[name] for name in impl.argnames if name in kwargs}
