"""Builtin termassist plugins."""

from termassist.plugins.remind import ReminderPlugin
from termassist.plugins.todo import TodoPlugin

__all__ = ["ReminderPlugin", "TodoPlugin"]
