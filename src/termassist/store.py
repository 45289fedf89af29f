"""YAML-file backed record stores used by the builtin plugins."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from termassist.errors import InvalidArgumentError, StoreError

STORED_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INPUT_DATE_FORMAT = "%Y-%m-%d"


class YamlListStore:
    """One YAML mapping document holding a single list under ``key``.

    The whole file is read on every ``load`` and rewritten on every ``save``.
    """

    def __init__(self, path: Path, key: str) -> None:
        self.path = path
        self.key = key

    def load(self) -> list[Any]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise StoreError(f"cannot read {self.path}: {exc}") from exc

        if payload is None:
            return []
        if not isinstance(payload, dict):
            raise StoreError(f"{self.path}: expected a mapping with key '{self.key}'")
        records = payload.get(self.key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise StoreError(f"{self.path}: '{self.key}' must be a list")
        logger.debug("store.loaded path={} records={}", self.path, len(records))
        return records

    def save(self, records: list[Any]) -> None:
        document = yaml.safe_dump({self.key: records}, sort_keys=False, allow_unicode=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("store.saved path={} records={}", self.path, len(records))


class TodoStore:
    """Ordered todo messages, addressed by 1-based position."""

    def __init__(self, path: Path) -> None:
        self._store = YamlListStore(path, "messages")

    @property
    def path(self) -> Path:
        return self._store.path

    def list(self) -> list[str]:
        return [str(message) for message in self._store.load()]

    def add(self, message: str) -> int:
        messages = self.list()
        messages.append(message)
        self._store.save(messages)
        return len(messages)

    def remove(self, position: int) -> str:
        messages = self.list()
        if not 1 <= position <= len(messages):
            raise InvalidArgumentError(f"No todo item with id {position}")
        removed = messages.pop(position - 1)
        self._store.save(messages)
        return removed


@dataclass(frozen=True)
class Reminder:
    """One dated reminder."""

    date: date
    message: str

    def to_record(self) -> dict[str, str]:
        stamp = datetime.combine(self.date, datetime.min.time())
        return {"date": stamp.strftime(STORED_DATE_FORMAT), "message": self.message}

    @classmethod
    def from_record(cls, record: object) -> Reminder:
        if not isinstance(record, dict):
            raise StoreError(f"malformed reminder entry: {record!r}")
        message = record.get("message")
        if message is None:
            raise StoreError(f"reminder entry without message: {record!r}")
        return cls(date=_parse_stored_date(record.get("date")), message=str(message))


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` command-line date."""

    try:
        return datetime.strptime(value.strip(), INPUT_DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidArgumentError(f"Wrong date format '{value}', expected YYYY-MM-DD") from exc


def _parse_stored_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        for fmt in (STORED_DATE_FORMAT, INPUT_DATE_FORMAT):
            try:
                return datetime.strptime(value.strip(), fmt).date()
            except ValueError:
                continue
    raise StoreError(f"malformed reminder date: {value!r}")


class ReminderStore:
    """Ordered dated reminders."""

    def __init__(self, path: Path) -> None:
        self._store = YamlListStore(path, "reminders")

    @property
    def path(self) -> Path:
        return self._store.path

    def list(self) -> list[Reminder]:
        return [Reminder.from_record(record) for record in self._store.load()]

    def add(self, reminder: Reminder) -> None:
        reminders = self.list()
        reminders.append(reminder)
        self._store.save([item.to_record() for item in reminders])

    def due(self, on: date) -> list[Reminder]:
        return [reminder for reminder in self.list() if reminder.date == on]
