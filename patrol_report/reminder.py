# patrol_report/reminder.py
"""
"Time for the next report" reminders.

Remembers when the last report was generated and, checked once a minute,
notifies the guard when two hours have passed inside the active window
(all of Sunday, otherwise 17:00 to 06:00). One reminder per report.
"""
from __future__ import annotations
import asyncio
import json
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

LAST_REPORT_KEY = "lastReportTimestamp"
REMINDER_SENT_KEY = "reminderSentFor"

REMINDER_AFTER_MS = 2 * 60 * 60 * 1000
ACTIVE_FROM_HOUR = 17
ACTIVE_UNTIL_HOUR = 6

REMINDER_TITLE = "Safety Report Reminder"
REMINDER_BODY = "It has been 2 hours since your last report. Please submit the latest status."


def now_ms() -> int:
    return int(time.time() * 1000)


class ReminderStore:
    """String key/value pairs kept in a small JSON file. Single writer."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            print(f"[Reminder] Ignoring unreadable state file {self.path}: {e}", file=sys.stderr)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


def record_report_generated(store: ReminderStore, timestamp_ms: int) -> None:
    """A new report resets the reminder cycle"""
    store.set(LAST_REPORT_KEY, str(timestamp_ms))
    store.remove(REMINDER_SENT_KEY)


def is_active_window(moment: datetime) -> bool:
    # weekday(): Monday=0 ... Sunday=6
    if moment.weekday() == 6:
        return True
    return moment.hour >= ACTIVE_FROM_HOUR or moment.hour < ACTIVE_UNTIL_HOUR


def reminder_due(store: ReminderStore, current_ms: int, moment: datetime) -> bool:
    last_str = store.get(LAST_REPORT_KEY)
    if not last_str:
        return False
    try:
        last_ms = int(last_str)
    except ValueError:
        return False
    if current_ms - last_ms < REMINDER_AFTER_MS:
        return False
    if store.get(REMINDER_SENT_KEY) == last_str:
        return False
    return is_active_window(moment)


class Notifier(Protocol):
    def request_permission(self) -> bool:
        ...

    def notify(self, title: str, body: str) -> None:
        ...


class ConsoleNotifier:
    """Prints reminders to the terminal"""

    def request_permission(self) -> bool:
        return True

    def notify(self, title: str, body: str) -> None:
        print(f"\n*** {title} ***\n{body}\n")


class ReminderMonitor:
    def __init__(self, store: ReminderStore, notifier: Notifier,
                 interval: float = 60,
                 clock: Callable[[], int] = now_ms,
                 local_time: Callable[[], datetime] = datetime.now):
        self.store = store
        self.notifier = notifier
        self.interval = interval
        self.clock = clock
        self.local_time = local_time
        self.permitted = False

    def start(self) -> None:
        """One-time permission request before the first check"""
        self.permitted = self.notifier.request_permission()
        if not self.permitted:
            print("[Reminder] Notification permission not granted; reminders will be skipped")

    def check(self) -> bool:
        """Run one evaluation. Returns True if a reminder was sent."""
        if not reminder_due(self.store, self.clock(), self.local_time()):
            return False
        if self.permitted:
            self.notifier.notify(REMINDER_TITLE, REMINDER_BODY)
        self.store.set(REMINDER_SENT_KEY, self.store.get(LAST_REPORT_KEY) or "")
        return True

    async def run(self, iterations: Optional[int] = None) -> None:
        """Check every `interval` seconds, forever or for `iterations` rounds"""
        self.start()
        count = 0
        while iterations is None or count < iterations:
            await asyncio.sleep(self.interval)
            self.check()
            count += 1
