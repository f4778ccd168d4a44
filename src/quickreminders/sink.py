# QuickReminders - Natural Language Reminder Parser
# Copyright (c) 2025-2026 Slash Daemon slashdaemon@protonmail.com
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Commercial licensing: [slashdaemon@protonmail.com]

"""
Reminder Sink

Boundary to whatever stores reminders (a calendar, a task app). The parser
never persists anything; callers hand a valid ParsedReminder to a sink.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from .models import ParsedReminder, RecurrenceFrequency, ReminderParseError
from .vocabulary import DAY_KEYWORDS, WEEKDAYS

logger = logging.getLogger("quickreminders.sink")


class ReminderRejectedError(ReminderParseError):
    """Raised when an invalid parse result is offered to a sink."""

    pass


class ReminderSink:
    """Interface implemented by reminder stores."""

    def create_reminder(self, title: str, due_date: Optional[datetime]) -> str:
        """Store a one-off reminder and return its id."""
        raise NotImplementedError

    def create_recurring_reminder(
        self,
        title: str,
        due_date: datetime,
        interval: int,
        frequency: RecurrenceFrequency,
        end_date: Optional[datetime] = None,
    ) -> str:
        """Store a repeating reminder and return its id."""
        raise NotImplementedError


def dispatch_reminder(parsed: ParsedReminder, sink: ReminderSink) -> str:
    """
    Hand a parsed reminder to a sink.

    Args:
        parsed: Result of parsing
        sink: Destination store

    Returns:
        Id assigned by the sink

    Raises:
        ReminderRejectedError: If the parse result is invalid
    """
    if not parsed.is_valid:
        raise ReminderRejectedError(parsed.error_message or "Invalid reminder")

    if parsed.is_recurring:
        reminder_id = sink.create_recurring_reminder(
            parsed.title,
            parsed.due_date,
            parsed.recurrence_interval,
            parsed.recurrence_frequency,
            parsed.recurrence_end_date,
        )
    else:
        reminder_id = sink.create_reminder(parsed.title, parsed.due_date)

    logger.info(f"Created reminder {reminder_id}: {parsed.title!r}")
    return reminder_id


@dataclass(frozen=True)
class StoredReminder:
    id: str
    title: str
    due_date: Optional[datetime] = None
    interval: Optional[int] = None
    frequency: Optional[RecurrenceFrequency] = None
    end_date: Optional[datetime] = None

    @property
    def is_recurring(self) -> bool:
        return self.frequency is not None


class InMemoryReminderSink(ReminderSink):
    """Dictionary-backed sink for tests and the command-line tool."""

    def __init__(self):
        self.reminders = {}
        self._next_id = 1

    def _store(self, reminder: StoredReminder) -> str:
        self.reminders[reminder.id] = reminder
        return reminder.id

    def _new_id(self) -> str:
        reminder_id = f"reminder-{self._next_id}"
        self._next_id += 1
        return reminder_id

    def create_reminder(self, title, due_date):
        return self._store(StoredReminder(self._new_id(), title, due_date))

    def create_recurring_reminder(self, title, due_date, interval, frequency, end_date=None):
        return self._store(
            StoredReminder(self._new_id(), title, due_date, interval, frequency, end_date)
        )

    def find(self, search_text: str) -> list:
        """Reminders whose title contains the search text, case-insensitively."""
        needle = search_text.strip().lower()
        return [r for r in self.reminders.values() if needle and needle in r.title.lower()]

    def delete(self, reminder_id: str) -> None:
        self.reminders.pop(reminder_id, None)

    def reschedule(self, reminder_id: str, due_date: datetime) -> StoredReminder:
        updated = replace(self.reminders[reminder_id], due_date=due_date)
        self.reminders[reminder_id] = updated
        return updated

    def find_matching(self, query) -> list:
        """
        Reminders matching a ReminderQuery.

        The date/time qualifier only narrows the result when more than one
        title matches; if it rules out every match, all title matches are
        returned.
        """
        title_matches = self.find(query.title)
        if len(title_matches) <= 1 or query.due_date is None:
            return title_matches

        narrowed = [r for r in title_matches if query.matches_due_date(r.due_date)]
        logger.debug(f"Qualifier narrowed {len(title_matches)} matches to {len(narrowed)}")
        return narrowed or title_matches

    def list_reminders(self, list_filter: str = "all", now: Optional[datetime] = None) -> list:
        """
        Reminders for a list command, ordered by due date.

        Args:
            list_filter: "all", "today", "tomorrow", a weekday name, or
                text to search titles for
            now: Reference time for today/tomorrow

        Returns:
            Matching reminders; reminders without a due date sort last
        """
        list_filter = (list_filter or "all").strip().lower()
        now = now or datetime.now()

        if list_filter == "all":
            selected = list(self.reminders.values())
        elif list_filter in DAY_KEYWORDS:
            day = (now + timedelta(days=DAY_KEYWORDS[list_filter])).date()
            selected = [
                r for r in self.reminders.values() if r.due_date and r.due_date.date() == day
            ]
        elif list_filter in WEEKDAYS:
            selected = [
                r
                for r in self.reminders.values()
                if r.due_date and r.due_date.weekday() == WEEKDAYS[list_filter]
            ]
        else:
            selected = self.find(list_filter)

        return sorted(selected, key=lambda r: (r.due_date is None, r.due_date or datetime.min))
