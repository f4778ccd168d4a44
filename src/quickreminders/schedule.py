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
Recurrence Schedules

Expands a parsed recurring reminder into concrete occurrences.

Every-1 rules map onto a CRON expression and are stepped with croniter;
longer intervals ("every 2 weeks") have no CRON form and are stepped with
calendar arithmetic instead.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from croniter import croniter

from .models import ParsedReminder, RecurrenceFrequency, ReminderParseError
from .timeparse import add_months

logger = logging.getLogger("quickreminders.schedule")

_UNIT_NAMES = {
    RecurrenceFrequency.DAILY: "day",
    RecurrenceFrequency.WEEKLY: "week",
    RecurrenceFrequency.MONTHLY: "month",
}


@dataclass(frozen=True)
class RecurrenceRule:
    """A repeating schedule anchored at its first occurrence."""

    start: datetime
    interval: int
    frequency: RecurrenceFrequency

    @classmethod
    def from_reminder(cls, reminder: ParsedReminder) -> "RecurrenceRule":
        """
        Build a rule from a parsed reminder.

        Raises:
            ReminderParseError: If the reminder is not a valid recurring one
        """
        if not reminder.is_valid or not reminder.is_recurring or reminder.due_date is None:
            raise ReminderParseError("Reminder has no recurrence")
        return cls(
            start=reminder.due_date,
            interval=reminder.recurrence_interval,
            frequency=reminder.recurrence_frequency,
        )

    def to_cron_expression(self) -> Optional[str]:
        """
        CRON expression for the rule, if it has one.

        Returns:
            5-field CRON string, or None for intervals above 1 and for monthly
            rules on days that some months lack
        """
        if self.interval != 1:
            return None

        minute, hour = self.start.minute, self.start.hour
        if self.frequency is RecurrenceFrequency.DAILY:
            return f"{minute} {hour} * * *"
        if self.frequency is RecurrenceFrequency.WEEKLY:
            # CRON counts Sunday as 0
            return f"{minute} {hour} * * {(self.start.weekday() + 1) % 7}"
        if self.start.day > 28:
            return None
        return f"{minute} {hour} {self.start.day} * *"

    def occurrence(self, index: int) -> datetime:
        """The index-th occurrence (0 is the start) by calendar arithmetic."""
        steps = self.interval * index
        if self.frequency is RecurrenceFrequency.MONTHLY:
            return add_months(self.start, steps)
        if self.frequency is RecurrenceFrequency.WEEKLY:
            return self.start + timedelta(weeks=steps)
        return self.start + timedelta(days=steps)

    def next_occurrences(self, count: int) -> list:
        """First ``count`` occurrences, starting with the start date."""
        if count <= 0:
            return []

        cron_expr = self.to_cron_expression()
        if cron_expr is None:
            return [self.occurrence(i) for i in range(count)]

        logger.debug(f"Expanding '{cron_expr}' with croniter")
        cron = croniter(cron_expr, self.start - timedelta(minutes=1))
        return [cron.get_next(datetime) for _ in range(count)]

    def describe(self) -> str:
        unit = _UNIT_NAMES[self.frequency]
        if self.interval == 1:
            return f"every {unit}"
        return f"every {self.interval} {unit}s"


def next_occurrences(reminder: ParsedReminder, count: int) -> list:
    """
    Upcoming due dates for a parsed reminder.

    Args:
        reminder: Parsed reminder
        count: Number of occurrences wanted

    Returns:
        List of datetimes; one-off reminders yield at most their due date
    """
    if not reminder.is_valid or reminder.due_date is None or count <= 0:
        return []
    if not reminder.is_recurring:
        return [reminder.due_date]
    return RecurrenceRule.from_reminder(reminder).next_occurrences(count)


def format_due_date(due_date: datetime) -> str:
    """Format a due date like "Thu Oct 15 at 3:00 PM"."""
    hour = due_date.hour % 12 or 12
    meridiem = "AM" if due_date.hour < 12 else "PM"
    return f"{due_date.strftime('%a %b')} {due_date.day} at {hour}:{due_date.minute:02d} {meridiem}"


def describe_reminder(reminder: ParsedReminder) -> str:
    """One-line human summary of a parsed reminder."""
    if not reminder.is_valid:
        return f"Invalid reminder: {reminder.error_message}"
    if reminder.due_date is None:
        return f"{reminder.title} (no due date)"

    summary = f"{reminder.title} - {format_due_date(reminder.due_date)}"
    if reminder.is_recurring:
        summary += f", {RecurrenceRule.from_reminder(reminder).describe()}"
    return summary
