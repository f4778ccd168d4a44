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
Reminder Parser Models

Immutable result types shared by the validators, extractors and the parser.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ReminderParseError(Exception):
    """Base error for reminder text that cannot be decoded."""

    pass


class InvalidDateError(ReminderParseError):
    """Raised when captured date components do not form a real date."""

    pass


class RecurrenceFrequency(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def from_unit(cls, unit: str) -> "RecurrenceFrequency":
        """Map a unit word (day, weeks, ...) to a frequency."""
        unit = unit.lower()
        if unit.startswith("week"):
            return cls.WEEKLY
        if unit.startswith("month"):
            return cls.MONTHLY
        return cls.DAILY


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation stage."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class MatchedPhrase:
    """A scheduling fragment recognised in the text."""

    category: str
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class ScheduleResult:
    """Due date and recurrence extracted from reminder text."""

    due_date: Optional[datetime] = None
    is_recurring: bool = False
    interval: Optional[int] = None
    frequency: Optional[RecurrenceFrequency] = None
    end_date: Optional[datetime] = None
    matched_phrases: tuple = ()
    source: Optional[str] = None

    @classmethod
    def empty(cls, source: Optional[str] = None) -> "ScheduleResult":
        return cls(source=source)

    @property
    def found(self) -> bool:
        return self.due_date is not None


@dataclass(frozen=True)
class ParsedReminder:
    """Result of parsing one piece of reminder text."""

    title: str
    due_date: Optional[datetime] = None
    is_recurring: bool = False
    recurrence_interval: Optional[int] = None
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    recurrence_end_date: Optional[datetime] = None
    is_valid: bool = True
    error_message: Optional[str] = None

    @classmethod
    def invalid(cls, title: str, error_message: str) -> "ParsedReminder":
        """Build a rejected result; no schedule data survives a rejection."""
        return cls(title=title, is_valid=False, error_message=error_message)

    @classmethod
    def from_schedule(cls, title: str, schedule: ScheduleResult) -> "ParsedReminder":
        return cls(
            title=title,
            due_date=schedule.due_date,
            is_recurring=schedule.is_recurring,
            recurrence_interval=schedule.interval,
            recurrence_frequency=schedule.frequency,
            recurrence_end_date=schedule.end_date,
        )


class ExtractionStrategy:
    """
    Base class for date/recurrence extraction strategies.

    Subclasses set ``name`` and implement ``extract`` and ``title``.
    """

    name = "base"

    def extract(self, text: str, now: datetime) -> ScheduleResult:
        """Find the due date and recurrence in lowercase reminder text."""
        raise NotImplementedError

    def title(self, original_text: str, result: ScheduleResult) -> str:
        """Derive the reminder title from the original-case text."""
        raise NotImplementedError
