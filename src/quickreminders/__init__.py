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
QuickReminders Package

Turns free-form text such as "pay rent in 2 weeks every 1 month" into a
titled, scheduled reminder.
"""

from .config import ConfigError, DateOrder, Meridiem, ParserConfig, validate_timezone
from .models import (
    InvalidDateError,
    ParsedReminder,
    RecurrenceFrequency,
    ReminderParseError,
    ScheduleResult,
    ValidationResult,
)
from .parser import ReminderParser, parse_reminder_text
from .schedule import RecurrenceRule, describe_reminder, next_occurrences
from .sink import InMemoryReminderSink, ReminderRejectedError, ReminderSink, dispatch_reminder

__all__ = [
    "ConfigError",
    "DateOrder",
    "Meridiem",
    "ParserConfig",
    "validate_timezone",
    "InvalidDateError",
    "ParsedReminder",
    "RecurrenceFrequency",
    "ReminderParseError",
    "ScheduleResult",
    "ValidationResult",
    "ReminderParser",
    "parse_reminder_text",
    "RecurrenceRule",
    "describe_reminder",
    "next_occurrences",
    "InMemoryReminderSink",
    "ReminderRejectedError",
    "ReminderSink",
    "dispatch_reminder",
]
