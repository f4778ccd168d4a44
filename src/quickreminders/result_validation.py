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

"""Sanity checks on an extracted reminder before it is handed out."""

from datetime import datetime
from typing import Optional

from .models import RecurrenceFrequency, ValidationResult

# Largest accepted interval per frequency, with the unit used in messages
MAX_INTERVALS = {
    RecurrenceFrequency.DAILY: (365, "Daily", "days"),
    RecurrenceFrequency.WEEKLY: (52, "Weekly", "weeks"),
    RecurrenceFrequency.MONTHLY: (24, "Monthly", "months"),
}


def validate_result(
    title: str,
    due_date: Optional[datetime],
    is_recurring: bool,
    interval: Optional[int],
    frequency: Optional[RecurrenceFrequency],
) -> ValidationResult:
    """
    Check a composed reminder for missing content and runaway recurrences.

    Args:
        title: Extracted title
        due_date: Extracted due date (not checked here)
        is_recurring: Whether a recurrence was found
        interval: Recurrence interval
        frequency: Recurrence frequency

    Returns:
        ValidationResult; oversize intervals are rejected, never clamped
    """
    if not title or not title.strip():
        return ValidationResult.fail("No reminder content found")

    if is_recurring:
        if interval is None or interval <= 0:
            return ValidationResult.fail("Invalid recurring interval")
        if frequency is None:
            return ValidationResult.fail("Invalid recurring frequency")

        limit, label, unit = MAX_INTERVALS[frequency]
        if interval > limit:
            return ValidationResult.fail(
                f"{label} recurring interval too large (max {limit} {unit})"
            )

    return ValidationResult.ok()
