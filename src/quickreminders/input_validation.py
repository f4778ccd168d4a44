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
Input Validation

Rejects malformed reminder text before any date extraction is attempted.
Rules run in order and the first failure wins.
"""

import logging
import re
from datetime import datetime
from typing import Optional

from .config import DateOrder, ParserConfig
from .models import InvalidDateError, ValidationResult
from .timeparse import decode_month_day
from .vocabulary import UNIT, WEEKS_OR_MONTHS, day_keyword_regex, weekday_regex

logger = logging.getLogger("quickreminders.input_validation")

MIN_LENGTH = 3
MAX_LENGTH = 200

INVALID_TIME_MESSAGE = (
    "Invalid time format - use valid hours (1-24) with AM/PM or 24-hour format"
)

_INVALID_MINUTE_RE = re.compile(r"\b\d{1,2}:[6-9]\d\b")
_HOUR_AFTER_KEYWORD = r"\s+(?:2[5-9]|[3-9]\d)\b(?![./]\d)"
_EVERY_RE = re.compile(rf"\bevery\s+(?!\d+\s+{UNIT}\b|{UNIT}\b)\S+")
_IN_RE = re.compile(
    rf"\bin\s+(?!\d+\s+{UNIT}\b|(?:the\s+)?(?:morning|afternoon|evening)\b)\S+"
)
_IN_DAYS_RE = re.compile(rf"\bin\s+\d+\s+days?\b")
_IN_WEEKS_RE = re.compile(rf"\bin\s+\d+\s+{WEEKS_OR_MONTHS}\b")
_DATE_PAIR_RE = re.compile(r"\b(\d{1,2})[./](\d{1,2})\b")


def _check_length(text: str) -> Optional[str]:
    if not text:
        return "Please enter a reminder"
    if len(text) < MIN_LENGTH:
        return "Reminder is too short"
    if len(text) > MAX_LENGTH:
        return f"Reminder is too long (max {MAX_LENGTH} characters)"
    return None


def _check_time_formats(text: str, config: ParserConfig) -> Optional[str]:
    if _INVALID_MINUTE_RE.search(text):
        return "Invalid minute format (minutes must be 00-59)"

    if re.search(rf"\b(?:at|on){_HOUR_AFTER_KEYWORD}", text):
        return INVALID_TIME_MESSAGE

    day_words = (
        f"(?:{day_keyword_regex(config.shortcuts_enabled)}"
        f"|{weekday_regex(config.shortcuts_enabled)})"
    )
    if re.search(rf"\b{day_words}{_HOUR_AFTER_KEYWORD}", text):
        return INVALID_TIME_MESSAGE
    return None


def _check_clause_structure(text: str) -> Optional[str]:
    if _EVERY_RE.search(text):
        return "Invalid recurring format - use 'every X days/weeks/months'"
    if _IN_RE.search(text):
        return "Invalid relative date format - use 'in X days/weeks/months'"
    return None


def _check_contradictions(text: str, config: ParserConfig) -> Optional[str]:
    weekday = re.compile(rf"\b{weekday_regex(config.shortcuts_enabled)}\b")
    day_keyword = re.compile(rf"\b{day_keyword_regex(config.shortcuts_enabled)}\b")

    in_days = _IN_DAYS_RE.search(text)
    if in_days:
        weekday_match = weekday.search(text)
        if weekday_match:
            if weekday_match.start() < in_days.start():
                return (
                    "Invalid format - cannot use 'weekday in X days'. Use 'in X weeks/months "
                    "weekday' or 'weekday in X weeks/months' instead."
                )
            return (
                "Invalid format - cannot use 'in X days' with weekdays. Use 'in X weeks/months "
                "weekday' or 'weekday in X weeks/months' instead."
            )

    if _IN_WEEKS_RE.search(text):
        if day_keyword.search(text):
            return (
                "Invalid format - cannot use 'in X weeks/months' with 'today/tomorrow'. "
                "Use just 'today/tomorrow' or 'in X weeks/months' alone."
            )
        if _DATE_PAIR_RE.search(text):
            return (
                "Invalid format - cannot use 'in X weeks/months' with specific dates like "
                "'10.10'. Use just 'in X weeks/months' or the specific date alone."
            )
    return None


def _check_dates(text: str, config: ParserConfig, now: datetime) -> Optional[str]:
    label = config.date_order.label
    for match in _DATE_PAIR_RE.finditer(text):
        first, second = int(match.group(1)), int(match.group(2))
        try:
            decode_month_day(first, second, config.date_order, now.year)
        except InvalidDateError:
            if config.date_order is DateOrder.MONTH_FIRST:
                month, day = first, second
            else:
                month, day = second, first
            if month < 1 or month > 12 or day < 1 or day > 31:
                return (
                    f"Invalid date format: '{first}/{second}' doesn't work with {label} "
                    "format. Check your Date Format setting in preferences."
                )
            return (
                f"Invalid date: '{first}/{second}' with {label} format results in an "
                "impossible date (e.g., February 30th)."
            )
    return None


def validate_input(
    text: str,
    config: ParserConfig,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """
    Validate raw reminder text before extraction.

    Args:
        text: Raw user input
        config: Parser configuration snapshot
        now: Reference time (defaults to the configured current time)

    Returns:
        ValidationResult with the first failing rule's message
    """
    trimmed = (text or "").strip()
    now = now or config.current_time()

    error = _check_length(trimmed)
    if error is None:
        lowered = trimmed.lower()
        error = (
            _check_time_formats(lowered, config)
            or _check_clause_structure(lowered)
            or _check_contradictions(lowered, config)
            or _check_dates(lowered, config, now)
        )

    if error:
        logger.debug(f"Rejected input {trimmed!r}: {error}")
        return ValidationResult.fail(error)
    return ValidationResult.ok()
