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
Time Decoding

Calendar arithmetic and hour/minute decoding shared by both extraction
strategies. All datetimes are naive local wall-clock times.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .config import DateOrder, ParserConfig
from .models import InvalidDateError
from .vocabulary import NOT_AN_HOUR, period_regex

# Used when the text carries no time information at all
DEFAULT_TIME = (9, 0)

# Periods that imply PM for an hour written without am/pm
_PM_PERIODS = ("afternoon", "evening", "night")

_PERIOD_RE = re.compile(rf"\b({period_regex()})\b")

# Times that are unambiguous on their own, in order of preference
EXPLICIT_TIME_PATTERNS = (
    re.compile(r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})(?:\s*(?P<meridiem>am|pm))?\b"),
    re.compile(r"(?<![./:\d])\b(?P<hour>\d{1,2})\s*(?P<meridiem>am|pm)\b"),
    re.compile(r"\bat\s+(?P<hour>\d{1,2})\b" + NOT_AN_HOUR),
)

_BARE_HOUR_RE = re.compile(r"(?<![./:\d])\b(?P<hour>\d{1,2})\b" + NOT_AN_HOUR)


def to_24_hour(
    hour: int,
    meridiem: Optional[str],
    config: ParserConfig,
    period: Optional[str] = None,
) -> int:
    """
    Convert a captured hour to the 24-hour clock.

    Args:
        hour: Hour as written (0-24)
        meridiem: "am", "pm" or None when not written
        config: Parser configuration (for the default meridiem)
        period: Time period named in the text, if any

    Returns:
        Hour in 0-23

    Raises:
        InvalidDateError: If the hour is out of range
    """
    if hour < 0 or hour > 24:
        raise InvalidDateError(f"Invalid hour: {hour}")
    if hour == 24:
        return 0
    if hour >= 13 or hour == 0:
        return hour

    if meridiem:
        meridiem = meridiem.lower()
    elif period in _PM_PERIODS and hour < 12:
        meridiem = "pm"
    else:
        meridiem = config.default_meridiem.value.lower()

    if meridiem == "pm" and hour != 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


def decode_time(
    hour: Optional[str],
    minute: Optional[str],
    meridiem: Optional[str],
    config: ParserConfig,
    period: Optional[str] = None,
) -> tuple[int, int]:
    """Decode hour/minute/meridiem captures into (hour, minute)."""
    minute_value = int(minute) if minute else 0
    if minute_value > 59:
        raise InvalidDateError(f"Invalid minute: {minute_value}")
    return (to_24_hour(int(hour), meridiem, config, period), minute_value)


def find_period(text: str, config: ParserConfig) -> Optional[str]:
    """Return the first time period word in the text, if periods are enabled."""
    if not config.time_periods_enabled:
        return None
    match = _PERIOD_RE.search(text.lower())
    return match.group(1) if match else None


def find_explicit_time(text: str) -> Optional[re.Match]:
    """First unambiguous clock time in the text (H:MM, H am/pm, at H)."""
    for pattern in EXPLICIT_TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match
    return None


def find_bare_hour(text: str) -> Optional[re.Match]:
    """A standalone number that could be an hour ("call mom 5")."""
    return _BARE_HOUR_RE.search(text)


def decode_match_time(
    match: re.Match,
    config: ParserConfig,
    period: Optional[str] = None,
) -> tuple[int, int]:
    """Decode a match carrying hour/minute/meridiem named groups."""
    groups = match.groupdict()
    return decode_time(groups["hour"], groups.get("minute"), groups.get("meridiem"), config, period)


def at_time(day, hour: int, minute: int) -> datetime:
    """Combine a date (or datetime) with a wall-clock time."""
    return datetime(day.year, day.month, day.day, hour, minute)


def add_months(day: datetime, months: int) -> datetime:
    """Add calendar months, clamping to the end of shorter months."""
    return day + relativedelta(months=months)


def advance(now: datetime, amount: int, unit: str) -> datetime:
    """Move forward by N days, weeks or months."""
    unit = unit.lower()
    if unit.startswith("month"):
        return add_months(now, amount)
    if unit.startswith("week"):
        return now + timedelta(weeks=amount)
    return now + timedelta(days=amount)


def next_weekday(now: datetime, weekday: int) -> datetime:
    """Next occurrence of a weekday strictly after today."""
    offset = (weekday - now.weekday()) % 7
    return now + timedelta(days=offset or 7)


def roll_to_weekday(anchor: datetime, weekday: int) -> datetime:
    """Same-or-later occurrence of a weekday starting at the anchor date."""
    return anchor + timedelta(days=(weekday - anchor.weekday()) % 7)


def decode_month_day(first: int, second: int, order: DateOrder, year: int) -> tuple[int, int]:
    """
    Interpret a numeric pair like 10/26 under the configured order.

    Raises:
        InvalidDateError: If the pair is not a real date in the given year
    """
    if order is DateOrder.MONTH_FIRST:
        month, day = first, second
    else:
        month, day = second, first

    if month < 1 or month > 12 or day < 1 or day > 31:
        raise InvalidDateError(f"'{first}/{second}' is not a valid {order.label} date")
    try:
        date(year, month, day)
    except ValueError:
        raise InvalidDateError(f"'{first}/{second}' is an impossible {order.label} date")
    return (month, day)


def resolve_numeric_date(
    first: int,
    second: int,
    year: Optional[int],
    hour: int,
    minute: int,
    config: ParserConfig,
    now: datetime,
) -> datetime:
    """
    Build the due datetime for a numeric date.

    Without an explicit year the current year is used, rolling to next year
    when the moment has already passed.
    """
    if year is not None:
        month, day = decode_month_day(first, second, config.date_order, year)
        return datetime(year, month, day, hour, minute)

    month, day = decode_month_day(first, second, config.date_order, now.year)
    target = datetime(now.year, month, day, hour, minute)
    if target < now:
        try:
            target = target.replace(year=now.year + 1)
        except ValueError:
            raise InvalidDateError(f"{month}/{day} does not exist in {now.year + 1}")
    return target
