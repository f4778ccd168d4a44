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
Parser Configuration

User formatting preferences read by the reminder parser: date component
order, default AM/PM, time-of-day presets and shortcut keywords.
Values can be overridden via environment variables.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import pytz

logger = logging.getLogger("quickreminders.config")

TIME_PERIOD_NAMES = ("morning", "noon", "afternoon", "evening", "night")

DEFAULT_TIME_PERIODS = {
    "morning": (9, 0),
    "noon": (12, 0),
    "afternoon": (15, 0),
    "evening": (18, 0),
    "night": (21, 0),
}

DEFAULT_VOICE_TRIGGERS = ("send", "sent")

_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\s*$", re.IGNORECASE)


class ConfigError(ValueError):
    """Raised when a configuration value cannot be interpreted."""

    pass


class DateOrder(Enum):
    """Order of the numeric components in dates like 10/26."""

    MONTH_FIRST = "mmdd"
    DAY_FIRST = "ddmm"

    @property
    def label(self) -> str:
        return "MM/DD" if self is DateOrder.MONTH_FIRST else "DD/MM"


class Meridiem(Enum):
    AM = "AM"
    PM = "PM"


def validate_timezone(tz_name: str) -> bool:
    """
    Validate that a timezone name is valid.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")

    Returns:
        True if valid, False otherwise
    """
    try:
        pytz.timezone(tz_name)
        return True
    except pytz.UnknownTimeZoneError:
        return False


def parse_clock_string(value: str) -> tuple[int, int]:
    """
    Parse a preset clock string such as "9:00 AM", "6pm" or "18:30".

    Args:
        value: Clock string as stored in the settings

    Returns:
        Tuple of (hour, minute) on the 24-hour clock

    Raises:
        ConfigError: If the string is not a valid clock time
    """
    match = _CLOCK_RE.match(value or "")
    if not match:
        raise ConfigError(f"Invalid clock time: '{value}'")

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").lower()

    if meridiem:
        if hour < 1 or hour > 12:
            raise ConfigError(f"Invalid 12-hour clock time: '{value}'")
        if meridiem == "pm" and hour != 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0

    if hour > 23 or minute > 59:
        raise ConfigError(f"Invalid clock time: '{value}'")
    return (hour, minute)


def _env_bool(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in ("true", "1", "yes", "on"):
        return True
    if raw in ("false", "0", "no", "off"):
        return False
    raise ConfigError(f"{name} must be true or false, got '{raw}'")


@dataclass
class ParserConfig:
    """Formatting preferences for the reminder parser."""

    # Numeric date order (10/26 vs 26/10)
    date_order: DateOrder = DateOrder.MONTH_FIRST

    # Applied to hours written without am/pm
    default_meridiem: Meridiem = Meridiem.AM

    # Natural language time periods ("tomorrow evening")
    time_periods: dict = field(default_factory=lambda: dict(DEFAULT_TIME_PERIODS))
    time_periods_enabled: bool = True

    # Terse keywords: tm, td, mon, tue, ...
    shortcuts_enabled: bool = True

    # Read by the voice layer, not the parser
    voice_send_triggers: tuple = DEFAULT_VOICE_TRIGGERS

    # IANA name used for "now"; None means host local time
    timezone: Optional[str] = None

    def time_period(self, name: str) -> tuple[int, int]:
        """Return the (hour, minute) preset for a period name."""
        return self.time_periods.get(name, DEFAULT_TIME_PERIODS[name])

    def current_time(self) -> datetime:
        """Wall-clock time in the configured timezone, as a naive datetime."""
        if self.timezone:
            if validate_timezone(self.timezone):
                return datetime.now(pytz.timezone(self.timezone)).replace(tzinfo=None)
            logger.warning(f"Invalid timezone '{self.timezone}', falling back to local time")
        return datetime.now()

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Create config from environment variables with defaults."""
        order_raw = os.getenv("REMINDER_DATE_ORDER", "mmdd").strip().lower()
        try:
            date_order = DateOrder(order_raw)
        except ValueError:
            raise ConfigError(f"REMINDER_DATE_ORDER must be 'mmdd' or 'ddmm', got '{order_raw}'")

        meridiem_raw = os.getenv("REMINDER_DEFAULT_MERIDIEM", "AM").strip().upper()
        try:
            default_meridiem = Meridiem(meridiem_raw)
        except ValueError:
            raise ConfigError(f"REMINDER_DEFAULT_MERIDIEM must be AM or PM, got '{meridiem_raw}'")

        time_periods = {}
        for name in TIME_PERIOD_NAMES:
            env_name = f"REMINDER_{name.upper()}_TIME"
            raw = os.getenv(env_name)
            time_periods[name] = parse_clock_string(raw) if raw else DEFAULT_TIME_PERIODS[name]

        triggers_raw = os.getenv("REMINDER_VOICE_TRIGGERS", ",".join(DEFAULT_VOICE_TRIGGERS))
        triggers = tuple(
            word.strip().lower() for word in triggers_raw.split(",") if word.strip()
        )

        timezone = os.getenv("REMINDER_TIMEZONE") or None
        if timezone and not validate_timezone(timezone):
            logger.warning(f"Invalid timezone '{timezone}', falling back to local time")
            timezone = None

        return cls(
            date_order=date_order,
            default_meridiem=default_meridiem,
            time_periods=time_periods,
            time_periods_enabled=_env_bool("REMINDER_TIME_PERIODS_ENABLED", "true"),
            shortcuts_enabled=_env_bool("REMINDER_SHORTCUTS_ENABLED", "true"),
            voice_send_triggers=triggers or DEFAULT_VOICE_TRIGGERS,
            timezone=timezone,
        )
