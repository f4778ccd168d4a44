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

"""Words and regex fragments shared by the validators and extractors."""

from .config import TIME_PERIOD_NAMES

# Python weekday numbers (Monday = 0)
WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

WEEKDAY_SHORTCUTS = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}

# Day offsets from today
DAY_KEYWORDS = {"today": 0, "tomorrow": 1}
DAY_KEYWORD_SHORTCUTS = {"td": 0, "tm": 1}

MONTHS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

UNIT = r"(?:days?|weeks?|months?)"
WEEKS_OR_MONTHS = r"(?:weeks?|months?)"
MERIDIEM = r"(?:am|pm)"
ORDINAL = r"(?:st|nd|rd|th)"

# A number is not an hour when it is an ordinal, starts a date, or counts units
NOT_AN_HOUR = r"(?![:./]\d)(?!\s*(?:st|nd|rd|th|days?|weeks?|months?|of)\b)"


def _alternation(words) -> str:
    # Longest first so "tuesday" wins over "tue"
    return "(?:" + "|".join(sorted(words, key=len, reverse=True)) + ")"


def weekday_words(shortcuts_enabled: bool) -> dict:
    words = dict(WEEKDAYS)
    if shortcuts_enabled:
        words.update(WEEKDAY_SHORTCUTS)
    return words


def day_keyword_words(shortcuts_enabled: bool) -> dict:
    words = dict(DAY_KEYWORDS)
    if shortcuts_enabled:
        words.update(DAY_KEYWORD_SHORTCUTS)
    return words


def weekday_regex(shortcuts_enabled: bool) -> str:
    return _alternation(weekday_words(shortcuts_enabled))


def day_keyword_regex(shortcuts_enabled: bool) -> str:
    return _alternation(day_keyword_words(shortcuts_enabled))


def month_regex() -> str:
    return _alternation(MONTHS)


def period_regex() -> str:
    return _alternation(TIME_PERIOD_NAMES)


def weekday_number(word: str, shortcuts_enabled: bool) -> int:
    """Weekday number for a full or abbreviated name, or -1 if unknown."""
    return weekday_words(shortcuts_enabled).get(word.lower(), -1)
