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
Ordered Pattern Table

Priority-ordered phrase patterns for the ordered extraction strategy.
The first row that matches (and decodes) wins, so rows run from the most
specific (anchor + time + recurrence) to the least specific (bare number).

Capture groups are named after the field they carry:
    weekday, day_keyword, first, second, year, hour, minute, meridiem,
    offset, offset_unit, every, every_unit
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from .vocabulary import NOT_AN_HOUR, UNIT, WEEKS_OR_MONTHS, day_keyword_regex, weekday_regex

# Anchor kinds: how a row turns into a calendar date
RELATIVE = "relative"
RELATIVE_WEEKDAY = "relative_weekday"
NEXT_WEEK = "next_week"
NEXT_WEEK_WEEKDAY = "next_week_weekday"
DAY_KEYWORD = "day_keyword"
WEEKDAY = "weekday"
DATE = "date"
EVERY = "every"
TIME = "time"

# Kinds whose rows may read a stray number elsewhere in the text as the hour
FALLBACK_KINDS = (DAY_KEYWORD, WEEKDAY, TIME)

_FRAGMENTS = {
    "{weekday_word}": r"\b(?P<weekday>{weekdays})\b",
    "{day_keyword}": r"\b(?P<day_keyword>{day_keywords})\b",
    "{time}": (
        r"(?:\s+(?:at\s+)?(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?"
        r"(?:\s*(?P<meridiem>am|pm))?\b" + NOT_AN_HOUR + r")?"
    ),
    "{every_clause}": rf"\bevery\s+(?P<every>\d+)\s+(?P<every_unit>{UNIT})\b",
    "{relative}": rf"\bin\s+(?P<offset>\d+)\s+(?P<offset_unit>{UNIT})\b",
    "{relative_wm}": rf"\bin\s+(?P<offset>\d+)\s+(?P<offset_unit>{WEEKS_OR_MONTHS})\b",
    "{next_week}": r"\bnext\s+week\b",
    "{date_year}": r"\b(?P<first>\d{1,2})[./](?P<second>\d{1,2})[./](?P<year>\d{4})\b",
    "{date}": r"\b(?P<first>\d{1,2})[./](?P<second>\d{1,2})\b(?![./]\d)\.?",
}


@dataclass(frozen=True)
class PatternSpec:
    """One row of the pattern table."""

    name: str
    template: str
    kind: str
    recurring: bool = False

    def compile(self, shortcuts_enabled: bool) -> "CompiledPattern":
        source = self.template
        for token, fragment in _FRAGMENTS.items():
            source = source.replace(token, fragment)
        source = source.replace("{weekdays}", weekday_regex(shortcuts_enabled))
        source = source.replace("{day_keywords}", day_keyword_regex(shortcuts_enabled))
        return CompiledPattern(spec=self, regex=re.compile(source, re.IGNORECASE))


@dataclass(frozen=True)
class CompiledPattern:
    spec: PatternSpec
    regex: re.Pattern


PATTERN_TABLE = (
    # Recurring rows: anchor (+ time) followed by "every N unit"
    PatternSpec("relative_every", r"{relative}{time}\s+{every_clause}", RELATIVE, True),
    PatternSpec(
        "relative_weekday_every",
        r"{relative_wm}\s+{weekday_word}{time}\s+{every_clause}",
        RELATIVE_WEEKDAY,
        True,
    ),
    PatternSpec(
        "weekday_relative_every",
        r"{weekday_word}\s+{relative_wm}{time}\s+{every_clause}",
        RELATIVE_WEEKDAY,
        True,
    ),
    PatternSpec(
        "next_week_weekday_every",
        r"{next_week}\s+{weekday_word}{time}\s+{every_clause}",
        NEXT_WEEK_WEEKDAY,
        True,
    ),
    PatternSpec(
        "weekday_next_week_every",
        r"{weekday_word}\s+{next_week}{time}\s+{every_clause}",
        NEXT_WEEK_WEEKDAY,
        True,
    ),
    PatternSpec("day_keyword_every", r"{day_keyword}{time}\s+{every_clause}", DAY_KEYWORD, True),
    PatternSpec("weekday_every", r"{weekday_word}{time}\s+{every_clause}", WEEKDAY, True),
    PatternSpec("date_year_every", r"{date_year}{time}\s+{every_clause}", DATE, True),
    PatternSpec("date_every", r"{date}{time}\s+{every_clause}", DATE, True),
    PatternSpec("next_week_every", r"{next_week}{time}\s+{every_clause}", NEXT_WEEK, True),
    # Recurrence first, anchor after
    PatternSpec(
        "every_weekday", r"{every_clause}\s+(?:on\s+)?{weekday_word}{time}", WEEKDAY, True
    ),
    PatternSpec("every_relative", r"{every_clause}\s+{relative}{time}", RELATIVE, True),
    PatternSpec(
        "every_day_keyword",
        r"{every_clause}\s+(?:starting\s+)?{day_keyword}{time}",
        DAY_KEYWORD,
        True,
    ),
    PatternSpec("every", r"{every_clause}{time}", EVERY, True),
    # One-off rows: week/month offsets combined with a weekday
    PatternSpec("relative_weekday", r"{relative_wm}\s+{weekday_word}{time}", RELATIVE_WEEKDAY),
    PatternSpec("weekday_relative", r"{weekday_word}\s+{relative_wm}{time}", RELATIVE_WEEKDAY),
    PatternSpec("next_week_weekday", r"{next_week}\s+{weekday_word}{time}", NEXT_WEEK_WEEKDAY),
    PatternSpec("weekday_next_week", r"{weekday_word}\s+{next_week}{time}", NEXT_WEEK_WEEKDAY),
    # Relative distances and absolute dates
    PatternSpec("relative", r"{relative}{time}", RELATIVE),
    PatternSpec("next_week", r"{next_week}{time}", NEXT_WEEK),
    PatternSpec("date_year", r"(?:\bon\s+)?{date_year}{time}", DATE),
    PatternSpec("date", r"(?:\bon\s+)?{date}{time}", DATE),
    # Fallbacks: day words, then a time on today's date
    PatternSpec("day_keyword", r"{day_keyword}{time}", DAY_KEYWORD),
    PatternSpec("weekday", r"(?:\bon\s+)?{weekday_word}{time}", WEEKDAY),
    PatternSpec(
        "at_time",
        r"\bat\s+(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?:\s*(?P<meridiem>am|pm))?\b"
        + NOT_AN_HOUR,
        TIME,
    ),
    PatternSpec(
        "clock_time", r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})(?:\s*(?P<meridiem>am|pm))?\b", TIME
    ),
    PatternSpec("meridiem_time", r"\b(?P<hour>\d{1,2})\s*(?P<meridiem>am|pm)\b", TIME),
    PatternSpec("bare_hour", r"\b(?P<hour>\d{1,2})\b" + NOT_AN_HOUR, TIME),
)


@lru_cache(maxsize=2)
def compiled_table(shortcuts_enabled: bool) -> tuple:
    """Compile the pattern table for one shortcut setting."""
    return tuple(spec.compile(shortcuts_enabled) for spec in PATTERN_TABLE)
