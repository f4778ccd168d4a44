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
Smart Extraction Strategy

Scans the text independently for each kind of scheduling phrase, then
composes a due date from whatever was found. Unlike the ordered strategy,
phrases may appear anywhere and in any order:

    "pay rent every 1 month on the 1st of next month at 9am"
    "tuesday morning take out trash"

The recognised spans are kept on the result so the title can be built by
removing exactly those phrases.
"""

import calendar
import logging
import re
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Optional

import dateparser

from .config import DateOrder, ParserConfig
from .models import (
    ExtractionStrategy,
    InvalidDateError,
    MatchedPhrase,
    RecurrenceFrequency,
    ScheduleResult,
)
from .timeparse import (
    DEFAULT_TIME,
    EXPLICIT_TIME_PATTERNS,
    add_months,
    advance,
    at_time,
    decode_match_time,
    next_weekday,
    resolve_numeric_date,
    roll_to_weekday,
)
from .titles import phrase_aware_title
from .vocabulary import (
    MONTHS,
    NOT_AN_HOUR,
    ORDINAL,
    UNIT,
    day_keyword_regex,
    day_keyword_words,
    month_regex,
    period_regex,
    weekday_number,
    weekday_regex,
)

logger = logging.getLogger("quickreminders.smart")

# Phrase categories
RECURRENCE = "recurrence"
WEEKDAY = "weekday"
TIME = "time"
PERIOD = "period"
NUMERIC_DATE = "numeric_date"
MONTH_DATE = "month_date"
RELATIVE = "relative"
DAY_KEYWORD = "day_keyword"
NEXT_WEEK = "next_week"

# Always stripped from the title when detected
_ALWAYS_REMOVED = (RECURRENCE, TIME, PERIOD, NUMERIC_DATE, RELATIVE, DAY_KEYWORD, NEXT_WEEK)

_MONTH_WORD_RE = re.compile(rf"\b{month_regex()}\b")


@lru_cache(maxsize=4)
def _category_patterns(shortcuts_enabled: bool, time_periods_enabled: bool) -> dict:
    weekdays = weekday_regex(shortcuts_enabled)
    day_keywords = day_keyword_regex(shortcuts_enabled)
    months = month_regex()

    # An hour written right after a day word or a period ("friday 3", "evening 7")
    hour_after_word = [rf"\b(?P<day_word>{day_keywords}|{weekdays})\s+(?P<hour>\d{{1,2}})\b"]
    if time_periods_enabled:
        hour_after_word.append(rf"\b(?P<period_word>{period_regex()})\s+(?P<hour>\d{{1,2}})\b")

    return {
        RECURRENCE: [
            re.compile(rf"\bevery\s+(?:(?P<every>\d+)\s+)?(?P<every_unit>{UNIT})\b"),
        ],
        WEEKDAY: [
            re.compile(rf"(?:\b(?P<prefix>on|this|next)\s+)?\b(?P<weekday>{weekdays})\b"),
        ],
        TIME: list(EXPLICIT_TIME_PATTERNS)
        + [re.compile(pattern + NOT_AN_HOUR) for pattern in hour_after_word],
        PERIOD: [
            re.compile(rf"(?:\b(?:in\s+the|at)\s+)?\b(?P<period>{period_regex()})\b"),
        ],
        NUMERIC_DATE: [
            re.compile(
                r"\b(?P<first>\d{1,2})[./](?P<second>\d{1,2})(?:[./](?P<year>\d{4}))?\b"
            ),
        ],
        MONTH_DATE: [
            re.compile(
                rf"\b(?P<month>{months})\.?\s+(?P<day>\d{{1,2}}){ORDINAL}?\b"
                r"(?:,?\s+(?P<year>\d{4})\b)?"
            ),
            re.compile(
                rf"\b(?P<day>\d{{1,2}}){ORDINAL}?\s+of\s+"
                rf"(?:(?P<month>{months})\b|(?P<relative_month>this|next)\s+month\b)"
            ),
            re.compile(rf"\b(?P<day>\d{{1,2}}){ORDINAL}?\s+(?P<month>{months})\b"),
        ],
        RELATIVE: [
            re.compile(rf"\bin\s+(?P<offset>\d+)\s+(?P<offset_unit>{UNIT})\b"),
        ],
        DAY_KEYWORD: [
            re.compile(rf"\b(?P<day_keyword>{day_keywords})\b"),
        ],
        NEXT_WEEK: [
            re.compile(r"\bnext\s+week\b"),
        ],
    }


def _phrase(category: str, match: re.Match) -> MatchedPhrase:
    # A bare hour after a day word or a period only claims the number itself
    groups = match.groupdict()
    if category == TIME and (groups.get("day_word") or groups.get("period_word")):
        return MatchedPhrase(category, match.group("hour"), match.start("hour"), match.end("hour"))
    return MatchedPhrase(category, match.group(0), match.start(), match.end())


def _calendar_phrase(text: str) -> str:
    """Strip ordinals, "of" and abbreviation dots so dateparser sees "15 november"."""
    phrase = re.sub(rf"(\d){ORDINAL}\b", r"\1", text)
    phrase = re.sub(r"\bof\b|\.", " ", phrase)
    return re.sub(r"\s+", " ", phrase).strip()


def _day_of_month(base: datetime, day: int) -> datetime:
    last_day = calendar.monthrange(base.year, base.month)[1]
    if day < 1 or day > last_day:
        raise InvalidDateError(f"{base.strftime('%B %Y')} has no day {day}")
    return base.replace(day=day)


def _month_word(phrase_text: str) -> Optional[str]:
    match = _MONTH_WORD_RE.search(phrase_text)
    return match.group(0) if match else None


def month_used_as_date(phrases: dict, text: str) -> bool:
    """
    Decide whether a month-name phrase schedules the reminder.

    A single mention of a named month next to a weekday or a recurrence is
    read as part of the reminder's content ("review october budget every
    1 week") rather than as its date.
    """
    month_phrase = phrases.get(MONTH_DATE)
    if month_phrase is None:
        return False

    others = set(phrases) - {MONTH_DATE}
    if not others:
        return True

    word = _month_word(month_phrase.text)
    if word is None:
        return True
    if len(re.findall(rf"\b{re.escape(word)}\b", text.lower())) > 1:
        return True
    return not (WEEKDAY in others or RECURRENCE in others)


def select_title_phrases(phrases: dict, text: str) -> list:
    """
    Choose which detected phrases to strip from the title.

    Args:
        phrases: Detected phrases keyed by category
        text: The reminder text the phrases were detected in

    Returns:
        Phrase strings to remove, in text order
    """
    selected = [phrases[category] for category in _ALWAYS_REMOVED if category in phrases]

    if MONTH_DATE in phrases and month_used_as_date(phrases, text):
        selected.append(phrases[MONTH_DATE])

    weekday = phrases.get(WEEKDAY)
    if weekday is not None:
        prefixed = weekday.text.split()[0] in ("on", "this", "next")
        if prefixed or len(phrases) > 1:
            selected.append(weekday)

    return [phrase.text for phrase in sorted(selected, key=lambda p: p.start)]


class SmartExtractor(ExtractionStrategy):
    """Order-independent extraction by phrase category."""

    name = "smart"

    def __init__(self, config: ParserConfig):
        self.config = config

    def detect(self, text: str) -> tuple[dict, dict]:
        """
        Find the first phrase of each category.

        Returns:
            (phrases, matches): MatchedPhrase and raw match per category
        """
        text = text.lower()
        phrases = {}
        matches = {}
        for category, patterns in _category_patterns(
            self.config.shortcuts_enabled, self.config.time_periods_enabled
        ).items():
            if category == PERIOD and not self.config.time_periods_enabled:
                continue
            for pattern in patterns:
                match = pattern.search(text)
                if match:
                    phrases[category] = _phrase(category, match)
                    matches[category] = match
                    break
        return phrases, matches

    def extract(self, text: str, now: datetime) -> ScheduleResult:
        text = text.lower()
        phrases, matches = self.detect(text)
        if not phrases:
            return ScheduleResult.empty(self.name)

        hour, minute = self._resolve_time(phrases, matches)
        due = self._resolve_date(phrases, matches, text, hour, minute, now)
        if due is None:
            return ScheduleResult.empty(self.name)

        is_recurring = RECURRENCE in matches
        interval = None
        frequency = None
        if is_recurring:
            recurrence = matches[RECURRENCE]
            interval = int(recurrence.group("every")) if recurrence.group("every") else 1
            frequency = RecurrenceFrequency.from_unit(recurrence.group("every_unit"))

        logger.debug(f"Detected {sorted(phrases)} in {text!r}")
        return ScheduleResult(
            due_date=due,
            is_recurring=is_recurring,
            interval=interval,
            frequency=frequency,
            matched_phrases=tuple(sorted(phrases.values(), key=lambda p: p.start)),
            source=self.name,
        )

    def title(self, original_text: str, result: ScheduleResult) -> str:
        phrases = {phrase.category: phrase for phrase in result.matched_phrases}
        return phrase_aware_title(original_text, select_title_phrases(phrases, original_text))

    def _resolve_time(self, phrases: dict, matches: dict) -> tuple[int, int]:
        period = matches[PERIOD].group("period") if PERIOD in matches else None

        if TIME in matches:
            try:
                return decode_match_time(matches[TIME], self.config, period)
            except InvalidDateError as e:
                logger.debug(f"Ignoring time {phrases[TIME].text!r}: {e}")
                del phrases[TIME]
                del matches[TIME]

        if period:
            return self.config.time_period(period)
        return DEFAULT_TIME

    def _resolve_date(
        self,
        phrases: dict,
        matches: dict,
        text: str,
        hour: int,
        minute: int,
        now: datetime,
    ) -> Optional[datetime]:
        if NUMERIC_DATE in matches:
            match = matches[NUMERIC_DATE]
            year = int(match.group("year")) if match.group("year") else None
            try:
                return resolve_numeric_date(
                    int(match.group("first")),
                    int(match.group("second")),
                    year,
                    hour,
                    minute,
                    self.config,
                    now,
                )
            except InvalidDateError as e:
                logger.debug(f"Ignoring date {phrases[NUMERIC_DATE].text!r}: {e}")
                del phrases[NUMERIC_DATE]
                del matches[NUMERIC_DATE]

        if MONTH_DATE in matches and month_used_as_date(phrases, text):
            try:
                return self._resolve_month_date(matches[MONTH_DATE], hour, minute, now)
            except InvalidDateError as e:
                logger.debug(f"Ignoring date {phrases[MONTH_DATE].text!r}: {e}")
                del phrases[MONTH_DATE]
                del matches[MONTH_DATE]

        if not phrases:
            return None
        return at_time(self._anchor(matches, now), hour, minute)

    def _anchor(self, matches: dict, now: datetime) -> datetime:
        shortcuts = self.config.shortcuts_enabled

        if WEEKDAY in matches:
            weekday = weekday_number(matches[WEEKDAY].group("weekday"), shortcuts)
            relative = matches.get(RELATIVE)
            if relative and not relative.group("offset_unit").startswith("day"):
                anchor = advance(now, int(relative.group("offset")), relative.group("offset_unit"))
                return roll_to_weekday(anchor, weekday)
            if NEXT_WEEK in matches:
                return roll_to_weekday(now + timedelta(days=7), weekday)
            return next_weekday(now, weekday)

        if RELATIVE in matches:
            relative = matches[RELATIVE]
            return advance(now, int(relative.group("offset")), relative.group("offset_unit"))

        if DAY_KEYWORD in matches:
            offset = day_keyword_words(shortcuts)[matches[DAY_KEYWORD].group("day_keyword")]
            return now + timedelta(days=offset)

        if NEXT_WEEK in matches or RECURRENCE in matches:
            return now + timedelta(days=7)

        return now

    def _resolve_month_date(self, match: re.Match, hour: int, minute: int, now: datetime) -> datetime:
        relative_month = match.groupdict().get("relative_month")
        if not relative_month:
            return at_time(self._parse_calendar_date(match, now), hour, minute)

        day = int(match.group("day"))
        base = now.replace(day=1)
        if relative_month == "next":
            base = add_months(base, 1)
        target = at_time(_day_of_month(base, day), hour, minute)

        # A passed day of "this month" means the same day next month
        if relative_month == "this" and target < now:
            target = at_time(_day_of_month(add_months(base, 1), day), hour, minute)
        return target

    def _parse_calendar_date(self, match: re.Match, now: datetime) -> datetime:
        phrase = _calendar_phrase(match.group(0))
        parsed = dateparser.parse(
            phrase,
            languages=["en"],
            settings={
                "DATE_ORDER": "MDY" if self.config.date_order is DateOrder.MONTH_FIRST else "DMY",
                "PREFER_DATES_FROM": "future",
                "REQUIRE_PARTS": ["day", "month"],
                "RELATIVE_BASE": now.replace(hour=0, minute=0, second=0, microsecond=0),
            },
        )

        expected = (MONTHS[match.group("month")], int(match.group("day")))
        if parsed is None or (parsed.month, parsed.day) != expected:
            raise InvalidDateError(f"'{match.group(0)}' is not a real date")
        return parsed
