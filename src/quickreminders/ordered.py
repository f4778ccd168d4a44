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
Ordered Extraction Strategy

Walks the pattern table in priority order and decodes the first row that
matches. Rows whose captures do not form a real date or time are skipped.
"""

import logging
import re
from datetime import datetime, timedelta

from .config import ParserConfig
from .models import (
    ExtractionStrategy,
    InvalidDateError,
    MatchedPhrase,
    RecurrenceFrequency,
    ScheduleResult,
)
from .pattern_table import (
    DATE,
    DAY_KEYWORD,
    EVERY,
    FALLBACK_KINDS,
    NEXT_WEEK,
    NEXT_WEEK_WEEKDAY,
    RELATIVE,
    RELATIVE_WEEKDAY,
    WEEKDAY,
    PatternSpec,
    compiled_table,
)
from .timeparse import (
    DEFAULT_TIME,
    advance,
    at_time,
    decode_match_time,
    decode_time,
    find_bare_hour,
    find_explicit_time,
    find_period,
    next_weekday,
    resolve_numeric_date,
    roll_to_weekday,
)
from .titles import truncating_title
from .vocabulary import day_keyword_words, weekday_number

logger = logging.getLogger("quickreminders.ordered")

_BARE_EVERY_RE = re.compile(r"\bevery\s+(days?|weeks?|months?)\b")


def normalize_recurrence(text: str) -> str:
    """Rewrite "every day" style phrases as "every 1 day"."""
    return _BARE_EVERY_RE.sub(r"every 1 \1", text)


class OrderedPatternExtractor(ExtractionStrategy):
    """First-match-wins extraction over the static pattern table."""

    name = "ordered"

    def __init__(self, config: ParserConfig):
        self.config = config

    def extract(self, text: str, now: datetime) -> ScheduleResult:
        normalized = normalize_recurrence(text.lower())

        for pattern in compiled_table(self.config.shortcuts_enabled):
            match = pattern.regex.search(normalized)
            if not match:
                continue
            try:
                result = self._decode(pattern.spec, match, normalized, now)
            except InvalidDateError as e:
                logger.debug(f"Pattern '{pattern.spec.name}' matched but did not decode: {e}")
                continue
            logger.debug(f"Pattern '{pattern.spec.name}' matched {match.group(0)!r}")
            return result

        return ScheduleResult.empty(self.name)

    def title(self, original_text: str, result: ScheduleResult) -> str:
        return truncating_title(original_text, self.config)

    def _decode(self, spec: PatternSpec, match: re.Match, text: str, now: datetime) -> ScheduleResult:
        groups = match.groupdict()
        hour, minute = self._resolve_time(spec, groups, text)

        if spec.kind == DATE:
            year = int(groups["year"]) if groups.get("year") else None
            due = resolve_numeric_date(
                int(groups["first"]), int(groups["second"]), year, hour, minute, self.config, now
            )
        else:
            due = at_time(self._anchor(spec.kind, groups, now), hour, minute)

        interval = None
        frequency = None
        if spec.recurring:
            interval = int(groups["every"])
            frequency = RecurrenceFrequency.from_unit(groups["every_unit"])
            # A bare recurrence starts today unless today's slot has passed
            if spec.kind == EVERY and due <= now:
                due = advance(due, interval, groups["every_unit"])

        return ScheduleResult(
            due_date=due,
            is_recurring=spec.recurring,
            interval=interval,
            frequency=frequency,
            matched_phrases=(
                MatchedPhrase(spec.name, match.group(0), match.start(), match.end()),
            ),
            source=self.name,
        )

    def _anchor(self, kind: str, groups: dict, now: datetime) -> datetime:
        shortcuts = self.config.shortcuts_enabled

        if kind == RELATIVE:
            return advance(now, int(groups["offset"]), groups["offset_unit"])
        if kind == RELATIVE_WEEKDAY:
            anchor = advance(now, int(groups["offset"]), groups["offset_unit"])
            return roll_to_weekday(anchor, weekday_number(groups["weekday"], shortcuts))
        if kind == NEXT_WEEK:
            return now + timedelta(days=7)
        if kind == NEXT_WEEK_WEEKDAY:
            anchor = now + timedelta(days=7)
            return roll_to_weekday(anchor, weekday_number(groups["weekday"], shortcuts))
        if kind == DAY_KEYWORD:
            offset = day_keyword_words(shortcuts)[groups["day_keyword"].lower()]
            return now + timedelta(days=offset)
        if kind == WEEKDAY:
            return next_weekday(now, weekday_number(groups["weekday"], shortcuts))
        return now

    def _resolve_time(self, spec: PatternSpec, groups: dict, text: str) -> tuple[int, int]:
        period = find_period(text, self.config)

        if groups.get("hour"):
            return decode_time(
                groups["hour"], groups.get("minute"), groups.get("meridiem"), self.config, period
            )

        explicit = find_explicit_time(text)
        if explicit:
            return decode_match_time(explicit, self.config, period)

        if period:
            return self.config.time_period(period)

        if spec.kind in FALLBACK_KINDS:
            bare = find_bare_hour(text)
            if bare:
                try:
                    return decode_match_time(bare, self.config)
                except InvalidDateError:
                    logger.debug(f"Ignoring {bare.group(0)!r} as an hour")

        return DEFAULT_TIME
