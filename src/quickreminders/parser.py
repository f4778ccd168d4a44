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
Reminder Parser

Entry point that turns free-form text into a ParsedReminder:

    raw text -> input validation -> extraction (smart, then ordered)
             -> title extraction -> result validation

Parsing never raises. Rejected input and inconsistent results come back as
a ParsedReminder with is_valid=False and a user-facing error_message; text
with no schedule in it is a valid reminder with no due date.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from .config import ParserConfig
from .input_validation import validate_input
from .models import ExtractionStrategy, ParsedReminder, ReminderParseError, ScheduleResult
from .ordered import OrderedPatternExtractor
from .result_validation import validate_result
from .smart import SmartExtractor
from .titles import truncating_title

logger = logging.getLogger("quickreminders.parser")

GENERIC_ERROR_MESSAGE = "Could not understand this reminder"


class ReminderParser:
    """
    Parses reminder text against a configuration snapshot.

    The configuration is read on every call and never modified, so changes
    to it apply to the next parse.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
    ):
        self.config = config or ParserConfig()
        self._strategies = list(strategies) if strategies else None

    @property
    def strategies(self) -> list:
        """Extraction strategies in the order they are tried."""
        if self._strategies is not None:
            return self._strategies
        return [SmartExtractor(self.config), OrderedPatternExtractor(self.config)]

    def parse(self, text: str, now: Optional[datetime] = None) -> ParsedReminder:
        """
        Parse one reminder.

        Args:
            text: Raw reminder text
            now: Reference time (defaults to the configured current time)

        Returns:
            ParsedReminder; never raises for any string input
        """
        original = (text or "").strip()
        try:
            return self._parse(original, now or self.config.current_time())
        except (ReminderParseError, ValueError, OverflowError) as e:
            logger.error(f"Failed to parse {original!r}: {e}", exc_info=True)
            return ParsedReminder.invalid(original, GENERIC_ERROR_MESSAGE)

    def _parse(self, original: str, now: datetime) -> ParsedReminder:
        validation = validate_input(original, self.config, now)
        if not validation.valid:
            logger.info(f"Input rejected: {validation.error}")
            return ParsedReminder.invalid(
                truncating_title(original, self.config), validation.error
            )

        lowered = original.lower()
        schedule = ScheduleResult.empty()
        chosen = None
        for strategy in self.strategies:
            schedule = strategy.extract(lowered, now)
            if schedule.found:
                chosen = strategy
                break
            logger.debug(f"Strategy '{strategy.name}' found no due date")

        if chosen is None:
            logger.info(f"No schedule found in {original!r}")
            return ParsedReminder(title=original)

        title = chosen.title(original, schedule)
        check = validate_result(
            title, schedule.due_date, schedule.is_recurring, schedule.interval, schedule.frequency
        )
        if not check.valid:
            logger.info(f"Result rejected: {check.error}")
            return ParsedReminder.invalid(title, check.error)

        logger.info(
            f"Parsed {original!r} via {chosen.name}: title={title!r}, "
            f"due={schedule.due_date}, recurring={schedule.is_recurring}"
        )
        return ParsedReminder.from_schedule(title, schedule)


def parse_reminder_text(
    text: str,
    config: Optional[ParserConfig] = None,
    now: Optional[datetime] = None,
) -> ParsedReminder:
    """
    Parse reminder text with a one-off parser.

    Args:
        text: Raw reminder text
        config: Parser configuration (defaults to ParserConfig())
        now: Reference time (defaults to the configured current time)

    Returns:
        ParsedReminder
    """
    return ReminderParser(config).parse(text, now)
