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
Command Routing

Input box text is either a new reminder or one of three commands:

    list [filter]              ls today, list tm, list groceries
    delete <reminder>          remove call mom, rm lunch
    move <reminder> to <when>  reschedule dentist to friday 3pm, mv lunch to 1pm

Short forms (ls, rm, mv) are only recognised with shortcuts enabled. A date
or time after the reminder name ("rm standup friday 9:45") narrows the
search when several reminders share a title.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .config import ParserConfig
from .models import ReminderParseError
from .smart import PERIOD, TIME, SmartExtractor
from .titles import phrase_aware_title
from .vocabulary import DAY_KEYWORD_SHORTCUTS, DAY_KEYWORDS, WEEKDAY_SHORTCUTS, WEEKDAYS

logger = logging.getLogger("quickreminders.commands")

LIST_KEYWORDS = ("list",)
DELETE_KEYWORDS = ("delete", "remove")
MOVE_KEYWORDS = ("move", "reschedule")
SHORT_KEYWORDS = {"ls": "list", "rm": "delete", "mv": "move"}

# Phrases that pin a search to a specific occurrence ("rm standup 9:45")
_TIME_CONTEXT_PATTERNS = [
    re.compile(r"\d{1,2}:\d{2}(?:am|pm)?"),
    re.compile(r"\d{1,2}(?:am|pm)\b"),
    re.compile(r"\d{1,2}[./]\d{1,2}\.?\s+(?:at\s+)?\d{1,2}(?::\d{2})?(?:am|pm)?"),
    re.compile(r"\b(?:morning|noon|afternoon|evening|night)\b"),
]


class CommandError(ReminderParseError):
    """Raised when a command is recognised but malformed."""

    pass


class CommandType(Enum):
    CREATE = "create"
    LIST = "list"
    DELETE = "delete"
    MOVE = "move"


@dataclass(frozen=True)
class Command:
    """A routed line of input."""

    type: CommandType
    text: str
    search_text: Optional[str] = None
    target_text: Optional[str] = None
    list_filter: Optional[str] = None

    @property
    def has_time_context(self) -> bool:
        """Whether the search text names a time or date to narrow matches."""
        return bool(self.search_text) and has_time_in_search_text(self.search_text)


def has_time_in_search_text(text: str) -> bool:
    """Check whether search text carries a time, date+time or period."""
    lowered = text.lower()
    return any(pattern.search(lowered) for pattern in _TIME_CONTEXT_PATTERNS)


def expand_day_shortcuts(text: str) -> str:
    """Replace tm/td/mon/... with the full day words."""
    full_words = {number: word for word, number in WEEKDAYS.items()}
    day_words = {offset: word for word, offset in DAY_KEYWORDS.items()}

    replacements = {short: full_words[number] for short, number in WEEKDAY_SHORTCUTS.items()}
    replacements.update({short: day_words[offset] for short, offset in DAY_KEYWORD_SHORTCUTS.items()})

    for short, word in replacements.items():
        text = re.sub(rf"\b{short}\b", word, text, flags=re.IGNORECASE)
    return text


def _keyword(first_word: str, config: ParserConfig) -> Optional[str]:
    if first_word in LIST_KEYWORDS:
        return "list"
    if first_word in DELETE_KEYWORDS:
        return "delete"
    if first_word in MOVE_KEYWORDS:
        return "move"
    if config.shortcuts_enabled:
        return SHORT_KEYWORDS.get(first_word)
    return None


def route_command(text: str, config: ParserConfig) -> Command:
    """
    Classify one line of input.

    Args:
        text: Raw input text
        config: Parser configuration (for shortcut keywords)

    Returns:
        Command; anything that is not a list/delete/move command is CREATE

    Raises:
        CommandError: If a delete/move command is missing its parts
    """
    stripped = (text or "").strip()
    words = stripped.lower().split()
    keyword = _keyword(words[0], config) if words else None

    if keyword == "list":
        list_filter = " ".join(words[1:]) or "all"
        if config.shortcuts_enabled:
            list_filter = expand_day_shortcuts(list_filter)
        logger.debug(f"List command with filter '{list_filter}'")
        return Command(CommandType.LIST, stripped, list_filter=list_filter)

    if keyword == "delete":
        if len(words) < 2:
            raise CommandError("Say which reminder to delete, e.g. 'delete call mom'")
        return Command(CommandType.DELETE, stripped, search_text=" ".join(words[1:]))

    if keyword == "move":
        if "to" not in words[2:]:
            raise CommandError("Use 'move <reminder> to <new date>', e.g. 'move lunch to friday'")
        to_index = words.index("to", 2)
        target_text = " ".join(words[to_index + 1:])
        if not target_text:
            raise CommandError("Say when to move the reminder to, e.g. 'move lunch to friday'")
        return Command(
            CommandType.MOVE,
            stripped,
            search_text=" ".join(words[1:to_index]),
            target_text=target_text,
        )

    return Command(CommandType.CREATE, stripped)


def resolve_move_target(command: Command, parser, now: Optional[datetime] = None):
    """
    Work out the new due date for a move command.

    The target ("friday 3pm") is run through the parser's extraction
    strategies directly, since it has no title of its own.

    Args:
        command: A MOVE command
        parser: ReminderParser whose strategies and config are used
        now: Reference time

    Returns:
        ScheduleResult for the target text

    Raises:
        CommandError: If the target names no date or time
    """
    if command.type is not CommandType.MOVE:
        raise CommandError(f"Not a move command: {command.type.value}")

    now = now or parser.config.current_time()
    for strategy in parser.strategies:
        schedule = strategy.extract(command.target_text, now)
        if schedule.found:
            return schedule

    raise CommandError(f"Could not understand the new date '{command.target_text}'")


@dataclass(frozen=True)
class ReminderQuery:
    """
    Delete/move search text split into a title part and a date qualifier.

    "standup friday 9:45" searches titles for "standup"; when several
    reminders match, only those due on Friday at 9:45 are kept.
    """

    title: str
    due_date: Optional[datetime] = None
    match_date: bool = False
    match_time: bool = False

    def matches_due_date(self, due_date: Optional[datetime]) -> bool:
        """Whether a reminder's due date satisfies the qualifier."""
        if due_date is None or self.due_date is None:
            return False
        if self.match_date and due_date.date() != self.due_date.date():
            return False
        if self.match_time and (due_date.hour, due_date.minute) != (
            self.due_date.hour,
            self.due_date.minute,
        ):
            return False
        return self.match_date or self.match_time


def build_search_query(
    command: Command,
    config: ParserConfig,
    now: Optional[datetime] = None,
) -> ReminderQuery:
    """
    Split a delete/move command's search text into title and qualifier.

    Args:
        command: A DELETE or MOVE command
        config: Parser configuration
        now: Reference time for resolving the qualifier

    Returns:
        ReminderQuery; without a recognisable qualifier the whole search
        text is the title
    """
    search_text = (command.search_text or "").strip().lower()
    extractor = SmartExtractor(config)
    try:
        schedule = extractor.extract(search_text, now or config.current_time())
    except (ReminderParseError, ValueError, OverflowError) as e:
        logger.debug(f"Ignoring qualifier in {search_text!r}: {e}")
        return ReminderQuery(title=search_text)

    if not schedule.found:
        return ReminderQuery(title=search_text)

    title = phrase_aware_title(search_text, [phrase.text for phrase in schedule.matched_phrases])
    categories = {phrase.category for phrase in schedule.matched_phrases}
    query = ReminderQuery(
        title=title or search_text,
        due_date=schedule.due_date,
        match_date=bool(categories - {TIME, PERIOD}),
        match_time=command.has_time_context,
    )
    logger.debug(f"Search {search_text!r} split into {query}")
    return query
