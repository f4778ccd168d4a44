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
Title Extraction

Two ways of turning reminder text into a title:

- truncating_title: cuts the text at the first scheduling cue. Used with
  the ordered strategy and for rejected input.
- phrase_aware_title: removes only the recognised scheduling phrases and
  keeps everything else, including words that follow them.
"""

import re

from .config import ParserConfig
from .vocabulary import UNIT, day_keyword_regex, period_regex, weekday_regex

_PREPOSITIONS = r"(?:in|on|at|the)"

_DANGLING_TRAILING_RE = re.compile(r"\s+(?:in|on|at|the|by|this|next|every)$", re.IGNORECASE)
_DANGLING_LEADING_RE = re.compile(r"^(?:in|on|at|by)\s+", re.IGNORECASE)


def _truncation_patterns(config: ParserConfig) -> list:
    day_words = (
        f"(?:{day_keyword_regex(config.shortcuts_enabled)}"
        f"|{weekday_regex(config.shortcuts_enabled)})"
    )
    return [
        r"\s+(?:at|on|by)\s+.*",
        rf"\s+{day_words}\b.*",
        r"\s+(?:on\s+)?\d{1,2}[./]\d{1,2}(?:[./]\d{4})?\.?.*",
        rf"\s+in\s+\d+\s+{UNIT}.*",
        rf"\s+every\s+(?:\d+\s+)?{UNIT}.*",
        r"\s+next\s+week.*",
        rf"\s+{day_words}\s+(?:in\s+the\s+)?{period_regex()}\b.*",
        r"\s+until\b.*",
    ]


def truncating_title(text: str, config: ParserConfig) -> str:
    """
    Cut reminder text at the first scheduling cue.

    Args:
        text: Original-case reminder text
        config: Parser configuration (for shortcut day words)

    Returns:
        Trimmed title; may be empty
    """
    title = text.strip()
    for pattern in _truncation_patterns(config):
        title = re.sub(pattern, "", title, count=1, flags=re.IGNORECASE | re.DOTALL)
    return title.strip()


def _remove_phrase(title: str, phrase: str) -> str:
    escaped = re.escape(phrase.strip())
    anchored = (
        (rf"^\s*(?:{_PREPOSITIONS}\s+)?{escaped}(?!\w)\s*", ""),
        (rf"\s*(?:\b{_PREPOSITIONS}\s+)?(?<!\w){escaped}\s*$", ""),
        (rf"\s+(?:{_PREPOSITIONS}\s+)?(?<!\w){escaped}(?!\w)", ""),
    )
    for pattern, replacement in anchored:
        updated, count = re.subn(pattern, replacement, title, count=1, flags=re.IGNORECASE)
        if count:
            return updated
    return title


def phrase_aware_title(text: str, phrases) -> str:
    """
    Remove scheduling phrases from the text and keep the rest.

    Args:
        text: Original-case reminder text
        phrases: Phrase strings to remove, in order

    Returns:
        Title with whitespace collapsed and dangling prepositions dropped
    """
    title = text.strip()
    for phrase in phrases:
        if phrase and phrase.strip():
            title = _remove_phrase(title, phrase)

    title = re.sub(r"\s+", " ", title).strip()
    while True:
        stripped = _DANGLING_LEADING_RE.sub("", _DANGLING_TRAILING_RE.sub("", title)).strip()
        if stripped == title:
            return title
        title = stripped
