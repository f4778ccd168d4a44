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

"""Tests for title extraction."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickreminders.config import ParserConfig
from quickreminders.titles import phrase_aware_title, truncating_title


class TestTruncatingTitle:
    """Test cutting the title at the first scheduling cue."""

    def test_day_word_and_time(self):
        config = ParserConfig()
        assert truncating_title("Dentist appointment tomorrow at 3pm", config) == (
            "Dentist appointment"
        )

    def test_recurrence(self):
        config = ParserConfig()
        assert truncating_title("Pay rent every 1 month on the 1st", config) == "Pay rent"
        assert truncating_title("Take vitamins every day", config) == "Take vitamins"

    def test_relative_and_next_week(self):
        config = ParserConfig()
        assert truncating_title("Report in 3 days", config) == "Report"
        assert truncating_title("Standup next week", config) == "Standup"

    def test_date_and_until(self):
        config = ParserConfig()
        assert truncating_title("Party 12/25 bring cake", config) == "Party"
        assert truncating_title("Trip until 12/1", config) == "Trip"

    def test_drops_trailing_content(self):
        config = ParserConfig()
        assert truncating_title("Lunch friday with the team", config) == "Lunch"

    def test_shortcut_day_words(self):
        assert truncating_title("Call mom tm", ParserConfig()) == "Call mom"
        assert truncating_title("Call mom tm", ParserConfig(shortcuts_enabled=False)) == (
            "Call mom tm"
        )

    def test_plain_text_unchanged(self):
        assert truncating_title("  Buy milk  ", ParserConfig()) == "Buy milk"


class TestPhraseAwareTitle:
    """Test removing only the recognised phrases."""

    def test_keeps_trailing_content(self):
        title = phrase_aware_title("Dentist at 3pm bring insurance card", ["3pm"])
        assert title == "Dentist bring insurance card"

    def test_leading_phrases(self):
        title = phrase_aware_title("Tuesday morning take out trash", ["tuesday", "morning"])
        assert title == "take out trash"

    def test_preposition_and_article_removed(self):
        title = phrase_aware_title(
            "Pay rent every 1 month on the 1st of next month",
            ["every 1 month", "1st of next month"],
        )
        assert title == "Pay rent"

    def test_whitespace_collapsed(self):
        assert phrase_aware_title("call   mom    tomorrow", ["tomorrow"]) == "call mom"

    def test_partial_words_untouched(self):
        assert phrase_aware_title("Mondays list for monday", ["monday"]) == "Mondays list for"

    def test_first_occurrence_removed(self):
        assert phrase_aware_title("Monday notes for monday", ["monday"]) == "notes for monday"

    def test_missing_phrase_ignored(self):
        assert phrase_aware_title("Buy milk", ["tomorrow", ""]) == "Buy milk"
