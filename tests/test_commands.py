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

"""Tests for command routing."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickreminders.commands import (
    CommandError,
    CommandType,
    ReminderQuery,
    build_search_query,
    expand_day_shortcuts,
    has_time_in_search_text,
    resolve_move_target,
    route_command,
)
from quickreminders.config import ParserConfig
from quickreminders.parser import ReminderParser

NOW = datetime(2026, 10, 14, 10, 0)


class TestRouteCommand:
    """Test classifying input lines."""

    def test_plain_reminder(self):
        command = route_command("buy milk tomorrow", ParserConfig())
        assert command.type is CommandType.CREATE
        assert command.text == "buy milk tomorrow"

    def test_keyword_must_be_whole_word(self):
        assert route_command("listen to podcast", ParserConfig()).type is CommandType.CREATE
        assert route_command("removal van friday", ParserConfig()).type is CommandType.CREATE
        assert route_command("movers at 9am", ParserConfig()).type is CommandType.CREATE

    def test_list(self):
        assert route_command("list", ParserConfig()).list_filter == "all"
        assert route_command("List groceries", ParserConfig()).list_filter == "groceries"

    def test_list_shortcuts(self):
        command = route_command("ls tm", ParserConfig())
        assert command.type is CommandType.LIST
        assert command.list_filter == "tomorrow"

    def test_shortcuts_disabled(self):
        config = ParserConfig(shortcuts_enabled=False)
        assert route_command("ls tm", config).type is CommandType.CREATE
        assert route_command("rm lunch", config).type is CommandType.CREATE
        assert route_command("list tm", config).list_filter == "tm"

    def test_delete(self):
        for text in ("delete call mom", "remove call mom", "rm call mom"):
            command = route_command(text, ParserConfig())
            assert command.type is CommandType.DELETE
            assert command.search_text == "call mom"

    def test_delete_needs_target(self):
        with pytest.raises(CommandError):
            route_command("delete", ParserConfig())

    def test_move(self):
        command = route_command("mv lunch with sam to friday 1pm", ParserConfig())

        assert command.type is CommandType.MOVE
        assert command.search_text == "lunch with sam"
        assert command.target_text == "friday 1pm"

    def test_move_needs_reminder_and_target(self):
        with pytest.raises(CommandError):
            route_command("move to friday", ParserConfig())
        with pytest.raises(CommandError):
            route_command("reschedule lunch to", ParserConfig())
        with pytest.raises(CommandError):
            route_command("move lunch", ParserConfig())


class TestTimeContext:
    """Test detecting occurrence-specific search text."""

    def test_times_and_periods(self):
        assert has_time_in_search_text("standup 9:45")
        assert has_time_in_search_text("Gym 6PM")
        assert has_time_in_search_text("lunch 10/15 at 1pm")
        assert has_time_in_search_text("walk dog evening")

    def test_no_time(self):
        assert not has_time_in_search_text("call mom")
        assert not route_command("rm call mom", ParserConfig()).has_time_context

    def test_command_property(self):
        assert route_command("rm standup 9:45", ParserConfig()).has_time_context

    def test_expand_day_shortcuts(self):
        assert expand_day_shortcuts("tm and mon") == "tomorrow and monday"
        assert expand_day_shortcuts("td fri") == "today friday"
        assert expand_day_shortcuts("month") == "month"


class TestResolveMoveTarget:
    """Test resolving the new date of a move command."""

    def test_weekday_and_time(self):
        parser = ReminderParser()
        command = route_command("mv lunch to friday 1pm", parser.config)

        schedule = resolve_move_target(command, parser, NOW)

        assert schedule.due_date == datetime(2026, 10, 16, 13, 0)

    def test_unknown_target(self):
        parser = ReminderParser()
        command = route_command("move lunch to someday", parser.config)

        with pytest.raises(CommandError):
            resolve_move_target(command, parser, NOW)

    def test_requires_move_command(self):
        parser = ReminderParser()
        with pytest.raises(CommandError):
            resolve_move_target(route_command("rm lunch", parser.config), parser, NOW)


class TestBuildSearchQuery:
    """Test splitting search text into a title and a date qualifier."""

    def test_weekday_and_time(self):
        config = ParserConfig()
        query = build_search_query(route_command("rm standup friday 9:45", config), config, NOW)

        assert query.title == "standup"
        assert query.due_date == datetime(2026, 10, 16, 9, 45)
        assert query.match_date
        assert query.match_time

    def test_time_only(self):
        config = ParserConfig()
        query = build_search_query(route_command("rm standup 9:45", config), config, NOW)

        assert query.title == "standup"
        assert not query.match_date
        assert query.match_time

    def test_day_only(self):
        config = ParserConfig()
        query = build_search_query(route_command("delete lunch tomorrow", config), config, NOW)

        assert query.title == "lunch"
        assert query.due_date == datetime(2026, 10, 15, 9, 0)
        assert query.match_date
        assert not query.match_time

    def test_no_qualifier(self):
        config = ParserConfig()
        query = build_search_query(route_command("rm Call Mom", config), config, NOW)

        assert query == ReminderQuery(title="call mom")

    def test_matches_due_date(self):
        query = ReminderQuery(
            title="standup",
            due_date=datetime(2026, 10, 16, 9, 45),
            match_date=True,
            match_time=True,
        )

        assert query.matches_due_date(datetime(2026, 10, 16, 9, 45))
        assert not query.matches_due_date(datetime(2026, 10, 16, 14, 0))
        assert not query.matches_due_date(datetime(2026, 10, 19, 9, 45))
        assert not query.matches_due_date(None)
        assert not ReminderQuery(title="standup").matches_due_date(NOW)
