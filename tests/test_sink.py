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

"""Tests for handing parsed reminders to a sink."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickreminders.commands import build_search_query, route_command
from quickreminders.config import ParserConfig
from quickreminders.models import ParsedReminder, RecurrenceFrequency
from quickreminders.parser import parse_reminder_text
from quickreminders.sink import InMemoryReminderSink, ReminderRejectedError, dispatch_reminder

NOW = datetime(2026, 10, 14, 10, 0)


class TestDispatchReminder:
    """Test routing parse results to the right sink call."""

    def test_one_off(self):
        sink = InMemoryReminderSink()
        reminder_id = dispatch_reminder(
            parse_reminder_text("Dentist appointment tomorrow at 3pm", now=NOW), sink
        )

        stored = sink.reminders[reminder_id]
        assert reminder_id == "reminder-1"
        assert stored.title == "Dentist appointment"
        assert stored.due_date == datetime(2026, 10, 15, 15, 0)
        assert not stored.is_recurring

    def test_recurring(self):
        sink = InMemoryReminderSink()
        reminder_id = dispatch_reminder(
            parse_reminder_text("water plants every 3 days", now=NOW), sink
        )

        stored = sink.reminders[reminder_id]
        assert stored.is_recurring
        assert stored.interval == 3
        assert stored.frequency == RecurrenceFrequency.DAILY
        assert stored.end_date is None

    def test_plain_task(self):
        sink = InMemoryReminderSink()
        reminder_id = dispatch_reminder(ParsedReminder(title="Buy milk"), sink)
        assert sink.reminders[reminder_id].due_date is None

    def test_invalid_rejected(self):
        sink = InMemoryReminderSink()
        parsed = parse_reminder_text("water plants every 400 days", now=NOW)

        with pytest.raises(ReminderRejectedError, match="max 365 days"):
            dispatch_reminder(parsed, sink)
        assert sink.reminders == {}


class TestInMemoryReminderSink:
    """Test the dictionary-backed store."""

    def test_find_delete_reschedule(self):
        sink = InMemoryReminderSink()
        lunch = sink.create_reminder("Lunch with Sam", datetime(2026, 10, 15, 12, 0))
        sink.create_reminder("Call mom", None)

        assert [r.id for r in sink.find("lunch")] == [lunch]
        assert sink.find("   ") == []

        moved = sink.reschedule(lunch, datetime(2026, 10, 16, 13, 0))
        assert moved.due_date == datetime(2026, 10, 16, 13, 0)
        assert sink.reminders[lunch].title == "Lunch with Sam"

        sink.delete(lunch)
        assert sink.find("lunch") == []
        sink.delete("missing")

    def test_ids_are_sequential(self):
        sink = InMemoryReminderSink()
        first = sink.create_reminder("A", None)
        second = sink.create_recurring_reminder("B", NOW, 1, RecurrenceFrequency.WEEKLY)
        assert (first, second) == ("reminder-1", "reminder-2")


class TestFindMatching:
    """Test narrowing shared titles with a date qualifier."""

    def make_sink(self):
        sink = InMemoryReminderSink()
        friday = sink.create_reminder("Standup", datetime(2026, 10, 16, 9, 45))
        monday = sink.create_reminder("Standup", datetime(2026, 10, 19, 9, 45))
        afternoon = sink.create_reminder("Standup", datetime(2026, 10, 16, 14, 0))
        return sink, friday, monday, afternoon

    def query(self, text):
        config = ParserConfig()
        return build_search_query(route_command(text, config), config, NOW)

    def test_date_and_time(self):
        sink, friday, _, _ = self.make_sink()
        matches = sink.find_matching(self.query("rm standup friday 9:45"))
        assert [r.id for r in matches] == [friday]

    def test_time_on_any_day(self):
        sink, friday, monday, _ = self.make_sink()
        matches = sink.find_matching(self.query("rm standup 9:45"))
        assert [r.id for r in matches] == [friday, monday]

    def test_date_on_its_own(self):
        sink, friday, _, afternoon = self.make_sink()
        matches = sink.find_matching(self.query("mv standup friday to monday"))
        assert [r.id for r in matches] == [friday, afternoon]

    def test_qualifier_matching_nothing_keeps_title_matches(self):
        sink, _, _, _ = self.make_sink()
        assert len(sink.find_matching(self.query("rm standup saturday"))) == 3

    def test_single_title_match_ignores_qualifier(self):
        sink = InMemoryReminderSink()
        lunch = sink.create_reminder("Lunch", datetime(2026, 10, 20, 12, 0))
        matches = sink.find_matching(self.query("rm lunch friday"))
        assert [r.id for r in matches] == [lunch]


class TestListReminders:
    """Test list command filters."""

    def test_filters(self):
        sink = InMemoryReminderSink()
        later = sink.create_reminder("Dentist", datetime(2026, 10, 16, 15, 0))
        today = sink.create_reminder("Call mom", datetime(2026, 10, 14, 18, 0))
        tomorrow = sink.create_reminder("Gym", datetime(2026, 10, 15, 7, 0))
        undated = sink.create_reminder("Buy milk", None)

        def ids(list_filter):
            return [r.id for r in sink.list_reminders(list_filter, NOW)]

        assert ids("all") == [today, tomorrow, later, undated]
        assert ids("today") == [today]
        assert ids("tomorrow") == [tomorrow]
        assert ids("friday") == [later]
        assert ids("milk") == [undated]
