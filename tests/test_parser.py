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

"""Tests for the reminder parser entry point."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickreminders.config import DEFAULT_TIME_PERIODS, DateOrder, Meridiem, ParserConfig
from quickreminders.models import ExtractionStrategy, RecurrenceFrequency, ScheduleResult
from quickreminders.parser import GENERIC_ERROR_MESSAGE, ReminderParser, parse_reminder_text

# A Wednesday
NOW = datetime(2026, 10, 14, 10, 0)


class TestParseReminder:
    """Test end-to-end parsing of typical reminders."""

    def test_title_strips_schedule_only(self):
        result = parse_reminder_text("Dentist appointment tomorrow at 3pm", now=NOW)

        assert result.is_valid
        assert result.title == "Dentist appointment"
        assert result.due_date == datetime(2026, 10, 15, 15, 0)
        assert not result.is_recurring

    def test_plain_task_has_no_due_date(self):
        result = parse_reminder_text("  buy milk  ", now=NOW)

        assert result.is_valid
        assert result.title == "buy milk"
        assert result.due_date is None
        assert result.error_message is None

    def test_recurring_with_day_of_next_month(self):
        result = parse_reminder_text(
            "pay rent every 1 month on the 1st of next month at 9am", now=NOW
        )

        assert result.title == "pay rent"
        assert result.due_date == datetime(2026, 11, 1, 9, 0)
        assert result.is_recurring
        assert result.recurrence_interval == 1
        assert result.recurrence_frequency == RecurrenceFrequency.MONTHLY
        assert result.recurrence_end_date is None

    def test_leading_schedule(self):
        result = parse_reminder_text("tuesday morning take out trash", now=NOW)

        assert result.title == "take out trash"
        assert result.due_date == datetime(2026, 10, 20, 9, 0)

    def test_hour_after_time_period(self):
        result = parse_reminder_text("dinner tomorrow evening 7", now=NOW)

        assert result.title == "dinner"
        assert result.due_date == datetime(2026, 10, 15, 19, 0)

    def test_falls_back_to_ordered_patterns(self):
        result = parse_reminder_text("call mom 5", now=NOW)

        assert result.is_valid
        assert result.title == "call mom 5"
        assert result.due_date == datetime(2026, 10, 14, 5, 0)


class TestParserProperties:
    """Test guarantees that hold for every parse."""

    def test_determinism(self):
        parser = ReminderParser()
        first = parser.parse("standup every 2 weeks on friday at 9:30", NOW)
        second = parser.parse("standup every 2 weeks on friday at 9:30", NOW)
        assert first == second

    def test_validation_precedes_extraction(self):
        result = parse_reminder_text("meet at 25", now=NOW)

        assert not result.is_valid
        assert result.due_date is None
        assert result.title == "meet"
        assert result.error_message.startswith("Invalid time format")

    def test_length_rules(self):
        assert parse_reminder_text("", now=NOW).error_message == "Please enter a reminder"
        assert parse_reminder_text("ab", now=NOW).error_message == "Reminder is too short"
        assert not parse_reminder_text("x" * 201, now=NOW).is_valid

    def test_meridiem_default(self):
        am = parse_reminder_text("remind me at 5:46", ParserConfig(), now=NOW)
        pm = parse_reminder_text(
            "remind me at 5:46", ParserConfig(default_meridiem=Meridiem.PM), now=NOW
        )

        assert (am.due_date.hour, am.due_date.minute) == (5, 46)
        assert (pm.due_date.hour, pm.due_date.minute) == (17, 46)

    def test_date_order_sensitivity(self):
        month_first = parse_reminder_text("standup 10/26", ParserConfig(), now=NOW)
        day_first = parse_reminder_text(
            "standup 10/26", ParserConfig(date_order=DateOrder.DAY_FIRST), now=NOW
        )

        assert month_first.due_date == datetime(2026, 10, 26, 9, 0)
        assert not day_first.is_valid
        assert day_first.due_date is None
        assert "DD/MM" in day_first.error_message

    def test_recurrence_normalization(self):
        bare = parse_reminder_text("take vitamins every day", now=NOW)
        counted = parse_reminder_text("take vitamins every 1 day", now=NOW)

        for result in (bare, counted):
            assert result.is_recurring
            assert result.recurrence_interval == 1
            assert result.recurrence_frequency == RecurrenceFrequency.DAILY
        assert bare == counted

    def test_weekday_rollover(self):
        result = parse_reminder_text("gym on wednesday", now=NOW)

        assert result.title == "gym"
        assert result.due_date == datetime(2026, 10, 21, 9, 0)

    def test_bound_rejection(self):
        for text, message in (
            ("water plants every 400 days", "Daily recurring interval too large (max 365 days)"),
            ("water plants every 60 weeks", "Weekly recurring interval too large (max 52 weeks)"),
            ("water plants every 30 months", "Monthly recurring interval too large (max 24 months)"),
        ):
            result = parse_reminder_text(text, now=NOW)
            assert not result.is_valid
            assert result.due_date is None
            assert not result.is_recurring
            assert result.error_message == message
            assert result.title == "water plants"

    def test_bounds_are_inclusive(self):
        result = parse_reminder_text("water plants every 365 days", now=NOW)
        assert result.is_valid
        assert result.recurrence_interval == 365

    def test_ambiguous_day_offset_with_weekday(self):
        for text in ("laundry in 3 days monday", "laundry monday in 3 days"):
            result = parse_reminder_text(text, now=NOW)
            assert not result.is_valid
            assert result.title == "laundry"
            assert "in X weeks/months weekday" in result.error_message

    def test_contradiction_rejection(self):
        result = parse_reminder_text("report in 2 weeks tomorrow", now=NOW)

        assert not result.is_valid
        assert result.title == "report"
        assert "today/tomorrow" in result.error_message

    def test_time_period_preset(self):
        periods = dict(DEFAULT_TIME_PERIODS, evening=(18, 30))
        result = parse_reminder_text(
            "dinner tomorrow evening", ParserConfig(time_periods=periods), now=NOW
        )

        assert result.title == "dinner"
        assert result.due_date == datetime(2026, 10, 15, 18, 30)

    def test_overflowing_distance_is_invalid(self):
        result = parse_reminder_text("task in 99999999999 days", now=NOW)

        assert not result.is_valid
        assert result.error_message == GENERIC_ERROR_MESSAGE
        assert result.due_date is None


class FixedStrategy(ExtractionStrategy):
    name = "fixed"

    def extract(self, text, now):
        return ScheduleResult(due_date=now + timedelta(hours=1), source=self.name)

    def title(self, original_text, result):
        return original_text.upper()


class EmptyStrategy(ExtractionStrategy):
    name = "empty"

    def __init__(self):
        self.calls = 0

    def extract(self, text, now):
        self.calls += 1
        return ScheduleResult.empty(self.name)

    def title(self, original_text, result):
        raise AssertionError("title requested without a due date")


class TestReminderParser:
    """Test strategy selection and configuration handling."""

    def test_default_strategy_order(self):
        names = [strategy.name for strategy in ReminderParser().strategies]
        assert names == ["smart", "ordered"]

    def test_first_strategy_with_due_date_wins(self):
        empty = EmptyStrategy()
        parser = ReminderParser(strategies=[empty, FixedStrategy()])

        result = parser.parse("buy milk", NOW)

        assert empty.calls == 1
        assert result.title == "BUY MILK"
        assert result.due_date == datetime(2026, 10, 14, 11, 0)

    def test_no_strategy_matches(self):
        parser = ReminderParser(strategies=[EmptyStrategy()])
        result = parser.parse("buy milk tomorrow", NOW)

        assert result.is_valid
        assert result.title == "buy milk tomorrow"
        assert result.due_date is None

    def test_config_changes_apply_to_next_parse(self):
        config = ParserConfig()
        parser = ReminderParser(config)

        before = parser.parse("call mom tomorrow at 5:46", NOW)
        config.default_meridiem = Meridiem.PM
        after = parser.parse("call mom tomorrow at 5:46", NOW)

        assert before.due_date == datetime(2026, 10, 15, 5, 46)
        assert after.due_date == datetime(2026, 10, 15, 17, 46)

    def test_never_raises(self):
        parser = ReminderParser()
        for text in (None, "   ", "every", "in the", "12/45 party", "at 99:99", "🎉🎉🎉"):
            result = parser.parse(text, NOW)
            assert result.is_valid or result.error_message
