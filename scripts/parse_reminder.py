#!/usr/bin/env python3
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
CLI tool for trying out the reminder parser.

Usage:
    python scripts/parse_reminder.py "dentist tomorrow at 3pm"
    python scripts/parse_reminder.py "pay rent every 1 month" --next 3
    python scripts/parse_reminder.py "call mom 5:46" --default-meridiem PM
    python scripts/parse_reminder.py "26/10 standup" --date-order ddmm --json
    python scripts/parse_reminder.py "water plants every day send" --voice
    python scripts/parse_reminder.py "mv lunch to friday 1pm" --now "2026-10-14 10:00"
    printf "standup friday 9am\nstandup monday 9am\nmv standup friday to friday 10am\nls\n" \
        | python scripts/parse_reminder.py --session

Preferences are read from REMINDER_* environment variables (or a .env file);
the flags above override them.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from quickreminders.commands import (
    CommandError,
    CommandType,
    build_search_query,
    resolve_move_target,
    route_command,
)
from quickreminders.config import DateOrder, Meridiem, ParserConfig
from quickreminders.parser import ReminderParser
from quickreminders.schedule import describe_reminder, format_due_date, next_occurrences
from quickreminders.sink import InMemoryReminderSink, dispatch_reminder
from quickreminders.voice import detect_send_trigger

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def format_datetime(dt: datetime) -> str:
    """Format datetime for display."""
    if dt is None:
        return "None"
    return dt.strftime("%Y-%m-%d %H:%M")


def reminder_to_dict(reminder) -> dict:
    frequency = reminder.recurrence_frequency
    return {
        "title": reminder.title,
        "due_date": reminder.due_date.isoformat() if reminder.due_date else None,
        "is_recurring": reminder.is_recurring,
        "recurrence_interval": reminder.recurrence_interval,
        "recurrence_frequency": frequency.value if frequency else None,
        "is_valid": reminder.is_valid,
        "error_message": reminder.error_message,
    }


def build_config(args) -> ParserConfig:
    config = ParserConfig.from_env()
    if args.date_order:
        config.date_order = DateOrder(args.date_order)
    if args.default_meridiem:
        config.default_meridiem = Meridiem(args.default_meridiem)
    if args.no_shortcuts:
        config.shortcuts_enabled = False
    if args.no_time_periods:
        config.time_periods_enabled = False
    return config


def print_reminder(reminder, args) -> None:
    if args.json:
        payload = reminder_to_dict(reminder)
        if args.next:
            payload["next"] = [d.isoformat() for d in next_occurrences(reminder, args.next)]
        print(json.dumps(payload, indent=2))
        return

    print(describe_reminder(reminder))
    if reminder.is_valid:
        print(f"  Title:     {reminder.title}")
        print(f"  Due:       {format_datetime(reminder.due_date)}")
        if reminder.is_recurring:
            print(
                f"  Repeats:   every {reminder.recurrence_interval} "
                f"{reminder.recurrence_frequency.value}"
            )
    if args.next:
        for occurrence in next_occurrences(reminder, args.next):
            print(f"  -> {format_datetime(occurrence)}")


def handle_line(text: str, parser: ReminderParser, sink: InMemoryReminderSink, now, args) -> int:
    """Route one line of input and apply it to the sink."""
    config = parser.config
    if args.voice:
        voice = detect_send_trigger(text, config.voice_send_triggers)
        if not voice.auto_send:
            print(f"No send trigger; transcript kept: {voice.text}")
            return 0
        text = voice.text

    command = route_command(text, config)
    if command.type is CommandType.LIST:
        reminders = sink.list_reminders(command.list_filter, now)
        print(f"{len(reminders)} reminder(s) for '{command.list_filter}'")
        for stored in reminders:
            print(f"  [{stored.id}] {stored.title}  {format_datetime(stored.due_date)}")
        return 0

    if command.type in (CommandType.DELETE, CommandType.MOVE):
        query = build_search_query(command, config, now)
        matches = sink.find_matching(query)
        if not matches:
            print(f"No reminder matches '{command.search_text}'")
            return 1

        if command.type is CommandType.DELETE:
            for stored in matches:
                sink.delete(stored.id)
                print(f"Deleted [{stored.id}] {stored.title}")
            return 0

        schedule = resolve_move_target(command, parser, now)
        for stored in matches:
            sink.reschedule(stored.id, schedule.due_date)
            print(f"Moved [{stored.id}] {stored.title} to {format_due_date(schedule.due_date)}")
        return 0

    reminder = parser.parse(text, now)
    print_reminder(reminder, args)
    if not reminder.is_valid:
        return 1

    reminder_id = dispatch_reminder(reminder, sink)
    logger.info(f"Stored as {reminder_id}")
    return 0


def run(args) -> int:
    parser = ReminderParser(build_config(args))
    sink = InMemoryReminderSink()
    now = datetime.strptime(args.now, "%Y-%m-%d %H:%M") if args.now else None

    if not args.session:
        return handle_line(" ".join(args.text), parser, sink, now, args)

    # One line per reminder or command, sharing one in-memory store
    status = 0
    for line in sys.stdin:
        if not line.strip():
            continue
        try:
            status = max(status, handle_line(line.strip(), parser, sink, now, args))
        except CommandError as e:
            logger.error(f"Error: {e}")
            status = 2
    return status


def main():
    parser = argparse.ArgumentParser(
        description="QuickReminders - parse natural language reminder text"
    )
    parser.add_argument("text", nargs="*", help="Reminder text or command")
    parser.add_argument("--now", help="Reference time, 'YYYY-MM-DD HH:MM' (default: now)")
    parser.add_argument(
        "--next", type=int, default=0, help="Show the next N occurrences (default: 0)"
    )
    parser.add_argument("--date-order", choices=["mmdd", "ddmm"], help="Numeric date order")
    parser.add_argument("--default-meridiem", choices=["AM", "PM"], help="AM/PM for bare hours")
    parser.add_argument("--no-shortcuts", action="store_true", help="Disable tm/td/mon/...")
    parser.add_argument(
        "--no-time-periods", action="store_true", help="Ignore morning/evening/..."
    )
    parser.add_argument("--voice", action="store_true", help="Treat text as a voice transcript")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--session", action="store_true", help="Read one reminder or command per line from stdin"
    )

    args = parser.parse_args()
    if not args.text and not args.session:
        parser.error("reminder text is required unless --session is given")
    try:
        sys.exit(run(args))
    except (CommandError, ValueError) as e:
        logger.error(f"Error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
