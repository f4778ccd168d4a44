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
Voice Send Triggers

A dictated reminder ending in a trigger word ("call mom tomorrow send") is
submitted without pressing enter. Transcription itself happens elsewhere;
this module only looks at the finished text.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger("quickreminders.voice")


@dataclass(frozen=True)
class VoiceCommand:
    """Transcript with any trailing trigger word removed."""

    text: str
    auto_send: bool = False
    trigger: str = ""


def detect_send_trigger(transcript: str, triggers: Iterable[str]) -> VoiceCommand:
    """
    Check whether a transcript ends with a send trigger word.

    Triggers also match with a trailing "s" ("sends") and before closing
    punctuation ("Send.").

    Args:
        transcript: Transcribed text
        triggers: Trigger words, e.g. ("send", "sent")

    Returns:
        VoiceCommand; auto_send is False when nothing is left to send
    """
    text = (transcript or "").strip()

    for trigger in triggers:
        word = trigger.strip().lower()
        if not word:
            continue
        match = re.search(rf"(?:^|\s){re.escape(word)}s?[.!?]*$", text, re.IGNORECASE)
        if not match:
            continue

        remaining = text[: match.start()].strip()
        if not remaining:
            logger.debug(f"Trigger '{word}' spoken with nothing to send")
            return VoiceCommand(text=text)
        logger.debug(f"Trigger '{word}' detected, sending {remaining!r}")
        return VoiceCommand(text=remaining, auto_send=True, trigger=word)

    return VoiceCommand(text=text)
