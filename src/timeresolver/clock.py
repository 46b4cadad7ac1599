# timeresolver - Natural-Language Date/Time Resolver
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
Clock-Time Parsing

Handles expressions like "9pm", "9p", "9om", "five am", "3:30 pm",
"nine twenty five pm" and "at 7 in the evening". A clock time needs either
an AM/PM indicator or a colon; a bare hour is left to the bare-number parser.
"""

import logging
from datetime import datetime
from typing import Optional

from .dates import today_at, tomorrow_at
from .formatting import format_time_label
from .fuzzy import Meridiem, detect_meridiem
from .models import TimeSuggestion
from .normalizer import strip_clock_fillers, strip_leading_at, strip_word_fillers, tokenize
from .numbers import extract_number, parse_compound_number, split_hour_minute

logger = logging.getLogger("timeresolver.clock")

# Time-of-day words accepted in place of am/pm, matched progressively
DAY_PERIODS = (
    ("morning", Meridiem.AM),
    ("afternoon", Meridiem.PM),
    ("evening", Meridiem.PM),
    ("night", Meridiem.PM),
)


def _period_meridiem(word: str) -> Optional[Meridiem]:
    # Two characters minimum so "a" doesn't read as "afternoon"
    if len(word) < 2:
        return None
    for period, meridiem in DAY_PERIODS:
        if period.startswith(word):
            return meridiem
    return None


def _peel_meridiem(words: list[str]) -> Optional[Meridiem]:
    """
    Find and remove the AM/PM indicator from the tail of words (in place).

    Tried in order: the whole last word, a time-of-day word, then a
    2-char and a 1-char suffix glued to the last word ("9pm", "9p").
    """
    last = words[-1]

    meridiem = detect_meridiem(last)
    if meridiem is None:
        meridiem = _period_meridiem(last)
    if meridiem is not None:
        words.pop()
        return meridiem

    if len(last) < 2:
        return None

    if len(last) >= 3:
        meridiem = detect_meridiem(last[-2:])
        if meridiem is not None:
            words[-1] = last[:-2]
            return meridiem

    meridiem = detect_meridiem(last[-1:])
    if meridiem is not None:
        words[-1] = last[:-1]
    return meridiem


def extract_clock_time(text: str) -> Optional[tuple[int, int]]:
    """
    Parse a clock-time fragment into (hour24, minute).

    Returns:
        The 24-hour time, or None if text is not an unambiguous clock time
    """
    words = strip_clock_fillers(strip_leading_at(tokenize(text)))
    if not words:
        return None

    meridiem = _peel_meridiem(words)

    words = strip_word_fillers(words)
    if not words:
        return None

    minute = 0
    colon_word = next((w for w in words if ":" in w), None)
    if colon_word is not None:
        hour, minute = split_hour_minute(colon_word)
    elif len(words) == 1:
        hour = extract_number(words[0])
    else:
        hour = extract_number(words[0])
        minute = parse_compound_number(words[1:]) or 0

    if hour is None or not 0 <= hour <= 23 or not 0 <= minute <= 59:
        return None
    if meridiem is None and ":" not in text:
        return None

    if meridiem is not None:
        if hour > 12:
            return None
        if meridiem is Meridiem.PM and hour != 12:
            hour += 12
        elif meridiem is Meridiem.AM and hour == 12:
            hour = 0

    return hour, minute


def _today_and_tomorrow(hour: int, minute: int, now: datetime) -> list[TimeSuggestion]:
    results = []
    time_label = format_time_label(hour, minute)

    today = today_at(now, hour, minute)
    if today > now:
        results.append(TimeSuggestion.at(f"today at {time_label}", today, now))

    tomorrow = tomorrow_at(now, hour, minute)
    if tomorrow > now:
        results.append(TimeSuggestion.at(f"tomorrow at {time_label}", tomorrow, now))

    return results


def parse_clock_time(text: str, now: datetime) -> list[TimeSuggestion]:
    """Clock time as "today at ..." (if still ahead) and "tomorrow at ..."."""
    parsed = extract_clock_time(text)
    if parsed is None:
        return []
    hour, minute = parsed
    return _today_and_tomorrow(hour, minute, now)


def expand_ambiguous(hour12: int, minute: int, now: datetime) -> list[TimeSuggestion]:
    """
    Both AM and PM readings of a 12-hour time, nearest two first.

    "935" at 08:00 gives today 9:35 am then today 9:35 pm.
    """
    am_hour = 0 if hour12 == 12 else hour12
    pm_hour = 12 if hour12 == 12 else hour12 + 12

    options = []
    for hour in (am_hour, pm_hour):
        options.extend(_today_and_tomorrow(hour, minute, now))

    options.sort(key=lambda s: s.timestamp)
    return options[:2]
