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
Composite Parsing

Combines a clock time and a date fragment from different parts of the input:
"5pm tomorrow", "tomorrow 5pm", "next monday 3:30 pm", "9pm tonight".
Every word boundary is tried as a split point, time-then-date first.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from .clock import extract_clock_time
from .dates import at_time, next_weekday_date
from .formatting import format_day_label, format_time_label
from .fuzzy import fuzzy_match, prefix_match
from .models import TimeSuggestion
from .normalizer import normalize, split_words
from .weekdays import match_weekday, split_next

TOMORROW_VARIANTS = ("tomorrow", "tmr", "tmrw", "tmw", "tom")


def _matches(word: str, target: str) -> bool:
    return prefix_match(word, target) or fuzzy_match(word, target)


def extract_base_date(text: str, now: datetime) -> Optional[date]:
    """Resolve a date fragment to a calendar day, or None."""
    fragment = normalize(text)
    if not fragment:
        return None

    for variant in TOMORROW_VARIANTS:
        if _matches(fragment, variant):
            return now.date() + timedelta(days=1)

    if _matches(fragment, "today") or _matches(fragment, "tonight"):
        return now.date()

    _, words = split_next(fragment.split())
    if len(words) == 1:
        entry = match_weekday(words[0])
        if entry is not None:
            return next_weekday_date(now, entry.weekday)

    return None


def _combine(hour: int, minute: int, day: date, now: datetime) -> list[TimeSuggestion]:
    timestamp = at_time(now, day, hour, minute)
    if timestamp <= now:
        return []
    label = f"{format_day_label(timestamp, now)} at {format_time_label(hour, minute)}"
    return [TimeSuggestion.at(label, timestamp, now)]


def parse_composite(text: str, now: datetime) -> list[TimeSuggestion]:
    words = split_words(text)
    if len(words) < 2:
        return []

    for split_at in range(1, len(words)):
        left = " ".join(words[:split_at])
        right = " ".join(words[split_at:])

        for time_part, date_part in ((left, right), (right, left)):
            clock_time = extract_clock_time(time_part)
            if clock_time is None:
                continue
            day = extract_base_date(date_part, now)
            if day is not None:
                hour, minute = clock_time
                return _combine(hour, minute, day, now)

    return []
