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
Duration Parsing

Supports:
- "<n> <unit>": "3 hours", "in 2 days", "five min"
- "a|an <unit>": "an hour", "a week"
- "half hour", "half an hour"
- Compact: "3h", "30min", "2d"

Units match by prefix in either direction, so an ambiguous unit yields
every reading ("3 m" is both 3 minutes and 3 months).
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from .dates import add_calendar, shift
from .formatting import pluralize
from .models import TimeSuggestion
from .normalizer import split_words
from .numbers import extract_number

logger = logging.getLogger("timeresolver.durations")


def _matches_minute(unit: str) -> bool:
    return "minute".startswith(unit) or unit.startswith("min")


def _matches_hour(unit: str) -> bool:
    return "hour".startswith(unit) or unit.startswith("hour") or unit in ("hr", "hrs")


def _matches_day(unit: str) -> bool:
    return "day".startswith(unit) or unit.startswith("day")


def _matches_week(unit: str) -> bool:
    return "week".startswith(unit) or unit.startswith("week")


def _matches_month(unit: str) -> bool:
    return "month".startswith(unit) or unit.startswith("month")


# (unit name, unit matcher, offset from now)
UNITS: tuple[tuple[str, Callable[[str], bool], Callable[[datetime, int], datetime]], ...] = (
    ("minute", _matches_minute, lambda now, n: shift(now, timedelta(minutes=n))),
    ("hour", _matches_hour, lambda now, n: shift(now, timedelta(hours=n))),
    ("day", _matches_day, lambda now, n: add_calendar(now, days=n)),
    ("week", _matches_week, lambda now, n: add_calendar(now, weeks=n)),
    ("month", _matches_month, lambda now, n: add_calendar(now, months=n)),
)


def duration_suggestions(n: int, unit: str, now: datetime) -> list[TimeSuggestion]:
    """One suggestion per unit that the unit string can stand for."""
    unit = unit.lower()
    if not unit:
        return []

    results = []
    for name, matches, offset in UNITS:
        if not matches(unit):
            continue
        try:
            timestamp = offset(now, n)
        except (OverflowError, ValueError):
            logger.debug(f"Duration {n} {name} out of range, skipping")
            continue
        results.append(TimeSuggestion.at(f"in {pluralize(n, name)}", timestamp, now))
    return results


def _split_compact(part: str) -> tuple[str, str]:
    """Split "30min" into ("30", "min") at the first letter."""
    for i, char in enumerate(part):
        if char.isalpha():
            return part[:i], part[i:]
    return part, ""


def parse_duration(text: str, now: datetime) -> list[TimeSuggestion]:
    parts = split_words(text)
    if parts and parts[0] == "in":
        parts = parts[1:]
    if not parts:
        return []

    if len(parts) == 2 and parts[0] in ("a", "an"):
        return duration_suggestions(1, parts[1], now)

    if parts[0] == "half":
        unit_parts = [p for p in parts[1:] if p not in ("a", "an")]
        if unit_parts and _is_hour_word(unit_parts[0]):
            half_hour = shift(now, timedelta(minutes=30))
            return [TimeSuggestion.at("in 30 minutes", half_hour, now)]

    if len(parts) == 1:
        number, unit = _split_compact(parts[0])
        if unit:
            n = extract_number(number)
            if n is not None and n > 0:
                return duration_suggestions(n, unit, now)

    if len(parts) != 2:
        return []

    n = extract_number(parts[0])
    if n is None or n <= 0:
        return []

    return duration_suggestions(n, parts[1], now)


def _is_hour_word(word: str) -> bool:
    return "hour".startswith(word) or word.startswith("hour")
