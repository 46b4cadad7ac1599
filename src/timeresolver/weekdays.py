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
Weekday Name Parsing

"monday", "fri", "next tuesday", and one-typo spellings like "fridey".
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .dates import FRIDAY, MONDAY, SATURDAY, SUNDAY, THURSDAY, TUESDAY, WEDNESDAY, next_weekday_at
from .fuzzy import fuzzy_match, prefix_match
from .models import TimeSuggestion
from .normalizer import split_words

WEEKDAY_HOUR = 9


@dataclass(frozen=True)
class WeekdayName:
    spellings: tuple[str, ...]  # Full name first
    weekday: int
    name: str


# Sunday first: a lone "s" or "t" resolves to Sunday / Tuesday
WEEKDAY_NAMES = (
    WeekdayName(("sunday", "sun"), SUNDAY, "Sunday"),
    WeekdayName(("monday", "mon"), MONDAY, "Monday"),
    WeekdayName(("tuesday", "tue", "tues"), TUESDAY, "Tuesday"),
    WeekdayName(("wednesday", "wed"), WEDNESDAY, "Wednesday"),
    WeekdayName(("thursday", "thu", "thur", "thurs"), THURSDAY, "Thursday"),
    WeekdayName(("friday", "fri"), FRIDAY, "Friday"),
    WeekdayName(("saturday", "sat"), SATURDAY, "Saturday"),
)


def match_weekday(word: str) -> Optional[WeekdayName]:
    """First weekday whose spellings match word by prefix or fuzzy match."""
    for entry in WEEKDAY_NAMES:
        full_name = entry.spellings[0]
        for spelling in entry.spellings:
            if (
                prefix_match(word, spelling)
                or fuzzy_match(word, spelling)
                or fuzzy_match(word, full_name)
            ):
                return entry
    return None


def split_next(words: list[str]) -> tuple[bool, list[str]]:
    """Separate an optional leading "next" from the remaining words."""
    if words and words[0] == "next":
        return True, words[1:]
    return False, words


def parse_weekday(text: str, now: datetime) -> list[TimeSuggestion]:
    has_next, words = split_next(split_words(text))
    if len(words) != 1:
        return []

    entry = match_weekday(words[0])
    if entry is None:
        return []

    timestamp = next_weekday_at(now, entry.weekday, WEEKDAY_HOUR)
    label = f"next {entry.name}" if has_next else entry.name
    return [TimeSuggestion.at(label, timestamp, now)]
