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
Fuzzy Matching

Typo-tolerant string comparison for keywords, weekday names and AM/PM markers.
The allowed edit distance scales with the target: 25% of its length, minimum 1.
"""

from enum import Enum
from typing import Optional

from rapidfuzz.distance import Levenshtein


class Meridiem(Enum):
    AM = "am"
    PM = "pm"


AM_FORMS = frozenset({"am", "a.m.", "a.m", "a"})
PM_FORMS = frozenset({"pm", "p.m.", "p.m", "p"})

# Keys around 'a' and 'p' on a QWERTY keyboard, used to break 2-char ties
AM_NEIGHBORS = frozenset("aqswz")
PM_NEIGHBORS = frozenset("pol;[")


def edit_distance(a: str, b: str) -> int:
    """Insert/delete/substitute edit distance, each operation costing 1."""
    return Levenshtein.distance(a, b)


def fuzzy_match(value: str, target: str) -> bool:
    """True if value is within the scaled edit distance of target."""
    max_dist = max(1, len(target) // 4)
    if abs(len(value) - len(target)) > max_dist:
        return False
    return edit_distance(value, target) <= max_dist


def prefix_match(value: str, target: str) -> bool:
    """Either string is a prefix of the other."""
    return target.startswith(value) or value.startswith(target)


def detect_meridiem(token: str) -> Optional[Meridiem]:
    """
    Detect an AM/PM marker, tolerating one-key typos.

    Exact and progressive forms ("am", "a.m.", "a") match directly.
    Two-character tokens are scored by mismatches against "am" and "pm";
    "9om" peels to "om", which ties and resolves to PM because 'o' sits
    next to 'p'.

    Returns:
        Meridiem.AM, Meridiem.PM, or None if the token is not a marker
    """
    lower = token.lower()
    if not lower:
        return None

    if lower in AM_FORMS:
        return Meridiem.AM
    if lower in PM_FORMS:
        return Meridiem.PM

    if len(lower) == 2:
        first, second = lower
        am_score = (first != "a") + (second != "m")
        pm_score = (first != "p") + (second != "m")

        if am_score <= 1 and am_score < pm_score:
            return Meridiem.AM
        if pm_score <= 1 and pm_score < am_score:
            return Meridiem.PM

        if am_score <= 1 and pm_score <= 1:
            if first in AM_NEIGHBORS:
                return Meridiem.AM
            if first in PM_NEIGHBORS:
                return Meridiem.PM

    return None
