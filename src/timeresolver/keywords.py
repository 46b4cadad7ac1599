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
Keyword Table

Fixed phrases ("noon", "eod", "next quarter", "never", ...) matched by
prefix in either direction or by fuzzy match, so "tom" offers every
"tomorrow ..." entry and "tonigt" still finds "tonight".
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from .dates import (
    FRIDAY,
    MONDAY,
    at_time,
    localize_like,
    next_saturday_at,
    next_weekday_at,
    today_or_tomorrow_at,
    tomorrow_at,
    wall_clock,
)
from .fuzzy import fuzzy_match, prefix_match
from .models import TimeSuggestion
from .normalizer import normalize

logger = logging.getLogger("timeresolver.keywords")


@dataclass(frozen=True)
class Keyword:
    match: str
    label: str
    rule: Optional[Callable[[datetime], datetime]]  # None means "never"


def later_today(now: datetime) -> datetime:
    """Three hours out, rounded up to the next :30 or :00."""
    later = wall_clock(now) + timedelta(hours=3)
    if later.minute <= 30:
        later = later.replace(minute=30, second=0, microsecond=0)
    else:
        later = later.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
    return localize_like(now, later)


def end_of_week(now: datetime) -> datetime:
    """This week's Friday at 17:00, or next week's once that has passed."""
    friday = now.date() + timedelta(days=(FRIDAY - now.weekday()) % 7)
    candidate = at_time(now, friday, 17)
    if candidate > now:
        return candidate
    return at_time(now, friday + timedelta(weeks=1), 17)


def next_month(now: datetime) -> datetime:
    year, month = divmod(now.year * 12 + now.month, 12)
    return at_time(now, date(year, month + 1, 1), 9)


def next_quarter(now: datetime) -> datetime:
    """First day of the next three-month quarter at 09:00."""
    month = ((now.month - 1) // 3 + 1) * 3 + 1
    year = now.year
    if month > 12:
        year += 1
        month -= 12
    return at_time(now, date(year, month, 1), 9)


KEYWORDS = (
    Keyword("noon", "noon", lambda now: today_or_tomorrow_at(now, 12)),
    Keyword("midnight", "midnight", lambda now: tomorrow_at(now, 0)),
    Keyword("later today", "later today", later_today),
    Keyword("later", "later today", later_today),
    Keyword("tonight", "tonight", lambda now: today_or_tomorrow_at(now, 21)),
    Keyword("tomorrow morning", "tomorrow morning", lambda now: tomorrow_at(now, 9)),
    Keyword("tomorrow afternoon", "tomorrow afternoon", lambda now: tomorrow_at(now, 14)),
    Keyword("tomorrow evening", "tomorrow evening", lambda now: tomorrow_at(now, 19)),
    Keyword("tomorrow night", "tomorrow night", lambda now: tomorrow_at(now, 21)),
    Keyword("tomorrow", "tomorrow", lambda now: tomorrow_at(now, 9)),
    Keyword("this weekend", "this weekend", lambda now: next_saturday_at(now, 12)),
    Keyword("end of day", "end of day", lambda now: today_or_tomorrow_at(now, 17)),
    Keyword("eod", "end of day", lambda now: today_or_tomorrow_at(now, 17)),
    Keyword("end of week", "end of week", end_of_week),
    Keyword("eow", "end of week", end_of_week),
    Keyword("next week", "next week", lambda now: next_weekday_at(now, MONDAY, 9)),
    Keyword("next month", "next month", next_month),
    Keyword("next quarter", "next quarter", next_quarter),
    Keyword("never", "never", None),
)


def parse_keywords(text: str, now: datetime) -> list[TimeSuggestion]:
    phrase = normalize(text)
    if not phrase:
        return []

    results = []
    seen_labels = set()

    for keyword in KEYWORDS:
        if keyword.label in seen_labels:
            continue
        if not (prefix_match(phrase, keyword.match) or fuzzy_match(phrase, keyword.match)):
            continue
        seen_labels.add(keyword.label)

        if keyword.rule is None:
            results.append(TimeSuggestion.never(keyword.label, now))
            continue

        try:
            timestamp = keyword.rule(now)
        except (OverflowError, ValueError):
            logger.debug(f"Keyword '{keyword.match}' out of range, skipping")
            continue
        if timestamp <= now:
            logger.debug(f"Keyword '{keyword.match}' resolved to the past, skipping")
            continue
        results.append(TimeSuggestion.at(keyword.label, timestamp, now))

    return results
