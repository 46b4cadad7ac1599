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
Suggestion Aggregator

Runs every rule parser over the input and merges their candidates into one
ranked list. Composite readings come first so "5pm tomorrow" leads with the
combined answer rather than its pieces.

Resolution is synchronous and pure: the same (text, now) always produces
the same list.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from .bare_number import parse_bare_number
from .clock import parse_clock_time
from .composite import parse_composite
from .config import MAX_RESULTS
from .dates import at_time, next_saturday_at, shift, today_or_tomorrow_at, tomorrow_at
from .detector import DateSpanDetector, dateparser_detector, detect_dates
from .durations import parse_duration
from .formatting import SHRUG
from .keywords import parse_keywords
from .models import TimeSuggestion
from .normalizer import normalize
from .weekdays import parse_weekday

logger = logging.getLogger("timeresolver.aggregator")

RuleParser = Callable[[str, datetime], list[TimeSuggestion]]

# Order matters: earlier parsers win label collisions
RULE_PARSERS: tuple[RuleParser, ...] = (
    parse_composite,
    parse_bare_number,
    parse_clock_time,
    parse_keywords,
    parse_duration,
    parse_weekday,
)

SOMEDAY_MIN_DAYS = 4
SOMEDAY_MAX_DAYS = 30
SOMEDAY_HOURS = (9, 10, 11, 12, 14, 15, 16, 17, 18, 19, 20)
SOMEDAY_MINUTES = (0, 15, 30, 45)


def _dedupe(suggestions: list[TimeSuggestion]) -> list[TimeSuggestion]:
    seen = set()
    unique = []
    for suggestion in suggestions:
        if suggestion.label in seen:
            continue
        seen.add(suggestion.label)
        unique.append(suggestion)
    return unique


def someday(now: datetime, rng: Optional[random.Random] = None) -> datetime:
    """A random daytime slot 4-30 days out."""
    rng = rng or random.Random()
    day = now.date() + timedelta(days=rng.randint(SOMEDAY_MIN_DAYS, SOMEDAY_MAX_DAYS))
    return at_time(now, day, rng.choice(SOMEDAY_HOURS), rng.choice(SOMEDAY_MINUTES))


def default_suggestions(
    now: datetime, rng: Optional[random.Random] = None
) -> list[TimeSuggestion]:
    """
    The fixed menu shown before anything is typed.

    Seven entries, "Never" always last. Not subject to the result cap.
    """
    return [
        TimeSuggestion.at("In an hour", shift(now, timedelta(hours=1)), now),
        TimeSuggestion.at("In 3 hours", shift(now, timedelta(hours=3)), now),
        TimeSuggestion.at("Tonight", today_or_tomorrow_at(now, 21), now),
        TimeSuggestion.at("Tomorrow", tomorrow_at(now, 9), now),
        TimeSuggestion.at("This Weekend", next_saturday_at(now, 12), now),
        TimeSuggestion(
            label="Someday",
            timestamp=someday(now, rng),
            formatted_display=SHRUG,
        ),
        TimeSuggestion.never("Never", now),
    ]


def resolve(
    text: str,
    now: datetime,
    *,
    detector: DateSpanDetector = dateparser_detector,
    max_results: int = MAX_RESULTS,
) -> list[TimeSuggestion]:
    """
    Resolve freeform text into ranked future time suggestions.

    Args:
        text: Raw user input
        now: Reference instant; every suggestion lands strictly after it
        detector: Date-span detector consulted when no rule matches
        max_results: Cap on the merged list, at most MAX_RESULTS

    Returns:
        Deduplicated suggestions, at most max_results long. Empty input
        returns the default menu instead.
    """
    normalized = normalize(text)
    if not normalized:
        # Seeded from now so repeated calls agree on "Someday"
        return default_suggestions(now, random.Random(now.isoformat()))

    results = []
    for parser in RULE_PARSERS:
        try:
            results.extend(parser(normalized, now))
        except (OverflowError, ValueError):
            # Only reachable at the edges of the datetime range
            logger.debug(f"{parser.__name__} out of range for '{normalized[:50]}', skipping")

    if not results:
        results = detect_dates(text, now, detector)

    # Parsers already drop past instants; this keeps the invariant for all of them
    results = [s for s in results if s.is_never_deliver or s.timestamp > now]

    # Callers may lower the cap but never raise it
    results = _dedupe(results)[:min(max_results, MAX_RESULTS)]
    logger.debug(f"Resolved '{normalized[:50]}' to {len(results)} suggestion(s)")
    return results
