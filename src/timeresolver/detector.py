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
System Date-Pattern Fallback

Last-resort detection of calendar phrases ("aug 7", "march 3rd at 4pm")
once every rule parser has come up empty. Detection is delegated to
dateparser's span search; any detector can be swapped in.
"""

import logging
from datetime import datetime
from typing import Callable

from dateparser.search import search_dates

from .dates import localize_like, wall_clock
from .models import TimeSuggestion

logger = logging.getLogger("timeresolver.detector")

# (text, now) -> [(matched_text, resolved_instant), ...]
DateSpanDetector = Callable[[str, datetime], list[tuple[str, datetime]]]


def _align(found: datetime, now: datetime) -> datetime:
    """Bring a detected instant into the same naive/aware frame as now."""
    if found.tzinfo is None:
        return localize_like(now, found)
    if now.tzinfo is None:
        return found.astimezone().replace(tzinfo=None)
    return found


def dateparser_detector(text: str, now: datetime) -> list[tuple[str, datetime]]:
    """Find date spans in text with dateparser, relative to now."""
    settings = {
        "RELATIVE_BASE": wall_clock(now),
        "PREFER_DATES_FROM": "future",
        "RETURN_AS_TIMEZONE_AWARE": False,
    }
    found = search_dates(text, languages=["en"], settings=settings)
    if not found:
        return []
    return [(matched, _align(instant, now)) for matched, instant in found]


def detect_dates(
    text: str,
    now: datetime,
    detector: DateSpanDetector = dateparser_detector,
) -> list[TimeSuggestion]:
    """
    Suggestions for every detected date strictly after now.

    The label is the raw input text. Detector failures count as no matches.
    """
    if not text.strip():
        return []

    try:
        spans = detector(text, now)
    except Exception as e:
        logger.warning(f"Date detector failed for '{text[:50]}': {e}")
        return []

    return [
        TimeSuggestion.at(text, instant, now)
        for _, instant in spans
        if instant > now
    ]
