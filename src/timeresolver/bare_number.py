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
Bare-Number Parsing

A lone number ("4", "eight", "935") is read as a minute, hour or weekday
offset, and 3-4 digit inputs additionally as an HMM/HHMM clock time.
"""

import logging
from datetime import datetime, timedelta

from .clock import expand_ambiguous
from .dates import add_weekdays, shift
from .formatting import pluralize
from .fuzzy import detect_meridiem
from .models import TimeSuggestion
from .normalizer import normalize
from .numbers import extract_number, is_digits

logger = logging.getLogger("timeresolver.bare_number")

MAX_NUMBER = 999
MAX_HOURS = 48
MAX_WEEKDAYS = 30


def parse_bare_number(text: str, now: datetime) -> list[TimeSuggestion]:
    token = normalize(text)
    if not token or " " in token:
        return []

    # Anything ending like am/pm belongs to the clock-time parser
    if detect_meridiem(token[-2:]) is not None or detect_meridiem(token[-1:]) is not None:
        return []

    n = extract_number(token)
    if n is None or not 1 <= n <= MAX_NUMBER:
        return []

    results = []

    if is_digits(token) and 3 <= len(token) <= 4:
        hour, minute = divmod(n, 100)
        if 1 <= hour <= 12 and 0 <= minute <= 59:
            try:
                results.extend(expand_ambiguous(hour, minute, now))
            except (OverflowError, ValueError):
                logger.debug(f"Clock reading of {token} out of range, skipping")

    offsets = [("minute", lambda: shift(now, timedelta(minutes=n)))]
    if n <= MAX_HOURS:
        offsets.append(("hour", lambda: shift(now, timedelta(hours=n))))
    if n <= MAX_WEEKDAYS:
        offsets.append(("weekday", lambda: add_weekdays(now, n)))

    for unit, offset in offsets:
        try:
            timestamp = offset()
        except (OverflowError, ValueError):
            logger.debug(f"{n} {unit}(s) out of range, skipping")
            continue
        results.append(TimeSuggestion.at(f"in {pluralize(n, unit)}", timestamp, now))

    return results
