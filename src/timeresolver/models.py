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
Suggestion Data Model

A TimeSuggestion is one resolved interpretation of the user's input.
Suggestions are immutable values created fresh on every resolve call.
"""

from dataclasses import dataclass
from datetime import datetime

import pytz

from .formatting import SHRUG, format_display


@dataclass(frozen=True)
class TimeSuggestion:
    """A candidate resolution of a time phrase."""

    label: str  # Deduplication key within one result set
    timestamp: datetime
    formatted_display: str
    is_ai_generated: bool = False
    is_never_deliver: bool = False  # Store only, never notify

    @property
    def key(self) -> str:
        """Stable identifier for list rendering."""
        key = self.label
        if self.is_ai_generated:
            key += "-ai"
        if self.is_never_deliver:
            key += "-never"
        return key

    @classmethod
    def at(
        cls,
        label: str,
        timestamp: datetime,
        now: datetime,
        is_ai_generated: bool = False,
    ) -> "TimeSuggestion":
        """Build a suggestion with its display string rendered relative to now."""
        return cls(
            label=label,
            timestamp=timestamp,
            formatted_display=format_display(timestamp, now),
            is_ai_generated=is_ai_generated,
        )

    @classmethod
    def never(cls, label: str, now: datetime) -> "TimeSuggestion":
        """The "never deliver" sentinel, pinned to the maximum instant."""
        return cls(
            label=label,
            timestamp=never_instant(now),
            formatted_display=SHRUG,
            is_never_deliver=True,
        )


def never_instant(now: datetime) -> datetime:
    """Maximum representable instant, comparable with now."""
    if now.tzinfo is None:
        return datetime.max
    return datetime.max.replace(tzinfo=pytz.UTC)


class CancellationToken:
    """
    Cooperative cancellation handle for one fallback request.

    Checked before any caller-visible state is touched, so a cancelled
    request can finish quietly without publishing a late result.
    """

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
