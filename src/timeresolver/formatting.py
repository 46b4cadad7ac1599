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

"""Label and display rendering for suggestions."""

from datetime import datetime

# Shown instead of a date for "someday" and "never"
SHRUG = "¯\\_(ツ)_/¯"


def _hour12(hour24: int) -> int:
    return hour24 % 12 or 12


def format_time_label(hour24: int, minute: int) -> str:
    """Lowercase label time: "9 pm", "9:35 am"."""
    period = "pm" if hour24 >= 12 else "am"
    if minute == 0:
        return f"{_hour12(hour24)} {period}"
    return f"{_hour12(hour24)}:{minute:02d} {period}"


def format_day_label(timestamp: datetime, now: datetime) -> str:
    """"today", "tomorrow", or the full weekday name."""
    days_apart = (timestamp.date() - now.date()).days
    if days_apart == 0:
        return "today"
    if days_apart == 1:
        return "tomorrow"
    return timestamp.strftime("%A")


def format_display(timestamp: datetime, now: datetime) -> str:
    """
    Short uppercase render of a timestamp relative to now.

    Same day: "9:35 PM". Within the week: "MON, 9:00 AM".
    Further out: "MON, JAN 08, 9:00 AM".
    """
    time_str = f"{_hour12(timestamp.hour)}:{timestamp.minute:02d} " + (
        "PM" if timestamp.hour >= 12 else "AM"
    )

    days_apart = (timestamp.date() - now.date()).days
    if days_apart == 0:
        return time_str

    if days_apart <= 6:
        day_str = timestamp.strftime("%a")
    else:
        day_str = timestamp.strftime("%a, %b %d")
    return f"{day_str.upper()}, {time_str}"


def pluralize(n: int, unit: str) -> str:
    """"1 hour", "3 hours"."""
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"
