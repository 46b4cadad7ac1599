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
Calendar Helpers

All day arithmetic happens on the local calendar of the reference instant.
Naive reference instants stay naive. Aware ones keep their zone; pytz zones
are re-localized so the UTC offset matches the target day.
"""

from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

# Python weekday numbers (Monday == 0)
MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


def wall_clock(now: datetime) -> datetime:
    """The naive local wall-clock reading of an instant."""
    return now.replace(tzinfo=None)


def localize_like(now: datetime, naive: datetime) -> datetime:
    """Attach now's timezone to a naive wall-clock datetime."""
    tz = now.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def at_time(now: datetime, day: date, hour: int, minute: int = 0) -> datetime:
    """The instant at hour:minute on a calendar day, in now's zone."""
    return localize_like(now, datetime.combine(day, time(hour, minute)))


def today_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    return at_time(now, now.date(), hour, minute)


def tomorrow_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    return at_time(now, now.date() + timedelta(days=1), hour, minute)


def today_or_tomorrow_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    """Today at hour:minute if that is still ahead, otherwise tomorrow."""
    candidate = today_at(now, hour, minute)
    if candidate > now:
        return candidate
    return tomorrow_at(now, hour, minute)


def shift(now: datetime, delta: timedelta) -> datetime:
    """Exact elapsed-time offset (minutes, hours)."""
    result = now + delta
    if result.tzinfo is not None and hasattr(result.tzinfo, "normalize"):
        result = result.tzinfo.normalize(result)
    return result


def add_calendar(now: datetime, days: int = 0, weeks: int = 0, months: int = 0) -> datetime:
    """
    Calendar offset that keeps the wall-clock time.

    Months clamp to the last day of the target month.

    Raises:
        OverflowError, ValueError: if the result falls outside datetime's range
    """
    naive = wall_clock(now) + relativedelta(days=days, weeks=weeks, months=months)
    return localize_like(now, naive)


def days_until_weekday(now: datetime, weekday: int) -> int:
    """Days from now until the next weekday, never zero."""
    days_ahead = weekday - now.weekday()
    if days_ahead <= 0:
        days_ahead += 7
    return days_ahead


def next_weekday_date(now: datetime, weekday: int) -> date:
    return now.date() + timedelta(days=days_until_weekday(now, weekday))


def next_weekday_at(now: datetime, weekday: int, hour: int, minute: int = 0) -> datetime:
    """Next occurrence of a weekday, strictly after today."""
    return at_time(now, next_weekday_date(now, weekday), hour, minute)


def next_saturday_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    # Saturday rolls a full week, Sunday six days
    days_until = (SATURDAY - now.weekday()) % 7 or 7
    return at_time(now, now.date() + timedelta(days=days_until), hour, minute)


def add_weekdays(now: datetime, count: int) -> datetime:
    """Step count working days forward (skipping Sat/Sun), landing at 09:00."""
    day = now.date()
    remaining = count
    while remaining > 0:
        day += timedelta(days=1)
        if day.weekday() not in (SATURDAY, SUNDAY):
            remaining -= 1
    return at_time(now, day, 9)
