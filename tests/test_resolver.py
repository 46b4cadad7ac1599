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

"""Tests for suggestion aggregation, defaults and the date-detector fallback."""

import random
import sys
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytz

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from timeresolver import TimeSuggestion, default_suggestions, resolve
from timeresolver.aggregator import SOMEDAY_HOURS, SOMEDAY_MINUTES
from timeresolver.detector import detect_dates
from timeresolver.extractors import RuleBasedExtractor
from timeresolver.formatting import SHRUG, format_display, format_time_label

# Monday
NOW = datetime(2024, 1, 1, 8, 0)

SAMPLE_INPUTS = [
    "4", "eight", "935", "9om", "9pm", "3:30 pm", "nine twenty five pm",
    "5pm tomorrow", "tomorrow 5pm", "next monday 3pm", "noon", "t", "tom",
    "eod", "next quarter", "never", "3 days", "3h", "3 m", "half an hour",
    "fri", "fridey", "next monday", "later", "this weekend", "n",
]


def no_dates(text, now):
    return []


def labels(suggestions):
    return [s.label for s in suggestions]


class TestResolveProperties:
    """Invariants that hold for every input."""

    @pytest.mark.parametrize("text", SAMPLE_INPUTS)
    def test_idempotent(self, text):
        assert resolve(text, NOW, detector=no_dates) == resolve(text, NOW, detector=no_dates)

    @pytest.mark.parametrize("text", SAMPLE_INPUTS)
    def test_all_in_future_unless_never(self, text):
        for suggestion in resolve(text, NOW, detector=no_dates):
            assert suggestion.is_never_deliver or suggestion.timestamp > NOW

    @pytest.mark.parametrize("text", SAMPLE_INPUTS)
    def test_unique_labels_and_bound(self, text):
        results = resolve(text, NOW, detector=no_dates)
        assert len(results) <= 6
        assert len(set(labels(results))) == len(results)

    def test_truncates_to_six(self):
        # "t" prefixes seven keyword entries plus Tuesday
        results = resolve("t", NOW, detector=no_dates)
        assert len(results) == 6

    def test_custom_cap(self):
        assert len(resolve("t", NOW, detector=no_dates, max_results=2)) == 2

    def test_cap_cannot_be_raised(self):
        assert len(resolve("t", NOW, detector=no_dates, max_results=10)) == 6
        assert len(RuleBasedExtractor(detector=no_dates, max_results=10).resolve("t", NOW)) == 6

    @pytest.mark.parametrize("text", ["6", "t", "935", "next quarter", "friday", "3 months"])
    def test_calendar_end_yields_only_valid_results(self, text):
        end = datetime(9999, 12, 30, 23, 0)
        for suggestion in resolve(text, end, detector=no_dates):
            assert suggestion.is_never_deliver or suggestion.timestamp > end

    def test_idempotent_for_empty_input(self):
        assert resolve("", NOW) == resolve("", NOW)


class TestResolveExamples:
    """Concrete resolutions."""

    def test_ambiguous_number_orders_am_first(self):
        results = resolve("935", NOW, detector=no_dates)
        assert labels(results)[:2] == ["today at 9:35 am", "today at 9:35 pm"]
        assert results[0].timestamp.date() == results[1].timestamp.date()
        assert results[0].timestamp < results[1].timestamp

    def test_typo_meridiem(self):
        results = resolve("9om", NOW, detector=no_dates)
        assert results[0].label == "today at 9 pm"
        assert results[0].timestamp == datetime(2024, 1, 1, 21, 0)

    def test_composite_order_independent(self):
        a = resolve("5pm tomorrow", NOW, detector=no_dates)
        b = resolve("tomorrow 5pm", NOW, detector=no_dates)
        assert a[0].timestamp == b[0].timestamp == datetime(2024, 1, 2, 17, 0)
        assert a[0].label == "tomorrow at 5 pm"

    def test_three_days(self):
        for now in (NOW, datetime(2024, 2, 27, 23, 15), datetime(2024, 12, 30, 6, 5)):
            results = resolve("3 days", now, detector=no_dates)
            assert labels(results) == ["in 3 days"]
            assert results[0].timestamp == now + timedelta(days=3)

    def test_next_monday_on_a_monday(self):
        results = resolve("next monday", NOW, detector=no_dates)
        monday = next(s for s in results if s.label == "next Monday")
        assert monday.timestamp == datetime(2024, 1, 8, 9, 0)

    def test_weekday_spellings_agree(self):
        stamps = set()
        for text in ("fri", "friday", "fridey"):
            results = resolve(text, NOW, detector=no_dates)
            friday = next(s for s in results if s.label == "Friday")
            stamps.add(friday.timestamp)
        assert stamps == {datetime(2024, 1, 5, 9, 0)}

    def test_whitespace_and_case(self):
        assert resolve("  NOON ", NOW, detector=no_dates)[0].label == "noon"

    def test_nothing_matches(self):
        assert resolve("qqq zzz", NOW, detector=no_dates) == []


class TestDefaultSuggestions:
    """Test the empty-input menu."""

    def test_shape(self):
        results = resolve("", NOW)
        assert labels(results) == [
            "In an hour", "In 3 hours", "Tonight", "Tomorrow",
            "This Weekend", "Someday", "Never",
        ]

    def test_blank_input_same_as_empty(self):
        assert labels(resolve("   ", NOW)) == labels(resolve("", NOW))

    def test_never_last(self):
        never = resolve("", NOW)[-1]
        assert never.is_never_deliver is True
        assert never.timestamp == datetime.max
        assert never.formatted_display == SHRUG

    def test_fixed_entries(self):
        results = {s.label: s.timestamp for s in default_suggestions(NOW)}
        assert results["In an hour"] == datetime(2024, 1, 1, 9, 0)
        assert results["In 3 hours"] == datetime(2024, 1, 1, 11, 0)
        assert results["Tonight"] == datetime(2024, 1, 1, 21, 0)
        assert results["Tomorrow"] == datetime(2024, 1, 2, 9, 0)
        assert results["This Weekend"] == datetime(2024, 1, 6, 12, 0)

    def test_tonight_rolls_after_nine(self):
        late = datetime(2024, 1, 1, 22, 30)
        results = {s.label: s.timestamp for s in default_suggestions(late)}
        assert results["Tonight"] == datetime(2024, 1, 2, 21, 0)

    def test_someday_window(self):
        for seed in range(50):
            someday = default_suggestions(NOW, random.Random(seed))[5]
            days_out = (someday.timestamp.date() - NOW.date()).days
            assert 4 <= days_out <= 30
            assert someday.timestamp.hour in SOMEDAY_HOURS
            assert someday.timestamp.minute in SOMEDAY_MINUTES
            assert someday.formatted_display == SHRUG


class TestDateDetectorFallback:
    """Test the last-resort detector."""

    def test_used_when_rules_find_nothing(self):
        detector = MagicMock(return_value=[
            ("zzz", NOW + timedelta(days=1)),
            ("qqq", NOW - timedelta(hours=1)),
        ])
        results = resolve("Qqq Zzz", NOW, detector=detector)
        assert labels(results) == ["Qqq Zzz"]
        assert results[0].timestamp == NOW + timedelta(days=1)
        detector.assert_called_once_with("Qqq Zzz", NOW)

    def test_not_used_when_rules_match(self):
        detector = MagicMock(return_value=[("x", NOW + timedelta(days=1))])
        resolve("noon", NOW, detector=detector)
        detector.assert_not_called()

    def test_detector_failure_is_no_match(self):
        detector = MagicMock(side_effect=RuntimeError("boom"))
        assert detect_dates("qqq", NOW, detector) == []

    def test_blank_text(self):
        detector = MagicMock()
        assert detect_dates("  ", NOW, detector) == []
        detector.assert_not_called()

    def test_dateparser_calendar_phrase(self):
        results = resolve("aug 7", NOW)
        assert len(results) == 1
        assert results[0].label == "aug 7"
        assert results[0].timestamp.date() == datetime(2024, 8, 7).date()


class TestTimezoneAwareNow:
    """Test resolution with a pytz-aware reference instant."""

    def test_composite_across_dst_change(self):
        eastern = pytz.timezone("America/New_York")
        # Saturday before the March 10 switch to daylight time
        now = eastern.localize(datetime(2024, 3, 9, 12, 0))
        results = resolve("tomorrow 9am", now, detector=no_dates)
        assert results[0].timestamp.replace(tzinfo=None) == datetime(2024, 3, 10, 9, 0)
        assert results[0].timestamp.utcoffset() == timedelta(hours=-4)

    def test_never_comparable_with_aware_now(self):
        eastern = pytz.timezone("America/New_York")
        now = eastern.localize(datetime(2024, 1, 1, 8, 0))
        never = resolve("", now)[-1]
        assert never.timestamp > now


class TestFormatting:
    """Test labels and display strings."""

    def test_time_label(self):
        assert format_time_label(0, 0) == "12 am"
        assert format_time_label(12, 5) == "12:05 pm"
        assert format_time_label(21, 35) == "9:35 pm"

    def test_display_same_day(self):
        assert format_display(datetime(2024, 1, 1, 21, 35), NOW) == "9:35 PM"

    def test_display_this_week(self):
        assert format_display(datetime(2024, 1, 2, 9, 0), NOW) == "TUE, 9:00 AM"

    def test_display_further_out(self):
        assert format_display(datetime(2024, 1, 8, 9, 0), NOW) == "MON, JAN 08, 9:00 AM"

    def test_suggestion_key(self):
        plain = TimeSuggestion.at("noon", datetime(2024, 1, 1, 12, 0), NOW)
        assert plain.key == "noon"
        assert TimeSuggestion.at("x", NOW, NOW, is_ai_generated=True).key == "x-ai"
        assert TimeSuggestion.never("never", NOW).key == "never-never"
