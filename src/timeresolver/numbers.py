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

"""Spelled-out and digit number parsing."""

from typing import Optional

NUMBER_WORDS = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19, "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
}


def is_digits(word: str) -> bool:
    return word.isascii() and word.isdigit()


def extract_number(word: str) -> Optional[int]:
    """Integer value of a digit string or a number word, else None."""
    if is_digits(word):
        return int(word)
    return NUMBER_WORDS.get(word)


def parse_compound_number(words: list[str]) -> Optional[int]:
    """
    Resolve one or two words into a single number.

    Two words only combine as tens + ones: "twenty five" -> 25.
    """
    if not words:
        return None
    if len(words) == 1:
        return extract_number(words[0])

    if len(words) == 2:
        tens = extract_number(words[0])
        ones = extract_number(words[1])
        if tens is not None and ones is not None:
            if tens >= 20 and tens % 10 == 0 and 1 <= ones <= 9:
                return tens + ones

    return None


def split_hour_minute(word: str) -> tuple[Optional[int], int]:
    """Split "9:35" into (9, 35). Missing or unreadable minutes read as 0."""
    parts = [p for p in word.split(":") if p]
    if not parts:
        return None, 0
    hour = int(parts[0]) if is_digits(parts[0]) else None
    minute = int(parts[1]) if len(parts) > 1 and is_digits(parts[1]) else 0
    return hour, minute
