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
Lexical Normalizer

Lowercases and tokenizes raw input before the rule parsers see it.
"""

CLOCK_FILLERS = frozenset({"o'clock", "oclock", "clock"})
WORD_FILLERS = frozenset({"in", "the", "o"})


def normalize(text: str) -> str:
    """Lowercase, whitespace-trimmed form of the input."""
    return text.strip().lower()


def split_words(text: str) -> list[str]:
    """Whitespace split of the normalized input."""
    return normalize(text).split()


def tokenize(text: str) -> list[str]:
    """Words with hyphenated compounds split ("twenty-five" -> "twenty", "five")."""
    tokens = []
    for word in split_words(text):
        if "-" in word:
            tokens.extend(part for part in word.split("-") if part)
        else:
            tokens.append(word)
    return tokens


def strip_leading_at(tokens: list[str]) -> list[str]:
    if tokens and tokens[0] == "at":
        return tokens[1:]
    return tokens


def strip_clock_fillers(tokens: list[str]) -> list[str]:
    return [t for t in tokens if t not in CLOCK_FILLERS]


def strip_word_fillers(tokens: list[str]) -> list[str]:
    return [t for t in tokens if t not in WORD_FILLERS]
