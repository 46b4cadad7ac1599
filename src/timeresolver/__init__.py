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
Natural-Language Time Resolver

Turns freeform input ("935", "9om", "5pm tomorrow", "3 days", "eod") into
ranked future time suggestions, with an optional AI fallback.
"""

from .aggregator import MAX_RESULTS, default_suggestions, resolve
from .ai_fallback import (
    AIFallbackAdapter,
    ClaudeDateCapability,
    ParsedDateTime,
    StructuredDateCapability,
    resolve_with_ai,
)
from .config import ConfigError, ResolverConfig
from .extractors import AIAssistedExtractor, ChainedExtractor, DateExtractor, RuleBasedExtractor
from .models import CancellationToken, TimeSuggestion
from .session import SuggestionSession

__all__ = [
    "MAX_RESULTS",
    "default_suggestions",
    "resolve",
    "AIFallbackAdapter",
    "ClaudeDateCapability",
    "ParsedDateTime",
    "StructuredDateCapability",
    "resolve_with_ai",
    "ConfigError",
    "ResolverConfig",
    "AIAssistedExtractor",
    "ChainedExtractor",
    "DateExtractor",
    "RuleBasedExtractor",
    "CancellationToken",
    "TimeSuggestion",
    "SuggestionSession",
]
