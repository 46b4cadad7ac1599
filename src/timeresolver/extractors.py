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
Date Extractors

One interface over the deterministic resolver and the AI fallback, so
callers can chain them without caring which one answered.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .aggregator import MAX_RESULTS, resolve
from .ai_fallback import AIFallbackAdapter, StructuredDateCapability
from .config import ResolverConfig
from .detector import DateSpanDetector, dateparser_detector
from .models import CancellationToken, TimeSuggestion

logger = logging.getLogger("timeresolver.extractors")


class DateExtractor(ABC):
    """Anything that turns (text, now) into time suggestions."""

    @abstractmethod
    async def extract(
        self,
        text: str,
        now: datetime,
        token: Optional[CancellationToken] = None,
    ) -> list[TimeSuggestion]:
        ...


class RuleBasedExtractor(DateExtractor):
    """The deterministic resolver. Usable synchronously via resolve()."""

    def __init__(
        self,
        detector: DateSpanDetector = dateparser_detector,
        max_results: int = MAX_RESULTS,
    ):
        self.detector = detector
        self.max_results = max_results

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "RuleBasedExtractor":
        return cls(max_results=config.max_results)

    def resolve(self, text: str, now: datetime) -> list[TimeSuggestion]:
        return resolve(text, now, detector=self.detector, max_results=self.max_results)

    async def extract(
        self,
        text: str,
        now: datetime,
        token: Optional[CancellationToken] = None,
    ) -> list[TimeSuggestion]:
        if token is not None and token.cancelled:
            return []
        return self.resolve(text, now)


class AIAssistedExtractor(DateExtractor):
    """The AI fallback, yielding zero or one suggestion."""

    def __init__(self, capability: StructuredDateCapability):
        self.adapter = AIFallbackAdapter(capability)

    @property
    def is_available(self) -> bool:
        return self.adapter.is_available

    async def extract(
        self,
        text: str,
        now: datetime,
        token: Optional[CancellationToken] = None,
    ) -> list[TimeSuggestion]:
        suggestion = await self.adapter.suggest(text, now, token)
        return [suggestion] if suggestion is not None else []


class ChainedExtractor(DateExtractor):
    """Tries each extractor in order and returns the first non-empty answer."""

    def __init__(self, *extractors: DateExtractor):
        if not extractors:
            raise ValueError("ChainedExtractor needs at least one extractor")
        self.extractors = extractors

    async def extract(
        self,
        text: str,
        now: datetime,
        token: Optional[CancellationToken] = None,
    ) -> list[TimeSuggestion]:
        for extractor in self.extractors:
            if token is not None and token.cancelled:
                return []
            results = await extractor.extract(text, now, token)
            if results:
                logger.debug(f"{type(extractor).__name__} answered with {len(results)} suggestion(s)")
                return results
        return []
