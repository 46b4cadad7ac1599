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
Suggestion Session

Drives one text input field: deterministic suggestions on every edit, and
a debounced, cancellable AI fallback when the rules find nothing.

Each edit cancels the previous fallback. A cancelled fallback never writes
to the session, so a slow model reply can't overwrite newer input.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from .config import ResolverConfig
from .extractors import DateExtractor, RuleBasedExtractor
from .models import CancellationToken, TimeSuggestion

logger = logging.getLogger("timeresolver.session")


class SuggestionSession:
    """Suggestion state for a single input field."""

    def __init__(
        self,
        rules: Optional[RuleBasedExtractor] = None,
        fallback: Optional[DateExtractor] = None,
        debounce: float = 0.5,
        clock: Callable[[], datetime] = datetime.now,
        on_change: Optional[Callable[["SuggestionSession"], None]] = None,
    ):
        """
        Args:
            rules: Deterministic resolver
            fallback: Extractor consulted when the rules find nothing
            debounce: Seconds to wait before the fallback fires
            clock: Source of "now" when update() isn't given one
            on_change: Called after a fallback result is published
        """
        self.rules = rules or RuleBasedExtractor()
        self.fallback = fallback
        self.debounce = debounce
        self.clock = clock
        self.on_change = on_change

        self.text = ""
        self.suggestions: list[TimeSuggestion] = []
        self.ai_suggestion: Optional[TimeSuggestion] = None
        self.is_loading = False

        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def from_config(
        cls,
        config: ResolverConfig,
        fallback: Optional[DateExtractor] = None,
        **kwargs,
    ) -> "SuggestionSession":
        return cls(
            rules=RuleBasedExtractor.from_config(config),
            fallback=fallback if config.ai_enabled else None,
            debounce=config.debounce_seconds,
            **kwargs,
        )

    @property
    def display_suggestions(self) -> list[TimeSuggestion]:
        """Rule suggestions if any, else the AI suggestion if one arrived."""
        if self.suggestions:
            return self.suggestions
        if self.ai_suggestion is not None:
            return [self.ai_suggestion]
        return []

    def update(self, text: str, now: Optional[datetime] = None) -> list[TimeSuggestion]:
        """
        Handle an edit to the input field.

        Returns:
            The deterministic suggestions for text
        """
        now = now or self.clock()
        self.text = text
        self.suggestions = self.rules.resolve(text, now)

        self._cancel_pending()
        self.ai_suggestion = None
        self.is_loading = False

        if not self.suggestions and text.strip() and self.fallback is not None:
            self._start_fallback(text, now)

        return self.suggestions

    def _start_fallback(self, text: str, now: datetime) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, AI fallback skipped")
            return

        token = CancellationToken()
        self._token = token
        self.is_loading = True
        self._task = loop.create_task(self._run_fallback(text, now, token))

    async def _run_fallback(self, text: str, now: datetime, token: CancellationToken) -> None:
        await asyncio.sleep(self.debounce)
        if token.cancelled:
            return

        try:
            results = await self.fallback.extract(text, now, token)
        except Exception as e:
            logger.warning(f"Fallback extractor failed: {e}", exc_info=True)
            results = []
        if token.cancelled:
            return

        self.ai_suggestion = results[0] if results else None
        self.is_loading = False
        logger.info(f"AI fallback for '{text[:50]}' returned {len(results)} suggestion(s)")

        if self.on_change is not None:
            try:
                self.on_change(self)
            except Exception as e:
                logger.warning(f"on_change callback failed: {e}", exc_info=True)

    def _cancel_pending(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._task is not None:
            if not self._task.done():
                self._task.cancel()
            self._task = None

    async def wait(self) -> None:
        """Wait for the current fallback (if any) to finish or be cancelled."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    def close(self) -> None:
        """Cancel any outstanding fallback."""
        self._cancel_pending()
        self.is_loading = False
