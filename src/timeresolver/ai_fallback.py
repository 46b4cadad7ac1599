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
AI Fallback

Asks a language model for one best-effort reading of phrases the rule
parsers don't understand ("after lunch on the 3rd", "when the sprint ends").
Used only when the deterministic resolver returns nothing.

The model is an optional capability: when it is missing, erroring, or the
request is cancelled, the result is simply no suggestion.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from anthropic import AsyncAnthropic

from .config import DEFAULT_AI_MODEL, ResolverConfig
from .dates import localize_like
from .models import CancellationToken, TimeSuggestion

logger = logging.getLogger("timeresolver.ai_fallback")

DATE_EXTRACTION_PROMPT = """
You are a date/time extraction assistant. Given natural language describing when something should be scheduled, extract the precise date and time.

Right now it is {now}.

Calculate actual dates for relative terms like "next Tuesday", "in 3 days", "after lunch", "end of the week", etc.
If no specific time is mentioned, default to hour=9 minute=0.

## Output Format
Return a JSON object with exactly these keys:
- `label`: A short human-readable label for this date, e.g. "tomorrow morning", "next Tuesday at 3 pm"
- `year`: Year as four digits, e.g. 2026
- `month`: Month 1-12
- `day`: Day of month 1-31
- `hour`: Hour in 24-hour format 0-23
- `minute`: Minute 0-59

## Example

INPUT: after lunch on friday
OUTPUT:
```json
{{"label": "Friday after lunch", "year": 2026, "month": 3, "day": 6, "hour": 13, "minute": 0}}
```
"""

FIELD_RANGES = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
}


@dataclass
class ParsedDateTime:
    """Structured date/time fields returned by the extraction capability."""

    label: str
    year: int
    month: int
    day: int
    hour: int  # 0-23
    minute: int

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedDateTime":
        """
        Build from decoded JSON, checking every field's range.

        Raises:
            KeyError: if a field is missing
            ValueError: if a field has the wrong type or is out of range
        """
        values = {}
        for field_name, (low, high) in FIELD_RANGES.items():
            value = data[field_name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{field_name} must be an integer, got {value!r}")
            if not low <= value <= high:
                raise ValueError(f"{field_name} out of range: {value}")
            values[field_name] = value

        label = str(data["label"]).strip()
        if not label:
            raise ValueError("label is empty")

        return cls(label=label, **values)


class StructuredDateCapability(Protocol):
    """Turns an instruction plus the current instant into date/time fields."""

    @property
    def is_available(self) -> bool: ...

    async def extract(self, instruction: str, now: datetime) -> ParsedDateTime: ...


def _format_now(now: datetime) -> str:
    hour = now.hour % 12 or 12
    period = "PM" if now.hour >= 12 else "AM"
    return f"{now.strftime('%A, %B')} {now.day}, {now.year} at {hour}:{now.minute:02d} {period}"


def parse_extraction_response(response_text: str) -> ParsedDateTime:
    """
    Parse Claude's JSON reply into ParsedDateTime.

    Raises:
        json.JSONDecodeError, KeyError, ValueError: if the reply is unusable
    """
    text = response_text.strip()

    # Extract JSON from markdown code blocks (handles ```json or ``` with content before/after)
    code_block_match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
    if code_block_match:
        text = code_block_match.group(1)
    else:
        json_match = re.search(r"\{.*\}", text, re.DOTALL)
        if json_match:
            text = json_match.group(0)

    return ParsedDateTime.from_dict(json.loads(text))


class ClaudeDateCapability:
    """Structured date extraction backed by Claude."""

    def __init__(
        self,
        client: Optional[AsyncAnthropic],
        model: str = DEFAULT_AI_MODEL,
        max_tokens: int = 256,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_env(cls, config: Optional[ResolverConfig] = None) -> "ClaudeDateCapability":
        """Build from ANTHROPIC_API_KEY; unavailable when the key is unset or AI is disabled."""
        config = config or ResolverConfig.from_env()
        api_key = os.getenv("ANTHROPIC_API_KEY")
        client = AsyncAnthropic(api_key=api_key) if api_key and config.ai_enabled else None
        return cls(client, model=config.ai_model, max_tokens=config.ai_max_tokens)

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def extract(self, instruction: str, now: datetime) -> ParsedDateTime:
        if self.client is None:
            raise RuntimeError("Claude client not configured")

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=DATE_EXTRACTION_PROMPT.format(now=_format_now(now)),
            messages=[{"role": "user", "content": instruction}],
        )

        return parse_extraction_response(response.content[0].text)


class AIFallbackAdapter:
    """
    Wraps a StructuredDateCapability as a single-suggestion resolver.

    No retries. Every failure, including an unavailable capability, comes
    back as None.
    """

    def __init__(self, capability: StructuredDateCapability):
        self.capability = capability

    @property
    def is_available(self) -> bool:
        try:
            return bool(self.capability.is_available)
        except Exception as e:
            logger.warning(f"AI availability check failed: {e}")
            return False

    async def suggest(
        self,
        text: str,
        now: datetime,
        token: Optional[CancellationToken] = None,
    ) -> Optional[TimeSuggestion]:
        """
        Ask the capability for one suggestion.

        Args:
            text: Raw user input
            now: Reference instant; results at or before it are rejected
            token: Checked before and after the request

        Returns:
            An AI-generated TimeSuggestion, or None
        """
        if not text.strip():
            return None
        if token is not None and token.cancelled:
            return None
        if not self.is_available:
            logger.debug("AI fallback unavailable, skipping")
            return None

        try:
            parsed = await self.capability.extract(text.strip(), now)
        except Exception as e:
            logger.warning(f"AI date extraction failed: {e}")
            logger.debug("AI extraction error detail", exc_info=True)
            return None

        if token is not None and token.cancelled:
            return None

        try:
            naive = datetime(parsed.year, parsed.month, parsed.day, parsed.hour, parsed.minute)
        except ValueError as e:
            logger.warning(f"AI returned an invalid date: {e}")
            return None

        timestamp = localize_like(now, naive)
        if timestamp <= now:
            logger.debug(f"AI suggestion '{parsed.label}' is not in the future, dropping")
            return None

        return TimeSuggestion.at(parsed.label, timestamp, now, is_ai_generated=True)


async def resolve_with_ai(
    text: str,
    now: datetime,
    capability: StructuredDateCapability,
    token: Optional[CancellationToken] = None,
) -> Optional[TimeSuggestion]:
    """One-shot AI resolution of text."""
    return await AIFallbackAdapter(capability).suggest(text, now, token)
