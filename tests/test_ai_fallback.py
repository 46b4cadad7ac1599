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

"""Tests for the AI fallback adapter and the Claude-backed capability."""

import json
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from timeresolver.ai_fallback import (
    AIFallbackAdapter,
    ClaudeDateCapability,
    ParsedDateTime,
    parse_extraction_response,
    resolve_with_ai,
)
from timeresolver.config import ResolverConfig
from timeresolver.models import CancellationToken

# Monday
NOW = datetime(2024, 1, 1, 8, 0)


def make_capability(result=None, available=True, error=None):
    capability = MagicMock()
    capability.is_available = available
    if error is not None:
        capability.extract = AsyncMock(side_effect=error)
    else:
        capability.extract = AsyncMock(return_value=result)
    return capability


def parsed(label="after lunch", year=2024, month=1, day=3, hour=13, minute=0):
    return ParsedDateTime(label=label, year=year, month=month, day=day, hour=hour, minute=minute)


class TestAIFallbackAdapter:
    """Test the single-suggestion adapter."""

    @pytest.mark.asyncio
    async def test_future_result(self):
        capability = make_capability(parsed())
        suggestion = await AIFallbackAdapter(capability).suggest("after lunch wednesday", NOW)

        assert suggestion is not None
        assert suggestion.label == "after lunch"
        assert suggestion.timestamp == datetime(2024, 1, 3, 13, 0)
        assert suggestion.is_ai_generated is True
        assert suggestion.is_never_deliver is False
        assert suggestion.key == "after lunch-ai"
        capability.extract.assert_awaited_once_with("after lunch wednesday", NOW)

    @pytest.mark.asyncio
    async def test_past_result_dropped(self):
        capability = make_capability(parsed(year=2023, month=12, day=31))
        assert await AIFallbackAdapter(capability).suggest("yesterday", NOW) is None

    @pytest.mark.asyncio
    async def test_result_equal_to_now_dropped(self):
        capability = make_capability(parsed(day=1, hour=8, minute=0))
        assert await AIFallbackAdapter(capability).suggest("right now", NOW) is None

    @pytest.mark.asyncio
    async def test_capability_error_is_none(self):
        capability = make_capability(error=RuntimeError("model unavailable"))
        assert await AIFallbackAdapter(capability).suggest("whenever", NOW) is None

    @pytest.mark.asyncio
    async def test_unavailable_skips_request(self):
        capability = make_capability(parsed(), available=False)
        assert await AIFallbackAdapter(capability).suggest("whenever", NOW) is None
        capability.extract.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_text_skips_request(self):
        capability = make_capability(parsed())
        assert await AIFallbackAdapter(capability).suggest("   ", NOW) is None
        capability.extract.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_before_request(self):
        capability = make_capability(parsed())
        token = CancellationToken()
        token.cancel()

        assert await AIFallbackAdapter(capability).suggest("whenever", NOW, token) is None
        capability.extract.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_during_request(self):
        token = CancellationToken()

        async def extract(instruction, now):
            token.cancel()
            return parsed()

        capability = MagicMock()
        capability.is_available = True
        capability.extract = extract

        assert await AIFallbackAdapter(capability).suggest("whenever", NOW, token) is None

    @pytest.mark.asyncio
    async def test_impossible_date_is_none(self):
        capability = make_capability(parsed(month=2, day=30))
        assert await AIFallbackAdapter(capability).suggest("feb 30", NOW) is None

    @pytest.mark.asyncio
    async def test_resolve_with_ai(self):
        capability = make_capability(parsed(label="sprint end", day=12, hour=17))
        suggestion = await resolve_with_ai("when the sprint ends", NOW, capability)
        assert suggestion.label == "sprint end"
        assert suggestion.formatted_display == "FRI, JAN 12, 5:00 PM"


class TestParseExtractionResponse:
    """Test decoding of the model's reply."""

    def test_plain_json(self):
        result = parse_extraction_response(
            '{"label": "Friday", "year": 2024, "month": 1, "day": 5, "hour": 9, "minute": 0}'
        )
        assert result == ParsedDateTime("Friday", 2024, 1, 5, 9, 0)

    def test_code_block_with_prose(self):
        reply = (
            "Here you go:\n```json\n"
            '{"label": "tomorrow", "year": 2024, "month": 1, "day": 2, "hour": 9, "minute": 0}'
            "\n```\nLet me know if that works."
        )
        assert parse_extraction_response(reply).day == 2

    def test_not_json(self):
        with pytest.raises(json.JSONDecodeError):
            parse_extraction_response("I can't tell when that is.")

    def test_missing_field(self):
        with pytest.raises(KeyError):
            parse_extraction_response('{"label": "x", "year": 2024, "month": 1, "day": 2, "hour": 9}')

    @pytest.mark.parametrize("field,value", [
        ("month", 13),
        ("hour", 24),
        ("minute", -1),
        ("day", "5"),
        ("hour", True),
    ])
    def test_invalid_field(self, field, value):
        data = {"label": "x", "year": 2024, "month": 1, "day": 2, "hour": 9, "minute": 0}
        data[field] = value
        with pytest.raises(ValueError):
            ParsedDateTime.from_dict(data)

    def test_empty_label(self):
        with pytest.raises(ValueError):
            ParsedDateTime.from_dict(
                {"label": "  ", "year": 2024, "month": 1, "day": 2, "hour": 9, "minute": 0}
            )


class TestClaudeDateCapability:
    """Test the Claude-backed capability with a mocked client."""

    def _client(self, reply_text):
        client = MagicMock()
        response = MagicMock()
        response.content = [MagicMock(text=reply_text)]
        client.messages.create = AsyncMock(return_value=response)
        return client

    @pytest.mark.asyncio
    async def test_extract_sends_current_time(self):
        client = self._client(
            '{"label": "Friday", "year": 2024, "month": 1, "day": 5, "hour": 9, "minute": 0}'
        )
        capability = ClaudeDateCapability(client, model="test-model", max_tokens=100)

        result = await capability.extract("end of the week", NOW)

        assert result.day == 5
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 100
        assert "Monday, January 1, 2024 at 8:00 AM" in kwargs["system"]
        assert kwargs["messages"] == [{"role": "user", "content": "end of the week"}]

    @pytest.mark.asyncio
    async def test_unusable_reply_becomes_no_suggestion(self):
        capability = ClaudeDateCapability(self._client("no idea"))
        assert await AIFallbackAdapter(capability).suggest("whenever", NOW) is None

    def test_unavailable_without_client(self):
        assert ClaudeDateCapability(None).is_available is False

    def test_from_env_with_key(self):
        with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "sk-test"}, clear=True):
            with patch("timeresolver.ai_fallback.AsyncAnthropic") as mock_client:
                capability = ClaudeDateCapability.from_env()

        assert capability.is_available is True
        mock_client.assert_called_once_with(api_key="sk-test")

    def test_from_env_without_key(self):
        with patch.dict("os.environ", {}, clear=True):
            capability = ClaudeDateCapability.from_env()
        assert capability.is_available is False

    def test_from_env_ai_disabled(self):
        with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "sk-test"}, clear=True):
            capability = ClaudeDateCapability.from_env(ResolverConfig(ai_enabled=False))
        assert capability.is_available is False
