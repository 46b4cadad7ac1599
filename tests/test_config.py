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

"""Tests for resolver configuration."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from timeresolver.config import DEFAULT_AI_MODEL, ConfigError, ResolverConfig


class TestResolverConfig:
    """Test resolver configuration."""

    def test_default_config(self):
        config = ResolverConfig()
        assert config.max_results == 6
        assert config.debounce_ms == 500
        assert config.debounce_seconds == 0.5
        assert config.ai_enabled is True
        assert config.ai_model == DEFAULT_AI_MODEL

    def test_config_from_env_default(self):
        with patch.dict("os.environ", {}, clear=True):
            config = ResolverConfig.from_env()
            assert config.max_results == 6
            assert config.debounce_ms == 500
            assert config.ai_enabled is True
            assert config.ai_max_tokens == 256

    def test_config_from_env_disabled(self):
        with patch.dict("os.environ", {"RESOLVER_AI_ENABLED": "false"}):
            config = ResolverConfig.from_env()
            assert config.ai_enabled is False

    def test_config_from_env_custom_values(self):
        with patch.dict("os.environ", {
            "RESOLVER_MAX_RESULTS": "4",
            "RESOLVER_DEBOUNCE_MS": "250",
            "RESOLVER_AI_MODEL": "claude-haiku-4-5",
            "RESOLVER_AI_MAX_TOKENS": "128",
        }):
            config = ResolverConfig.from_env()
            assert config.max_results == 4
            assert config.debounce_seconds == 0.25
            assert config.ai_model == "claude-haiku-4-5"
            assert config.ai_max_tokens == 128

    @pytest.mark.parametrize("value", ["six", "-1", "", "7", "10"])
    def test_config_from_env_invalid(self, value):
        with patch.dict("os.environ", {"RESOLVER_MAX_RESULTS": value}):
            with pytest.raises(ConfigError):
                ResolverConfig.from_env()

    def test_config_from_env_lower_cap(self):
        with patch.dict("os.environ", {"RESOLVER_MAX_RESULTS": "2"}):
            config = ResolverConfig.from_env()
            assert config.max_results == 2

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
