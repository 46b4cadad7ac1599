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
Resolver Configuration

Tunable parameters for suggestion aggregation and the AI fallback.
Values can be overridden via environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_AI_MODEL = "claude-sonnet-4-5-20250929"

# Hard ceiling on rule-parser results; overrides may only lower it
MAX_RESULTS = 6


class ConfigError(ValueError):
    """Raised when an environment override cannot be parsed."""

    pass


def _env_int(name: str, default: int, maximum: Optional[int] = None) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigError(f"{name} must be at most {maximum}, got {value}")
    return value


@dataclass
class ResolverConfig:
    """Configuration for the resolver and its AI fallback."""

    # Rule-parser result cap (the empty-input default set is never capped)
    max_results: int = MAX_RESULTS

    # Delay before the AI fallback fires, so each keystroke doesn't call it
    debounce_ms: int = 500

    # AI fallback settings
    ai_enabled: bool = True
    ai_model: str = DEFAULT_AI_MODEL
    ai_max_tokens: int = 256

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Create config from environment variables with defaults."""
        return cls(
            max_results=_env_int("RESOLVER_MAX_RESULTS", MAX_RESULTS, maximum=MAX_RESULTS),
            debounce_ms=_env_int("RESOLVER_DEBOUNCE_MS", 500),
            ai_enabled=os.getenv("RESOLVER_AI_ENABLED", "true").lower() == "true",
            ai_model=os.getenv("RESOLVER_AI_MODEL", DEFAULT_AI_MODEL),
            ai_max_tokens=_env_int("RESOLVER_AI_MAX_TOKENS", 256),
        )
