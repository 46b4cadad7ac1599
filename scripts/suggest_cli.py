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
Suggestion CLI

Command-line tool for trying phrases against the resolver.

Usage:
    # Suggestions for a phrase, relative to the current time
    python scripts/suggest_cli.py "5pm tomorrow"

    # Pin the reference time
    python scripts/suggest_cli.py 935 --now "2024-01-01 08:00"

    # Default menu (empty input)
    python scripts/suggest_cli.py ""

    # Ask Claude when no rule matches (needs ANTHROPIC_API_KEY)
    python scripts/suggest_cli.py "after the standup on thursday" --ai
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from timeresolver import ClaudeDateCapability, ResolverConfig, RuleBasedExtractor, resolve_with_ai

load_dotenv()

logger = logging.getLogger(__name__)


def parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid --now value: '{value}' (use ISO format)")


def print_suggestions(suggestions) -> None:
    if not suggestions:
        print("(no suggestions)")
        return
    width = max(len(s.label) for s in suggestions)
    for s in suggestions:
        flags = []
        if s.is_ai_generated:
            flags.append("ai")
        if s.is_never_deliver:
            flags.append("never")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(f"  {s.label:<{width}}  {s.formatted_display}{suffix}")


async def run(text: str, now: datetime, use_ai: bool, config: ResolverConfig) -> int:
    suggestions = RuleBasedExtractor.from_config(config).resolve(text, now)
    print(f"Now: {now:%Y-%m-%d %H:%M} ({now:%A})")
    print_suggestions(suggestions)

    if suggestions or not use_ai or not text.strip():
        return 0

    capability = ClaudeDateCapability.from_env(config)
    if not capability.is_available:
        logger.error("AI fallback unavailable: set ANTHROPIC_API_KEY and RESOLVER_AI_ENABLED=true")
        return 1

    print("\nAI fallback:")
    suggestion = await resolve_with_ai(text, now, capability)
    print_suggestions([suggestion] if suggestion else [])
    return 0


def main():
    parser = argparse.ArgumentParser(description="Resolve a time phrase into suggestions")
    parser.add_argument("text", help="Phrase to resolve (empty string for the default menu)")
    parser.add_argument(
        "--now",
        type=parse_now,
        default=None,
        help="Reference time in ISO format (default: current local time)",
    )
    parser.add_argument(
        "--ai",
        action="store_true",
        help="Ask Claude when no rule matches",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    config = ResolverConfig.from_env()
    now = args.now or datetime.now()
    sys.exit(asyncio.run(run(args.text, now, args.ai, config)))


if __name__ == "__main__":
    main()
