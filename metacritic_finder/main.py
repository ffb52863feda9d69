# ===== IMPORTS & DEPENDENCIES =====
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import aiohttp

# --- Configuration ---
from metacritic_finder.config import (
    DEFAULT_CONCURRENCY, DEFAULT_DELAY_BETWEEN_REQUESTS_MS, DEFAULT_MAX_CANDIDATES,
    DEFAULT_TIMEOUT_MS, LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, ScrapeOptions
)

# --- Core Components ---
from metacritic_finder.core.resolver import GameResolver

# --- Utility Functions ---
from metacritic_finder.utils.durations import parse_duration_ms

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )


def _duration(value: str) -> int:
    parsed = parse_duration_ms(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid duration: '{value}' (try 500ms, 15s, 2m)")
    return parsed


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")
    return parsed


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metacritic-finder",
        description="Find a game on Metacritic and print its ratings as JSON.",
    )
    parser.add_argument("query", nargs="+", help="Game title to look up, e.g. \"GTA V\".")
    parser.add_argument("--limit", type=_positive_int, default=DEFAULT_MAX_CANDIDATES,
                        help="Maximum candidates per query (reserved; at most one is returned). Default: %(default)s.")
    parser.add_argument("--concurrency", type=_positive_int, default=DEFAULT_CONCURRENCY,
                        help="Queries resolved in parallel. Default: %(default)s.")
    parser.add_argument("--timeout", type=_duration, default=DEFAULT_TIMEOUT_MS,
                        help="Per-request timeout, e.g. 15s or 500ms. Default: %(default)sms.")
    parser.add_argument("--delay", type=_duration, default=DEFAULT_DELAY_BETWEEN_REQUESTS_MS,
                        help="Minimum delay between requests to the same host. Default: %(default)sms.")
    parser.add_argument("--extract", action="store_true",
                        help="Also fetch each matched game page for user score, counts and reviews.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


# ===== INITIALIZATION & STARTUP =====
async def run(queries: List[str], options: ScrapeOptions, extract: bool) -> List[dict]:
    """Resolves every query and returns the JSON-ready records that were found."""
    async with aiohttp.ClientSession() as session:
        resolver = GameResolver.for_batch(session, options)
        records = await resolver.resolve_many(queries, extract=extract)
    return [record.to_dict() for record in records if record is not None]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.verbose)

    query = " ".join(args.query)

    try:
        options = ScrapeOptions(
            timeout_ms=args.timeout,
            concurrency=args.concurrency,
            delay_between_requests_ms=args.delay,
            max_candidates=args.limit,
        )
        results = asyncio.run(run([query], options, args.extract))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        return 1
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(results, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
