# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from typing import List, Optional, Sequence

import aiohttp

from metacritic_finder.config import ScrapeOptions
from metacritic_finder.core.rate_limiter import RateLimiter
from metacritic_finder.models.game import ProductRecord, SearchCandidate
from metacritic_finder.scraping.page_extractor import PageExtractor
from metacritic_finder.search.heuristic_finder import HeuristicFinder
from metacritic_finder.search.structured_finder import StructuredFinder

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class GameResolver:
    """Composes the finders and the page extractor into the public lookups."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        options: Optional[ScrapeOptions] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.options = options or ScrapeOptions()
        self.session = session
        self.rate_limiter = rate_limiter

        # Every component shares the injected session and configuration
        self.structured_finder = StructuredFinder(session, self.options, rate_limiter)
        self.heuristic_finder = HeuristicFinder(session, self.options, rate_limiter)
        self.page_extractor = PageExtractor(session, self.options, rate_limiter)

    async def find_candidate(self, query: str) -> Optional[SearchCandidate]:
        """Structured lookup first, HTML scan only when it finds nothing."""
        candidate = await self.structured_finder.search(query)
        if candidate is not None:
            return candidate

        logger.info(f"[{self.__class__.__name__}] Structured search found nothing for '{query}'. Falling back to HTML search.")
        return await self.heuristic_finder.search(query)

    async def resolve(self, query: str) -> Optional[ProductRecord]:
        """
        Lightweight best-match lookup.

        The record only carries what the search result already knew; the
        game page itself is not fetched.
        """
        query = (query or '').strip()
        if not query:
            logger.debug(f"[{self.__class__.__name__}] Empty query, nothing to resolve.")
            return None

        candidate = await self.find_candidate(query)
        if candidate is None:
            logger.info(f"[{self.__class__.__name__}] No Metacritic page found for '{query}'.")
            return None
        return ProductRecord.from_candidate(candidate)

    async def extract(self, url: str) -> ProductRecord:
        return await self.page_extractor.extract(url)

    async def resolve_and_extract(self, query: str) -> Optional[ProductRecord]:
        """Resolves the query and then extracts the full record from the matched page."""
        record = await self.resolve(query)
        if record is None:
            return None
        return await self.page_extractor.extract(record.url)

    async def resolve_many(self, queries: Sequence[str], extract: bool = False) -> List[Optional[ProductRecord]]:
        """
        Resolves independent queries with at most `options.concurrency` in flight.

        Results come back in input order. A FetchError from one extraction
        propagates to the caller once the remaining lookups are cancelled.
        """
        semaphore = asyncio.Semaphore(self.options.concurrency)

        async def run(query: str) -> Optional[ProductRecord]:
            async with semaphore:
                if extract:
                    return await self.resolve_and_extract(query)
                return await self.resolve(query)

        logger.info(f"[{self.__class__.__name__}] Resolving {len(queries)} queries with concurrency {self.options.concurrency}")
        tasks = [asyncio.ensure_future(run(query)) for query in queries]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Cancelling {len(pending)} unfinished lookup(s) after a failure.")
                await asyncio.gather(*pending, return_exceptions=True)

    @classmethod
    def for_batch(cls, session: aiohttp.ClientSession, options: Optional[ScrapeOptions] = None) -> "GameResolver":
        """A resolver whose requests share one per-origin rate limiter."""
        options = options or ScrapeOptions()
        return cls(session, options, RateLimiter(options.delay_between_requests_ms))


# ===== PUBLIC ENTRY POINTS =====
async def resolve(query: str, options: Optional[ScrapeOptions] = None) -> Optional[ProductRecord]:
    async with aiohttp.ClientSession() as session:
        return await GameResolver(session, options).resolve(query)


async def resolve_and_extract(query: str, options: Optional[ScrapeOptions] = None) -> Optional[ProductRecord]:
    async with aiohttp.ClientSession() as session:
        return await GameResolver(session, options).resolve_and_extract(query)


async def extract(url: str, options: Optional[ScrapeOptions] = None) -> ProductRecord:
    async with aiohttp.ClientSession() as session:
        return await GameResolver(session, options).extract(url)
