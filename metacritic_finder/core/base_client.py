# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import json
import logging
import random
from typing import Any, Dict, Optional

import aiohttp

from metacritic_finder.config import ScrapeOptions
from metacritic_finder.core.errors import HttpStatusError, ParseError, TransportError
from metacritic_finder.core.rate_limiter import RateLimiter

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = (403, 429, 502, 503, 504)

# ===== CORE BUSINESS LOGIC =====
class BaseWebClient:
    """A base class for Metacritic clients providing configured, bounded fetching."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        options: Optional[ScrapeOptions] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self._session = session
        self._options = options or ScrapeOptions()
        self._rate_limiter = rate_limiter
        logger.debug(f"[{self.__class__.__name__}] Initialized with timeout {self._options.timeout_ms}ms and {self._options.max_attempts} attempt(s)")

    @property
    def options(self) -> ScrapeOptions:
        return self._options

    async def _fetch(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        initial_delay: float = 2.0,
    ) -> str:
        """
        GETs a URL and returns the decoded body.

        Raises TransportError when no response arrives within the timeout and
        HttpStatusError on a non-2xx status, once all attempts are used up.
        """
        request_headers = {**self._options.headers, **(headers or {})}
        timeout = aiohttp.ClientTimeout(total=self._options.timeout_seconds)
        max_attempts = self._options.max_attempts

        for attempt in range(max_attempts):
            if self._rate_limiter is not None:
                await self._rate_limiter.wait(url)

            logger.info(f"➡️ [{self.__class__.__name__}] Fetching from network: {url}")
            try:
                async with self._session.request('GET', url, headers=request_headers, timeout=timeout) as response:
                    if not 200 <= response.status < 300:
                        raise HttpStatusError(url, response.status)
                    body = await response.read()
                    return body.decode('utf-8', errors='replace')

            except HttpStatusError as e:
                logger.warning(f"⚠️ [{self.__class__.__name__}] HTTP error on {url} (Attempt {attempt + 1}/{max_attempts}): Status {e.status}")
                if attempt >= max_attempts - 1 or e.status not in RETRYABLE_STATUSES:
                    raise
            except (asyncio.TimeoutError, aiohttp.ClientError) as e:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Network error on {url} (Attempt {attempt + 1}/{max_attempts}): {type(e).__name__}")
                if attempt >= max_attempts - 1:
                    raise TransportError(url, type(e).__name__) from e

            delay = initial_delay * (2 ** attempt) + random.uniform(0, 1)
            logger.info(f"Retrying request to {url} in {delay:.2f} seconds...")
            await asyncio.sleep(delay)

        # range() above always returns or raises on its last iteration
        raise TransportError(url, "no attempts made")

    async def _fetch_json(self, url: str) -> Any:
        """Fetches a URL and decodes its body as JSON, raising ParseError on malformed payloads."""
        content = await self._fetch(url, headers={'Accept': 'application/json'})
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ParseError(url, str(e)) from e
