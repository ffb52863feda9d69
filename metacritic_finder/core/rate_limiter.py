# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
import time
from typing import Dict

from metacritic_finder.utils.url_utils import url_origin

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class RateLimiter:
    """
    Keeps a minimum delay between successive requests to the same origin.

    One instance is shared by every client taking part in a batch of
    resolutions; a single resolution never needs one.
    """

    def __init__(self, min_interval_ms: int):
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be non-negative.")
        self._min_interval = min_interval_ms / 1000.0
        self._last_call: Dict[str, float] = {}
        self._lock = asyncio.Lock()

    async def wait(self, url: str) -> None:
        """Sleeps just long enough to respect the interval for the URL's origin."""
        if self._min_interval <= 0:
            return

        origin = url_origin(url)
        # Held across the sleep so concurrent callers queue up per limiter.
        async with self._lock:
            last = self._last_call.get(origin)
            now = time.monotonic()
            if last is not None:
                remaining = self._min_interval - (now - last)
                if remaining > 0:
                    logger.debug(f"[{self.__class__.__name__}] Waiting {remaining:.2f}s before next request to {origin}")
                    await asyncio.sleep(remaining)
            self._last_call[origin] = time.monotonic()
