# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from typing import Any, Dict, Optional, Tuple

from metacritic_finder.config import (
    API_GAME_ITEM_TYPE, METACRITIC_API_SEARCH_URL, METASCORE_RANGE
)
from metacritic_finder.core.base_client import BaseWebClient
from metacritic_finder.core.errors import ScraperError
from metacritic_finder.models.game import SearchCandidate
from metacritic_finder.utils.normalize import dedupe_platforms, score_in_range
from metacritic_finder.utils.url_utils import build_game_url, encode_query, is_platform_token

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# A slug is a single path segment; anything that would break the URL shape is rejected.
SLUG_PATTERN = re.compile(r"^[^/?#\s]+$")

# ===== CORE BUSINESS LOGIC =====
class StructuredFinder(BaseWebClient):
    """Finds the best matching game through Metacritic's JSON search backend."""

    def build_search_url(self, query: str) -> str:
        return METACRITIC_API_SEARCH_URL.format(query=encode_query(query))

    @staticmethod
    def _is_game_item(item: Any) -> bool:
        if not isinstance(item, dict) or item.get('type') != API_GAME_ITEM_TYPE:
            return False
        slug = item.get('slug')
        return isinstance(slug, str) and bool(SLUG_PATTERN.match(slug))

    @staticmethod
    def _extract_platforms(item: Dict[str, Any]) -> Tuple[str, ...]:
        raw_platforms = item.get('platforms')
        if not isinstance(raw_platforms, list):
            return ()
        return dedupe_platforms(
            platform.get('name') for platform in raw_platforms
            if isinstance(platform, dict) and isinstance(platform.get('name'), str)
        )

    @staticmethod
    def _extract_name(item: Dict[str, Any]) -> str:
        for key in ('title', 'name'):
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return item['slug']

    @staticmethod
    def _extract_metascore(item: Dict[str, Any]) -> Optional[int]:
        summary = item.get('criticScoreSummary')
        if not isinstance(summary, dict):
            return None
        score = summary.get('score')
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        if not score_in_range(score, METASCORE_RANGE):
            return None
        return int(score)

    def _parse_search_response(self, payload: Any) -> Optional[SearchCandidate]:
        """Turns the `data.items[]` envelope into the first qualifying candidate."""
        data = payload.get('data') if isinstance(payload, dict) else None
        items = data.get('items') if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Search response has no 'data.items' list.")
            return None

        item = next((entry for entry in items if self._is_game_item(entry)), None)
        if item is None:
            logger.info(f"[{self.__class__.__name__}] No game item among {len(items)} search result(s).")
            return None

        platforms = self._extract_platforms(item)
        slug = item['slug']
        # Unrecognised labels are kept in `platforms` but never become a path segment
        url_platform = platforms[0] if platforms and is_platform_token(platforms[0]) else None
        return SearchCandidate(
            name=self._extract_name(item),
            platforms=platforms,
            slug=slug,
            url=build_game_url(slug, url_platform, self.options.base_url),
            metascore=self._extract_metascore(item),
        )

    async def search(self, query: str) -> Optional[SearchCandidate]:
        """
        Returns the first game result for the query, or None.

        Any transport, status or decoding failure also yields None so the
        caller can fall back to scanning the HTML search page.
        """
        search_url = self.build_search_url(query)
        logger.info(f"[{self.__class__.__name__}] Searching Metacritic API for '{query}' at {search_url}")
        try:
            payload = await self._fetch_json(search_url)
        except ScraperError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Structured search failed for '{query}': {e}")
            return None

        candidate = self._parse_search_response(payload)
        if candidate:
            logger.info(f"✅ [{self.__class__.__name__}] Found Metacritic game '{candidate.name}' at {candidate.url}")
        return candidate
