# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from metacritic_finder.config import (
    METACRITIC_SEARCH_PATH, SEARCH_RESULT_PLATFORM_SELECTOR,
    SEARCH_RESULT_TITLE_SELECTOR,
)
from metacritic_finder.core.base_client import BaseWebClient
from metacritic_finder.core.errors import ScraperError
from metacritic_finder.models.game import SearchCandidate
from metacritic_finder.search.anchor_filters import (
    collect_result_anchors, dedupe_candidates, is_candidate_anchor,
    query_words, relevance_rule,
)
from metacritic_finder.utils.normalize import normalize_platform
from metacritic_finder.utils.selectors import select_text
from metacritic_finder.utils.url_utils import build_game_url, encode_query, parse_game_path

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class HeuristicFinder(BaseWebClient):
    """
    Fallback finder that scans Metacritic's human-facing search page.

    The page gives no reliable marker separating real results from related or
    promoted links, so anchors pass through structural filters and a graduated
    relevance check (search container, whole query word, 3-character prefix).
    Recall is preferred over precision.
    """

    def build_search_url(self, query: str) -> str:
        return self.options.base_url + METACRITIC_SEARCH_PATH.format(query=encode_query(query))

    def _candidate_from_anchor(self, anchor: Tag) -> Optional[SearchCandidate]:
        game_path = parse_game_path(anchor.get('href'))
        if game_path is None:
            return None

        name = (
            select_text(anchor, SEARCH_RESULT_TITLE_SELECTOR)
            or anchor.get_text(' ', strip=True)
            or game_path.slug
        )
        platform_label = select_text(anchor, SEARCH_RESULT_PLATFORM_SELECTOR) or game_path.platform
        platform = normalize_platform(platform_label) or game_path.platform
        return SearchCandidate(
            name=name,
            platforms=(platform,) if platform else (),
            slug=game_path.slug,
            url=build_game_url(game_path.slug, game_path.platform, self.options.base_url),
        )

    def _parse_search_page(self, html_content: str, query: str) -> List[SearchCandidate]:
        """Extracts every plausible candidate from a search page, deduplicated, in document order."""
        soup = BeautifulSoup(html_content, 'lxml')
        words = query_words(query)
        anchors = collect_result_anchors(soup)
        logger.debug(f"[{self.__class__.__name__}] Found {len(anchors)} game link(s) to inspect for '{query}'.")

        candidates: List[SearchCandidate] = []
        for anchor in anchors:
            if not is_candidate_anchor(anchor):
                continue
            rule = relevance_rule(anchor, words)
            if rule is None:
                logger.debug(f"[{self.__class__.__name__}] Skipping unrelated link {anchor.get('href')}")
                continue
            candidate = self._candidate_from_anchor(anchor)
            if candidate:
                logger.debug(f"[{self.__class__.__name__}] Accepted {candidate.url} via rule '{rule}'")
                candidates.append(candidate)

        return dedupe_candidates(candidates)

    async def search(self, query: str) -> Optional[SearchCandidate]:
        """Returns the first candidate on the HTML search page, or None."""
        search_url = self.build_search_url(query)
        logger.info(f"[{self.__class__.__name__}] Searching Metacritic for '{query}' at {search_url}")
        try:
            html_content = await self._fetch(search_url)
        except ScraperError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Search page fetch failed for '{query}': {e}")
            return None

        candidates = self._parse_search_page(html_content, query)
        if not candidates:
            logger.warning(f"⚠️ [{self.__class__.__name__}] No game page link found in Metacritic search results for '{query}'.")
            return None

        best = candidates[0]
        logger.info(f"✅ [{self.__class__.__name__}] Found Metacritic page URL: {best.url}")
        return best
