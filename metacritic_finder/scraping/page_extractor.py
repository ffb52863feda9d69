# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from typing import List, Optional, Tuple, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from metacritic_finder.config import METASCORE_RANGE, USERSCORE_RANGE
from metacritic_finder.core.base_client import BaseWebClient
from metacritic_finder.core.errors import FetchError, ScraperError
from metacritic_finder.models.game import ProductRecord, Review, ReviewKind
from metacritic_finder.utils.normalize import (
    normalize_date, normalize_platform, parse_numeric_text, score_in_range
)
from metacritic_finder.utils.selectors import first_attr, first_text
from metacritic_finder.utils.url_utils import build_game_url, parse_game_path, url_origin

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# Each chain lists the current layout first and the legacy layout after it.
FIELD_SELECTORS = {
    'name': ['h1[data-testid="product-title"]', 'h1.product_title'],
    'platform': ['span[data-testid="product-platform"]', 'span.platform'],
    'metascore': ['[data-testid="metascore-wrapped"]', 'div.metascore_w > span', 'div.metascore_w'],
    'userscore': ['[data-testid="userscore-wrapped"]', 'div.userscore_w > span', 'div.userscore_w'],
    'critic_count': ['[data-testid="critic-reviews-count"]', 'a.metascore_anchor span.count'],
    'user_count': ['[data-testid="user-reviews-count"]', 'a.userscore_anchor span.count'],
    'release_date': ['[data-testid="product-release-date"]', 'li.release_data .data'],
}
OG_TITLE_SELECTOR = 'meta[property="og:title"]'

CRITIC_REVIEW_SELECTOR = '[data-testid="critic-reviews"] article, .critic_reviews .review'
USER_REVIEW_SELECTOR = '[data-testid="user-reviews"] article, .user_reviews .review'

REVIEW_FIELD_SELECTORS = {
    'critic': {
        'source': ['[data-testid="critic-publication"]', '.source'],
        'score': ['[data-testid="critic-score"]', '.metascore_w'],
        'date': ['[data-testid="critic-date"]', '.date'],
        'quote': ['[data-testid="review-quote"]', '.summary'],
    },
    'user': {
        'source': ['[data-testid="user-username"]', '.author'],
        'score': ['[data-testid="user-score"]', '.metascore_w'],
        'date': ['[data-testid="user-date"]', '.date'],
        'quote': ['[data-testid="review-quote"]', '.summary'],
    },
}
CRITIC_LINK_SELECTORS = ['a[href^="http"]', 'a.read_full_review']

# ===== CORE BUSINESS LOGIC =====
class PageExtractor(BaseWebClient):
    """Extracts ratings and reviews from a Metacritic game page."""

    def _bounded_score(self, text: Optional[str], bounds: Tuple[int, int]) -> Optional[Union[int, float]]:
        value = parse_numeric_text(text)
        if value is None:
            return None
        if not score_in_range(value, bounds):
            logger.debug(f"[{self.__class__.__name__}] Discarding out-of-range score '{text}' (expected {bounds[0]}-{bounds[1]})")
            return None
        return value

    @staticmethod
    def _count(text: Optional[str]) -> Optional[int]:
        value = parse_numeric_text(text)
        if value is None or value < 0 or value != int(value):
            return None
        return int(value)

    def _parse_review(self, element: Tag, kind: ReviewKind, page_url: str) -> Review:
        selectors = REVIEW_FIELD_SELECTORS[kind]
        score_text = first_text(element, selectors['score'])
        if kind == 'critic':
            score = self._bounded_score(score_text, METASCORE_RANGE)
            score = int(score) if score is not None else None
            href = first_attr(element, CRITIC_LINK_SELECTORS, 'href')
            url = urljoin(page_url, href) if href else None
        else:
            score = self._bounded_score(score_text, USERSCORE_RANGE)
            url = None

        return Review(
            kind=kind,
            source=first_text(element, selectors['source']),
            quote=first_text(element, selectors['quote']),
            score=score,
            date=normalize_date(first_text(element, selectors['date'])),
            url=url,
        )

    def _parse_reviews(self, soup: BeautifulSoup, selector: str, kind: ReviewKind, page_url: str) -> List[Review]:
        return [self._parse_review(element, kind, page_url) for element in soup.select(selector)]

    @staticmethod
    def _slug_from_name(name: str) -> str:
        return re.sub(r'\s+', '-', name.strip().lower())

    def _parse_game_page(self, html_content: str, url: str) -> ProductRecord:
        """Parses a game page into a ProductRecord, leaving missing fields as None."""
        soup = BeautifulSoup(html_content, 'lxml')

        def field(name: str) -> Optional[str]:
            return first_text(soup, FIELD_SELECTORS[name])

        page_name = field('name') or first_attr(soup, [OG_TITLE_SELECTOR], 'content')
        platform_label = field('platform')
        game_path = parse_game_path(url)

        if game_path:
            slug = game_path.slug
        elif page_name:
            slug = self._slug_from_name(page_name)
        else:
            slug = ''
        name = page_name or slug
        canonical_url = build_game_url(game_path.slug, game_path.platform, url_origin(url)) if game_path else url

        platform = normalize_platform(platform_label) or (game_path.platform if game_path else None)
        metascore = self._bounded_score(field('metascore'), METASCORE_RANGE)
        userscore = self._bounded_score(field('userscore'), USERSCORE_RANGE)

        reviews = self._parse_reviews(soup, CRITIC_REVIEW_SELECTOR, 'critic', url)
        reviews.extend(self._parse_reviews(soup, USER_REVIEW_SELECTOR, 'user', url))

        return ProductRecord(
            name=name,
            slug=slug,
            url=canonical_url,
            platforms=(platform,) if platform else (),
            metascore=int(metascore) if metascore is not None else None,
            userscore=float(userscore) if userscore is not None else None,
            critic_reviews_count=self._count(field('critic_count')),
            user_ratings_count=self._count(field('user_count')),
            release_date=field('release_date'),
            reviews=reviews,
        )

    async def extract(self, url: str) -> ProductRecord:
        """
        Fetches and parses a game page.

        Raises FetchError when the page cannot be retrieved; once a concrete
        URL has been chosen there is nothing left to fall back to.
        """
        logger.info(f"[{self.__class__.__name__}] Extracting game page {url}")
        try:
            page_html = await self._fetch(url)
        except ScraperError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Failed to fetch Metacritic page {url}: {e}")
            raise FetchError(url, e) from e

        record = self._parse_game_page(page_html, url)
        logger.info(
            f"✅ [{self.__class__.__name__}] Extracted '{record.name}': metascore={record.metascore}, "
            f"userscore={record.userscore}, reviews={len(record.reviews)}"
        )
        return record
