# ===== IMPORTS & DEPENDENCIES =====
import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from metacritic_finder.config import (
    GAME_LINK_SELECTOR, GENERIC_NAV_LABELS, LANDMARK_SELECTOR,
    MIN_ANCHOR_TEXT_LENGTH, MIN_QUERY_WORD_LENGTH, QUERY_PREFIX_LENGTH,
    SEARCH_CONTAINER_SELECTOR, SEARCH_RESULT_REGION_SELECTORS,
    STRICT_LANDMARK_SELECTOR,
)
from metacritic_finder.models.game import SearchCandidate

# ===== CONFIGURATION & CONSTANTS =====
RULE_CONTAINER = "search-container"
RULE_WORD = "query-word"
RULE_PREFIX = "query-prefix"
RULE_NO_WORDS = "no-query-words"

# ===== UTILITY FUNCTIONS =====
# Each predicate looks at a single anchor so it can be tested on its own.

def anchor_text(anchor: Tag) -> str:
    return anchor.get_text(' ', strip=True).lower()


def anchor_href(anchor: Tag) -> str:
    href = anchor.get('href') or ''
    return href.lower() if isinstance(href, str) else ''


def query_words(query: str) -> List[str]:
    """Lowercased query words long enough to carry meaning."""
    return [word for word in re.split(r'\s+', query.lower()) if len(word) >= MIN_QUERY_WORD_LENGTH]


def is_in_landmark(anchor: Tag, selector: str = LANDMARK_SELECTOR) -> bool:
    """True when the anchor or one of its ancestors is navigation, header, footer or sidebar chrome."""
    return anchor.css.closest(selector) is not None


def has_generic_text(anchor: Tag) -> bool:
    """True for empty, very short or stock navigation labels such as 'More' or 'See all'."""
    text = anchor_text(anchor)
    return len(text) < MIN_ANCHOR_TEXT_LENGTH or text in GENERIC_NAV_LABELS


def is_browse_link(anchor: Tag) -> bool:
    return '/browse/' in anchor_href(anchor)


def is_offsite_link(anchor: Tag) -> bool:
    netloc = urlparse(anchor_href(anchor)).netloc
    return bool(netloc) and not netloc.endswith('metacritic.com')


def in_search_container(anchor: Tag) -> bool:
    return anchor.css.closest(SEARCH_CONTAINER_SELECTOR) is not None


def matches_query_word(anchor: Tag, words: Iterable[str]) -> bool:
    text, href = anchor_text(anchor), anchor_href(anchor)
    return any(word in text or word in href for word in words)


def matches_query_prefix(anchor: Tag, words: Iterable[str]) -> bool:
    """Lenient last resort: the first few characters of any query word appear in the text or href."""
    text, href = anchor_text(anchor), anchor_href(anchor)
    return any(
        word[:QUERY_PREFIX_LENGTH] in text or word[:QUERY_PREFIX_LENGTH] in href
        for word in words
    )


def relevance_rule(anchor: Tag, words: List[str]) -> Optional[str]:
    """Name of the first relevance rule the anchor satisfies, or None when it fails all of them."""
    if not words:
        return RULE_NO_WORDS
    if in_search_container(anchor):
        return RULE_CONTAINER
    if matches_query_word(anchor, words):
        return RULE_WORD
    if matches_query_prefix(anchor, words):
        return RULE_PREFIX
    return None


def is_candidate_anchor(anchor: Tag) -> bool:
    """Structural filters every anchor must pass regardless of the query."""
    return (
        bool(anchor_href(anchor))
        and not is_browse_link(anchor)
        and not is_offsite_link(anchor)
        and not has_generic_text(anchor)
        and not is_in_landmark(anchor, STRICT_LANDMARK_SELECTOR)
    )


def collect_result_anchors(soup: BeautifulSoup) -> List[Tag]:
    """
    Game links from the search-results region, in document order.

    When no region is recognised, every game link outside page chrome with a
    meaningful label is used instead.
    """
    region_selector = ', '.join(f'{region} {GAME_LINK_SELECTOR}' for region in SEARCH_RESULT_REGION_SELECTORS)
    anchors = soup.select(region_selector)
    if anchors:
        return anchors
    return [
        anchor for anchor in soup.select(GAME_LINK_SELECTOR)
        if not is_in_landmark(anchor) and not has_generic_text(anchor)
    ]


def dedupe_candidates(candidates: Iterable[SearchCandidate]) -> List[SearchCandidate]:
    """Drops candidates whose URL was already seen; first occurrence wins."""
    seen = set()
    unique = []
    for candidate in candidates:
        if candidate.url in seen:
            continue
        seen.add(candidate.url)
        unique.append(candidate)
    return unique
