# ===== IMPORTS & DEPENDENCIES =====
from typing import NamedTuple, Optional
from urllib.parse import quote, urlparse

from metacritic_finder.config import (
    METACRITIC_BASE_URL, PLATFORM_PATH_TOKENS, SUBPAGE_SEGMENTS
)

# ===== TYPES & INTERFACES =====
class GamePath(NamedTuple):
    platform: Optional[str]
    slug: str

# ===== UTILITY FUNCTIONS =====

def is_platform_token(segment: str) -> bool:
    return segment.lower() in PLATFORM_PATH_TOKENS


def parse_game_path(href: Optional[str]) -> Optional[GamePath]:
    """
    Parses `/game/<slug>/` and `/game/<platform>/<slug>/` paths.

    Accepts relative hrefs and absolute URLs. Returns None for anything that
    does not point at a game's main page, including sub-pages such as
    `/game/pc/critic-reviews/`.
    """
    if not href:
        return None
    path = urlparse(href).path
    segments = [segment for segment in path.split('/') if segment]
    if len(segments) < 2 or segments[0] != 'game':
        return None
    if segments[-1].lower() in SUBPAGE_SEGMENTS:
        return None

    first = segments[1]
    if len(segments) == 2:
        # A bare platform token is a platform listing, not a game.
        if is_platform_token(first):
            return None
        return GamePath(platform=None, slug=first)

    second = segments[2]
    if is_platform_token(first):
        return GamePath(platform=first, slug=second)
    # /game/<slug>/<extra>/ without a platform prefix still names the game
    return GamePath(platform=None, slug=first)


def build_game_url(slug: str, platform: Optional[str] = None, base_url: str = METACRITIC_BASE_URL) -> str:
    """Builds the canonical product URL with a trailing slash and no query string."""
    if platform:
        return f"{base_url}/game/{platform}/{slug}/"
    return f"{base_url}/game/{slug}/"


def encode_query(query: str) -> str:
    """URL-encodes a free-text query for use inside a path segment."""
    return quote(query.strip(), safe='')


def url_origin(url: str) -> str:
    """Scheme and host of an absolute URL, e.g. 'https://www.metacritic.com'."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"
