# ===== CONFIGURATION & CONSTANTS =====
import os
from dataclasses import dataclass, field
from typing import Dict

# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

DEFAULT_TIMEOUT_MS = 15000
DEFAULT_CONCURRENCY = 2
DEFAULT_DELAY_BETWEEN_REQUESTS_MS = 1000
DEFAULT_MAX_CANDIDATES = 5
DEFAULT_MAX_ATTEMPTS = 1

# --- Web Scraping & API Headers ---
COMMON_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Cache-Control': 'no-cache',
}

# --- Metacritic Endpoints ---
METACRITIC_BASE_URL = "https://www.metacritic.com"
# mcoTypeId=13 selects games (1=tv, 2=movies, 3=people)
METACRITIC_API_SEARCH_URL = (
    "https://backend.metacritic.com/finder/metacritic/search/{query}/web"
    "?offset=0&limit=1&mcoTypeId=13&sortBy=&sortDirection=DESC"
    "&componentName=search&componentDisplayName=Search&componentType=SearchResults"
)
METACRITIC_SEARCH_PATH = "/search/{query}/?category=2"
API_GAME_ITEM_TYPE = "game-title"

# --- Platform Normalization ---
# Ordered (alias, canonical id) pairs. First substring match wins, so
# specific aliases must come before broader ones.
PLATFORM_ALIASES = [
    ("pc", "pc"),
    ("playstation 5", "playstation-5"),
    ("playstation-5", "playstation-5"),
    ("ps5", "playstation-5"),
    ("playstation 4", "playstation-4"),
    ("playstation-4", "playstation-4"),
    ("ps4", "playstation-4"),
    ("xbox series", "xbox-series-x"),
    ("xbox-series", "xbox-series-x"),
    ("xbox one", "xbox-one"),
    ("xbox-one", "xbox-one"),
    ("switch", "switch"),
    ("mac", "mac"),
    ("linux", "linux"),
    ("ios", "ios"),
    ("android", "android"),
]

# Path tokens that mark the first segment of /game/<x>/<y>/ as a platform.
PLATFORM_PATH_TOKENS = (
    "pc", "playstation-5", "playstation-4", "ps5", "ps4", "xbox-series-x",
    "xbox-one", "switch", "ios", "android", "mac", "linux", "stadia",
    "wii-u", "3ds", "vita", "nintendo-switch",
)

# Final path segments that point at a sub-page rather than the product page.
SUBPAGE_SEGMENTS = ("critic-reviews", "user-reviews", "reviews")

# --- Heuristic Search Page Scanning ---
GAME_LINK_SELECTOR = 'a[href*="/game/"]'
SEARCH_RESULT_REGION_SELECTORS = [
    'section[data-testid="search-results"]',
    '.search_results',
    '.search_result',
    '[class*="search"]',
    'main',
    '[role="main"]',
]
LANDMARK_SELECTOR = (
    'nav, header, footer, aside, .nav, .header, .footer, [class*="nav"], '
    '[class*="header"], [class*="footer"], [class*="sidebar"], '
    '[role="navigation"], [role="banner"], [role="complementary"]'
)
STRICT_LANDMARK_SELECTOR = 'nav, header, footer, [role="navigation"], [role="banner"]'
SEARCH_CONTAINER_SELECTOR = (
    '[class*="search"], [id*="search"], section, article, [data-testid*="search"]'
)
GENERIC_NAV_LABELS = ("games", "all", "new", "reviews", "more", "see all", "explore")
MIN_ANCHOR_TEXT_LENGTH = 3
MIN_QUERY_WORD_LENGTH = 3
QUERY_PREFIX_LENGTH = 3
SEARCH_RESULT_TITLE_SELECTOR = '[data-testid="searchResult-title"]'
SEARCH_RESULT_PLATFORM_SELECTOR = '[data-testid="searchResult-platform"]'

# --- Score Scales ---
METASCORE_RANGE = (0, 100)
USERSCORE_RANGE = (0, 10)


# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class ScrapeOptions:
    """
    Per-call settings threaded into every client at construction time.

    `concurrency` and `delay_between_requests_ms` are honoured by the caller
    layer (`GameResolver.resolve_many`), never inside a single resolution.
    `max_candidates` is reserved: at most one result is ever returned.
    """
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    concurrency: int = DEFAULT_CONCURRENCY
    delay_between_requests_ms: int = DEFAULT_DELAY_BETWEEN_REQUESTS_MS
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_url: str = METACRITIC_BASE_URL
    headers: Dict[str, str] = field(default_factory=lambda: dict(COMMON_HEADERS))

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive.")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1.")
        if self.delay_between_requests_ms < 0:
            raise ValueError("delay_between_requests_ms must be non-negative.")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0
