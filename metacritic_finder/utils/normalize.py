# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

from metacritic_finder.config import PLATFORM_ALIASES

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

NON_NUMERIC_PATTERN = re.compile(r'[^\d.]')
DATE_FORMATS = ('%b %d, %Y', '%B %d, %Y', '%Y-%m-%d', '%m/%d/%Y', '%d %b %Y', '%d %B %Y')

# ===== UTILITY FUNCTIONS =====

def normalize_platform(raw: Optional[str]) -> Optional[str]:
    """
    Maps a free-text platform label to its canonical id.

    Unknown labels are returned unchanged rather than dropped.
    """
    if not isinstance(raw, str) or not raw:
        return None
    lowered = raw.lower()
    for alias, canonical in PLATFORM_ALIASES:
        if alias in lowered:
            return canonical
    return raw


def dedupe_platforms(raw_platforms: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Normalizes platform labels, drops empty ones and keeps first-seen order."""
    seen = []
    for raw in raw_platforms:
        platform = normalize_platform(raw)
        if platform and platform not in seen:
            seen.append(platform)
    return tuple(seen)


def parse_numeric_text(text: Optional[str]) -> Optional[Union[int, float]]:
    """
    Parses numbers out of noisy text such as '78 Metascore' or 'Based on 1,204 Ratings'.

    Every character that is not a digit or a decimal point is discarded first.
    """
    if not text:
        return None
    cleaned = NON_NUMERIC_PATTERN.sub('', text)
    if not cleaned:
        return None
    try:
        if '.' in cleaned:
            return float(cleaned)
        return int(cleaned)
    except ValueError:
        logger.debug(f"[parse_numeric_text] Could not parse number from '{text}'")
        return None


def normalize_date(text: Optional[str]) -> Optional[str]:
    """Returns an ISO-8601 date when the text is a known date format, else the raw text."""
    if not text:
        return None
    cleaned = re.sub(r'\s+', ' ', text).strip()
    if not cleaned:
        return None
    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, date_format).date().isoformat()
        except ValueError:
            continue
    return cleaned


def score_in_range(value: Optional[Union[int, float]], bounds: Tuple[int, int]) -> bool:
    return value is not None and bounds[0] <= value <= bounds[1]
