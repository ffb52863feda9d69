# ===== IMPORTS & DEPENDENCIES =====
import re
from typing import Optional

# ===== CONFIGURATION & CONSTANTS =====
DURATION_PATTERN = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*(ms|s|sec|secs|m|min|mins|h|hr|hrs)?\s*$', re.IGNORECASE)
UNIT_TO_MS = {
    None: 1.0,
    'ms': 1.0,
    's': 1000.0, 'sec': 1000.0, 'secs': 1000.0,
    'm': 60_000.0, 'min': 60_000.0, 'mins': 60_000.0,
    'h': 3_600_000.0, 'hr': 3_600_000.0, 'hrs': 3_600_000.0,
}

# ===== UTILITY FUNCTIONS =====

def parse_duration_ms(value: Optional[str]) -> Optional[int]:
    """
    Parses human-readable durations like '500ms', '15s', '2m' or '1h' into milliseconds.

    A bare number is taken as milliseconds. Returns None for anything else.
    """
    if not value:
        return None
    match = DURATION_PATTERN.match(value)
    if not match:
        return None
    amount, unit = match.groups()
    return int(round(float(amount) * UNIT_TO_MS[unit.lower() if unit else None]))
