# ===== TYPES & INTERFACES =====
from typing import Optional


class ScraperError(Exception):
    """Base class for every error raised by the scraper."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class TransportError(ScraperError):
    """The request never produced a response (connection failure or timeout)."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"Transport error for {url}: {reason}")
        self.reason = reason


class HttpStatusError(ScraperError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status: int):
        super().__init__(url, f"HTTP {status} for {url}")
        self.status = status


class ParseError(ScraperError):
    """The payload could not be decoded into the expected structure."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"Could not parse response from {url}: {reason}")
        self.reason = reason


class FetchError(ScraperError):
    """A game page could not be retrieved. No fallback exists past this point."""

    def __init__(self, url: str, cause: Optional[ScraperError] = None):
        detail = str(cause) if cause else "unknown error"
        super().__init__(url, f"Failed to fetch game page {url}: {detail}")
        self.cause = cause
