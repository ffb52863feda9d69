"""Shared fixtures for the scraper tests."""

import asyncio

import pytest

from fakes import FakeSession
from metacritic_finder.config import ScrapeOptions


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def options() -> ScrapeOptions:
    return ScrapeOptions(timeout_ms=1000, delay_between_requests_ms=0)


@pytest.fixture
def timeout_error() -> BaseException:
    return asyncio.TimeoutError()
