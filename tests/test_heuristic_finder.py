"""Tests for the HTML search page fallback."""

import pytest

from metacritic_finder.search.heuristic_finder import HeuristicFinder
from sample_pages import GTA_SEARCH_PAGE, SEARCH_PAGE_PREFIX


@pytest.mark.asyncio
async def test_finds_result_outside_page_chrome(session, options) -> None:
    session.add(SEARCH_PAGE_PREFIX, GTA_SEARCH_PAGE)

    candidate = await HeuristicFinder(session, options).search("GTA V")

    assert candidate is not None
    assert candidate.name == "Grand Theft Auto V"
    assert candidate.slug == "gta-v"
    assert candidate.platforms == ("playstation-4",)
    assert candidate.url == "https://www.metacritic.com/game/playstation-4/gta-v/"
    assert candidate.metascore is None


@pytest.mark.asyncio
async def test_search_page_url(session, options) -> None:
    session.add(SEARCH_PAGE_PREFIX, GTA_SEARCH_PAGE)

    await HeuristicFinder(session, options).search("GTA V")

    assert session.urls() == ["https://www.metacritic.com/search/GTA%20V/?category=2"]


@pytest.mark.asyncio
async def test_prefers_dedicated_title_and_platform_elements(session, options) -> None:
    page = """
    <main>
      <a href="/game/hades/?ref=search">
        <span data-testid="searchResult-title">Hades</span>
        <span data-testid="searchResult-platform">Nintendo Switch</span>
        <span>2020</span>
      </a>
    </main>
    """
    session.add(SEARCH_PAGE_PREFIX, page)

    candidate = await HeuristicFinder(session, options).search("Hades")

    assert candidate.name == "Hades"
    assert candidate.platforms == ("switch",)
    assert candidate.url == "https://www.metacritic.com/game/hades/"


@pytest.mark.asyncio
async def test_skips_subpages_and_duplicates(session, options) -> None:
    page = """
    <section data-testid="search-results">
      <a href="/game/pc/critic-reviews/">Critic Reviews</a>
      <a href="/game/pc/elden-ring/user-reviews/">Elden Ring user reviews</a>
      <a href="/game/pc/elden-ring/">Elden Ring</a>
      <a href="/game/pc/elden-ring">ELDEN RING</a>
      <a href="/game/playstation-5/elden-ring/">Elden Ring</a>
    </section>
    """
    session.add(SEARCH_PAGE_PREFIX, page)
    finder = HeuristicFinder(session, options)

    candidates = finder._parse_search_page(page, "Elden Ring")

    assert [c.url for c in candidates] == [
        "https://www.metacritic.com/game/pc/elden-ring/",
        "https://www.metacritic.com/game/playstation-5/elden-ring/",
    ]
    assert candidates[0].name == "Elden Ring"
    best = await finder.search("Elden Ring")
    assert best == candidates[0]


@pytest.mark.asyncio
async def test_unrelated_links_are_ignored(session, options) -> None:
    page = """
    <div class="promo">
      <a href="/game/pc/stardew-valley/">Stardew Valley</a>
      <a href="/game/pc/zelda-like/">Zelda-like Adventure</a>
    </div>
    """
    session.add(SEARCH_PAGE_PREFIX, page)

    candidate = await HeuristicFinder(session, options).search("Zelda")

    assert candidate.slug == "zelda-like"


@pytest.mark.asyncio
async def test_no_links_means_no_candidate(session, options) -> None:
    session.add(SEARCH_PAGE_PREFIX, "<html><body><p>No results</p></body></html>")
    assert await HeuristicFinder(session, options).search("Nothing") is None


@pytest.mark.asyncio
async def test_fetch_failure_means_no_candidate(session, options, timeout_error) -> None:
    session.add(SEARCH_PAGE_PREFIX, exc=timeout_error)
    assert await HeuristicFinder(session, options).search("GTA V") is None


@pytest.mark.asyncio
async def test_error_status_means_no_candidate(session, options) -> None:
    session.add(SEARCH_PAGE_PREFIX, "blocked", status=403)
    assert await HeuristicFinder(session, options).search("GTA V") is None
