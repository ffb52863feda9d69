"""Tests for the JSON search backend lookup."""

import aiohttp
import pytest

from metacritic_finder.search.structured_finder import StructuredFinder
from sample_pages import API_PREFIX, FORTNITE_API_RESPONSE


@pytest.mark.asyncio
async def test_first_game_item_becomes_candidate(session, options) -> None:
    session.add(API_PREFIX, FORTNITE_API_RESPONSE)

    candidate = await StructuredFinder(session, options).search("Fortnite")

    assert candidate is not None
    assert candidate.name == "Fortnite"
    assert candidate.platforms == ("pc", "playstation-5")
    assert candidate.slug == "fortnite"
    assert candidate.url == "https://www.metacritic.com/game/pc/fortnite/"
    assert candidate.metascore == 78


@pytest.mark.asyncio
async def test_request_shape(session, options) -> None:
    session.add(API_PREFIX, FORTNITE_API_RESPONSE)

    await StructuredFinder(session, options).search("GTA V")

    method, url, headers = session.requests[0]
    assert method == "GET"
    assert url.startswith(API_PREFIX + "GTA%20V/web?")
    assert "offset=0" in url and "limit=1" in url and "mcoTypeId=13" in url
    assert headers["Accept"] == "application/json"
    assert "User-Agent" in headers and "Cache-Control" in headers


@pytest.mark.asyncio
async def test_non_game_items_yield_nothing(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [
        {"type": "person", "slug": "hideo-kojima", "title": "Hideo Kojima"},
        {"type": "game-title", "slug": "", "title": "No Slug"},
    ]}})

    assert await StructuredFinder(session, options).search("Kojima") is None


@pytest.mark.asyncio
async def test_skips_to_first_qualifying_item(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [
        {"type": "franchise", "slug": "halo"},
        {"type": "game-title", "slug": "halo-infinite", "name": "Halo Infinite"},
    ]}})

    candidate = await StructuredFinder(session, options).search("Halo")

    assert candidate.name == "Halo Infinite"
    assert candidate.platforms == ()
    assert candidate.url == "https://www.metacritic.com/game/halo-infinite/"
    assert candidate.metascore is None


@pytest.mark.asyncio
async def test_duplicate_platforms_are_collapsed(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "hades", "title": "Hades",
        "platforms": [{"name": "PlayStation 5"}, {"name": "PS5"}, {"name": "Nintendo Switch"}],
        "criticScoreSummary": {"score": None},
    }]}})

    candidate = await StructuredFinder(session, options).search("Hades")

    assert candidate.platforms == ("playstation-5", "switch")
    assert candidate.url == "https://www.metacritic.com/game/playstation-5/hades/"
    assert candidate.metascore is None


@pytest.mark.asyncio
@pytest.mark.parametrize("body, status", [
    ("<html>not json</html>", 200),
    ({"error": "nope"}, 200),
    ({"data": {"items": "oops"}}, 200),
    (FORTNITE_API_RESPONSE, 503),
])
async def test_bad_responses_yield_nothing(session, options, body, status) -> None:
    session.add(API_PREFIX, body, status=status)

    assert await StructuredFinder(session, options).search("Fortnite") is None


@pytest.mark.asyncio
async def test_transport_failures_yield_nothing(session, options, timeout_error) -> None:
    session.add(API_PREFIX, exc=timeout_error)
    assert await StructuredFinder(session, options).search("Fortnite") is None


@pytest.mark.asyncio
async def test_connection_errors_yield_nothing(session, options) -> None:
    session.add(API_PREFIX, exc=aiohttp.ClientConnectionError("refused"))
    assert await StructuredFinder(session, options).search("Fortnite") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("platforms", [5, True, "PS5", {"name": "PS5"}, [{"name": 5}], [{"name": ["PS5"]}], [None, "PC"]])
async def test_malformed_platforms_are_ignored(session, options, platforms) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "celeste", "title": "Celeste", "platforms": platforms,
    }]}})

    candidate = await StructuredFinder(session, options).search("Celeste")

    assert candidate.platforms == ()
    assert candidate.url == "https://www.metacritic.com/game/celeste/"


@pytest.mark.asyncio
async def test_valid_platform_names_survive_malformed_neighbours(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "celeste", "title": "Celeste",
        "platforms": [{"name": 5}, "PC", {"name": "Nintendo Switch"}],
    }]}})

    candidate = await StructuredFinder(session, options).search("Celeste")

    assert candidate.platforms == ("switch",)
    assert candidate.url == "https://www.metacritic.com/game/switch/celeste/"


@pytest.mark.asyncio
@pytest.mark.parametrize("title, name", [(42, None), (None, ["Celeste"]), ("   ", {"en": "Celeste"})])
async def test_non_text_titles_fall_back_to_slug(session, options, title, name) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "celeste", "title": title, "name": name,
    }]}})

    candidate = await StructuredFinder(session, options).search("Celeste")

    assert candidate.name == "celeste"


@pytest.mark.asyncio
async def test_name_used_when_title_is_not_text(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "celeste", "title": 7, "name": "Celeste",
    }]}})

    candidate = await StructuredFinder(session, options).search("Celeste")

    assert candidate.name == "Celeste"


@pytest.mark.asyncio
async def test_unrecognised_platform_is_kept_out_of_the_url(session, options) -> None:
    session.add(API_PREFIX, {"data": {"items": [{
        "type": "game-title", "slug": "beat-saber", "title": "Beat Saber",
        "platforms": [{"name": "Meta Quest"}, {"name": "PC"}],
    }]}})

    candidate = await StructuredFinder(session, options).search("Beat Saber")

    assert candidate.platforms == ("Meta Quest", "pc")
    assert candidate.url == "https://www.metacritic.com/game/beat-saber/"


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["pc/halo", "halo?x=1", "halo#top", "halo infinite", 42, ["halo"]])
async def test_slugs_that_break_the_url_are_rejected(session, options, slug) -> None:
    session.add(API_PREFIX, {"data": {"items": [{"type": "game-title", "slug": slug, "title": "Halo"}]}})

    assert await StructuredFinder(session, options).search("Halo") is None
