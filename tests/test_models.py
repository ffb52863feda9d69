"""Tests for the record types and their JSON shape."""

import dataclasses

import pytest

from metacritic_finder.config import ScrapeOptions
from metacritic_finder.models.game import ProductRecord, Review, SearchCandidate


def _candidate() -> SearchCandidate:
    return SearchCandidate(
        name="Fortnite",
        platforms=("pc", "playstation-5"),
        slug="fortnite",
        url="https://www.metacritic.com/game/pc/fortnite/",
        metascore=78,
    )


def test_candidate_is_immutable() -> None:
    candidate = _candidate()
    with pytest.raises(dataclasses.FrozenInstanceError):
        candidate.name = "Other"


def test_candidate_url_shape() -> None:
    url = _candidate().url
    assert url.endswith("/")
    assert "?" not in url


def test_record_from_candidate_keeps_absent_fields_absent() -> None:
    record = ProductRecord.from_candidate(_candidate())

    assert record.metascore == 78
    assert record.userscore is None
    assert record.critic_reviews_count is None
    assert record.user_ratings_count is None
    assert record.release_date is None
    assert record.reviews == []


def test_review_to_dict() -> None:
    review = Review(kind="user", source="someone", score=8.5)
    assert review.to_dict() == {
        "type": "user",
        "source": "someone",
        "quote": None,
        "score": 8.5,
        "date": None,
        "url": None,
    }


def test_record_splits_reviews_by_kind() -> None:
    record = ProductRecord(
        name="Halo",
        slug="halo",
        url="https://www.metacritic.com/game/halo/",
        reviews=[Review(kind="user", score=9), Review(kind="critic", score=90), Review(kind="user", score=3)],
    )

    assert [r.score for r in record.critic_reviews] == [90]
    assert [r.score for r in record.user_reviews] == [9, 3]
    assert [r["type"] for r in record.to_dict()["reviews"]] == ["user", "critic", "user"]


def test_scrape_options_defaults() -> None:
    options = ScrapeOptions()
    assert options.timeout_ms == 15000
    assert options.timeout_seconds == 15.0
    assert options.concurrency == 2
    assert options.delay_between_requests_ms == 1000
    assert options.max_candidates == 5
    assert options.headers["Cache-Control"] == "no-cache"


@pytest.mark.parametrize("kwargs", [
    {"timeout_ms": 0},
    {"concurrency": 0},
    {"delay_between_requests_ms": -1},
    {"max_attempts": 0},
])
def test_scrape_options_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        ScrapeOptions(**kwargs)
