# ===== TYPES & INTERFACES =====

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

ReviewKind = Literal["critic", "user"]
Score = Union[int, float]


@dataclass(frozen=True)
class SearchCandidate:
    """
    A provisional identification of a Metacritic game page.

    Attributes:
        name (str): Display title of the game.
        platforms (Tuple[str, ...]): Canonical platform ids, deduplicated, in source order.
        slug (str): The path segment identifying the game.
        url (str): Absolute product URL, `/game/<slug>/` or `/game/<platform>/<slug>/`.
        metascore (Optional[int]): Critic score (0-100) when the search source carried one.
    """
    name: str
    platforms: Tuple[str, ...]
    slug: str
    url: str
    metascore: Optional[int] = None


@dataclass(frozen=True)
class Review:
    """
    A single critic or user review.

    Critic scores use the 0-100 scale and user scores the 0-10 scale; the two
    are never converted into one another.
    """
    kind: ReviewKind
    source: Optional[str] = None
    quote: Optional[str] = None
    score: Optional[Score] = None
    date: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind,
            'source': self.source,
            'quote': self.quote,
            'score': self.score,
            'date': self.date,
            'url': self.url,
        }


@dataclass
class ProductRecord:
    """
    The normalized rating record of one game page.

    Every field except `name`, `slug` and `url` may be None when the page (or
    the search result it was built from) did not carry it.
    """
    name: str
    slug: str
    url: str
    platforms: Tuple[str, ...] = ()
    metascore: Optional[int] = None
    userscore: Optional[float] = None
    critic_reviews_count: Optional[int] = None
    user_ratings_count: Optional[int] = None
    release_date: Optional[str] = None
    reviews: List[Review] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: SearchCandidate) -> "ProductRecord":
        """Builds the lightweight record carrying only what the search already knew."""
        return cls(
            name=candidate.name,
            slug=candidate.slug,
            url=candidate.url,
            platforms=candidate.platforms,
            metascore=candidate.metascore,
        )

    @property
    def critic_reviews(self) -> List[Review]:
        return [review for review in self.reviews if review.kind == "critic"]

    @property
    def user_reviews(self) -> List[Review]:
        return [review for review in self.reviews if review.kind == "user"]

    def to_dict(self) -> Dict[str, Any]:
        """Serializes to the public JSON shape; absent values stay as None."""
        return {
            'name': self.name,
            'platforms': list(self.platforms),
            'slug': self.slug,
            'url': self.url,
            'metascore': self.metascore,
            'userscore': self.userscore,
            'criticReviewsCount': self.critic_reviews_count,
            'userRatingsCount': self.user_ratings_count,
            'releaseDate': self.release_date,
            'reviews': [review.to_dict() for review in self.reviews],
        }
