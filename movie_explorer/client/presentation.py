"""Formatting helpers shared by the screen models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence, TypeVar
from urllib.parse import quote

from movie_explorer.client.resource import ResourceState
from movie_explorer.domain.models import MovieDetails

T = TypeVar("T")

POSTER_PLACEHOLDER = "https://via.placeholder.com/100x145.png?text=No+Image"
BOOKING_SEARCH_URL = "https://in.bookmyshow.com/explore/movies-{city}?q={title}"
NOT_AVAILABLE = "N/A"

SectionStatus = Literal["loading", "error", "empty", "ready"]


def chunked(items: Sequence[T] | None, size: int) -> list[list[T]]:
    """Split ``items`` into grid rows of at most ``size`` entries."""

    if size < 1:
        raise ValueError("size must be positive")
    if not items:
        return []
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def poster_url(
    image_base: str,
    poster_path: str | None,
    *,
    size: str = "w300",
    placeholder: str | None = POSTER_PLACEHOLDER,
) -> str | None:
    if not poster_path:
        return placeholder
    return f"{image_base.rstrip('/')}/{size}/{poster_path.lstrip('/')}"


def booking_url(title: str, city: str = "mumbai") -> str:
    """Ticket search page with the movie title pre-filled."""

    cleaned = (title or "").strip()
    if not cleaned:
        raise ValueError("title is required to build a booking link")
    return BOOKING_SEARCH_URL.format(city=quote(city.strip().lower()), title=quote(cleaned, safe=""))


def section_status(state: ResourceState[Sequence[T]] | ResourceState[T]) -> SectionStatus:
    """Decide what a section shows.

    A spinner wins over everything, then the error indicator. Stale data stays
    in ``state.data`` but is not shown while an error is present.
    """

    if state.loading:
        return "loading"
    if state.error is not None:
        return "error"
    data = state.data
    if data is None:
        return "empty"
    if isinstance(data, Sequence) and not isinstance(data, str) and len(data) == 0:
        return "empty"
    return "ready"


def format_millions(amount: int | None) -> str:
    if not amount:
        return NOT_AVAILABLE
    return f"${amount / 1_000_000:.1f} million"


def format_runtime(minutes: int | None) -> str:
    if not minutes:
        return NOT_AVAILABLE
    return f"{minutes}m"


def join_names(names: Sequence[str]) -> str:
    return " • ".join(name for name in names if name) or NOT_AVAILABLE


@dataclass(frozen=True, slots=True)
class DetailView:
    title: str
    poster: str | None
    subtitle: str
    rating: str
    overview: str
    genres: str
    budget: str
    revenue: str
    companies: str

    @classmethod
    def from_details(cls, movie: MovieDetails, *, image_base: str) -> DetailView:
        year = str(movie.release_year) if movie.release_year else NOT_AVAILABLE
        if movie.vote_average is not None:
            rating = f"{round(movie.vote_average)}/10 ({movie.vote_count or 0} votes)"
        else:
            rating = NOT_AVAILABLE
        return cls(
            title=movie.title,
            poster=poster_url(image_base, movie.poster_path, size="w500", placeholder=None),
            subtitle=f"{year} • {format_runtime(movie.runtime)}",
            rating=rating,
            overview=movie.overview or NOT_AVAILABLE,
            genres=join_names([genre.name for genre in movie.genres]),
            budget=format_millions(movie.budget),
            revenue=format_millions(movie.revenue),
            companies=join_names([company.name for company in movie.production_companies]),
        )


__all__ = [
    "DetailView",
    "SectionStatus",
    "booking_url",
    "chunked",
    "format_millions",
    "format_runtime",
    "join_names",
    "poster_url",
    "section_status",
]
