from __future__ import annotations

import pytest

from movie_explorer.client.errors import ErrorInfo
from movie_explorer.client.presentation import (
    POSTER_PLACEHOLDER,
    DetailView,
    booking_url,
    chunked,
    format_millions,
    poster_url,
    section_status,
)
from movie_explorer.client.resource import ResourceState
from movie_explorer.domain.models import MovieDetails

IMAGE_BASE = "https://images.example/t/p/"


def test_chunked_splits_rows():
    assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunked(None, 3) == []
    with pytest.raises(ValueError):
        chunked([1], 0)


def test_poster_url_uses_given_image_base_and_placeholder():
    assert poster_url(IMAGE_BASE, "/x.jpg") == "https://images.example/t/p/w300/x.jpg"
    assert poster_url(IMAGE_BASE, None) == POSTER_PLACEHOLDER
    assert poster_url(IMAGE_BASE, "", placeholder=None) is None


def test_booking_url_encodes_title():
    assert booking_url(" Spider-Man: No Way Home ") == (
        "https://in.bookmyshow.com/explore/movies-mumbai?q=Spider-Man%3A%20No%20Way%20Home"
    )
    with pytest.raises(ValueError):
        booking_url("   ")


def test_section_status_prefers_loading_then_error():
    error = ErrorInfo(message="boom")
    assert section_status(ResourceState(data=[1], loading=True)) == "loading"
    assert section_status(ResourceState(data=[1], error=error)) == "error"
    assert section_status(ResourceState(data=[])) == "empty"
    assert section_status(ResourceState()) == "empty"
    assert section_status(ResourceState(data=[1])) == "ready"


def test_detail_view_formats_fields():
    movie = MovieDetails(
        id=550,
        title="Fight Club",
        overview=None,
        poster_path="/fc.jpg",
        release_date="1999-10-15",
        runtime=139,
        budget=63_000_000,
        revenue=None,
        vote_average=8.4,
        vote_count=100,
        genres=[{"id": 18, "name": "Drama"}, {"id": 53, "name": "Thriller"}],
    )

    view = DetailView.from_details(movie, image_base=IMAGE_BASE)

    assert view.poster == "https://images.example/t/p/w500/fc.jpg"
    assert view.subtitle == "1999 • 139m"
    assert view.rating == "8/10 (100 votes)"
    assert view.overview == "N/A"
    assert view.genres == "Drama • Thriller"
    assert view.budget == "$63.0 million"
    assert view.revenue == "N/A"
    assert view.companies == "N/A"
    assert format_millions(100_853_753) == "$100.9 million"
