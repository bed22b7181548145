"""Screen models composing AsyncResources against fake collaborators."""

from __future__ import annotations

import asyncio

import pytest

from movie_explorer.client.errors import StatusError
from movie_explorer.client.presentation import POSTER_PLACEHOLDER
from movie_explorer.client.screens import (
    HistoryScreen,
    HomeScreen,
    MovieDetailScreen,
    SearchBoardScreen,
    TopMoviesScreen,
)
from movie_explorer.domain.models import CatalogItem, GeneratedMovie, MovieDetails


def _items(*titles: str) -> list[CatalogItem]:
    return [CatalogItem(id=idx, title=title) for idx, title in enumerate(titles, start=1)]


class FakeCatalog:
    image_base_url = "https://images.example/t/p"

    def __init__(self) -> None:
        self.queries: list[str] = []
        self.now_playing_calls = 0
        self.delays: dict[str, float] = {}

    async def now_playing(self):
        self.now_playing_calls += 1
        return _items("N1", "N2", "N3", "N4", "N5")

    async def search_movies(self, query: str = ""):
        self.queries.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        if query == "broken":
            raise StatusError("Failed to search movies (500): upstream down", status_code=500)
        return _items(*(f"{query or 'popular'} {n}" for n in range(1, 5)))

    async def movie_details(self, movie_id):
        return MovieDetails(id=int(movie_id), title="Detail", runtime=90)


class FakeBackend:
    def __init__(self) -> None:
        self.saved: list[tuple[str, str, CatalogItem]] = []
        self.created = []
        self.top_queries: list[str] = []

    async def save_search(self, user_id, search_term, movie):
        self.saved.append((user_id, search_term, movie))
        return "Search history saved"

    async def create_movie(self, record):
        self.created.append(record)
        return record

    async def history(self, user_id):
        return [user_id]

    async def top_movies(self, search=""):
        self.top_queries.append(search)
        return [GeneratedMovie(title="Gen", about="x", rating=4, ticket_link="https://t.example")]


@pytest.mark.asyncio
async def test_home_screen_loads_latest_and_waits_for_submit():
    catalog = FakeCatalog()
    screen = HomeScreen(catalog)
    await screen.settle()

    assert catalog.now_playing_calls == 1
    assert catalog.queries == []
    assert [len(row) for row in screen.latest_rows()] == [4, 1]
    assert screen.search.data is None

    screen.set_search_term("   ")
    assert screen.submit_search() is False

    screen.set_search_term("alien")
    assert screen.submit_search() is True
    await screen.settle()

    assert catalog.queries == ["alien"]
    assert [len(row) for row in screen.result_rows()] == [3, 1]
    screen.dispose()


@pytest.mark.asyncio
async def test_home_screen_resubmission_keeps_latest_result():
    catalog = FakeCatalog()
    catalog.delays = {"first": 0.05, "second": 0.01}
    screen = HomeScreen(catalog)

    screen.set_search_term("first")
    screen.submit_search()
    await asyncio.sleep(0)
    screen.set_search_term("second")
    screen.submit_search()
    await screen.settle()

    assert screen.search.data[0].title == "second 1"


@pytest.mark.asyncio
async def test_home_screen_surfaces_search_error_and_keeps_previous_results():
    catalog = FakeCatalog()
    screen = HomeScreen(catalog)
    screen.set_search_term("alien")
    screen.submit_search()
    await screen.settle()

    screen.set_search_term("broken")
    screen.submit_search()
    await screen.settle()

    assert screen.search.error.status_code == 500
    assert screen.search.data[0].title == "alien 1"


@pytest.mark.asyncio
async def test_search_board_blank_submit_lists_popular():
    catalog = FakeCatalog()
    screen = SearchBoardScreen(catalog, FakeBackend(), user_id="user123")
    screen.submit_search()
    await screen.settle()

    assert catalog.queries == [""]
    assert screen.search.data[0].title == "popular 1"


@pytest.mark.asyncio
async def test_search_board_custom_movies_and_comments():
    screen = SearchBoardScreen(FakeCatalog(), FakeBackend(), user_id="user123")

    assert screen.add_custom_movie(title="", about="x", ticket_link="y") is None
    movie = screen.add_custom_movie(
        title=" Local Film ", about="Indie", ticket_link="https://tickets.example"
    )
    assert movie is not None
    assert movie.title == "Local Film"
    assert screen.custom_movies == [movie]

    assert screen.add_comment(movie.id, "   ") is False
    assert screen.add_comment(movie.id, "Loved it") is True
    assert screen.add_comment(movie.id, "Again!") is True
    assert screen.comments_for(movie.id) == ["Loved it", "Again!"]
    assert screen.selected_movie_id == movie.id
    assert screen.comments_for("unknown") == []
    await screen.settle()


@pytest.mark.asyncio
async def test_search_board_saves_search_and_publishes_custom_movie():
    backend = FakeBackend()
    screen = SearchBoardScreen(FakeCatalog(), backend, user_id="user123")
    screen.set_search_term("inception")
    screen.submit_search()
    await screen.settle()
    screen.set_search_term("something else")
    movie = CatalogItem(id=27205, title="Inception")

    message = await screen.save_search(movie)
    assert message == "Search history saved"
    assert backend.saved == [("user123", "inception", movie)]

    custom = screen.add_custom_movie(title="Local", about="Indie", ticket_link="https://t.example")
    record = await screen.publish_custom_movie(custom, rating=4)
    assert record.ticket_link == "https://t.example"
    assert record.poster is None
    await screen.settle()


@pytest.mark.asyncio
async def test_detail_history_and_top_movies_screens():
    backend = FakeBackend()
    detail = MovieDetailScreen(FakeCatalog(), 12)
    history = HistoryScreen(backend, "user123")
    top = TopMoviesScreen(backend)

    await asyncio.gather(detail.settle(), history.settle(), top.settle())

    assert detail.view.title == "Detail"
    assert detail.view.subtitle == "N/A • 90m"
    assert detail.view.poster is None
    assert history.history.data == ["user123"]
    assert top.movies.data is None
    assert backend.top_queries == []

    top.generate(" heist ")
    await top.settle()
    assert backend.top_queries == ["heist"]
    assert top.movies.data[0].title == "Gen"


@pytest.mark.asyncio
async def test_disposed_screen_stops_updating():
    catalog = FakeCatalog()
    screen = HomeScreen(catalog)
    screen.dispose()
    await screen.settle()

    assert screen.latest.data is None
    assert screen.submit_search() is False


@pytest.mark.asyncio
async def test_search_board_saves_title_when_browsing_popular_listing():
    backend = FakeBackend()
    screen = SearchBoardScreen(FakeCatalog(), backend, user_id="user123")
    screen.set_search_term("typed but not submitted")
    movie = CatalogItem(id=7, title="Popular Pick")

    await screen.save_search(movie)

    assert backend.saved == [("user123", "Popular Pick", movie)]
    await screen.settle()


@pytest.mark.asyncio
async def test_grid_posters_use_catalog_image_base():
    screen = HomeScreen(FakeCatalog())
    await screen.settle()

    with_poster = CatalogItem(id=1, title="A", poster_path="/a.jpg")
    without_poster = CatalogItem(id=2, title="B")
    assert screen.poster(with_poster) == "https://images.example/t/p/w300/a.jpg"
    assert screen.poster(without_poster) == POSTER_PLACEHOLDER
    screen.dispose()
