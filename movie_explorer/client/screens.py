"""Screen models: the state each screen renders, built from AsyncResources."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from movie_explorer.client.backend import BackendClient
from movie_explorer.client.catalog import CatalogClient
from movie_explorer.client.presentation import DetailView, booking_url, chunked, poster_url
from movie_explorer.client.resource import AsyncResource
from movie_explorer.domain.models import (
    CatalogItem,
    GeneratedMovie,
    HistoryEntry,
    MovieDetails,
    MovieRecord,
    MovieRecordIn,
)
from movie_explorer.logging import logger

LATEST_GRID_COLUMNS = 4
RESULT_GRID_COLUMNS = 3


class Screen:
    """Owns the resources of one mounted screen and releases them together."""

    def __init__(self) -> None:
        self._resources: list[AsyncResource] = []

    def _track(self, resource: AsyncResource) -> AsyncResource:
        self._resources.append(resource)
        return resource

    async def settle(self) -> None:
        for resource in self._resources:
            await resource.wait()

    def dispose(self) -> None:
        for resource in self._resources:
            resource.dispose()


class _LatestAndSearch(Screen):
    def __init__(self, catalog: CatalogClient) -> None:
        super().__init__()
        self._catalog = catalog
        self.search_term = ""
        self._query = ""
        self.latest: AsyncResource[list[CatalogItem]] = self._track(
            AsyncResource(catalog.now_playing, name="latest_movies")
        )
        self.search: AsyncResource[list[CatalogItem]] = self._track(
            AsyncResource(self._run_search, auto_start=False, name="search_movies")
        )

    def set_search_term(self, term: str) -> None:
        self.search_term = term

    def latest_rows(self) -> list[list[CatalogItem]]:
        return chunked(self.latest.data, LATEST_GRID_COLUMNS)

    def result_rows(self) -> list[list[CatalogItem]]:
        return chunked(self.search.data, RESULT_GRID_COLUMNS)

    def poster(self, movie: CatalogItem) -> str | None:
        return poster_url(self._catalog.image_base_url, movie.poster_path)

    @staticmethod
    def booking_link(movie: CatalogItem) -> str:
        return booking_url(movie.title)

    def _run_search(self):
        return self._catalog.search_movies(self._query)


class HomeScreen(_LatestAndSearch):
    """Landing screen: now-playing grid plus submit-only search."""

    def submit_search(self) -> bool:
        """Run the search if the term is not blank; returns whether it ran."""

        term = self.search_term.strip()
        if not term:
            return False
        self._query = term
        self.search.refetch()
        return True


@dataclass(frozen=True, slots=True)
class CustomMovie:
    title: str
    about: str
    ticket_link: str
    poster: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


class SearchBoardScreen(_LatestAndSearch):
    """Search screen with user-added movies, comments and history saving."""

    def __init__(self, catalog: CatalogClient, backend: BackendClient, user_id: str) -> None:
        super().__init__(catalog)
        self._backend = backend
        self.user_id = user_id
        self.custom_movies: list[CustomMovie] = []
        self.comments: dict[str, list[str]] = {}
        self.selected_movie_id: str | None = None

    def submit_search(self) -> None:
        # Blank terms are allowed here and show the popular listing.
        self._query = self.search_term.strip()
        self.search.refetch()

    def add_custom_movie(
        self, *, title: str, about: str, ticket_link: str, poster: str = ""
    ) -> CustomMovie | None:
        if not (title.strip() and about.strip() and ticket_link.strip()):
            return None
        movie = CustomMovie(
            title=title.strip(),
            about=about.strip(),
            ticket_link=ticket_link.strip(),
            poster=poster,
        )
        self.custom_movies.append(movie)
        return movie

    def add_comment(self, movie_id: int | str, text: str) -> bool:
        text = text.strip()
        if not text:
            return False
        key = str(movie_id)
        self.comments.setdefault(key, []).append(text)
        self.selected_movie_id = key
        return True

    def comments_for(self, movie_id: int | str) -> list[str]:
        return list(self.comments.get(str(movie_id), []))

    async def save_search(self, movie: CatalogItem) -> str:
        """Record ``movie`` against the query that produced it."""

        term = self._query or movie.title
        message = await self._backend.save_search(self.user_id, term, movie)
        logger.info("search_saved", user_id=self.user_id, movie_id=movie.id)
        return message

    async def publish_custom_movie(self, movie: CustomMovie, *, rating: float) -> MovieRecord:
        record = MovieRecordIn(
            title=movie.title,
            about=movie.about,
            ticket_link=movie.ticket_link,
            rating=rating,
            poster=movie.poster or None,
        )
        return await self._backend.create_movie(record)


class MovieDetailScreen(Screen):
    def __init__(self, catalog: CatalogClient, movie_id: int | str) -> None:
        super().__init__()
        self._image_base = catalog.image_base_url
        self.movie_id = movie_id
        self.details: AsyncResource[MovieDetails] = self._track(
            AsyncResource(lambda: catalog.movie_details(movie_id), name="movie_details")
        )

    @property
    def view(self) -> DetailView | None:
        if self.details.data is None:
            return None
        return DetailView.from_details(self.details.data, image_base=self._image_base)


class HistoryScreen(Screen):
    def __init__(self, backend: BackendClient, user_id: str) -> None:
        super().__init__()
        self.user_id = user_id
        self.history: AsyncResource[list[HistoryEntry]] = self._track(
            AsyncResource(lambda: backend.history(user_id), name="search_history")
        )

    def refresh(self) -> None:
        self.history.refetch()


class TopMoviesScreen(Screen):
    def __init__(self, backend: BackendClient) -> None:
        super().__init__()
        self._backend = backend
        self._query = ""
        self.movies: AsyncResource[list[GeneratedMovie]] = self._track(
            AsyncResource(self._run, auto_start=False, name="top_movies")
        )

    def generate(self, search: str = "") -> None:
        self._query = search.strip()
        self.movies.refetch()

    def _run(self):
        return self._backend.top_movies(self._query)


__all__ = [
    "CustomMovie",
    "HistoryScreen",
    "HomeScreen",
    "MovieDetailScreen",
    "Screen",
    "SearchBoardScreen",
    "TopMoviesScreen",
]
