"""Client for this project's REST backend (history, movie records, top movies)."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from movie_explorer.client.http import JsonHttpClient
from movie_explorer.config import BackendSettings
from movie_explorer.domain.models import (
    CatalogItem,
    GeneratedMovie,
    GeneratedMovieList,
    HistoryEntry,
    HistoryEntryList,
    Message,
    MovieRecord,
    MovieRecordIn,
    MovieRecordList,
)


class BackendClient(JsonHttpClient):
    service_name = "backend"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: BackendSettings | None = None,
    ) -> None:
        self._settings = settings or BackendSettings()
        super().__init__(http_client, timeout=self._settings.request_timeout_seconds)

    async def save_search(self, user_id: str, search_term: str, movie: CatalogItem) -> str:
        payload = {
            "userId": user_id,
            "searchTerm": search_term,
            "movie": {
                "id": movie.id,
                "title": movie.title,
                "poster_path": movie.poster_path,
            },
        }
        body = await self._request("POST", self._url("/search"), json=payload, operation="save search")
        return self._parse(Message, body, operation="save search").message

    async def history(self, user_id: str) -> list[HistoryEntry]:
        body = await self._request(
            "GET",
            self._url(f"/history/{quote(user_id, safe='')}"),
            operation="fetch search history",
        )
        return self._parse(HistoryEntryList, body, operation="fetch search history")

    async def create_movie(self, record: MovieRecordIn) -> MovieRecord:
        body = await self._request(
            "POST",
            self._url("/movies"),
            json=record.model_dump(by_alias=True, exclude_none=True),
            operation="create movie",
        )
        return self._parse(MovieRecord, body, operation="create movie")

    async def list_movies(self) -> list[MovieRecord]:
        body = await self._request("GET", self._url("/movies"), operation="list movies")
        return self._parse(MovieRecordList, body, operation="list movies")

    async def top_movies(self, search: str = "") -> list[GeneratedMovie]:
        params: dict[str, Any] = {"search": search} if search else {}
        body = await self._request(
            "GET", self._url("/top-movies"), params=params, operation="fetch top movies"
        )
        return self._parse(GeneratedMovieList, body, operation="fetch top movies")

    def _url(self, path: str) -> str:
        return f"{str(self._settings.base_url).rstrip('/')}{path}"


__all__ = ["BackendClient"]
