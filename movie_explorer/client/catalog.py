"""TMDB catalog client (search, listings, details)."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from movie_explorer.client.http import JsonHttpClient, read_secret
from movie_explorer.config import CatalogSettings
from movie_explorer.domain.models import CatalogItem, CatalogPage, MovieDetails


class CatalogClient(JsonHttpClient):
    """Read-only access to the movie catalog.

    Every call is a single request: non-success statuses, transport failures
    and unexpected payloads surface as :class:`~movie_explorer.client.errors.ClientError`
    subclasses without retrying.
    """

    service_name = "catalog"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._settings = settings or CatalogSettings()
        super().__init__(http_client, timeout=self._settings.request_timeout_seconds)

    async def search_movies(self, query: str = "") -> list[CatalogItem]:
        """Search by title; a blank query falls back to the popular listing."""

        query = (query or "").strip()
        if not query:
            return await self.popular_movies()
        payload = await self._request(
            "GET",
            self._url("/search/movie"),
            params={"query": query},
            operation="search movies",
        )
        return self._parse(CatalogPage, payload, operation="search movies").results

    async def popular_movies(self) -> list[CatalogItem]:
        payload = await self._request(
            "GET",
            self._url("/discover/movie"),
            params={"sort_by": "popularity.desc"},
            operation="fetch popular movies",
        )
        return self._parse(CatalogPage, payload, operation="fetch popular movies").results

    async def now_playing(self, page: int = 1) -> list[CatalogItem]:
        payload = await self._request(
            "GET",
            self._url("/movie/now_playing"),
            params={"language": self._settings.language, "page": page},
            operation="fetch now playing movies",
        )
        return self._parse(CatalogPage, payload, operation="fetch now playing movies").results

    async def movie_details(self, movie_id: int | str) -> MovieDetails:
        movie_id = str(movie_id).strip()
        if not movie_id:
            raise ValueError("movie_id must not be empty")
        payload = await self._request(
            "GET",
            self._url(f"/movie/{quote(movie_id, safe='')}"),
            operation="fetch movie details",
        )
        return self._parse(MovieDetails, payload, operation="fetch movie details")

    @property
    def image_base_url(self) -> str:
        return str(self._settings.image_base_url).rstrip("/")

    def _url(self, path: str) -> str:
        return f"{str(self._settings.base_url).rstrip('/')}{path}"

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        token = read_secret(self._settings.api_key)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers


__all__ = ["CatalogClient"]
