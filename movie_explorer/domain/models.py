"""Pydantic records shared by the client, services and API layers."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel


class _UpstreamRecord(BaseModel):
    """Immutable record parsed from a third-party payload; unknown keys are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class _ApiRecord(BaseModel):
    """Record exchanged with the backend using camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Genre(_UpstreamRecord):
    id: int
    name: str


class Company(_UpstreamRecord):
    id: int
    name: str


class CatalogItem(_UpstreamRecord):
    id: int
    title: str
    overview: str | None = None
    poster_path: str | None = None
    release_date: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def release_year(self) -> int | None:
        if not self.release_date:
            return None
        head = self.release_date.split("-", 1)[0]
        return int(head) if head.isdigit() else None


class MovieDetails(CatalogItem):
    genres: list[Genre] = Field(default_factory=list)
    runtime: int | None = None
    budget: int | None = None
    revenue: int | None = None
    vote_average: float | None = None
    vote_count: int | None = None
    production_companies: list[Company] = Field(default_factory=list)


class CatalogPage(_UpstreamRecord):
    page: int = 1
    results: list[CatalogItem]
    total_pages: int | None = None
    total_results: int | None = None


class MovieRef(_UpstreamRecord):
    """Movie reference embedded in a search-history write."""

    id: int | str
    title: str = Field(min_length=1)
    poster_path: str | None = None


class SearchRecordIn(_ApiRecord):
    user_id: str = Field(min_length=1)
    search_term: str = Field(min_length=1)
    movie: MovieRef


class HistoryEntry(_ApiRecord):
    id: int
    user_id: str
    search_term: str
    movie_id: str
    movie_title: str
    poster_url: str = ""
    searched_at: datetime


Rating = Annotated[float, Field(ge=0, le=5)]


class MovieRecordIn(_ApiRecord):
    title: str = Field(min_length=1)
    ticket_link: str = Field(min_length=1)
    about: str = Field(min_length=1)
    rating: Rating
    poster: str | None = None

    @field_validator("title", "ticket_link", "about")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class MovieRecord(_ApiRecord):
    id: int
    title: str
    ticket_link: str
    about: str
    rating: float
    poster: str | None = None
    created_at: datetime
    updated_at: datetime


class GeneratedMovie(_ApiRecord):
    """One entry of the generated top-movies list."""

    title: str = Field(min_length=1)
    about: str
    poster: str | None = None
    rating: Rating
    ticket_link: str


class ServiceInfo(BaseModel):
    ok: bool = True
    service: str


class Message(BaseModel):
    message: str


GeneratedMovieList = TypeAdapter(list[GeneratedMovie])
HistoryEntryList = TypeAdapter(list[HistoryEntry])
MovieRecordList = TypeAdapter(list[MovieRecord])


__all__ = [
    "CatalogItem",
    "CatalogPage",
    "Company",
    "GeneratedMovie",
    "GeneratedMovieList",
    "Genre",
    "HistoryEntry",
    "HistoryEntryList",
    "Message",
    "MovieDetails",
    "MovieRecord",
    "MovieRecordIn",
    "MovieRecordList",
    "MovieRef",
    "Rating",
    "SearchRecordIn",
    "ServiceInfo",
]
