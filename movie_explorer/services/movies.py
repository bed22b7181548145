"""User-recorded movie entries."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.db.models import MovieEntry
from movie_explorer.domain.models import MovieRecord, MovieRecordIn
from movie_explorer.utils.datetime import ensure_utc

ABSOLUTE_PREFIXES = ("http://", "https://", "data:")


class MovieRecordService:
    def __init__(self, session: AsyncSession, *, public_base_url: str) -> None:
        self.session = session
        self.public_base_url = public_base_url.rstrip("/")

    async def create_movie(self, payload: MovieRecordIn) -> MovieRecord:
        entry = MovieEntry(
            title=payload.title,
            ticket_link=payload.ticket_link,
            about=payload.about,
            rating=payload.rating,
            poster=payload.poster or None,
        )
        self.session.add(entry)
        await self.session.flush()
        return self._to_record(entry)

    async def list_movies(self) -> list[MovieRecord]:
        stmt = select(MovieEntry).order_by(MovieEntry.created_at.desc(), MovieEntry.id.desc())
        result = await self.session.execute(stmt)
        return [self._to_record(entry) for entry in result.scalars().all()]

    def resolve_poster(self, poster: str | None) -> str | None:
        if not poster:
            return None
        if poster.startswith(ABSOLUTE_PREFIXES):
            return poster
        return f"{self.public_base_url}/{poster.lstrip('/')}"

    def _to_record(self, entry: MovieEntry) -> MovieRecord:
        return MovieRecord(
            id=entry.id,
            title=entry.title,
            ticket_link=entry.ticket_link,
            about=entry.about,
            rating=entry.rating,
            poster=self.resolve_poster(entry.poster),
            created_at=ensure_utc(entry.created_at),
            updated_at=ensure_utc(entry.updated_at),
        )


__all__ = ["MovieRecordService"]
