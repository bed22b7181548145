"""Append-only search history."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.db.models import SearchHistory
from movie_explorer.domain.models import HistoryEntry, SearchRecordIn
from movie_explorer.services.exceptions import ValidationFailed
from movie_explorer.utils.datetime import ensure_utc

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
DEFAULT_HISTORY_LIMIT = 100


def history_poster_url(poster_path: str | None) -> str:
    if not poster_path:
        return ""
    return f"{POSTER_BASE_URL}/{poster_path.lstrip('/')}"


class HistoryService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save_search(self, record: SearchRecordIn) -> SearchHistory:
        movie = record.movie
        entry = SearchHistory(
            user_id=record.user_id,
            search_term=record.search_term.strip(),
            movie_id=str(movie.id),
            movie_title=movie.title,
            poster_url=history_poster_url(movie.poster_path),
            movie_payload=movie.model_dump(mode="json"),
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_user_history(
        self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[HistoryEntry]:
        if not (user_id or "").strip():
            raise ValidationFailed("userId is required.")
        stmt = (
            select(SearchHistory)
            .where(SearchHistory.user_id == user_id)
            .order_by(SearchHistory.searched_at.desc(), SearchHistory.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        entries = []
        for row in result.scalars().all():
            entry = HistoryEntry.model_validate(row)
            entries.append(entry.model_copy(update={"searched_at": ensure_utc(entry.searched_at)}))
        return entries


__all__ = ["HistoryService", "history_poster_url"]
