"""Tests covering HistoryService helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import select

from movie_explorer.db.models import SearchHistory
from movie_explorer.domain.models import SearchRecordIn
from movie_explorer.services.exceptions import ValidationFailed
from movie_explorer.services.history import HistoryService, history_poster_url
from movie_explorer.utils.datetime import utc_now


def _record(user_id: str, term: str, movie_id: int, poster: str | None = None) -> SearchRecordIn:
    return SearchRecordIn.model_validate(
        {
            "userId": user_id,
            "searchTerm": term,
            "movie": {"id": movie_id, "title": f"Movie {movie_id}", "poster_path": poster},
        }
    )


@pytest.mark.asyncio
async def test_save_search_builds_poster_url(session):
    service = HistoryService(session)

    entry = await service.save_search(_record("user123", " dune ", 438631, "/dune.jpg"))

    stored = (
        await session.execute(select(SearchHistory).where(SearchHistory.id == entry.id))
    ).scalar_one()
    assert stored.search_term == "dune"
    assert stored.movie_id == "438631"
    assert stored.poster_url == "https://image.tmdb.org/t/p/w500/dune.jpg"
    assert stored.movie_payload["title"] == "Movie 438631"


@pytest.mark.asyncio
async def test_history_is_most_recent_first_and_scoped_to_user(session):
    service = HistoryService(session)
    older = await service.save_search(_record("user123", "first", 1))
    older.searched_at = utc_now() - timedelta(minutes=5)
    await service.save_search(_record("user123", "second", 2))
    await service.save_search(_record("someone-else", "other", 3))
    await session.flush()

    history = await service.get_user_history("user123")

    assert [entry.search_term for entry in history] == ["second", "first"]
    assert history[0].poster_url == ""
    assert history[0].searched_at.tzinfo is not None


def test_history_poster_url_handles_missing_path():
    assert history_poster_url(None) == ""
    assert history_poster_url("abc.jpg") == "https://image.tmdb.org/t/p/w500/abc.jpg"


@pytest.mark.asyncio
async def test_history_requires_user_id(session):
    with pytest.raises(ValidationFailed) as exc_info:
        await HistoryService(session).get_user_history("   ")

    assert exc_info.value.status_code == 400
