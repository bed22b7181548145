"""FastAPI dependencies resolved from application state."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.config import ExplorerSettings
from movie_explorer.db.session import Database
from movie_explorer.services.history import HistoryService
from movie_explorer.services.movies import MovieRecordService
from movie_explorer.services.top_movies import TopMoviesService


def get_settings(request: Request) -> ExplorerSettings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


def get_history_service(session: AsyncSession = Depends(get_session)) -> HistoryService:
    return HistoryService(session)


def get_movie_service(
    session: AsyncSession = Depends(get_session),
    settings: ExplorerSettings = Depends(get_settings),
) -> MovieRecordService:
    return MovieRecordService(session, public_base_url=str(settings.server.public_base_url))


def get_top_movies_service(request: Request) -> TopMoviesService:
    return request.app.state.top_movies


__all__ = [
    "get_database",
    "get_history_service",
    "get_movie_service",
    "get_session",
    "get_settings",
    "get_top_movies_service",
]
