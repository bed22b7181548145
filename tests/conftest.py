"""Shared pytest fixtures for database-backed and HTTP-backed tests."""

from __future__ import annotations

import pytest
import pytest_asyncio

from movie_explorer.config import DatabaseSettings, ExplorerSettings
from movie_explorer.db.session import Database


@pytest.fixture
def settings() -> ExplorerSettings:
    return ExplorerSettings(
        _env_file=None,
        database=DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:"),
        server={"public_base_url": "http://testserver"},
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database)
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as session:
        yield session
