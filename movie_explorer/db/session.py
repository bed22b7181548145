"""Async SQLAlchemy session management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from movie_explorer.config import DatabaseSettings
from movie_explorer.db.base import Base
from movie_explorer.db import models as _models  # noqa: F401  registers tables on Base.metadata
from movie_explorer.logging import logger


class Database:
    """Lazy SQLAlchemy engine/session factory wrapper."""

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        self.settings = settings or DatabaseSettings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _engine_options(self) -> dict[str, Any]:
        db_cfg = self.settings
        if db_cfg.dsn.startswith("sqlite"):
            options: dict[str, Any] = {"echo": db_cfg.echo}
            if ":memory:" in db_cfg.dsn:
                # One shared connection, otherwise every session sees an empty database.
                options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
            return options
        return {
            "echo": db_cfg.echo,
            "pool_size": db_cfg.pool_size,
            "max_overflow": db_cfg.max_overflow,
            "pool_recycle": db_cfg.pool_recycle,
            "pool_pre_ping": db_cfg.pool_pre_ping,
        }

    def _ensure_engine(self) -> None:
        if self._engine is None:
            self._engine = create_async_engine(self.settings.dsn, **self._engine_options())
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.info("db_engine_initialized", dsn=self.settings.dsn)

    @property
    def engine(self) -> AsyncEngine:
        self._ensure_engine()
        assert self._engine is not None
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        self._ensure_engine()
        assert self._session_factory is not None
        return self._session_factory

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        factory = self.session_factory
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


__all__ = ["Database"]
