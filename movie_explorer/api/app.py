"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_explorer.agents.top_movies import TopMoviesAgent
from movie_explorer.api.errors import register_error_handlers
from movie_explorer.api.routers import setup_routers
from movie_explorer.config import ExplorerSettings
from movie_explorer.db.session import Database
from movie_explorer.domain.models import ServiceInfo
from movie_explorer.logging import logger
from movie_explorer.services.top_movies import TextGenerator, TopMoviesService

SERVICE_NAME = "movie-explorer"


def create_app(
    settings: ExplorerSettings,
    *,
    database: Database | None = None,
    generator: TextGenerator | None = None,
) -> FastAPI:
    """Wire settings, storage and the text generator into a new app."""

    database = database or Database(settings.database)
    generator = generator or TopMoviesAgent(settings.llm)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.create_all()
        logger.info("api_starting", environment=settings.environment)
        yield
        await database.dispose()
        logger.info("api_stopped")

    app = FastAPI(title="Movie Explorer API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.top_movies = TopMoviesService(generator, settings.top_movies)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(setup_routers())

    @app.get("/", response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        return ServiceInfo(service=SERVICE_NAME)

    return app


__all__ = ["SERVICE_NAME", "create_app"]
