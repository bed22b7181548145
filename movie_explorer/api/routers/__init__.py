from fastapi import APIRouter

from movie_explorer.api.routers import history, movies, top_movies


def setup_routers() -> APIRouter:
    router = APIRouter()
    router.include_router(history.router)
    router.include_router(movies.router)
    router.include_router(top_movies.router)
    return router


__all__ = ["setup_routers"]
