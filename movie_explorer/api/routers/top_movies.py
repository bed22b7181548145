"""Generated top-movies endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from movie_explorer.api.dependencies import get_top_movies_service
from movie_explorer.domain.models import GeneratedMovie
from movie_explorer.services.top_movies import TopMoviesService

router = APIRouter(prefix="/api", tags=["top-movies"])


@router.get("/top-movies", response_model=list[GeneratedMovie])
async def top_movies(
    search: str = Query(default="", max_length=200),
    service: TopMoviesService = Depends(get_top_movies_service),
) -> list[GeneratedMovie]:
    return await service.top_movies(search)
