"""User-recorded movie endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from movie_explorer.api.dependencies import get_movie_service
from movie_explorer.domain.models import MovieRecord, MovieRecordIn
from movie_explorer.logging import logger
from movie_explorer.services.movies import MovieRecordService

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.post("", response_model=MovieRecord, status_code=status.HTTP_201_CREATED)
async def create_movie(
    payload: MovieRecordIn,
    service: MovieRecordService = Depends(get_movie_service),
) -> MovieRecord:
    record = await service.create_movie(payload)
    await service.session.commit()
    logger.info("movie_record_created", movie_id=record.id, title=record.title)
    return record


@router.get("", response_model=list[MovieRecord])
async def list_movies(service: MovieRecordService = Depends(get_movie_service)) -> list[MovieRecord]:
    return await service.list_movies()
