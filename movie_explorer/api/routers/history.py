"""Search history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from movie_explorer.api.dependencies import get_history_service
from movie_explorer.domain.models import HistoryEntry, Message, SearchRecordIn
from movie_explorer.logging import logger
from movie_explorer.services.history import HistoryService

router = APIRouter(prefix="/api", tags=["history"])


@router.post("/search", response_model=Message, status_code=status.HTTP_201_CREATED)
async def save_search(
    payload: SearchRecordIn,
    service: HistoryService = Depends(get_history_service),
) -> Message:
    entry = await service.save_search(payload)
    await service.session.commit()
    logger.info("search_history_saved", user_id=entry.user_id, movie_id=entry.movie_id)
    return Message(message="Search history saved")


@router.get("/history/{user_id}", response_model=list[HistoryEntry])
async def get_user_history(
    user_id: str,
    service: HistoryService = Depends(get_history_service),
) -> list[HistoryEntry]:
    return await service.get_user_history(user_id)
