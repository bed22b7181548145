"""Document-style tables for search history and user-recorded movies."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from movie_explorer.db.base import Base
from movie_explorer.utils.datetime import utc_now


class SearchHistory(Base):
    __tablename__ = "search_history"
    __table_args__ = (Index("ix_search_history_user_searched", "user_id", "searched_at"),)

    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    search_term: Mapped[str] = mapped_column(String(256), nullable=False)
    movie_id: Mapped[str] = mapped_column(String(64), nullable=False)
    movie_title: Mapped[str] = mapped_column(String(512), nullable=False)
    poster_url: Mapped[str] = mapped_column(String(1024), default="", nullable=False)
    searched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    # Raw movie payload as posted by the client.
    movie_payload: Mapped[dict | None] = mapped_column(JSON)


class MovieEntry(Base):
    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    ticket_link: Mapped[str] = mapped_column(String(2048), nullable=False)
    about: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    poster: Mapped[str | None] = mapped_column(String(2048))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


__all__ = ["MovieEntry", "SearchHistory"]
