"""Top-movies list produced by the generative text service."""

from __future__ import annotations

import json
import re
from typing import Protocol

from pydantic import ValidationError

from movie_explorer.config import TopMoviesSettings
from movie_explorer.domain.models import GeneratedMovie, GeneratedMovieList
from movie_explorer.logging import logger
from movie_explorer.services.exceptions import InvalidUpstreamFormat, UpstreamUnavailable

INVALID_FORMAT_MESSAGE = "Invalid upstream response format."
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*?)\n?```$", re.DOTALL)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


def build_prompt(search: str, *, count: int = 5) -> str:
    return (
        f'List {count} movies related to "{search}" in JSON format.\n'
        "Include for each movie: title, a short about/description, poster (image url if possible), "
        "rating (0-5), ticketLink (URL for ticket booking; use a real or example link).\n"
        "Reply ONLY with the JSON array."
    )


def strip_code_fence(raw: str) -> str:
    text = raw.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group("body").strip()
    return text


def parse_generated_movies(raw: str) -> list[GeneratedMovie]:
    """Parse the reply into movies or raise :class:`InvalidUpstreamFormat`."""

    try:
        payload = json.loads(strip_code_fence(raw))
    except ValueError as exc:
        logger.warning("top_movies_parse_error", error=str(exc))
        raise InvalidUpstreamFormat(INVALID_FORMAT_MESSAGE, details=raw) from exc

    if not isinstance(payload, list):
        logger.warning("top_movies_shape_error", payload_type=type(payload).__name__)
        raise InvalidUpstreamFormat(INVALID_FORMAT_MESSAGE, details=raw)

    try:
        return GeneratedMovieList.validate_python(payload)
    except ValidationError as exc:
        logger.warning("top_movies_shape_error", errors=exc.error_count())
        raise InvalidUpstreamFormat(INVALID_FORMAT_MESSAGE, details=raw) from exc


class TopMoviesService:
    def __init__(self, generator: TextGenerator, settings: TopMoviesSettings | None = None) -> None:
        self._generator = generator
        self._settings = settings or TopMoviesSettings()

    async def top_movies(self, search: str = "") -> list[GeneratedMovie]:
        search = (search or "").strip()
        prompt = build_prompt(search, count=self._settings.movie_count)
        try:
            raw = await self._generator.generate(prompt)
        except Exception as exc:
            logger.exception("top_movies_generation_failed", search=search)
            raise UpstreamUnavailable(f"Generative service request failed: {exc}") from exc

        logger.debug("top_movies_raw_response", search=search, raw=raw)
        movies = parse_generated_movies(raw)
        if len(movies) != self._settings.movie_count:
            logger.warning(
                "top_movies_unexpected_count",
                expected=self._settings.movie_count,
                received=len(movies),
            )
        return movies


__all__ = [
    "INVALID_FORMAT_MESSAGE",
    "TextGenerator",
    "TopMoviesService",
    "build_prompt",
    "parse_generated_movies",
    "strip_code_fence",
]
