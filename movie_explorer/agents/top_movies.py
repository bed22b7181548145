"""Free-text generation agent behind the top-movies feature."""

from __future__ import annotations

from pydantic_ai import Agent

from movie_explorer.agents.model_factory import build_model_spec
from movie_explorer.config import LLMSettings


class TopMoviesAgent:
    """Thin wrapper that sends one prompt and returns the raw reply text.

    The underlying pydantic-ai agent is built on first use so the API can start
    without LLM credentials; a missing configuration then fails that request only.
    """

    def __init__(self, llm_settings: LLMSettings, agent: Agent[None, str] | None = None) -> None:
        self._llm_settings = llm_settings
        self._agent = agent

    @property
    def agent(self) -> Agent[None, str]:
        if self._agent is None:
            self._agent = Agent(
                model=build_model_spec(self._llm_settings),
                name="TopMovies",
                instructions=(
                    "You recommend movies. Reply only with raw JSON, "
                    "no prose and no markdown fences."
                ),
                model_settings={"timeout": float(self._llm_settings.request_timeout_seconds)},
            )
        return self._agent

    async def generate(self, prompt: str) -> str:
        result = await self.agent.run(prompt)
        return result.output


__all__ = ["TopMoviesAgent"]
