"""Application entrypoint."""

from __future__ import annotations

import uvicorn

from movie_explorer.api.app import create_app
from movie_explorer.config import load_settings
from movie_explorer.logging import configure_logging, logger


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info(
        "server_starting",
        host=settings.server.host,
        port=settings.server.port,
        environment=settings.environment,
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)


if __name__ == "__main__":
    run()
