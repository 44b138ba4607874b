"""Run the broker with uvicorn on the configured host and port."""

from __future__ import annotations

import logging

import uvicorn

from meeting_broker.core.config import get_settings
from meeting_broker.core.logging import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting meeting broker on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "meeting_broker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
