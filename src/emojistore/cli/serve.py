"""Run the emoji store API with uvicorn."""

from __future__ import annotations

import uvicorn
from loguru import logger

from emojistore.infrastructure import configure_logging, get_settings


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(f"Listening on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "emojistore.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
