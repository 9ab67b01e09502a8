"""Run the crypto server with uvicorn: ``python -m crypto_server``."""

from __future__ import annotations

import logging

import uvicorn

from .config import ConfigError, get_server_config
from .main import ENDPOINTS, app

logger = logging.getLogger("crypto_server")


def main() -> None:
    try:
        settings = get_server_config()
    except ConfigError as exc:
        raise SystemExit(f"Error: {exc}") from exc
    logging.basicConfig(level=settings.log_level)
    logger.info("Server is running on %s:%s", settings.listen.host, settings.listen.port)
    logger.info("Available endpoints:")
    for method, path, description in ENDPOINTS:
        logger.info("  %s %s - %s", method, path, description)
    uvicorn.run(app, host=settings.listen.host, port=settings.listen.port)


if __name__ == "__main__":
    main()
