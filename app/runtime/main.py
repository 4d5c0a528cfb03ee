import logging

import uvicorn

from app.core.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("Serving %s on %s:%s", settings.APP_NAME, settings.APP_HOST, settings.APP_PORT)
    logger.info("Health check: http://localhost:%s/api/health", settings.APP_PORT)
    if settings.APP_HOST == "0.0.0.0":
        logger.info("Server is accessible from all network interfaces")
    uvicorn.run(
        "app.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    main()
