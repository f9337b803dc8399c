import logging
import sys

import uvicorn

from brincapark.config import get_settings
from brincapark.main import configure_logging, create_app

logger = logging.getLogger("brincapark")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.database_url:
        logger.critical("DATABASE_URL is not set, refusing to start")
        sys.exit(1)

    logger.info("Starting server on http://%s:%s", settings.host, settings.port)
    # uvicorn exits non-zero by itself when the lifespan startup fails
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
