import logging

import uvicorn

from .app import create_app
from .config import Settings
from .logs import configure_logging

logger = logging.getLogger("scoreboard")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info("Starting on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
