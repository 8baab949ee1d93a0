"""Library API - process entry point.

Loads configuration, sets up logging and serves the FastAPI app with uvicorn.
"""

import logging

import uvicorn

from .api import create_app
from .config import get_config
from .observability import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()
    configure_logging(config.effective_log_level)

    app = create_app(config)

    logger.info("Starting Library API on %s:%d", config.host, config.port)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.effective_log_level.lower(),
    )


if __name__ == "__main__":
    main()
