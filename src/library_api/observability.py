"""Logging and Logfire setup for the Library API."""

import logging
import sys

import logfire
from fastapi import FastAPI

from .config import ServerConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stderr at ``level``."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def initialize_observability(app: FastAPI, config: ServerConfig) -> bool:
    """
    Configure Logfire and instrument ``app`` when enabled.

    Returns:
        True if instrumentation was installed
    """
    if not config.logfire_enabled:
        logger.debug("Observability disabled via configuration")
        return False

    logfire.configure(
        token=config.logfire_token,
        service_name="library-api",
        environment=config.environment,
        send_to_logfire="if-token-present",
        console=False,
    )
    logfire.instrument_fastapi(app)

    # Forward standard logging records as Logfire logs as well
    logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

    logger.info("Logfire instrumentation enabled (environment=%s)", config.environment)
    return True
