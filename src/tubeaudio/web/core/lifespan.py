"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tubeaudio.system.structlog_configurator import configure_structlog
from tubeaudio.system.tool_probe import EXTRACTOR_INSTALL_HINT, TRANSCODER_INSTALL_HINT
from tubeaudio.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Handles:
    - Logging configuration from the loaded config
    - Creation of the audio directory
    - Reporting which external tools are installed
    - Cancelling queued conversion jobs on shutdown

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    path_resolver = container.path_resolver()
    path_resolver.get_audio_dir().mkdir(parents=True, exist_ok=True)

    tools = container.tool_probe().status()
    if tools.extractor_present:
        logger.info("Found extractor: %s", tools.extractor)
    else:
        logger.warning("No extractor found (%s)", EXTRACTOR_INSTALL_HINT)
    if tools.transcoder_present:
        logger.info("Found transcoder: %s", tools.transcoder)
    else:
        logger.warning("No transcoder found (%s)", TRANSCODER_INSTALL_HINT)

    logger.info("Serving audio from %s", path_resolver.get_audio_dir())

    try:
        yield
    finally:
        logger.info("Shutting down conversion jobs...")
        await container.conversion_jobs().shutdown()
