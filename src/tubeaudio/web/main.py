"""tubeaudio web application entry point for uvicorn (``tubeaudio.web.main:app``)."""

import logging

from tubeaudio.config import ConfigManager
from tubeaudio.system.structlog_configurator import configure_structlog
from tubeaudio.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config = ConfigManager().load()
configure_structlog(config)

# Our middleware logs every request already
logging.getLogger("uvicorn.access").disabled = True
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

app = create_app()
