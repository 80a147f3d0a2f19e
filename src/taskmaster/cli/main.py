# src/taskmaster/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the HTTP API with uvicorn
until interrupted.
"""

from __future__ import annotations

import logging

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if settings.access_log else logging.WARNING
    )

    logger.info("Starting %s... (log file %s)", settings.app_name, log_file)

    state = create_initial_state(settings=settings)
    app = create_app(state)

    # log_config=None: uvicorn loggers propagate into our handlers.
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=settings.access_log,
    )
    logger.info("Bye.")


if __name__ == "__main__":
    main()
