# src/task_manager/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import PersistenceError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.debug("Logging to %s", log_file)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except PersistenceError as e:
        logger.error("Cannot open task database %s: %s", settings.tasks_db_path, e)
        return 1

    try:
        run_console_loop(state)
    finally:
        state.task_store.close()
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
