# src/todo_sessions/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one connector in the main thread:
- MCP over stdio (default; what agent clients launch),
- console REPL (TODO_CONNECTOR=console).
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = settings.data_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (connector=%s)...", settings.app_name, settings.connector)

    state = create_initial_state(settings=settings)

    try:
        if settings.connector == "console":
            from ..connectors.console_connector import run_console_loop

            run_console_loop(state)
        else:
            from ..connectors.mcp_connector import run_mcp_stdio

            run_mcp_stdio(state)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye. sessions=%d", state.store.count_sessions())


if __name__ == "__main__":
    main()
