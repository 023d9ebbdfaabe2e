"""Logging setup for the modgraph command line."""

from __future__ import annotations

import logging
import sys

HANDLER_NAME = "modgraph-cli"

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int = 0) -> None:
    """Send log records to stderr at a level chosen by ``-v`` count.

    0 shows warnings, 1 adds info, 2 or more adds debug. Calling it again
    replaces the handler installed by the previous call, so the handler
    always writes to the ``sys.stderr`` current at the time of the call.
    """
    level = _LEVELS.get(verbosity, logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(levelname)s %(name)s: %(message)s")
    )
    root_logger.addHandler(console_handler)
