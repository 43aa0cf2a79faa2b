# MIT License (see LICENSE)
"""
Logging setup for applications embedding the chain simulator.

The library itself only obtains ``logging.getLogger("chain_sim")`` and emits
DEBUG records; call ``setup_logging()`` once to see them:

    from chain_sim.logging_config import setup_logging

    logger = setup_logging(level="DEBUG")
    logger.info("Starting chain simulation.")
"""
from __future__ import annotations
import logging
import logging.handlers

from .util import log_level_from_env

LOGGER_NAME = "chain_sim"


def setup_logging(
    log_file: str | None = None,
    quiet: bool = False,
    level: str | None = None,
) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)

    if logger.handlers:
        if quiet:
            logger.handlers = [h for h in logger.handlers
                               if not isinstance(h, logging.StreamHandler)
                               or isinstance(h, logging.FileHandler)]
        return logger

    logger.setLevel(level.upper() if level else log_level_from_env())

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(log_file,
                                                            maxBytes=5_000_000,
                                                            backupCount=0)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
