"""Logging setup for the asyncchunk package logger."""

import logging
from typing import Optional, Union

from asyncchunk.config import config

PACKAGE_LOGGER = "asyncchunk"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None,
                      handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Attach a handler to the package logger.

    Args:
        level: Log level (defaults to config.log_level)
        handler: Handler to attach (defaults to a stderr StreamHandler)
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level if level is not None else config.log_level.upper())
    
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    
    # Replace a handler installed by an earlier call
    for existing in list(logger.handlers):
        if getattr(existing, '_asyncchunk_handler', False):
            logger.removeHandler(existing)
    handler._asyncchunk_handler = True
    logger.addHandler(handler)
    return logger
