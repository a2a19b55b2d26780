"""
Logging utilities
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Name of the package logger, parent of every module logger in scalespace
PACKAGE_LOGGER = 'scalespace'

# Libraries whose records are only shown from WARNING up
QUIET_LOGGERS = ('concurrent.futures',)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    package_level: Optional[int] = None
) -> logging.Logger:
    """
    Send log records to stdout and, optionally, to a file.

    level applies to the handlers and to other libraries, package_level
    (defaults to level) to the scalespace loggers, so pyramid internals can
    be traced at DEBUG without flooding the output with library records.
    """
    if package_level is None:
        package_level = level
    handler_level = min(level, package_level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(handler_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(package_level)
    return package_logger
