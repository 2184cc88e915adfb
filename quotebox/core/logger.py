"""
Rich-powered logging for Quotebox.
Importing this module sets up the handler, the level is applied later from the config.
"""

import logging
from rich.logging import RichHandler
import sys

FORMAT = "%(message)s"

logging.basicConfig(
    level="INFO",
    format=FORMAT,
    datefmt="[%X]",
    handlers=[RichHandler(
        markup=True,
        rich_tracebacks=True
    )]
)

logging.captureWarnings(True)

log = logging.getLogger("quotebox")

# Names accepted by LOG_LVL, mapped to the logging module's levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": logging.CRITICAL + 1,
}


def parse_log_level(level: str) -> int:
    """
    Turn a level name into a logging level. Unknown names fall back to INFO.
    """
    return LOG_LEVELS.get((level or '').upper(), logging.INFO)


def set_log_level(level: str):
    log.setLevel(parse_log_level(level))


# noinspection PyShadowingBuiltins,PyUnusedLocal
def except_handler(type, value, tb):
    log.exception(str(value), exc_info=(type, value, tb))


sys.excepthook = except_handler
