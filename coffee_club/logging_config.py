"""
Logging setup for the Coffee Club API.

Call `setup_logging()` once at startup (main.py does). Everything under the
`coffee_club` logger follows LOG_LEVEL; the libraries the service runs on
are held at WARNING unless LOG_LEVEL is DEBUG, so SQL echo and per-request
access lines do not drown dialog and recipe events.

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
"""
import logging
import os
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries this service runs on
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "uvicorn.access",
    "slowapi",
)


def setup_logging(level: str = None) -> None:
    """
    Configure the root handler and the coffee_club logger.

    Args:
        level: Level name; falls back to LOG_LEVEL, then INFO. Unknown names
               are treated as INFO.
    """
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = logging.getLevelName(name)
    if not isinstance(numeric_level, int):
        name, numeric_level = "INFO", logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("coffee_club").setLevel(numeric_level)

    library_level = logging.DEBUG if numeric_level == logging.DEBUG else logging.WARNING
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(library_level)

    logging.getLogger(__name__).debug("Logging configured at %s level", name)
