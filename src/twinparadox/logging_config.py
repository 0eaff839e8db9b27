"""
Logging Configuration
=====================
One `twinparadox` logger for the whole application. Module loggers
(`logging.getLogger(__name__)`) propagate into it.

The tutor's HTTP stack (google-genai on top of httpx) logs every request at
INFO, which would drown the physics messages, so those loggers are held at
WARNING unless the application itself runs at DEBUG.
"""
import logging
import sys
from typing import Optional, Union

APP_LOGGER = "twinparadox"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s (%(threadName)s): %(message)s"
TIME_FORMAT = "%H:%M:%S"

# Chatty libraries underneath the tutor client
THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "google_genai", "urllib3")


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger and return it.

    Args:
        level: A logging constant or its name ("debug", "INFO", ...).
        log_file: Optional path. The file is overwritten on each run and also
            records the thread name, since tutor requests run off the GUI thread.
    """
    level = _as_level(level)
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)

    # Calling twice (tests, restarts) must not duplicate output
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=TIME_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=TIME_FORMAT))
        logger.addHandler(file_handler)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger.debug(f"Logging at {logging.getLevelName(level)}, file: {log_file or 'none'}.")
    return logger
