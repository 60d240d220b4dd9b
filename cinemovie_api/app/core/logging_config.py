"""
Logging setup for the cinemovie API process.

``create_app`` calls ``setup_logging(settings.log_level,
settings.log_file)``, so the level and the optional log file come from
the ``LOG_LEVEL`` and ``LOG_FILE`` environment variables.  Services,
repositories and the error handlers in ``main`` log through
module-level ``logging.getLogger(__name__)`` loggers and inherit the
root handlers installed here.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Install console and optional file handlers on the root logger.

    Does nothing when the root logger already has handlers, which is
    the case under pytest and when ``create_app`` runs more than once
    in a process.

    Parameters
    ----------
    level : str
        Value of ``LOG_LEVEL`` (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Value of ``LOG_FILE``.  When set, records are also appended to
        this file, resolved against the working directory.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
