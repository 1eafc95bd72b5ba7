"""Logging configuration for applications built on kalman_forecast.

Library modules only create loggers; handlers are installed here, once, by
the application.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> None:
    """Configure root logger to log to stdout and optionally a log file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers.append(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    logging.debug("Logging initialised. Log file: %s", log_file)
