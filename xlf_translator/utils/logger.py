import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Setup and return a logger with a console handler and an optional file handler.

    The level defaults to ``LOG_LEVEL`` (INFO when unset). A file handler is
    attached only when ``LOG_DIR`` is set.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_format = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        log_dir = os.getenv("LOG_DIR")
        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path / f"{name}.log", encoding="utf-8")
            file_handler.setLevel(level)
            file_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(file_format)
            logger.addHandler(file_handler)

    return logger
