"""
Logging setup for the sync entry points.
"""

import logging
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


def setup_logging(log_level: Union[int, str] = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None,
                  name: str = 'career_data') -> logging.Logger:
    """
    Configure the package logger with a console handler and optional file handler.

    Args:
        log_level: Logging level (int or name such as 'WARNING')
        log_file: Optional path of a log file to append to
        name: Logger to configure

    Returns:
        The configured logger
    """
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()  # Clear existing handlers

    # Console handler writes to stderr
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
