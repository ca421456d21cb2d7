"""
Logging configuration for the listing scraper.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class QuietHttpFilter(logging.Filter):
    """Drop per-request INFO lines from httpx/httpcore on the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        return not record.name.startswith(('httpx', 'httpcore'))


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None):
    """Configure root logger with a console handler and an optional file handler"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.addFilter(QuietHttpFilter())
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger
