"""
Logging configuration utility.
"""

import logging
import sys
from typing import Dict, Any, Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = 'INFO',
    format_str: str = None,
    log_file: str = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_str: Log message format
        log_file: Optional file to write logs to

    Returns:
        Configured root logger
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # urllib3 logs every connection at DEBUG, including full URLs with webhook secrets
    logging.getLogger('urllib3').setLevel(max(numeric_level, logging.INFO))

    return root_logger


def configure_from_settings(settings: Optional[Dict[str, Any]], verbose: bool = False) -> logging.Logger:
    """
    Configure logging from the 'logging' section of the config file.

    Args:
        settings: Application settings
        verbose: Force DEBUG level

    Returns:
        Configured root logger
    """
    log_settings = (settings or {}).get('logging') or {}
    level = 'DEBUG' if verbose else log_settings.get('level', 'INFO')
    return setup_logging(
        level=level,
        format_str=log_settings.get('format'),
        log_file=log_settings.get('file')
    )
