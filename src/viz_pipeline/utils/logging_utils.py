"""
Logging utilities for the visualization pipeline.
Provides consistent logging across all stages with colored console output
and an optional file handler.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import colorlog

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("viz_pipeline", log_file="logs/pipeline.log")
        >>> logger.info("Analyzing 120 rows")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def configure_logging(log_config: Dict[str, Any], verbose: bool = False) -> logging.Logger:
    """
    Configure the package root logger from the ``logging`` config section.

    Module loggers created with get_logger() propagate to it, so this
    only needs to run once per process (the CLI calls it on startup).
    """
    file_config = log_config.get('file', {}) or {}
    log_file = file_config.get('path') if file_config.get('enabled') else None
    level = 'DEBUG' if verbose else log_config.get('level', 'INFO')

    return setup_logger(
        'viz_pipeline',
        log_file=log_file,
        level=level,
        colorize=log_config.get('colorize', True)
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers inside the package propagate to the ``viz_pipeline`` root
    logger; anything else gets default handlers on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Column 'Notes' has 12 missing values")
    """
    logger = logging.getLogger(name)

    if name.split('.')[0] == 'viz_pipeline':
        return logger

    if not logger.handlers:
        logger = setup_logger(name)

    return logger
