"""
Logging utilities for the canvas engine.
"""
import logging
import sys
from config import LOG_LEVEL, LOG_FILE

ROOT_LOGGER_NAME = "prompt_canvas"

_logger = None


def setup_logger(name: str = ROOT_LOGGER_NAME, level: str = None) -> logging.Logger:
    """Set up and return the project logger."""
    global _logger

    if _logger is not None:
        return _logger

    level = level or LOG_LEVEL
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if logger.handlers:
        _logger = logger
        return logger

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    # File handler
    try:
        file_handler = logging.FileHandler(LOG_FILE)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not set up file logging: {e}")

    _logger = logger
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the project logger.

    Module names become children ("prompt_canvas.state.grid") so they share
    the handlers installed by setup_logger().
    """
    root = _logger if _logger is not None else setup_logger()
    if not name or name == root.name:
        return root
    return root.getChild(name)
