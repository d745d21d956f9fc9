"""
Logging configuration for the voice order app.

Usage:
    from logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
APP_LOGGERS = ["catalog", "matchers", "order_parser", "prompts", "app_voice_order"]


def setup_logging(level: str = None) -> str:
    """
    Configure logging for the application and return the level applied.

    Args:
        level: Log level name. Falls back to LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    # Streamlit is chatty at INFO
    if level != "DEBUG":
        logging.getLogger("streamlit").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
    return level
