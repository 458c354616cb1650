"""Logging configuration utilities."""

import json
import logging
import time
from typing import Optional

__all__ = ["JsonFormatter", "setup_logger"]


class JsonFormatter(logging.Formatter):
    """Render each log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
        }
        return json.dumps(payload, ensure_ascii=False)


def setup_logger(
    name: str,
    level: Optional[str] = None,
    format_type: str = "text",
    verbose: bool = True,
) -> logging.Logger:
    """Configure and return a logger writing to stderr.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR) or None for default
        format_type: Output format: "text" or "json"
        verbose: Default to INFO when True, WARNING otherwise

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("snpthin", format_type="json")
        >>> logger.info("Reading input.beagle")
        {"level": "INFO", "message": "Reading input.beagle", ...}
    """
    logger = logging.getLogger(name)

    formatter: logging.Formatter
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("[%(levelname)s] %(message)s")

    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
        logger.propagate = False
    for handler in logger.handlers:
        handler.setFormatter(formatter)

    level_name = (level or ("INFO" if verbose else "WARNING")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    return logger
