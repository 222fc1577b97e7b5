import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pythonjsonlogger import jsonlogger

def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = "logs/app.log",
    json_format: bool = True,
    name: str = "app"
) -> logging.Logger:
    """
    Configure and return the application logger with console and file handlers.

    Modules log through ``logging.getLogger(__name__)`` under the ``app``
    package, so configuring that namespace covers all of them.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. If None, only console logging is enabled
        json_format: Whether to use JSON formatting for logs
        name: Logger namespace to configure
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level.upper())
    logger.handlers = []  # Reset existing handlers
    logger.propagate = False

    # Create formatters
    if json_format:
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (if log_file is specified)
    if log_file:
        log_dir = Path(log_file).parent
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=7,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
