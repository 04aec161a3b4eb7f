"""
Logging configuration for the inventory CLI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

class DebugFormatter(logging.Formatter):
    """Console formatter: timestamp, logger name and message, cyan on a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        message = f"[{record.created:.3f}] {record.levelname} {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if sys.stderr.isatty():
            return f"\033[0;36m{message}\033[0m"
        return message

def setup_logging(debug: bool = False, level: str = 'INFO', log_dir: Optional[Path] = None) -> None:
    """Setup logging configuration.

    Args:
        debug: Enable debug logging (overrides ``level``)
        level: Log level name used when not in debug mode
        log_dir: Also write ``inventory.log`` into this directory
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(DebugFormatter())
    root_logger.addHandler(console_handler)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'inventory.log')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)

    # SQL echo is opt-in through the engine, not the log level
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
