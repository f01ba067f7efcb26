"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; entry points call
``setup_logger`` once to route the root logger to stderr and, for the
server, to a log file as well.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger, replacing any handlers set up earlier.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: also write to this file, creating its directory; stderr only when None

    Raises:
        ValueError: unknown log level
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
