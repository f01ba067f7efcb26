"""Application-wide settings and logging setup."""

from .config import Config, DatabaseConfig, ServerConfig
from .logger import setup_logger

__all__ = ["Config", "DatabaseConfig", "ServerConfig", "setup_logger"]
