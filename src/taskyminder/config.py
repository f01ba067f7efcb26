"""
Application configuration

Values come from config/app_config.yaml (or a path given explicitly) or from
TASKYMINDER_* environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


@dataclass
class DatabaseConfig:
    """SQLite settings"""

    # None falls back to $TASKYMINDER_DB_PATH, then data/tasks.db
    path: Optional[str] = None


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class Config:
    """Application settings"""

    database: DatabaseConfig = None  # type: ignore
    server: ServerConfig = None  # type: ignore

    log_level: str = "INFO"
    log_file: str = "logs/taskyminder.log"

    def __post_init__(self):
        if self.database is None:
            self.database = DatabaseConfig()
        if self.server is None:
            self.server = ServerConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """Load settings from YAML.

        Args:
            config_path: settings file (default: config/app_config.yaml)

        Returns:
            Config: settings; read from the environment when the default file does not exist

        Raises:
            FileNotFoundError: an explicit config_path does not exist
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
            if not config_path.exists():
                return cls.from_env()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        database_data = yaml_data.get("database") or {}
        server_data = yaml_data.get("server") or {}
        log_data = yaml_data.get("log") or {}

        return cls(
            database=DatabaseConfig(path=database_data.get("path")),
            server=ServerConfig(
                host=server_data.get("host", "127.0.0.1"),
                port=int(server_data.get("port", 8000)),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/taskyminder.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load settings from environment variables."""
        return cls(
            database=DatabaseConfig(path=os.getenv("TASKYMINDER_DB_PATH")),
            server=ServerConfig(
                host=os.getenv("TASKYMINDER_HOST", "127.0.0.1"),
                port=int(os.getenv("TASKYMINDER_PORT", "8000")),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/taskyminder.log"),
        )
