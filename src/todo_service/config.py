"""
Application configuration

Related classes:
  - src.server.dependencies: builds the repository and logger from this config
  - src.server.run: reads the server host/port
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class DatabaseConfig:
    """SQLite settings"""

    path: str = "data/todoApplication.db"


@dataclass
class Config:
    """Application settings"""

    server: ServerConfig = None  # type: ignore
    database: DatabaseConfig = None  # type: ignore

    # logging
    log_level: str = "INFO"
    log_file: str = "logs/todo_app.log"

    def __post_init__(self):
        if self.server is None:
            self.server = ServerConfig()
        if self.database is None:
            self.database = DatabaseConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """Load settings from a YAML file.

        Args:
            config_path: file to read (defaults to config/app_config.yaml)

        Returns:
            Config: loaded settings, or the defaults when the file is missing
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        if not Path(config_path).exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        server_data = yaml_data.get("server", {})
        database_data = yaml_data.get("database", {})
        log_data = yaml_data.get("log", {})

        return cls(
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=int(server_data.get("port", 3000)),
            ),
            database=DatabaseConfig(
                path=database_data.get("path", "data/todoApplication.db"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_app.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load settings from environment variables"""
        return cls(
            server=ServerConfig(
                host=os.getenv("TODO_APP_HOST", "0.0.0.0"),
                port=int(os.getenv("TODO_APP_PORT", "3000")),
            ),
            database=DatabaseConfig(
                path=os.getenv("TODO_APP_DB_PATH", "data/todoApplication.db"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/todo_app.log"),
        )
