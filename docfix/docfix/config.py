"""
Configuration loader for docfix.yaml files.

Example docfix.yaml:

    fixture_path: ./fixtures
    log_level: DEBUG
    mongo:
      uri: mongodb://localhost:27017
      database: app_test
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "docfix.yaml"
CONFIG_ENV_VAR = "DOCFIX_CONFIG"


@dataclass
class DocfixConfig:
    """Configuration loaded from docfix.yaml."""
    fixture_path: Optional[str] = None
    log_level: str = "INFO"
    mongo_uri: Optional[str] = None
    mongo_database: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocfixConfig":
        mongo = data.get("mongo") or {}
        return cls(
            fixture_path=data.get("fixture_path"),
            log_level=str(data.get("log_level", "INFO")).upper(),
            mongo_uri=mongo.get("uri"),
            mongo_database=mongo.get("database"),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DocfixConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    def mongo_client(self):
        """Create a PyMongo client for ``mongo_uri``."""
        from pymongo import MongoClient

        if not self.mongo_uri:
            raise ConfigError("mongo.uri is not configured")
        return MongoClient(self.mongo_uri)

    def mongo_db(self):
        """Return the configured database from a new client."""
        if not self.mongo_database:
            raise ConfigError("mongo.database is not configured")
        return self.mongo_client()[self.mongo_database]


def find_config_file(start: Path) -> Optional[Path]:
    """Return the nearest docfix.yaml in start or its ancestors, if any."""
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Optional[Union[str, Path]] = None) -> DocfixConfig:
    """
    Load configuration from docfix.yaml.

    Search order:
    1. Provided config_path
    2. DOCFIX_CONFIG environment variable
    3. ./docfix.yaml in current directory
    4. docfix.yaml in parent directories (walk up the tree)

    Args:
        config_path: Optional explicit path to config file

    Returns:
        DocfixConfig instance; defaults when no file is found

    Raises:
        FileNotFoundError: If an explicitly given file does not exist
        ConfigError: If the file does not hold a mapping
    """
    path = config_path or os.environ.get(CONFIG_ENV_VAR) or find_config_file(Path.cwd())
    if path is None:
        return DocfixConfig()
    return DocfixConfig.from_yaml(path)


__all__ = ["DocfixConfig", "load_config", "find_config_file", "CONFIG_FILENAME", "CONFIG_ENV_VAR"]
