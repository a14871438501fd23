"""Configuration management for tagdb."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


# Default paths
DEFAULT_TAGDB_DIR = Path.home() / ".tagdb"
DEFAULT_DB_PATH = DEFAULT_TAGDB_DIR / "tags.db"
DEFAULT_CONFIG_PATH = DEFAULT_TAGDB_DIR / "config.yaml"

CONFIG_PATH_ENV = "TAGDB_CONFIG"


def _default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


@dataclass
class Config:
    """Main configuration."""
    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "WARNING"
    create_missing_tags: bool = True  # Default for `item tag` in the CLI

    def __post_init__(self):
        self.db_path = Path(self.db_path).expanduser()
        self.log_level = str(self.log_level).upper()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = _default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        db_path = DEFAULT_DB_PATH
        if "db_path" in data:
            db_path = Path(data["db_path"]).expanduser()

        return cls(
            db_path=db_path,
            log_level=data.get("log_level", "WARNING"),
            create_missing_tags=bool(data.get("create_missing_tags", True)),
        )

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = _default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "db_path": str(self.db_path),
            "log_level": self.log_level,
            "create_missing_tags": self.create_missing_tags,
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global config instance (lazy loaded)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reload_config() -> Config:
    """Reload configuration from disk."""
    global _config
    _config = Config.load()
    return _config
