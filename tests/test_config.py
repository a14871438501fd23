"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

from tagdb import config as config_module
from tagdb.config import DEFAULT_DB_PATH, Config


class TestConfig:
    """Test the Config dataclass."""

    def test_defaults(self):
        """A fresh config uses the default database path."""
        config = Config()
        assert config.db_path == DEFAULT_DB_PATH
        assert config.log_level == "WARNING"
        assert config.create_missing_tags is True

    def test_missing_file(self, temp_dir):
        """Loading a missing file yields defaults."""
        config = Config.load(temp_dir / "absent.yaml")
        assert config.db_path == DEFAULT_DB_PATH

    def test_load(self, temp_dir):
        """Values are read from YAML."""
        path = temp_dir / "config.yaml"
        path.write_text(
            "db_path: ~/photos/tags.db\n"
            "log_level: debug\n"
            "create_missing_tags: false\n"
        )

        config = Config.load(path)

        assert config.db_path == Path("~/photos/tags.db").expanduser()
        assert config.log_level == "DEBUG"
        assert config.create_missing_tags is False

    def test_empty_file(self, temp_dir):
        """An empty YAML file yields defaults."""
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert Config.load(path) == Config()

    def test_save_roundtrip(self, temp_dir):
        """Saved configs load back unchanged."""
        path = temp_dir / "sub" / "config.yaml"
        original = Config(db_path=temp_dir / "x.db", log_level="INFO", create_missing_tags=False)

        original.save(path)

        assert Config.load(path) == original

    def test_env_override(self, temp_dir, monkeypatch):
        """TAGDB_CONFIG points at another config file."""
        path = temp_dir / "env.yaml"
        path.write_text(f"db_path: {temp_dir / 'env.db'}\n")
        monkeypatch.setenv(config_module.CONFIG_PATH_ENV, str(path))
        monkeypatch.setattr(config_module, "_config", None)

        assert config_module.get_config().db_path == temp_dir / "env.db"
        assert config_module.reload_config().db_path == temp_dir / "env.db"
