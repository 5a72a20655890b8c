"""Tests for configuration system."""

import json
import logging
import yaml
import pytest

from kvcrud.config import (
    StorageConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)
from kvcrud.domain.exceptions import ConfigurationError
from kvcrud.infrastructure.storage.sqlite_adapter import SQLiteStorageAdapter
from kvcrud.storage.codecs import JsonCodec


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with no config files on the search path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("KVCRUD_CONFIG_PATH", raising=False)
    set_default_config(None)
    yield tmp_path
    set_default_config(None)


class TestStorageConfig:
    """Test StorageConfig functionality."""

    def test_defaults(self, isolated_env):
        config = StorageConfig()
        assert config.db_path.endswith("data.db")
        assert config.journal_mode == 'WAL'
        assert config.busy_timeout_ms == 5000
        assert config.log_level == 'WARNING'

    def test_to_dict_from_dict(self):
        config = StorageConfig(db_path="/tmp/x.db", journal_mode="DELETE", busy_timeout_ms=10)
        restored = StorageConfig.from_dict(config.to_dict())
        assert restored == config

    def test_from_dict_partial(self):
        config = StorageConfig.from_dict({'db_path': ':memory:', 'log_level': 'debug'})
        assert config.db_path == ':memory:'
        assert config.log_level == 'DEBUG'
        assert config.journal_mode == 'WAL'

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            StorageConfig.from_dict(['db_path'])

    def test_from_dict_rejects_bad_timeout(self):
        with pytest.raises(ConfigurationError):
            StorageConfig.from_dict({'busy_timeout_ms': 'soon'})

    def test_from_dict_rejects_bad_journal_mode(self):
        with pytest.raises(ConfigurationError):
            StorageConfig.from_dict({'journal_mode': 'WAL; DROP TABLE data'})

    def test_from_dict_allows_null_journal_mode(self):
        assert StorageConfig.from_dict({'journal_mode': None}).journal_mode is None


class TestLoad:
    """Test config file discovery and parsing."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({'db_path': 'a.db', 'busy_timeout_ms': 100}))
        config = StorageConfig.load(str(path))
        assert config.db_path == 'a.db'
        assert config.busy_timeout_ms == 100

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'journal_mode': 'TRUNCATE'}))
        assert StorageConfig.load(str(path)).journal_mode == 'TRUNCATE'

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert StorageConfig.load(str(path)).busy_timeout_ms == 5000

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            StorageConfig.load(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("db_path = 'x'")
        with pytest.raises(ConfigurationError):
            StorageConfig.load(str(path))

    def test_bad_journal_mode_in_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("journal_mode: sideways\n")
        with pytest.raises(ConfigurationError):
            StorageConfig.load(str(path))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("db_path: [unclosed")
        with pytest.raises(ConfigurationError):
            StorageConfig.load(str(path))

    def test_env_var(self, isolated_env, monkeypatch):
        path = isolated_env / "env.json"
        path.write_text(json.dumps({'db_path': 'from-env.db'}))
        monkeypatch.setenv("KVCRUD_CONFIG_PATH", str(path))
        assert StorageConfig.load().db_path == 'from-env.db'

    def test_search_path_in_cwd(self, isolated_env):
        (isolated_env / "kvcrud_config.yaml").write_text("db_path: cwd.db\n")
        assert StorageConfig.load().db_path == 'cwd.db'

    def test_no_files_gives_defaults(self, isolated_env):
        config = StorageConfig.load()
        assert config.db_path == str(isolated_env / ".kvcrud" / "data.db")

    @pytest.mark.parametrize("name", ["saved.yaml", "saved.json"])
    def test_save_and_reload(self, tmp_path, name):
        config = StorageConfig(db_path="s.db", busy_timeout_ms=42)
        config.save(str(tmp_path / name))
        assert StorageConfig.load(str(tmp_path / name)) == config

    def test_save_unsupported_format(self, tmp_path):
        with pytest.raises(ConfigurationError):
            StorageConfig().save(str(tmp_path / "config.ini"))


class TestDefaultConfig:
    def test_lazy_load_and_override(self, isolated_env):
        first = get_default_config()
        assert get_default_config() is first
        custom = StorageConfig(db_path=':memory:')
        set_default_config(custom)
        assert get_default_config() is custom


class TestConfigureLogging:
    def test_sets_package_level(self):
        logger = logging.getLogger("kvcrud")
        previous = logger.level
        try:
            configure_logging(StorageConfig(log_level='DEBUG'))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            configure_logging(StorageConfig(log_level='LOUD'))


class TestAdapterFromConfig:
    def test_opens_configured_path(self, tmp_path):
        from dataclasses import dataclass

        @dataclass
        class Item:
            id: int

            def get_id(self) -> int:
                return self.id

        db_path = tmp_path / "cfg.db"
        config = StorageConfig(db_path=str(db_path), journal_mode='DELETE')
        with SQLiteStorageAdapter.from_config(JsonCodec(Item), config) as storage:
            storage.save(Item(id=3))
            assert storage.find_by_id(3) == Item(id=3)
            assert storage._db.fetchone("PRAGMA journal_mode")[0] == "delete"
        assert db_path.exists()
