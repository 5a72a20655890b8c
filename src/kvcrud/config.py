"""Configuration management for kvcrud."""

import os
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from .domain.exceptions import ConfigurationError
from .storage.database import JOURNAL_MODES, get_default_db_path


@dataclass
class StorageConfig:
    """SQLite store configuration."""

    db_path: str = field(default_factory=lambda: str(get_default_db_path()))
    journal_mode: Optional[str] = 'WAL'
    busy_timeout_ms: int = 5000
    log_level: str = 'WARNING'

    # Default config file locations (in priority order)
    CONFIG_SEARCH_PATHS = [
        './kvcrud_config.yaml',
        './kvcrud_config.json',
        '~/.kvcrud/config.yaml',
        '~/.kvcrud/config.json',
    ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'db_path': self.db_path,
            'journal_mode': self.journal_mode,
            'busy_timeout_ms': self.busy_timeout_ms,
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StorageConfig':
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config must be a mapping, got {type(data).__name__}"
            )
        try:
            busy_timeout_ms = int(data.get('busy_timeout_ms', 5000))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid busy_timeout_ms: {exc}") from exc
        journal_mode = data.get('journal_mode', 'WAL')
        if journal_mode is not None and str(journal_mode).upper() not in JOURNAL_MODES:
            raise ConfigurationError(
                f"Unsupported journal_mode: {journal_mode}; expected one of {sorted(JOURNAL_MODES)}"
            )
        return cls(
            db_path=str(data.get('db_path', get_default_db_path())),
            journal_mode=journal_mode,
            busy_timeout_ms=busy_timeout_ms,
            log_level=str(data.get('log_level', 'WARNING')).upper(),
        )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'StorageConfig':
        """
        Load configuration from file.

        Search order:
        1. Explicit config_path parameter
        2. KVCRUD_CONFIG_PATH environment variable
        3. Default search paths (project, user home)

        Args:
            config_path: Optional explicit path to config file

        Returns:
            StorageConfig instance
        """
        if config_path:
            return cls._load_from_file(config_path)

        env_path = os.getenv('KVCRUD_CONFIG_PATH')
        if env_path and Path(env_path).exists():
            return cls._load_from_file(env_path)

        for path_str in cls.CONFIG_SEARCH_PATHS:
            path = Path(path_str).expanduser()
            if path.exists():
                return cls._load_from_file(str(path))

        # No config file found, use defaults
        return cls()

    @classmethod
    def _load_from_file(cls, filepath: str) -> 'StorageConfig':
        """Load configuration from a specific file."""
        path = Path(filepath)

        if not path.exists():
            raise ConfigurationError(f"Config file not found: {filepath}")

        with open(path, 'r') as f:
            content = f.read()

        try:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(content)
            elif path.suffix == '.json':
                data = json.loads(content)
            else:
                raise ConfigurationError(f"Unsupported config format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot parse config file {filepath}: {exc}") from exc

        # An empty YAML file parses to None
        return cls.from_dict(data or {})

    def save(self, filepath: str) -> None:
        """
        Save configuration to file.

        Args:
            filepath: Path to save config file
        """
        path = Path(filepath)
        data = self.to_dict()

        if path.suffix in ['.yaml', '.yml']:
            with open(path, 'w') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        elif path.suffix == '.json':
            with open(path, 'w') as f:
                json.dump(data, f, indent=2)
        else:
            raise ConfigurationError(f"Unsupported config format: {path.suffix}")


def configure_logging(config: StorageConfig) -> None:
    """Apply ``config.log_level`` to the ``kvcrud`` logger hierarchy."""
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {config.log_level}")
    logging.getLogger("kvcrud").setLevel(level)


# Global default configuration instance
_default_config: Optional[StorageConfig] = None


def get_default_config() -> StorageConfig:
    """
    Get the default configuration instance.

    Lazily loads configuration on first access.

    Returns:
        StorageConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = StorageConfig.load()
    return _default_config


def set_default_config(config: Optional[StorageConfig]) -> None:
    """
    Set the default configuration instance.

    Args:
        config: StorageConfig to use as default, or None to reload lazily
    """
    global _default_config
    _default_config = config
