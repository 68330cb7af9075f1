"""
Configuration system for repository comparison.

Values are layered: built-in defaults, then a YAML or JSON config file, then
REPODM_* environment variables, then command-line overrides.
"""

import os
import copy
import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml

from .core.errors import ConfigError


CONFIG_FILE_NAMES = [
    ".repodiffmatch.yml",
    ".repodiffmatch.yaml",
    "repodiffmatch.yml",
    "repodiffmatch.yaml",
]

# env var suffix -> (config key, parser)
ENV_OVERRIDES: Dict[str, Tuple[str, type]] = {
    "MAX_FILES": ("comparison.max_files", int),
    "MAX_FILE_CHARS": ("comparison.max_file_chars", int),
    "BATCH_SIZE": ("comparison.batch_size", int),
    "FETCH_WORKERS": ("comparison.fetch_workers", int),
    "BRANCH": ("github.branch", str),
    "API_URL": ("github.api_url", str),
    "TIMEOUT": ("github.timeout", float),
    "LOG_LEVEL": ("logging.level", str),
}


class Config:
    """Configuration manager for repository comparison."""

    DEFAULT_CONFIG = {
        "github": {
            "api_url": "https://api.github.com",
            "branch": "main",
            "timeout": 30.0
        },
        "comparison": {
            "max_files": 100,
            "max_file_chars": 50000,
            "batch_size": 10,
            "fetch_workers": 1,
            "cache_targets": True
        },
        "report": {
            "format": "text",  # Options: text, json
            "identical_preview": 3
        },
        "logging": {
            "level": "WARNING",
            "file": False,
            "log_dir": "logs"
        }
    }

    def __init__(self, config_dict: Optional[Dict] = None):
        """Initialize with optional config dictionary."""
        self.config = self._merge_configs(copy.deepcopy(self.DEFAULT_CONFIG), config_dict or {})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """Load configuration from a file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                if path.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f) or {}
                elif path.suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigError(f"Unsupported config format: {path.suffix}")
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise ConfigError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        return cls(data)

    @classmethod
    def find_and_load(cls, start_path: Optional[Path] = None) -> "Config":
        """Find and load configuration from standard locations."""
        current = Path(start_path or Path.cwd()).resolve()

        while True:
            for name in CONFIG_FILE_NAMES:
                config_path = current / name
                if config_path.exists():
                    return cls.from_file(config_path)
            if current == current.parent:
                break
            current = current.parent

        return cls()

    def apply_environment_overrides(
        self,
        environ: Optional[Dict[str, str]] = None,
        prefix: str = "REPODM_"
    ) -> List[str]:
        """
        Apply REPODM_* environment variables on top of the loaded values.

        Returns:
            List of keys that were overridden
        """
        environ = os.environ if environ is None else environ
        applied = []

        for suffix, (key, parser) in ENV_OVERRIDES.items():
            raw = environ.get(prefix + suffix)
            if raw is None or raw == "":
                continue
            try:
                self.set(key, parser(raw.strip()))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {prefix + suffix}: {raw!r}", key=key) from e
            applied.append(key)

        return applied

    def get(self, key: str, default=None):
        """Get configuration value by dot-separated key."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value):
        """Set configuration value by dot-separated key."""
        keys = key.split(".")
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return copy.deepcopy(self.config)

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
