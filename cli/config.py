#!/usr/bin/env python3
"""
Configuration Management Module for tokenmsg CLI

Handles hierarchical configuration loading, environment variable mapping
and profile selection for the command line tools.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

# Configuration file locations in order of precedence (highest to lowest)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / '.tokenmsg.yml',
    Path.cwd() / '.tokenmsg.json',
    Path.home() / '.tokenmsg' / 'config.yml',
    Path.home() / '.tokenmsg' / 'config.json',
]

# Environment variable prefix
ENV_PREFIX = 'TOKENMSG_'

# Default configuration values
DEFAULT_CONFIG = {
    # CLI behavior
    'cli': {
        'output_format': 'table',  # table, json, yaml
        'verbose': 0,
    },

    # Validator settings
    'validator': {
        'validator_id': 'tokenmsg_cli_validator',
        'log_level': 'WARNING',
    },
}

# Configuration profiles
PROFILES = {
    'strict': {
        'cli': {'output_format': 'json', 'verbose': 0},
        'validator': {'log_level': 'WARNING'},
    },
    'development': {
        'cli': {'output_format': 'table', 'verbose': 2},
        'validator': {'log_level': 'DEBUG'},
    },
}


class ConfigurationError(Exception):
    """Raised when a configuration source cannot be used."""
    pass


class ConfigurationManager:
    """Manages hierarchical configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None, profile: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit configuration file path
            profile: Configuration profile to load (strict, development)
        """
        self.logger = logging.getLogger('tokenmsg-cli.config')
        self.config_file = config_file
        self.profile = profile
        self._config_cache: Optional[Dict[str, Any]] = None
        self._config_sources: List[str] = []

    @property
    def sources(self) -> List[str]:
        """Configuration sources applied, lowest precedence first."""
        self.load()
        return list(self._config_sources)

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from all sources in hierarchical order.

        Returns:
            Merged configuration dictionary
        """
        if self._config_cache is not None:
            return self._config_cache

        configs = []
        self._config_sources = []

        # 1. Start with default configuration
        configs.append(copy.deepcopy(DEFAULT_CONFIG))
        self._config_sources.append("defaults")

        # 2. Apply profile if specified
        if self.profile:
            if self.profile not in PROFILES:
                raise ConfigurationError(f"Unknown profile: {self.profile}")
            configs.append(PROFILES[self.profile])
            self._config_sources.append(f"profile:{self.profile}")
            self.logger.debug(f"Applied profile: {self.profile}")

        # 3. Load configuration files
        if self.config_file:
            path = Path(self.config_file)
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")
            configs.append(self._load_config_file(path))
            self._config_sources.append(f"file:{path}")
        else:
            for config_path in CONFIG_SEARCH_PATHS:
                if config_path.exists():
                    configs.append(self._load_config_file(config_path))
                    self._config_sources.append(f"file:{config_path}")
                    self.logger.debug(f"Loaded config from {config_path}")
                    break  # Use first found config file

        # 4. Apply environment variables
        env_config = self._load_environment_variables()
        if env_config:
            configs.append(env_config)
            self._config_sources.append("environment")

        self._config_cache = self._deep_merge(*configs)
        return self._config_cache

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file."""
        try:
            with open(path, 'r') as f:
                if path.suffix in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                elif path.suffix == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unknown config file format: {path}")
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        The first segment after the prefix names the section and the rest
        names the key, e.g. TOKENMSG_CLI_OUTPUT_FORMAT -> cli.output_format.
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            config_key = key[len(ENV_PREFIX):].lower()
            section, _, option = config_key.partition('_')
            if not section or not option:
                self.logger.debug(f"Ignoring environment variable {key}")
                continue

            env_config.setdefault(section, {})[option] = self._parse_env_value(value)

        return env_config

    def _parse_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def _deep_merge(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge dictionaries, later ones overriding earlier ones."""
        result: Dict[str, Any] = {}
        for config in configs:
            for key, value in config.items():
                if isinstance(value, dict) and isinstance(result.get(key), dict):
                    result[key] = self._deep_merge(result[key], value)
                else:
                    result[key] = copy.deepcopy(value)
        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dotted key, e.g. ``cli.output_format``.
        """
        current: Any = self.load()
        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def invalidate(self):
        """Drop the cached configuration so the next access reloads it."""
        self._config_cache = None
