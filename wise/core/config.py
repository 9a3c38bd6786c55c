"""Configuration management for Wise.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import io
import os
import configparser
from pathlib import Path
from typing import Optional, Dict, Tuple

from wise.utils.atomic import atomic_write


def split_key(key: str) -> Tuple[str, str]:
    """
    Split a dotted key into (section, option).

    Keys without a dot live in the 'core' section.
    """
    if '.' in key:
        section, option = key.split('.', 1)
    else:
        section, option = 'core', key
    if not section or not option:
        raise ValueError(f"Invalid config key: {key!r}")
    return section, option


def global_config_path() -> Path:
    """Location of the global config, overridable with WISE_GLOBAL_CONFIG."""
    override = os.environ.get('WISE_GLOBAL_CONFIG')
    if override:
        return Path(override)
    return Path.home() / '.wiseconfig'


class Config:
    """
    Manages Wise configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.wiseconfig
    - Repository config: .wise/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self.global_config_path = global_config_path()
        self._global_config = None
        self._repo_config = None

    @staticmethod
    def _load(path: Optional[Path]) -> configparser.ConfigParser:
        config = configparser.ConfigParser(interpolation=None)
        if path and path.exists():
            config.read(path, encoding='utf-8')
        return config

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._load(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config

    def get(self, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (WISE_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value

        Args:
            key: Dotted key (e.g., 'user.name')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        section, option = split_key(key)

        env_key = f"WISE_{section.upper()}_{option.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, option):
            return self.repo_config.get(section, option)

        if self.global_config.has_option(section, option):
            return self.global_config.get(section, option)

        return fallback

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    @staticmethod
    def _save(config: configparser.ConfigParser, path: Path) -> None:
        buffer = io.StringIO()
        config.write(buffer)
        atomic_write(path, buffer.getvalue().encode('utf-8'))

    def set(self, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            key: Dotted key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        section, option = split_key(key)
        config, config_path = self._target(global_config)

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, option, value)
        self._save(config, config_path)

    def unset(self, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        section, option = split_key(key)
        config, config_path = self._target(global_config)

        if not config.has_option(section, option):
            return False

        config.remove_option(section, option)

        if not config.options(section):
            config.remove_section(section)

        self._save(config, config_path)
        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, str]:
        """
        List all configuration values as dotted keys.

        Repository values override global ones.
        """
        result = {}

        if not repo_only:
            for section in self.global_config.sections():
                for option, value in self.global_config.items(section):
                    result[f"{section}.{option}"] = value

        if not global_only and self.repo_config:
            for section in self.repo_config.sections():
                for option, value in self.repo_config.items(section):
                    result[f"{section}.{option}"] = value

        return dict(sorted(result.items()))

    def get_user_identity(self) -> tuple:
        """
        Get user name and email for commits.

        Returns:
            Tuple of (name, email), either may be None
        """
        return self.get('user.name'), self.get('user.email')
