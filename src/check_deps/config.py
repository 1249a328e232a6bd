# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Configuration loading and validation for check dependency resolution."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".check_deps.yml"

# Node built-in modules available in the check runtime
DEFAULT_BUILTIN_MODULES = [
    "assert",
    "buffer",
    "crypto",
    "dns",
    "fs",
    "path",
    "querystring",
    "readline",
    "stream",
    "string_decoder",
    "timers",
    "tls",
    "url",
    "util",
    "zlib",
]


class ConfigurationError(Exception):
    """Raised when configuration validation fails critically."""

    pass


class Config:
    """Configuration for check dependency resolution.

    Loads configuration from .check_deps.yml with validation and defaults.
    """

    DEFAULTS: Dict[str, Any] = {
        "builtin_modules": DEFAULT_BUILTIN_MODULES,
        "allowed_packages": [],
        "max_dependency_files": 0,  # 0 = no limit
        "max_file_size_kb": 1024,
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses default location.
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        self.config_path = config_path
        self._config: Dict[str, Any] = {}
        self._load_config()

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "Config":
        """Build a configuration from a dict, validated like a loaded file.

        Raises:
            ConfigurationError: If values is not a dict.
        """
        if not isinstance(values, dict):
            raise ConfigurationError(f"Configuration must be a dictionary, got {type(values)}")
        config = cls.__new__(cls)
        config.config_path = None
        config._config = copy.deepcopy(cls.DEFAULTS)
        config._validate_and_merge(values)
        return config

    def _load_config(self) -> None:
        """Load and validate configuration from file."""
        self._config = copy.deepcopy(self.DEFAULTS)

        if not self.config_path.exists():
            logger.info(f"Configuration file not found at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.warning(
                f"Error parsing configuration file {self.config_path}: {e}, using defaults"
            )
            return
        except OSError as e:
            logger.warning(
                f"Error reading configuration file {self.config_path}: {e}, using defaults"
            )
            return

        if loaded_config is None:
            logger.warning("Configuration file is empty, using defaults")
            return

        if not isinstance(loaded_config, dict):
            logger.warning(
                f"Configuration file must contain a YAML dictionary, "
                f"got {type(loaded_config)}, using defaults"
            )
            return

        self._validate_and_merge(loaded_config)

    def _validate_and_merge(self, loaded_config: Dict[str, Any]) -> None:
        """Validate loaded configuration and merge with defaults.

        Invalid parameters are logged as warnings and defaults are used.
        """
        for key, value in loaded_config.items():
            if key not in self.DEFAULTS:
                logger.warning(f"Unknown configuration parameter '{key}', ignoring")
                continue

            if not self._validate_parameter(key, value):
                logger.warning(
                    f"Invalid value for '{key}': {value}, using default {self.DEFAULTS[key]}"
                )
                continue

            self._config[key] = copy.deepcopy(value)

    def _validate_parameter(self, key: str, value: Any) -> bool:
        """Validate a configuration parameter.

        Returns:
            True if valid, False if invalid
        """
        expected_type = type(self.DEFAULTS[key])
        # bool is a subclass of int; reject it for numeric parameters
        if not isinstance(value, expected_type) or isinstance(value, bool):
            return False

        if key == "max_dependency_files":
            return value >= 0
        elif key == "max_file_size_kb":
            return value > 0
        elif key in ("builtin_modules", "allowed_packages"):
            return all(isinstance(name, str) and name for name in value)

        return True

    def with_allowed_packages(self, names: Iterable[str]) -> "Config":
        """Return a copy whose allowed_packages also include names."""
        clone = copy.copy(self)
        clone._config = copy.deepcopy(self._config)
        for name in names:
            if name not in clone._config["allowed_packages"]:
                clone._config["allowed_packages"].append(name)
        return clone

    def allowed_modules(self) -> Set[str]:
        """External names the check runtime provides: built-ins and allowed packages."""
        return set(self.builtin_modules) | set(self.allowed_packages)

    @property
    def builtin_modules(self) -> List[str]:
        """Built-in module names available in the runtime."""
        value = self._config["builtin_modules"]
        assert isinstance(value, list)
        return value

    @property
    def allowed_packages(self) -> List[str]:
        """Third-party package names available in the runtime."""
        value = self._config["allowed_packages"]
        assert isinstance(value, list)
        return value

    @property
    def max_dependency_files(self) -> int:
        """Maximum files a single resolution may collect (0 = unlimited)."""
        value = self._config["max_dependency_files"]
        assert isinstance(value, int)
        return value

    @property
    def max_file_size_kb(self) -> int:
        """Largest source file read from disk, in kilobytes."""
        value = self._config["max_file_size_kb"]
        assert isinstance(value, int)
        return value
