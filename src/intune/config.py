"""
Configuration management for InTune.

Loads and validates TOML config against strict bounds.
Scoring weights and tier thresholds are engine constants, not config.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import toml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when config validation fails."""
    pass


class Config:
    """Configuration loader and validator."""

    PARAM_BOUNDS = {
        "ranking": {
            "min_score": (0, 100),
            "max_results": (1, 200),
        },
        "suggestions": {
            "max_suggestions": (1, 24),
        },
        "logging": {
            "level": ("DEBUG", "INFO", "WARNING", "ERROR"),
        },
    }

    DEFAULT_CONFIG = {
        "config_version": "1.0",
        "ranking": {
            "min_score": 40,
            "max_results": 20,
        },
        "suggestions": {
            "max_suggestions": 10,
        },
        "logging": {
            "level": "INFO",
        },
    }

    def __init__(self, config_dict: Dict[str, Any]):
        """Initialize config from dictionary."""
        self.data = config_dict
        self._validate()

    @classmethod
    def defaults(cls) -> "Config":
        """Config built purely from DEFAULT_CONFIG."""
        return cls(copy.deepcopy(cls.DEFAULT_CONFIG))

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Load config from TOML file.

        Args:
            config_path: Path to intune.toml. If None, uses INTUNE_CONFIG_PATH env var
                        or defaults to configs/intune.toml.

        Returns:
            Config instance.

        Raises:
            ConfigError: If config is invalid or unreadable.
        """
        if config_path is None:
            config_path = os.getenv("INTUNE_CONFIG_PATH", "configs/intune.toml")

        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return cls.defaults()

        try:
            config_dict = toml.load(config_path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}")

        logger.info(f"Loaded config from {config_path}")
        return cls(config_dict)

    def _validate(self) -> None:
        """
        Validate all config parameters against PARAM_BOUNDS.

        Numeric bounds are (min, max) pairs; string parameters list their
        allowed values.

        Raises:
            ConfigError: If any parameter is out of bounds.
        """
        for section, params in self.PARAM_BOUNDS.items():
            if section not in self.data:
                logger.warning(f"Missing config section: {section}. Using defaults.")
                self.data[section] = copy.deepcopy(self.DEFAULT_CONFIG.get(section, {}))
                continue

            section_data = self.data[section]
            if not isinstance(section_data, dict):
                raise ConfigError(f"Config section {section} must be a table")

            for param, bounds in params.items():
                if param not in section_data:
                    default_val = self.DEFAULT_CONFIG.get(section, {}).get(param)
                    if default_val is not None:
                        logger.warning(f"Missing param {section}.{param}. Using default: {default_val}")
                        section_data[param] = default_val
                    continue

                value = section_data[param]

                if all(isinstance(b, str) for b in bounds):
                    if str(value).upper() not in bounds:
                        raise ConfigError(
                            f"Parameter {section}.{param}={value!r} not one of {list(bounds)}"
                        )
                    section_data[param] = str(value).upper()
                    continue

                min_val, max_val = bounds
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(f"Parameter {section}.{param}={value!r} is not numeric")
                if not (min_val <= value <= max_val):
                    raise ConfigError(
                        f"Parameter {section}.{param}={value} out of bounds "
                        f"[{min_val}, {max_val}]"
                    )

        logger.debug("✅ Config validation passed")

    def get(self, section: str, param: str, default: Any = None) -> Any:
        """Get a config parameter safely."""
        return self.data.get(section, {}).get(param, default)

    def __getitem__(self, section: str) -> Dict[str, Any]:
        """Allow dict-like access: config["ranking"]"""
        return self.data.get(section, {})

    def __repr__(self) -> str:
        version = self.data.get('config_version', 'unknown')
        return f"Config(version={version})"
