"""
Configuration management for DTO generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields
from enum import Enum

from .naming import NamingStyle


DEFAULT_SUFFIX = "DTO"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


class DiscoveryMode(Enum):
    """How classes are located in the input text."""
    SINGLE = "single"  # first class keyword, whole text replaced
    MULTI = "multi"    # every class declaration, each span replaced


@dataclass
class GenerationConfig:
    """Settings applied uniformly to every class in one invocation."""

    suffix: str = ""
    naming_style: NamingStyle = NamingStyle.ORIGINAL

    # Discovery and extraction
    discovery_mode: DiscoveryMode = DiscoveryMode.SINGLE
    directive_aware: bool = False

    # Generated members
    copy_with: bool = True
    equality: bool = True

    # Unrecognized settings from config files
    custom: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        try:
            self.naming_style = NamingStyle.from_value(self.naming_style)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        if not isinstance(self.discovery_mode, DiscoveryMode):
            try:
                self.discovery_mode = DiscoveryMode(str(self.discovery_mode).lower())
            except ValueError as e:
                raise ConfigError(
                    f"Invalid discovery_mode: {self.discovery_mode}"
                ) from e

        self.suffix = (self.suffix or "").strip()

    @property
    def multi_class(self) -> bool:
        return self.discovery_mode == DiscoveryMode.MULTI

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain JSON-compatible values."""
        config_dict = {
            "suffix": self.suffix,
            "naming_style": self.naming_style.value,
            "discovery_mode": self.discovery_mode.value,
            "directive_aware": self.directive_aware,
            "copy_with": self.copy_with,
            "equality": self.equality,
        }
        config_dict.update(self.custom)
        return config_dict


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "suffix": DEFAULT_SUFFIX,
            "naming_style": NamingStyle.ORIGINAL.value,
            "discovery_mode": DiscoveryMode.SINGLE.value,
            "directive_aware": False,
            "copy_with": True,
            "equality": True,
        }

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GenerationConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        # Start with defaults
        base_config = self._defaults.copy()

        # Load from file if provided
        if config_file:
            base_config.update(self.load_config_file(config_file))

        # Apply overrides, ignoring unset values
        if custom_config:
            base_config.update(
                {k: v for k, v in custom_config.items() if v is not None}
            )

        return self._dict_to_config(base_config)

    def load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GenerationConfig:
        """Convert dictionary to GenerationConfig instance."""
        known_fields = {f.name for f in fields(GenerationConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GenerationConfig(**config_args)

    def validate_config(self, config: GenerationConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.suffix and not f"A{config.suffix}".isidentifier():
            warnings.append(f"Suffix is not a valid identifier part: {config.suffix!r}")

        for key in config.custom:
            warnings.append(f"Unknown configuration key: {key}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GenerationConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


def read_config_file(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Read the raw values of a JSON configuration file."""
    return get_config_manager().load_config_file(config_file)
