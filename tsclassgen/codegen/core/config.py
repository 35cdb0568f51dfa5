"""
Configuration management for class emission.

Handles loading and merging configuration from JSON files,
providing defaults and validation for emitter settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class EmitterConfig:
    """Settings for the code writer and the generation front-end."""

    # Code style settings
    indent_size: int = 2
    use_tabs: bool = False
    line_ending: str = "\n"
    string_quote: str = "'"

    # Class layout
    promote_constructor_properties: bool = True
    max_blank_lines: int = 1

    # Output settings
    header_comment: Optional[str] = None

    # Unrecognised keys from config files
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """One level of indentation."""
        return "\t" if self.use_tabs else " " * self.indent_size


DEFAULTS: Dict[str, Any] = {
    "indent_size": 2,
    "use_tabs": False,
    "line_ending": "\n",
    "string_quote": "'",
    "promote_constructor_properties": True,
    "max_blank_lines": 1,
    "header_comment": None,
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = dict(DEFAULTS)

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> EmitterConfig:
        """
        Get the complete emitter configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Defaults, overlaid by the file, overlaid by the overrides
        """
        base_config = self._defaults.copy()

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)
            logger.debug("Loaded %d setting(s) from %s", len(file_config), config_file)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> EmitterConfig:
        """Convert dictionary to EmitterConfig instance."""
        known_fields = set(EmitterConfig.__dataclass_fields__)

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

        return EmitterConfig(**config_args)

    def save_config(self, config: EmitterConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: EmitterConfig) -> list[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.string_quote not in {"'", '"'}:
            warnings.append(f"Invalid string_quote: {config.string_quote!r}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        if config.max_blank_lines < 0:
            warnings.append(f"Invalid max_blank_lines: {config.max_blank_lines}")

        for key in config.custom:
            warnings.append(f"Unknown setting: {key}")

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
                config_file: Optional[Union[str, Path]] = None) -> EmitterConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "indent_size": 4,
    "string_quote": '"',
    "promote_constructor_properties": False,
    "header_comment": "Generated code. Do not edit.",
}
