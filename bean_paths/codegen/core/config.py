"""
Configuration management for code generation.

Handles loading and merging emitter settings from JSON files,
providing defaults and validation.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


IMPLEMENTATION_FILE = "implementationFile"
DECLARATION_FILE = "declarationFile"
OUTPUT_FILE_TYPES = {IMPLEMENTATION_FILE, DECLARATION_FILE}


@dataclass
class Settings:
    """Settings consumed by the emitter and its extensions."""

    # Code style settings
    indent_string: str = "    "
    newline: str = "\n"

    # Output settings
    output_file: Optional[str] = None
    output_file_type: str = IMPLEMENTATION_FILE
    export_keyword: bool = False

    # Registered extension names to run
    extensions: List[str] = field(default_factory=lambda: ["beanPropertyPath"])

    # Custom settings (extension-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages settings loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(Settings())

    def get_settings(self, custom_config: Optional[Dict[str, Any]] = None,
                     config_file: Optional[Union[str, Path]] = None) -> Settings:
        """
        Get complete settings.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged settings
        """
        # Start with defaults
        base_config = dict(self._defaults)

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_settings(base_config)

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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_settings(self, config_dict: Dict[str, Any]) -> Settings:
        """Convert dictionary to Settings instance."""
        config_dict = dict(config_dict)

        # indent_size/use_tabs are an alternative way to give the indent string
        use_tabs = config_dict.pop("use_tabs", False)
        indent_size = config_dict.pop("indent_size", None)
        if use_tabs:
            config_dict["indent_string"] = "\t"
        elif indent_size is not None:
            if not isinstance(indent_size, int) or indent_size < 0:
                raise ConfigError(f"indent_size must be a non-negative integer: {indent_size!r}")
            config_dict["indent_string"] = " " * indent_size

        # Extract known fields
        known_fields = {f.name for f in fields(Settings)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Add custom fields to the custom dict
        existing_custom = dict(config_args.get('custom') or {})
        existing_custom.update(custom_args)
        config_args['custom'] = existing_custom

        if not isinstance(config_args.get("indent_string", ""), str):
            raise ConfigError("indent_string must be a string")

        if config_args.get("output_file_type", IMPLEMENTATION_FILE) not in OUTPUT_FILE_TYPES:
            raise ConfigError(
                f"Invalid output_file_type: {config_args['output_file_type']} "
                f"(expected one of {', '.join(sorted(OUTPUT_FILE_TYPES))})"
            )

        extensions = config_args.get("extensions")
        if extensions is not None:
            config_args["extensions"] = list(extensions)

        return Settings(**config_args)

    def save_settings(self, settings: Settings, output_path: Union[str, Path]):
        """Save settings to JSON file."""
        path = Path(output_path)

        config_dict = asdict(settings)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def validate_settings(self, settings: Settings) -> List[str]:
        """
        Validate settings.

        Returns:
            List of validation warnings
        """
        warnings = []

        if settings.indent_string.strip(" \t"):
            warnings.append(
                f"indent_string contains non-whitespace characters: {settings.indent_string!r}"
            )

        if settings.newline not in ("\n", "\r\n"):
            warnings.append(f"Unusual newline sequence: {settings.newline!r}")

        if not settings.extensions:
            warnings.append("No extensions configured - output will be empty")

        if settings.output_file and not settings.output_file.endswith(".ts"):
            warnings.append(f"Output file does not have .ts extension: {settings.output_file}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_settings(custom_config: Optional[Dict[str, Any]] = None,
                  config_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Convenience function to load settings.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged settings
    """
    manager = get_config_manager()
    return manager.get_settings(custom_config, config_file)
