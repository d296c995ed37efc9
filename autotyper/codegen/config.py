"""
Configuration management for code generation.

Handles loading and merging generation options from JSON files and from
request payloads, providing defaults and alias handling.
"""

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


# Accepted spellings for each option. The first alias is the wire name used
# in JSON payloads and in ``to_dict``.
OPTION_ALIASES: Dict[str, tuple] = {
    "optional_by_default": ("optionalByDefault",),
    "zod": ("zod", "emitZod", "emitSchema", "emit_zod", "emit_schema"),
    "interface": ("interface", "emitInterface", "emit_interface"),
    "example": ("example", "emitExample", "emit_example"),
    "strict_zod": ("strictZod", "strictSchema", "strict_schema"),
}

_KEY_TO_FIELD: Dict[str, str] = {
    alias: field_name
    for field_name, aliases in OPTION_ALIASES.items()
    for alias in (field_name,) + aliases
}


@dataclass(frozen=True)
class GenerationOptions:
    """Per-call settings for :func:`autotyper.codegen.builder.build_output`."""

    # Parsing
    optional_by_default: bool = False  # Fields optional unless marked with !

    # Artifacts
    zod: bool = True
    interface: bool = True
    example: bool = True

    # Zod settings
    strict_zod: bool = False  # Add .strict() to the object schema

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GenerationOptions":
        """
        Build options from a mapping using any accepted key spelling.

        Args:
            data: Option values; missing keys keep their defaults

        Returns:
            New options instance

        Raises:
            ConfigError: If ``data`` is not a mapping
        """
        return cls().merged(data)

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "GenerationOptions":
        """
        Return a copy with ``overrides`` applied.

        Args:
            overrides: Option values keyed by field name, wire name or alias

        Returns:
            New options instance
        """
        if overrides is None:
            return self

        if not isinstance(overrides, Mapping):
            raise ConfigError(
                f"Options must be an object, got {type(overrides).__name__}"
            )

        changes = {}
        for key, value in overrides.items():
            field_name = _KEY_TO_FIELD.get(key)
            if field_name is None:
                logger.debug("Ignoring unknown option: %s", key)
                continue
            changes[field_name] = bool(value)

        return replace(self, **changes)

    def to_dict(self) -> Dict[str, bool]:
        """Return the options keyed by their wire names."""
        return {
            OPTION_ALIASES[name][0]: value for name, value in asdict(self).items()
        }


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self, defaults: Optional[GenerationOptions] = None):
        """Initialize configuration manager."""
        self.defaults = defaults or GenerationOptions()

    def get_config(
        self,
        custom_config: Optional[Mapping[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GenerationOptions:
        """
        Get complete generation options.

        Args:
            custom_config: Explicit overrides, applied last
            config_file: Path to JSON options file

        Returns:
            Merged options
        """
        options = self.defaults

        if config_file:
            options = options.merged(self._load_config_file(config_file))

        if custom_config:
            options = options.merged(custom_config)

        return options

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load options from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded options from %s", path)
        return config


def load_config(
    custom_config: Optional[Mapping[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationOptions:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Explicit overrides
        config_file: Path to JSON options file

    Returns:
        Merged options
    """
    return ConfigManager().get_config(custom_config, config_file)


def coerce_options(
    options: Union[GenerationOptions, Mapping[str, Any], None],
) -> GenerationOptions:
    """Accept options as an instance, a mapping or ``None``."""
    if isinstance(options, GenerationOptions):
        return options
    return GenerationOptions.from_dict(options)
