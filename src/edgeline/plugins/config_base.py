# src/edgeline/plugins/config_base.py
"""Base classes for typed codec configurations.

Codecs inherit from these to get strict validation (unknown options are
rejected) and a factory with clear error messages.

Example usage:
    class LongCodecConfig(NumericCodecConfig):
        pass

    cfg = LongCodecConfig.from_dict(options)
    cfg.allow_negative
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError


class PluginConfigError(Exception):
    """Raised when plugin configuration is invalid."""

    pass


class PluginConfig(BaseModel):
    """Base class for typed plugin configurations."""

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Args:
            config: Dictionary of configuration values.

        Returns:
            Validated configuration instance.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e


class NumericCodecConfig(PluginConfig):
    """Options shared by codecs that decode numeric edge weights."""

    allow_negative: bool = True
