# src/edgeline/plugins/__init__.py
"""Plugin system: edge value codecs via pluggy.

- Base class: BaseEdgeValueCodec, the capability set a graph algorithm
  supplies to readers (default value, validation, decoding)
- Config base: typed, strict codec options
- Manager: discovery, registration and lookup
- Hookspecs: pluggy hook definitions
"""

from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.config_base import NumericCodecConfig, PluginConfig, PluginConfigError
from edgeline.plugins.hookspecs import hookimpl, hookspec
from edgeline.plugins.manager import PluginManager

__all__ = [
    "BaseEdgeValueCodec",
    "NumericCodecConfig",
    "PluginConfig",
    "PluginConfigError",
    "PluginManager",
    "hookimpl",
    "hookspec",
]
