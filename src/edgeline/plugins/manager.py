# src/edgeline/plugins/manager.py
"""Plugin manager for codec discovery, registration, and lookup.

Uses pluggy for hook-based plugin registration.
"""

from typing import Any

import pluggy

from edgeline.contracts.errors import PluginNotFoundError
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.hookspecs import PROJECT_NAME, EdgelineCodecSpec


class PluginManager:
    """Manages codec discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        codec_cls = manager.get_codec_by_name("long")
        codec = manager.create_codec("double", {"allow_negative": False})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(EdgelineCodecSpec)

        # Name -> class, rebuilt from hooks on every registration
        self._codecs: dict[str, type[BaseEdgeValueCodec]] = {}

    def register_builtin_plugins(self) -> None:
        """Discover and register all built-in codecs.

        Call this once at startup to make built-in codecs discoverable.
        """
        from edgeline.plugins.discovery import CodecProvider, discover_codecs

        self.register(CodecProvider(discover_codecs()))

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If the plugin provides a codec name already registered
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        new_codecs: dict[str, type[BaseEdgeValueCodec]] = {}

        for codecs in self._pm.hook.edgeline_get_codecs():
            for cls in codecs:
                name = cls.name
                if name in new_codecs:
                    raise ValueError(f"Duplicate codec plugin name: '{name}'. Already registered by {new_codecs[name].__name__}")
                new_codecs[name] = cls

        self._codecs = new_codecs

    def get_codecs(self) -> list[type[BaseEdgeValueCodec]]:
        """Get all registered codec classes, sorted by name."""
        return [self._codecs[name] for name in sorted(self._codecs)]

    def get_codec_by_name(self, name: str) -> type[BaseEdgeValueCodec] | None:
        """Get codec class by name."""
        return self._codecs.get(name)

    def create_codec(self, name: str, options: dict[str, Any] | None = None) -> BaseEdgeValueCodec:
        """Instantiate a registered codec.

        Raises:
            PluginNotFoundError: If no codec is registered under ``name``
            PluginConfigError: If ``options`` are invalid for the codec
        """
        codec_cls = self.get_codec_by_name(name)
        if codec_cls is None:
            available = ", ".join(sorted(self._codecs)) or "none"
            raise PluginNotFoundError(f"Unknown codec '{name}'. Available codecs: {available}")
        return codec_cls(options or {})
