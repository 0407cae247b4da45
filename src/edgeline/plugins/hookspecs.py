# src/edgeline/plugins/hookspecs.py
"""pluggy hook specifications for Edgeline plugins.

Plugins implement these hooks to register codec classes with the framework.

Usage (implementing a plugin):
    from edgeline.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def edgeline_get_codecs(self):
            return [MyCodec]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from edgeline.plugins.base import BaseEdgeValueCodec

# Project name for pluggy
PROJECT_NAME = "edgeline"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class EdgelineCodecSpec:
    """Hook specifications for edge value codec plugins."""

    @hookspec
    def edgeline_get_codecs(self) -> list[type["BaseEdgeValueCodec"]]:  # type: ignore[empty-body]
        """Return codec plugin classes.

        Returns:
            List of codec classes (not instances)
        """
