# src/edgeline/plugins/codecs/text.py
"""Text codec: edge values are passed through as strings.

For algorithms that carry an opaque label on each edge, or none at all
(connected components, leaf compression).
"""

from edgeline.contracts.edges import RawEdge
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.config_base import PluginConfig


class TextCodecConfig(PluginConfig):
    """Text codec takes no options."""


class TextCodec(BaseEdgeValueCodec):
    """Pass raw edge values through unchanged."""

    name = "text"
    plugin_version = "1.0.0"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        TextCodecConfig.from_dict(self.config)

    def default_edge_value(self) -> str:
        return ""

    def validate_edge_value(self, edge: RawEdge) -> None:
        pass

    def decode_value(self, raw_value: str) -> str:
        return raw_value
