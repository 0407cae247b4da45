# src/edgeline/plugins/codecs/null.py
"""Null codec: edges carry no value.

Any third field is accepted and discarded, so weighted and unweighted input
files can feed the same unweighted algorithm.
"""

from edgeline.contracts.edges import RawEdge
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.config_base import PluginConfig


class NullCodecConfig(PluginConfig):
    """Null codec takes no options."""


class NullCodec(BaseEdgeValueCodec):
    """Ignore edge values; every record's value is None."""

    name = "null"
    plugin_version = "1.0.0"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        NullCodecConfig.from_dict(self.config)

    def default_edge_value(self) -> str:
        return ""

    def validate_edge_value(self, edge: RawEdge) -> None:
        pass

    def decode_value(self, raw_value: str) -> None:
        return None
