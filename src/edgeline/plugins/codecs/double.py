# src/edgeline/plugins/codecs/double.py
"""Double codec: edge values are finite floating-point weights."""

import math
import re

from edgeline.contracts.edges import RawEdge
from edgeline.contracts.errors import EdgeValidationError
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.config_base import NumericCodecConfig

# Decimal or scientific notation; float() alone would also take "nan",
# "infinity" and "1_0"
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class DoubleCodec(BaseEdgeValueCodec):
    """Decode edge weights as floats.

    Config options:
        allow_negative: Accept weights below zero (default: True)
    """

    name = "double"
    plugin_version = "1.0.0"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        cfg = NumericCodecConfig.from_dict(self.config)
        self._allow_negative = cfg.allow_negative

    def default_edge_value(self) -> str:
        return "1.0"

    def validate_edge_value(self, edge: RawEdge) -> None:
        raw = edge.raw_value
        if _DECIMAL.fullmatch(raw) is None:
            raise EdgeValidationError(f"edge value {raw!r} is not a decimal number")
        value = float(raw)
        if not math.isfinite(value):
            raise EdgeValidationError(f"edge value {raw!r} overflows a double")
        if value < 0 and not self._allow_negative:
            raise EdgeValidationError(f"edge value {raw!r} is negative")

    def decode_value(self, raw_value: str) -> float:
        return float(raw_value)
