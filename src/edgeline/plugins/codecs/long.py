# src/edgeline/plugins/codecs/long.py
"""Long codec: edge values are signed 64-bit integer weights.

Used by weighted community detection and betweenness algorithms. A line
without a weight counts as weight 1.
"""

import re

from edgeline.contracts.edges import RawEdge
from edgeline.contracts.errors import EdgeValidationError
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.config_base import NumericCodecConfig

# Plain decimal only: no whitespace, underscores or non-ASCII digits
_INTEGER = re.compile(r"[+-]?[0-9]+")

LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
# Signed 64-bit values have at most 19 significant digits; int() is never
# asked to convert anything longer
_MAX_DIGITS = len(str(LONG_MAX))


def _significant(raw: str) -> tuple[str, str]:
    """Split a matched integer into its sign and digits without leading zeros."""
    sign = raw[0] if raw[0] in "+-" else ""
    return sign, raw[len(sign) :].lstrip("0") or "0"


class LongCodec(BaseEdgeValueCodec):
    """Decode edge weights as integers in the signed 64-bit range.

    Config options:
        allow_negative: Accept weights below zero (default: True)
    """

    name = "long"
    plugin_version = "1.0.0"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        cfg = NumericCodecConfig.from_dict(self.config)
        self._allow_negative = cfg.allow_negative

    def default_edge_value(self) -> str:
        return "1"

    def validate_edge_value(self, edge: RawEdge) -> None:
        raw = edge.raw_value
        if _INTEGER.fullmatch(raw) is None:
            raise EdgeValidationError(f"edge value {raw!r} is not an integer")
        sign, digits = _significant(raw)
        if len(digits) > _MAX_DIGITS:
            raise EdgeValidationError(f"edge value {raw!r} is outside the 64-bit integer range")
        value = int(sign + digits)
        if not LONG_MIN <= value <= LONG_MAX:
            raise EdgeValidationError(f"edge value {raw!r} is outside the 64-bit integer range")
        if value < 0 and not self._allow_negative:
            raise EdgeValidationError(f"edge value {raw!r} is negative")

    def decode_value(self, raw_value: str) -> int:
        sign, digits = _significant(raw_value)
        return int(sign + digits)
