# src/edgeline/plugins/base.py
"""Base class for edge value codec plugins.

A codec is the algorithm-specific half of edge ingestion. The reader does
the tokenizing; the codec says what a missing value defaults to, which raw
values are acceptable, and what Python value the graph engine receives.

Codecs are injected into readers rather than subclassed from them, and must
be stateless after construction: a single instance may serve many readers
running in parallel.

Plugins MUST subclass BaseEdgeValueCodec. Discovery uses issubclass() checks
against it, and the ``name`` attribute is the registry key.
"""

from abc import ABC, abstractmethod
from typing import Any

from edgeline.contracts.edges import RawEdge


class BaseEdgeValueCodec(ABC):
    """Base class for edge value codecs.

    Subclass and implement the three capability methods.

    Example:
        class IntCodec(BaseEdgeValueCodec):
            name = "int"

            def default_edge_value(self) -> str:
                return "1"

            def validate_edge_value(self, edge: RawEdge) -> None:
                if not edge.raw_value.isdigit():
                    raise EdgeValidationError(f"not a number: {edge.raw_value!r}")

            def decode_value(self, raw_value: str) -> int:
                return int(raw_value)
    """

    name: str
    plugin_version: str = "0.0.0"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        """Initialize with configuration.

        Args:
            config: Codec options; subclasses validate them
        """
        self.config = dict(config) if config else {}

    @abstractmethod
    def default_edge_value(self) -> str:
        """Raw value substituted when a line has no third field."""
        ...

    @abstractmethod
    def validate_edge_value(self, edge: RawEdge) -> None:
        """Check the raw value of a parsed edge.

        Raises:
            EdgeValidationError: If the raw value is unacceptable. Location
                context is added by the reader.
        """
        ...

    @abstractmethod
    def decode_value(self, raw_value: str) -> Any:
        """Convert a validated raw value into the engine's edge value."""
        ...
