"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core, engine
or plugins. Settings classes live in edgeline.core.config.

Import patterns:
    from edgeline.contracts import EdgeRecord, RawEdge, ReaderState
    from edgeline.core.config import ReaderConfiguration
"""

from edgeline.contracts.edges import EdgeRecord, RawEdge
from edgeline.contracts.enums import OutputFormat, ReaderState
from edgeline.contracts.errors import (
    EdgeIngestError,
    EdgeParseError,
    EdgeValidationError,
    LineError,
    PluginNotFoundError,
    ReaderConfigurationError,
    ReaderStateError,
)

__all__ = [
    "EdgeIngestError",
    "EdgeParseError",
    "EdgeRecord",
    "EdgeValidationError",
    "LineError",
    "OutputFormat",
    "PluginNotFoundError",
    "RawEdge",
    "ReaderConfigurationError",
    "ReaderState",
    "ReaderStateError",
]
