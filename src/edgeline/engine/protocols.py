# src/edgeline/engine/protocols.py
"""Protocols at the boundary between readers and the host.

These define interface contracts for type checking. InputSplit is what the
host hands to a reader; SplitReader is what the host drives. EdgeReader and
ReverseEdgeDuplicator both satisfy SplitReader, so the host never needs to
know whether duplication is on.
"""

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from edgeline.contracts.edges import EdgeRecord
    from edgeline.contracts.enums import ReaderState
    from edgeline.engine.splits import LineStream


@runtime_checkable
class InputSplit(Protocol):
    """A partition of the input assigned to exactly one reader.

    Attributes:
        uri: Identifies the split in errors and logs
    """

    uri: str

    def open_lines(self) -> "LineStream":
        """Open the split for sequential reading.

        Must fail eagerly: an unreachable split raises here, not on the
        first read.

        Raises:
            ReaderConfigurationError: If the split cannot be opened
        """
        ...


class SplitReader(Protocol):
    """A reader the host initializes once, iterates once, then closes."""

    @property
    def state(self) -> "ReaderState": ...

    def initialize(self, split: InputSplit, conf: Mapping[str, Any]) -> None: ...

    def __iter__(self) -> Iterator["EdgeRecord"]: ...

    def close(self) -> None: ...
