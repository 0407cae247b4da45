# src/edgeline/engine/reader.py
"""Per-split edge reader.

An EdgeReader owns one input split. It tokenizes each line into a RawEdge,
has its codec validate and decode the raw value, and yields EdgeRecords to
the host.

Lifecycle:

    UNINITIALIZED --initialize()--> INITIALIZED --iter()--> READING
        --split exhausted / close() / failure--> EXHAUSTED

- initialize() runs once. It resolves the ReaderConfiguration from the job
  configuration and opens the split. Later changes to the job
  configuration do not reach an initialized reader.
- Iteration is pull-based and buffers at most one line.
- Any parse or validation failure aborts the split: the error propagates to
  the host and the reader is closed. Nothing is retried or skipped here.
- EXHAUSTED is terminal. Readers are never reused.

Readers share no mutable state, so any number may run in parallel threads
or processes. The codec is shared but stateless.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from edgeline.contracts.edges import EdgeRecord, RawEdge
from edgeline.contracts.enums import ReaderState
from edgeline.contracts.errors import LineError, ReaderConfigurationError, ReaderStateError
from edgeline.core.config import ReaderConfiguration
from edgeline.core.logging import get_logger
from edgeline.engine.protocols import InputSplit
from edgeline.engine.splits import LineStream
from edgeline.plugins.base import BaseEdgeValueCodec

logger = get_logger(__name__)


class EdgeReader:
    """Reads one split into typed directed edges.

    Args:
        codec: Supplies the default raw value, validates raw values and
            decodes them into the engine's value type
    """

    def __init__(self, codec: BaseEdgeValueCodec) -> None:
        self._codec = codec
        self._state = ReaderState.UNINITIALIZED
        self._config: ReaderConfiguration | None = None
        self._lines: LineStream | None = None
        self._split_uri: str | None = None
        self._lines_read = 0
        self._edges_produced = 0

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def codec(self) -> BaseEdgeValueCodec:
        return self._codec

    @property
    def configuration(self) -> ReaderConfiguration:
        """Settings resolved at initialization.

        Raises:
            ReaderStateError: If the reader has not been initialized
        """
        if self._config is None:
            raise ReaderStateError("EdgeReader has no configuration before initialize()")
        return self._config

    @property
    def lines_read(self) -> int:
        return self._lines_read

    @property
    def edges_produced(self) -> int:
        return self._edges_produced

    def initialize(self, split: InputSplit, conf: Mapping[str, Any]) -> None:
        """Resolve configuration and open the split.

        Args:
            split: The split this reader owns
            conf: Job configuration; read once, here

        Raises:
            ReaderStateError: If called more than once
            ReaderConfigurationError: If the configuration is invalid or
                the split cannot be opened
        """
        if self._state is not ReaderState.UNINITIALIZED:
            raise ReaderStateError(f"EdgeReader.initialize() called in state {self._state}; readers are initialized once")

        try:
            config = ReaderConfiguration.from_job_conf(conf, self._codec.default_edge_value())
        except ValidationError as e:
            raise ReaderConfigurationError(f"Invalid reader configuration for split {split.uri}: {e}") from e

        self._lines = split.open_lines()
        self._config = config
        self._split_uri = split.uri
        self._state = ReaderState.INITIALIZED

        logger.debug(
            "edge_reader_initialized",
            split=split.uri,
            codec=self._codec.name,
            delimiter=config.delimiter,
            default_value=config.default_value,
        )

    def __iter__(self) -> Iterator[EdgeRecord]:
        """Return the single pass over this reader's edges.

        Raises:
            ReaderStateError: If the reader is not initialized, or has
                already been iterated
        """
        if self._state is not ReaderState.INITIALIZED:
            raise ReaderStateError(f"EdgeReader cannot be iterated in state {self._state}; initialize() it first and iterate once")
        # Claimed before the first pull so a second iter() is refused
        self._state = ReaderState.READING
        return self._read()

    def _read(self) -> Iterator[EdgeRecord]:
        assert self._lines is not None
        try:
            while True:
                line_number = self._lines_read + 1
                try:
                    line = next(self._lines)
                except StopIteration:
                    break
                except LineError as e:
                    raise e.at(split_uri=self._split_uri or "", line_number=line_number, line="") from e
                self._lines_read = line_number
                record = self.to_record(line, line_number)
                self._edges_produced += 1
                yield record
        finally:
            self.close()

        logger.info(
            "edge_split_exhausted",
            split=self._split_uri,
            lines=self._lines_read,
            edges=self._edges_produced,
        )

    def to_record(self, line: str, line_number: int) -> EdgeRecord:
        """Convert one line of this reader's split into an EdgeRecord.

        Raises:
            EdgeParseError: If the line lacks a source or target
            EdgeValidationError: If the codec rejects the raw value
        """
        config = self.configuration
        try:
            edge = RawEdge.from_line(line, config.delimiter, config.default_value)
            self._codec.validate_edge_value(edge)
        except LineError as e:
            raise e.at(split_uri=self._split_uri or "", line_number=line_number, line=line) from e
        return EdgeRecord(
            source=edge.source_id,
            target=edge.target_id,
            value=self._codec.decode_value(edge.raw_value),
        )

    def close(self) -> None:
        """Release the split and move to EXHAUSTED. Idempotent."""
        if self._lines is not None:
            self._lines.close()
        self._state = ReaderState.EXHAUSTED

    def __repr__(self) -> str:
        return f"EdgeReader(codec={self._codec.name!r}, split={self._split_uri!r}, state={self._state})"
