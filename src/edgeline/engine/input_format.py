# src/edgeline/engine/input_format.py
"""EdgeInputFormat: builds the reader the host drives for each split.

The format binds a codec (the algorithm-specific part) to the generic
reader, and decides whether edges are duplicated in reverse. It holds no
per-split state, so one format can serve every split of a job.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from edgeline.contracts.edges import EdgeRecord
from edgeline.core.config import REVERSE_DUPLICATOR_DEFAULT, REVERSE_DUPLICATOR_KEY, parse_flag
from edgeline.core.logging import get_logger
from edgeline.engine.duplicator import ReverseEdgeDuplicator
from edgeline.engine.protocols import InputSplit, SplitReader
from edgeline.engine.reader import EdgeReader
from edgeline.plugins.base import BaseEdgeValueCodec
from edgeline.plugins.manager import PluginManager

logger = get_logger(__name__)


class EdgeInputFormat:
    """Factory for per-split edge readers.

    Example:
        input_format = EdgeInputFormat.for_codec("long")
        reader = input_format.create_reader(split, conf)
        reader.initialize(split, conf)
        try:
            for edge in reader:
                engine.add_edge(edge.source, edge.target, edge.value)
        finally:
            reader.close()
    """

    def __init__(self, codec: BaseEdgeValueCodec) -> None:
        self._codec = codec

    @classmethod
    def for_codec(
        cls,
        name: str,
        options: dict[str, Any] | None = None,
        manager: PluginManager | None = None,
    ) -> "EdgeInputFormat":
        """Build a format around a registered codec.

        Args:
            name: Codec name, e.g. "long"
            options: Codec options
            manager: Plugin manager to look the codec up in; defaults to
                one holding the built-in codecs

        Raises:
            PluginNotFoundError: If no codec is registered under ``name``
            PluginConfigError: If ``options`` are invalid for the codec
        """
        if manager is None:
            manager = PluginManager()
            manager.register_builtin_plugins()
        return cls(manager.create_codec(name, options))

    @property
    def codec(self) -> BaseEdgeValueCodec:
        return self._codec

    def get_edge_reader(self) -> EdgeReader:
        """Return a fresh, uninitialized reader bound to this format's codec."""
        return EdgeReader(self._codec)

    def create_reader(self, split: InputSplit, conf: Mapping[str, Any]) -> SplitReader:
        """Build the reader for one split.

        The reverse-duplicator flag is read from ``conf``; the returned
        reader is still uninitialized.
        """
        duplicate = parse_flag(conf.get(REVERSE_DUPLICATOR_KEY, REVERSE_DUPLICATOR_DEFAULT))
        reader = self.get_edge_reader()
        logger.debug("edge_reader_created", split=split.uri, codec=self._codec.name, reverse_duplicate=duplicate)
        if duplicate:
            return ReverseEdgeDuplicator(reader)
        return reader

    def read_split(self, split: InputSplit, conf: Mapping[str, Any]) -> Iterator[EdgeRecord]:
        """Create, initialize and drain a reader for ``split``.

        The reader is closed however iteration ends.
        """
        reader = self.create_reader(split, conf)
        try:
            reader.initialize(split, conf)
            yield from reader
        finally:
            reader.close()
