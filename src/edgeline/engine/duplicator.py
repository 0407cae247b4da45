# src/edgeline/engine/duplicator.py
"""Reverse-edge duplication for undirected graphs.

A graph engine built on directed edges models an undirected edge u-v as the
pair u->v and v->u. ReverseEdgeDuplicator produces that pair from each input
line, so undirected input files need not list every edge twice.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from edgeline.contracts.edges import EdgeRecord
from edgeline.contracts.enums import ReaderState
from edgeline.engine.protocols import InputSplit, SplitReader


class ReverseEdgeDuplicator:
    """Wraps a reader and emits every edge forward, then reversed.

    Both records for a line are produced before the wrapped reader pulls the
    next line. Lifecycle calls are delegated, so the wrapper drops in
    wherever the wrapped reader would be used.

    Self-loops are not special-cased: u->u is emitted twice.
    """

    def __init__(self, reader: SplitReader) -> None:
        self._reader = reader
        self._edges_produced = 0

    @property
    def reader(self) -> SplitReader:
        return self._reader

    @property
    def state(self) -> ReaderState:
        return self._reader.state

    @property
    def edges_produced(self) -> int:
        return self._edges_produced

    def initialize(self, split: InputSplit, conf: Mapping[str, Any]) -> None:
        self._reader.initialize(split, conf)

    def __iter__(self) -> Iterator[EdgeRecord]:
        # iter() first so lifecycle errors surface here, not on first next()
        return self._duplicate(iter(self._reader))

    def _duplicate(self, upstream: Iterator[EdgeRecord]) -> Iterator[EdgeRecord]:
        for record in upstream:
            self._edges_produced += 2
            yield record
            yield record.reversed()

    def close(self) -> None:
        self._reader.close()

    def __repr__(self) -> str:
        return f"ReverseEdgeDuplicator({self._reader!r})"
