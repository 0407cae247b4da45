"""Engine: per-split edge readers and the input format that builds them.

Usage:
    from edgeline.engine import EdgeInputFormat, FileSplit

    input_format = EdgeInputFormat.for_codec("long")
    for edge in input_format.read_split(FileSplit("edges.csv"), job_conf):
        ...
"""

from edgeline.engine.duplicator import ReverseEdgeDuplicator
from edgeline.engine.input_format import EdgeInputFormat
from edgeline.engine.protocols import InputSplit, SplitReader
from edgeline.engine.reader import EdgeReader
from edgeline.engine.splits import FileSplit, LineSplit, LineStream

__all__ = [
    "EdgeInputFormat",
    "EdgeReader",
    "FileSplit",
    "InputSplit",
    "LineSplit",
    "LineStream",
    "ReverseEdgeDuplicator",
    "SplitReader",
]
