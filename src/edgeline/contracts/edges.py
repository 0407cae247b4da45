# src/edgeline/contracts/edges.py
"""Edge records produced while reading a split.

RawEdge is the untyped result of tokenizing one input line. EdgeRecord is
what the host pipeline receives once the raw value has been validated and
decoded by a codec.

Both are frozen and single-owner: a reader builds one per line, hands it on,
and never keeps a reference.
"""

from dataclasses import dataclass
from typing import Any

from edgeline.contracts.errors import EdgeParseError

# source, target, value
_MAX_FIELDS = 3


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


@dataclass(frozen=True, slots=True)
class RawEdge:
    """One tokenized input line.

    Attributes:
        source_id: Field 1 of the line, never empty
        target_id: Field 2 of the line, never empty
        raw_value: Field 3 of the line, or the configured default when the
            line has only two fields. Always a string.
    """

    source_id: str
    target_id: str
    raw_value: str

    @classmethod
    def from_line(cls, line: str, delimiter: str, default_value: str) -> "RawEdge":
        """Tokenize a line of the form ``source<d>target[<d>value]``.

        The split is bounded to three parts, so any delimiters after the
        second one belong to the raw value. Delimiters cannot be escaped.

        Args:
            line: Input line; a trailing ``\\n`` or ``\\r\\n`` is ignored
            delimiter: Field separator
            default_value: Raw value to use when the third field is absent

        Returns:
            The parsed edge.

        Raises:
            EdgeParseError: If the source or target field is missing or empty.
        """
        fields = _strip_terminator(line).split(delimiter, _MAX_FIELDS - 1)
        if len(fields) < 2:
            raise EdgeParseError(f"expected source and target separated by {delimiter!r}, found {len(fields)} field")
        source_id, target_id = fields[0], fields[1]
        if not source_id:
            raise EdgeParseError("source id is empty")
        if not target_id:
            raise EdgeParseError("target id is empty")
        raw_value = fields[2] if len(fields) == _MAX_FIELDS else default_value
        return cls(source_id=source_id, target_id=target_id, raw_value=raw_value)


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """A typed directed edge handed to the host pipeline.

    The type of ``value`` is decided by the codec that decoded it.
    """

    source: str
    target: str
    value: Any

    def reversed(self) -> "EdgeRecord":
        """Return the target->source edge carrying the same value."""
        return EdgeRecord(source=self.target, target=self.source, value=self.value)

    def as_tuple(self) -> tuple[str, str, Any]:
        return (self.source, self.target, self.value)
