# src/edgeline/contracts/errors.py
"""Exception hierarchy for edge ingestion.

Every failure raised by a reader is fatal for the split that produced it.
Nothing here is retried locally: the host scheduler that owns the split
decides whether to retry it, skip it, or fail the job.
"""


class EdgeIngestError(Exception):
    """Base exception for all edge ingestion failures."""


class LineError(EdgeIngestError):
    """Failure tied to a single input line.

    Attributes:
        reason: Human-readable cause, without location context
        split_uri: URI of the split being read, if known
        line_number: 1-based line number within the split, if known
        line: The offending line (terminator stripped), if known
    """

    def __init__(
        self,
        reason: str,
        *,
        split_uri: str | None = None,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.reason = reason
        self.split_uri = split_uri
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.reason
        location = f"{self.split_uri}:{self.line_number}" if self.split_uri else f"line {self.line_number}"
        return f"{location}: {self.reason} (line: {self.line!r})"

    def at(self, *, split_uri: str, line_number: int, line: str) -> "LineError":
        """Return a copy of this error carrying split and line context."""
        return type(self)(self.reason, split_uri=split_uri, line_number=line_number, line=line)


class EdgeParseError(LineError):
    """Raised when a line lacks a source or target field."""


class EdgeValidationError(LineError):
    """Raised when a codec rejects an edge's raw value."""


class ReaderConfigurationError(EdgeIngestError):
    """Raised when a reader cannot establish access to its split."""


class ReaderStateError(EdgeIngestError):
    """Raised when a reader is driven out of lifecycle order."""


class PluginNotFoundError(EdgeIngestError):
    """Raised when a codec name is not registered with the plugin manager."""
