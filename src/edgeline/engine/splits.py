# src/edgeline/engine/splits.py
"""Input splits: in-memory lines and byte ranges of text files.

FileSplit follows the usual convention for line-oriented splits of one
file: a line belongs to the split in which its first byte falls. A split
that does not start at byte 0 therefore skips the partial line it starts
in, and a split reads past its end to finish its last line. Adjacent splits
over one file together yield every line exactly once.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO

from edgeline.contracts.errors import EdgeParseError, ReaderConfigurationError


class LineStream(Iterator[str]):
    """An open, single-pass sequence of lines.

    Lines are yielded without their terminator. close() releases the
    underlying handle, if any, and is idempotent.
    """

    def __init__(self, lines: Iterator[str], handle: IO[bytes] | None = None) -> None:
        self._lines = lines
        self._handle = handle
        self._closed = False

    def __iter__(self) -> "LineStream":
        return self

    def __next__(self) -> str:
        if self._closed:
            raise StopIteration
        return next(self._lines)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._handle is not None:
            self._handle.close()


class LineSplit:
    """A split over lines already in memory.

    The lines are copied at construction, so later changes to the caller's
    list are not seen.
    """

    def __init__(self, lines: Iterable[str], uri: str = "memory") -> None:
        self.uri = uri
        self._lines = tuple(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def open_lines(self) -> LineStream:
        return LineStream(iter(self._lines))

    def __repr__(self) -> str:
        return f"LineSplit(uri={self.uri!r}, lines={len(self._lines)})"


class FileSplit:
    """A byte range ``[start, start + length)`` of a text file.

    Args:
        path: File to read
        start: Byte offset of the split
        length: Bytes in the split; None reads to end of file
        encoding: Text encoding of the file
    """

    def __init__(
        self,
        path: str | Path,
        start: int = 0,
        length: int | None = None,
        encoding: str = "utf-8",
    ) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        if length is not None and length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        self.path = Path(path)
        self.start = start
        self.length = length
        self.encoding = encoding

    @property
    def uri(self) -> str:
        if self.start == 0 and self.length is None:
            return str(self.path)
        end = "" if self.length is None else str(self.start + self.length)
        return f"{self.path}[{self.start}:{end}]"

    def open_lines(self) -> LineStream:
        """Open the file and position at the first line owned by this split.

        Raises:
            ReaderConfigurationError: If the file cannot be opened
        """
        try:
            handle = open(self.path, "rb")  # noqa: SIM115 - owned by the returned LineStream
        except OSError as e:
            raise ReaderConfigurationError(f"Cannot open split {self.uri}: {e.strerror or e}") from e

        try:
            if self.start > 0:
                # Discard the line containing byte start-1; if that byte is
                # the newline itself, only the newline is discarded
                handle.seek(self.start - 1)
                handle.readline()
        except OSError as e:
            handle.close()
            raise ReaderConfigurationError(f"Cannot seek split {self.uri}: {e.strerror or e}") from e

        return LineStream(self._iter_lines(handle), handle)

    def _iter_lines(self, handle: IO[bytes]) -> Iterator[str]:
        end = None if self.length is None else self.start + self.length
        while True:
            position = handle.tell()
            if end is not None and position >= end:
                return
            data = handle.readline()
            if not data:
                return
            if data.endswith(b"\n"):
                data = data[:-1]
            if data.endswith(b"\r"):
                data = data[:-1]
            try:
                yield data.decode(self.encoding)
            except UnicodeDecodeError as e:
                raise EdgeParseError(f"line is not valid {self.encoding}: {e.reason}") from e

    def __repr__(self) -> str:
        return f"FileSplit({self.uri!r})"
