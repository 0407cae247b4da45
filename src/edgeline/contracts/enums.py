"""Lifecycle states and output modes used across subsystem boundaries."""

from enum import StrEnum


class ReaderState(StrEnum):
    """Lifecycle of a per-split edge reader.

    UNINITIALIZED -> INITIALIZED -> READING -> EXHAUSTED. EXHAUSTED is
    terminal; readers are never reused.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    READING = "reading"
    EXHAUSTED = "exhausted"


class OutputFormat(StrEnum):
    """Rendering of produced edges on the CLI."""

    TSV = "tsv"
    JSONL = "jsonl"
