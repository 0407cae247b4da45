"""
Edgeline: edge ingestion for bulk graph-processing pipelines.

Converts delimited text records, delivered split by split, into typed
directed-edge records for a graph-computation engine.
"""

__version__ = "0.3.0"
