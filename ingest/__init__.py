"""
Thumbmark v1 - Ingest Module

This module provides the Netscape bookmark file codec and the pipelines
that import and export bookmarks.
"""

from .netscape_codec import InterchangeEntry, decode, encode
from .pipeline import ImportPipeline, ExportPipeline, ImportSummary, ExportFile

__all__ = [
    "InterchangeEntry",
    "decode",
    "encode",
    "ImportPipeline",
    "ExportPipeline",
    "ImportSummary",
    "ExportFile",
]
