"""
Export module - Hand-off of generated tracks to other programs.

This module contains:
- nl2_csv: NoLimits 2 tab-separated point table
- TrackFileWriter: Writes an encoded table to disk
- preview: Position stream for the 3D viewer
"""

from coastergen.export.nl2_csv import export_bytes, export_text, suggested_filename
from coastergen.export.writer import ExportError, TrackFileWriter, WriterConfig
from coastergen.export.preview import position_stream, preview_message

__all__ = [
    "export_bytes",
    "export_text",
    "suggested_filename",
    "ExportError",
    "TrackFileWriter",
    "WriterConfig",
    "position_stream",
    "preview_message",
]
