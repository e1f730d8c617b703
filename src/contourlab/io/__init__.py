"""Batch file I/O layer for contourlab.

This module handles reading polyline batches and writing descriptor results
as JSON. It keeps file formats out of the geometric core.

Key responsibilities:
- Load named polylines from JSON batch files
- Convert records to and from domain polylines
- Write descriptor results and per-polyline errors

Key classes:
- PolylineReader: Load batch files and iterate over records
- ResultWriter: Save descriptor results
"""

from contourlab.io.converter import polyline_to_record, record_to_polyline
from contourlab.io.reader import PolylineReader
from contourlab.io.writer import ResultWriter

__all__ = [
    "PolylineReader",
    "ResultWriter",
    "polyline_to_record",
    "record_to_polyline",
]
