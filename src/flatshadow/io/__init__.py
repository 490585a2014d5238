"""SVG I/O layer for flatshadow.

This module handles reading artwork and writing icons. It provides a clean
abstraction layer between fontTools' SVG path tooling and the domain models.

Key responsibilities:
- Parse SVG path data into CompoundShapes
- Serialize shapes back to path data
- Load SVG documents and read stored icon options
- Write composed icons as SVG documents

Key classes:
- SvgReader: Load SVG files and extract outlines
- IconWriter: Save composed icons
"""

from flatshadow.io.converter import format_path_data, parse_path_data
from flatshadow.io.reader import SvgReader
from flatshadow.io.writer import IconWriter

__all__ = [
    "IconWriter",
    "SvgReader",
    "format_path_data",
    "parse_path_data",
]
