"""Input and output layer for plotpaths.

This module handles loading geometry from JSON and writing SVG documents
and diagnostic records.

Key responsibilities:
- Load triangle meshes and shape specifications
- Serialize geometry into plotter-ready SVG
- Write documents with the ``-paths`` naming convention
- Emit rounded diagnostic records

Key classes:
- MeshReader / ShapeReader: Load input geometry
- SVGExporter: Render geometry into a document
- SVGWriter: Save documents
"""

from plotpaths.io.diagnostics import (
    paths_to_records,
    points_to_records,
    triangles_to_records,
    write_diagnostics,
)
from plotpaths.io.reader import MeshReader, ShapeReader
from plotpaths.io.svg import SVGExporter, lop
from plotpaths.io.writer import SVGWriter

__all__ = [
    "MeshReader",
    "SVGExporter",
    "SVGWriter",
    "ShapeReader",
    "lop",
    "paths_to_records",
    "points_to_records",
    "triangles_to_records",
    "write_diagnostics",
]
