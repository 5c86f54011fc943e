"""Core geometry algorithms for plotpaths.

This module contains the algorithms for:

- Geometry operations (intersections, containment, winding, subdivision)
- Masking (crop to box or outline, cut an outline out)
- Polygon boolean merge by segment splitting
- Outline offsetting and corner-cutting smoothing
- Flow-line extraction from triangle meshes
- Colour alpha classification

All functions are designed to be:
- Stateless (per-call side tables only)
- Pure (inputs are never modified)
- Tolerant of degenerate input (None or empty results instead of errors)

Key functions:
- point_within_polygon: Ray-cast containment with bounding-box early-out
- segment_segment_intersect: Parametric segment intersection
- polygon_is_clockwise: Winding from signed shoelace area
- merge_shapes: Union or subtract shape outlines
- offset_segs: Offset a segment run
- smooth_segments: Chaikin-style smoothing per connected run
- find_paths: Extract disjoint flow lines from a mesh graph

Key classes:
- MeshGraph: Canonicalized adjacency graph over a triangle mesh
- PathSearchResult: Flow lines plus search bookkeeping

The render pipeline lives in ``plotpaths.core.pipeline`` and is imported
from there directly.
"""

from plotpaths.core.clipping import (
    crop_path_data_to_bounding_box,
    crop_segs_to_bounding_box,
    crop_segs_to_shape,
    cut_shape_from_segs,
)
from plotpaths.core.coloring import ColorSampler, apply_colors, color_alpha, is_below_alpha
from plotpaths.core.geometry import (
    point_within_polygon,
    polygon_area,
    polygon_is_clockwise,
    segment_segment_intersect,
    segment_within_polygon,
)
from plotpaths.core.merge import merge_shapes
from plotpaths.core.offset import offset_points, offset_segs
from plotpaths.core.pathfinder import (
    MeshGraph,
    MeshNode,
    PathSearchResult,
    WalkPhase,
    find_path,
    find_paths,
)
from plotpaths.core.smoothing import smooth_line, smooth_segments

__all__ = [
    # Colour
    "ColorSampler",
    # Path finder classes
    "MeshGraph",
    "MeshNode",
    "PathSearchResult",
    "WalkPhase",
    "apply_colors",
    "color_alpha",
    # Clipping functions
    "crop_path_data_to_bounding_box",
    "crop_segs_to_bounding_box",
    "crop_segs_to_shape",
    "cut_shape_from_segs",
    "find_path",
    "find_paths",
    "is_below_alpha",
    # Merge, offset, smoothing
    "merge_shapes",
    "offset_points",
    "offset_segs",
    # Geometry functions
    "point_within_polygon",
    "polygon_area",
    "polygon_is_clockwise",
    "segment_segment_intersect",
    "segment_within_polygon",
    "smooth_line",
    "smooth_segments",
]
