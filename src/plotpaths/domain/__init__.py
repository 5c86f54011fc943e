"""Domain models for plotpaths.

This module contains the value types shared by every layer. All models are
designed to be:

- Immutable where possible (points and curve spans are frozen dataclasses)
- Free of algorithm state (no per-pass annotations on points)
- Independent of the geometry algorithms built on top of them

Key classes:
- Point: An immutable 2D point
- Segment: A directed line with presentation metadata
- BoundingBox / BoundingCircle: Bounds helpers
- CurvePoint / Curve: Cubic Bezier spans
- SegmentCollection: Base for anything producing points and segments
- Segments: A collection over an explicit segment list
"""

from plotpaths.domain.collection import SegmentCollection, Segments
from plotpaths.domain.curve import Curve, CurvePoint
from plotpaths.domain.primitives import (
    BoundingBox,
    BoundingCircle,
    Point,
    Segment,
    make_absolute,
    make_segments_absolute,
    points_equal,
    rotate_point,
    rotate_point_deg,
    round_half_up,
    round_to,
)

__all__: list[str] = [
    # Core types
    "Point",
    "Segment",
    "BoundingBox",
    "BoundingCircle",
    "CurvePoint",
    "Curve",
    # Collections
    "SegmentCollection",
    "Segments",
    # Helpers
    "make_absolute",
    "make_segments_absolute",
    "points_equal",
    "rotate_point",
    "rotate_point_deg",
    "round_half_up",
    "round_to",
]
