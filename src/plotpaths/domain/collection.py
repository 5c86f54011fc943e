"""Segment collections: anything that yields points and segments.

A collection owns a pivot and a rotation. Geometry is generated in local
space and moved into absolute space by the free transform functions in
``plotpaths.domain.primitives``.
"""

import math
from typing import Any

from plotpaths.domain.primitives import (
    BoundingBox,
    BoundingCircle,
    Point,
    Segment,
    make_absolute,
    make_segments_absolute,
)


class SegmentCollection:
    """Base class for point and segment producers.

    Subclasses must implement ``to_points`` and ``to_segments``.

    Attributes:
        pivot: Translation applied in absolute space
        rotation: Rotation in degrees applied before translation
        is_open: Whether the outline is an open polyline
        is_group: Export as a line group
        is_strong: Emphasis hint for callers
        data: Presentation metadata (color, width, fill_color, outline, discrete)
    """

    def __init__(self) -> None:
        self.pivot = Point(0.0, 0.0)
        self.rotation = 0.0
        self.is_open = True
        self.is_group = False
        self.is_strong = False
        self.data: dict[str, Any] = {}

    def to_points(self, local: bool = False) -> list[Point]:
        raise NotImplementedError(f"{type(self).__name__} does not implement to_points")

    def to_segments(self, local: bool = False) -> list[Segment]:
        raise NotImplementedError(f"{type(self).__name__} does not implement to_segments")

    def make_absolute(self, points: list[Point]) -> list[Point]:
        """Apply this collection's rotation and pivot to local points."""
        return make_absolute(points, self.pivot, self.rotation)

    def make_segments_absolute(self, segs: list[Segment]) -> list[Segment]:
        """Apply this collection's rotation and pivot to local segments."""
        return make_segments_absolute(segs, self.pivot, self.rotation)

    def bounding_box(self, local: bool = False) -> BoundingBox:
        """Bounds of the generated points."""
        bb = BoundingBox.empty()
        for pt in self.to_points(local):
            bb.include_point(pt)
        return bb

    def bounding_circle(self) -> BoundingCircle:
        """Smallest origin-centered circle around the local points."""
        bc = BoundingCircle()
        for pt in self.to_points(True):
            bc.r = max(bc.r, math.hypot(pt.x, pt.y))
        return bc


class Segments(SegmentCollection):
    """A collection wrapping an explicit list of segments.

    Example:
        segs = Segments([Segment(Point(0, 0), Point(10, 0))])
        segs.pivot = Point(5, 5)
        segs.to_segments()  # segment from (5, 5) to (15, 5)
    """

    def __init__(self, segments: list[Segment] | None = None) -> None:
        super().__init__()
        self._segments: list[Segment] = list(segments or [])

    def __len__(self) -> int:
        return len(self._segments)

    def add(self, *segs: Segment) -> None:
        """Append segments."""
        self._segments.extend(segs)

    def to_points(self, local: bool = False) -> list[Point]:
        """Endpoints of every segment, two per segment."""
        pts: list[Point] = []
        for seg in self.to_segments(local):
            pts.extend((seg.a, seg.b))
        return pts

    def to_segments(self, local: bool = False) -> list[Segment]:
        """Copies of the stored segments, transformed unless ``local``."""
        segs = [seg.clone() for seg in self._segments if seg is not None]
        if not local:
            segs = self.make_segments_absolute(segs)
        return segs

    def result(self) -> "Segments":
        return self.clone()

    def clone(self) -> "Segments":
        """Deep copy including pivot, rotation and metadata."""
        out = Segments([seg.clone() for seg in self._segments])
        out.pivot = self.pivot
        out.rotation = self.rotation
        out.is_open = self.is_open
        out.is_group = self.is_group
        out.is_strong = self.is_strong
        out.data = dict(self.data)
        return out
