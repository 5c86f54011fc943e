"""Core geometric value types.

This module defines the primitives every other layer is built on:
- Point: An immutable 2D point
- Segment: A directed line between two points with presentation metadata
- BoundingBox: Axis-aligned bounds with an explicit empty sentinel
- BoundingCircle: Radius of the smallest origin-centered enclosing circle

It also hosts the tolerance-based point equality used throughout the package
and the rotate-then-translate transform applied to locally generated geometry.

Coordinates are screen space: y grows downward, so a positive shoelace area
means a clockwise polygon.
"""

import math
from dataclasses import dataclass, field
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding toward +infinity.

    Args:
        value: Value to round

    Returns:
        Rounded integer

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def round_to(value: float, decimals: int) -> float:
    """Round half-up to a fixed number of decimals."""
    factor = 10**decimals
    return round_half_up(value * factor) / factor


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Algorithms that need per-point annotations keep
    them in their own side tables rather than on the point.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def clone(self) -> "Point":
        """Return an equal, independent copy."""
        return Point(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


def points_equal(a: Point, b: Point, scale: float = 1) -> bool:
    """Compare two points at 4-decimal precision.

    Coordinates are divided by ``scale`` before rounding, so larger scales
    widen the tolerance (scale 10000 treats points within about one unit as
    equal).

    Args:
        a: First point
        b: Second point
        scale: Tolerance scale

    Returns:
        True if both rounded coordinates match
    """
    return round_half_up(a.x * 10000 / scale) == round_half_up(
        b.x * 10000 / scale
    ) and round_half_up(a.y * 10000 / scale) == round_half_up(b.y * 10000 / scale)


@dataclass(eq=False)
class Segment:
    """A directed line segment from ``a`` to ``b``.

    Segments compare by identity. Use ``Segment.is_equal`` for tolerance-based
    geometric comparison.

    Attributes:
        a: Start point
        b: End point
        data: Presentation metadata (color, width)
        tags: Free-form labels
    """

    a: Point
    b: Point
    data: dict[str, Any] = field(default_factory=dict)
    tags: dict[str, Any] = field(default_factory=dict)

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.b.x - self.a.x, self.b.y - self.a.y)

    def length_squared(self) -> float:
        """Squared length."""
        dx = self.b.x - self.a.x
        dy = self.b.y - self.a.y
        return dx * dx + dy * dy

    def angle(self) -> float:
        """Direction of travel in radians, in [-pi, pi]."""
        return math.atan2(self.b.y - self.a.y, self.b.x - self.a.x)

    def clone(self) -> "Segment":
        """Return a copy with its own metadata dictionaries."""
        return Segment(self.a, self.b, dict(self.data), dict(self.tags))

    def flipped(self) -> "Segment":
        """Return a copy running from ``b`` to ``a``."""
        return Segment(self.b, self.a, dict(self.data), dict(self.tags))

    @staticmethod
    def is_equal(
        seg_a: "Segment",
        seg_b: "Segment",
        scale: float = 1,
        no_reverse: bool = False,
    ) -> bool:
        """Check whether two segments share endpoints.

        Args:
            seg_a: First segment
            seg_b: Second segment
            scale: Tolerance scale passed to points_equal
            no_reverse: If True, opposite directions do not match

        Returns:
            True if the segments coincide
        """
        if points_equal(seg_a.a, seg_b.a, scale) and points_equal(seg_a.b, seg_b.b, scale):
            return True
        if no_reverse:
            return False
        return points_equal(seg_a.b, seg_b.a, scale) and points_equal(seg_a.a, seg_b.b, scale)

    @staticmethod
    def reverse(segs: list["Segment"]) -> list["Segment"]:
        """Reverse a run of segments.

        Returns a new list in reverse order with every segment flipped. The
        input list and its segments are left untouched; applying this twice
        restores the original run.

        Args:
            segs: Segments to reverse

        Returns:
            Reversed run
        """
        return [seg.flipped() for seg in reversed(segs)]


@dataclass
class BoundingBox:
    """Axis-aligned bounding box.

    ``BoundingBox.empty()`` is an inverted sentinel that any real point
    replaces on the first ``include_point`` call.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> "BoundingBox":
        """Create an empty sentinel box."""
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @property
    def is_empty(self) -> bool:
        """Whether no point has been accumulated."""
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        """Box width (0 for an empty box)."""
        if self.is_empty:
            return 0.0
        return abs(self.max_x - self.min_x)

    @property
    def height(self) -> float:
        """Box height (0 for an empty box)."""
        if self.is_empty:
            return 0.0
        return abs(self.max_y - self.min_y)

    @property
    def center(self) -> Point:
        """Center point."""
        return Point(
            self.min_x + (self.max_x - self.min_x) * 0.5,
            self.min_y + (self.max_y - self.min_y) * 0.5,
        )

    def include_point(self, pt: Point) -> None:
        """Grow the box to contain a point."""
        self.min_x = min(self.min_x, pt.x)
        self.min_y = min(self.min_y, pt.y)
        self.max_x = max(self.max_x, pt.x)
        self.max_y = max(self.max_y, pt.y)

    def include_box(self, other: "BoundingBox") -> None:
        """Grow the box to contain another box."""
        self.min_x = min(self.min_x, other.min_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_x = max(self.max_x, other.max_x)
        self.max_y = max(self.max_y, other.max_y)

    def equals(self, other: "BoundingBox") -> bool:
        """Compare corners with a loose tolerance (scale 10)."""
        return points_equal(
            Point(self.min_x, self.min_y), Point(other.min_x, other.min_y), 10
        ) and points_equal(Point(self.max_x, self.max_y), Point(other.max_x, other.max_y), 10)

    def to_dict(self) -> dict[str, float]:
        """Serialize to dictionary."""
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass
class BoundingCircle:
    """Origin-centered enclosing circle."""

    r: float = 0.0


def rotate_point(pt: Point, rad: float) -> Point:
    """Rotate a point about the origin.

    Positive angles turn +y toward +x, matching the parametric shape
    formulas that start at (0, r).

    Args:
        pt: Point to rotate
        rad: Angle in radians

    Returns:
        Rotated point
    """
    cos = math.cos(rad)
    sin = math.sin(rad)
    return Point(sin * pt.y + cos * pt.x, cos * pt.y - sin * pt.x)


def rotate_point_deg(pt: Point, deg: float) -> Point:
    """Rotate a point about the origin by degrees."""
    return rotate_point(pt, math.radians(deg))


def make_absolute(points: list[Point], pivot: Point, rotation: float) -> list[Point]:
    """Move locally generated points into absolute space.

    Args:
        points: Points in local space
        pivot: Translation applied after rotation
        rotation: Rotation in degrees

    Returns:
        New list of transformed points
    """
    rad = math.radians(rotation)
    out = []
    for pt in points:
        rotated = rotate_point(pt, rad)
        out.append(Point(rotated.x + pivot.x, rotated.y + pivot.y))
    return out


def make_segments_absolute(
    segs: list[Segment], pivot: Point, rotation: float
) -> list[Segment]:
    """Segment counterpart of make_absolute; metadata is copied."""
    rad = math.radians(rotation)
    out = []
    for seg in segs:
        a = rotate_point(seg.a, rad)
        b = rotate_point(seg.b, rad)
        out.append(
            Segment(
                Point(a.x + pivot.x, a.y + pivot.y),
                Point(b.x + pivot.x, b.y + pivot.y),
                dict(seg.data),
                dict(seg.tags),
            )
        )
    return out
