"""Cubic Bezier curve types consumed by the SVG curve emitter."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from plotpaths.domain.primitives import BoundingBox, Point


@dataclass(frozen=True, slots=True)
class CurvePoint:
    """One cubic Bezier span.

    Attributes:
        x, y: Start point
        cx, cy: First control point
        cx2, cy2: Second control point
        x2, y2: End point
    """

    x: float
    y: float
    cx: float
    cy: float
    cx2: float
    cy2: float
    x2: float
    y2: float

    @property
    def start(self) -> Point:
        return Point(self.x, self.y)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)

    @classmethod
    def from_array(cls, arr: Sequence[Sequence[float]]) -> "CurvePoint":
        """Build from ``[[x, y], [cx, cy], [cx2, cy2], [x2, y2]]``."""
        return cls(
            arr[0][0],
            arr[0][1],
            arr[1][0],
            arr[1][1],
            arr[2][0],
            arr[2][1],
            arr[3][0],
            arr[3][1],
        )


@dataclass
class Curve:
    """A chain of cubic spans drawn as one path."""

    points: list[CurvePoint]
    data: dict[str, Any] = field(default_factory=dict)

    def to_points(self, local: bool = False) -> list[CurvePoint]:  # noqa: ARG002
        """Return the spans. Curves carry no pivot, so ``local`` is ignored."""
        return list(self.points)

    def bounding_box(self) -> BoundingBox:
        """Bounds of the span start points."""
        bb = BoundingBox.empty()
        for pt in self.points:
            bb.include_point(pt.start)
        return bb

    @classmethod
    def from_array(
        cls,
        arr: Sequence[Sequence[Sequence[float]]],
        data: dict[str, Any] | None = None,
    ) -> "Curve":
        """Build from a list of span arrays."""
        return cls([CurvePoint.from_array(a) for a in arr], dict(data or {}))
