"""Rectangular shapes.

Shapes taking ``division_distance`` subdivide each edge into steps of about
that length; shared corners appear once.
"""

from plotpaths.core.geometry import subdivide_by_distance
from plotpaths.domain import Point, rotate_point_deg
from plotpaths.shapes.base import Shape
from plotpaths.shapes.round import Arc


def subdivide_outline(corners: list[Point], division_distance: float) -> list[Point]:
    """Subdivide a closed corner loop, each corner listed once."""
    if division_distance <= 0:
        return list(corners)
    pts: list[Point] = []
    count = len(corners)
    for idx, corner in enumerate(corners):
        pts.extend(subdivide_by_distance(corner, corners[(idx + 1) % count], division_distance)[:-1])
    return pts


class Rectangle(Shape):
    """Axis-aligned rectangle centered on ``center``.

    Example:
        >>> rect = Rectangle(Point(0, 0), 10, 10)
        >>> len(rect.to_points()), len(rect.to_segments())
        (4, 4)
    """

    def __init__(
        self, center: Point, width: float, height: float, division_distance: float = 0
    ) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.division_distance = division_distance

    def corners(self) -> list[Point]:
        hw = self.width * 0.5
        hh = self.height * 0.5
        return [Point(-hw, -hh), Point(-hw, hh), Point(hw, hh), Point(hw, -hh)]

    def to_points(self, local: bool = False) -> list[Point]:
        pts = subdivide_outline(self.corners(), self.division_distance)
        return self._place(pts, self.center, local)


class Square(Rectangle):
    """Rectangle with equal sides."""

    def __init__(self, center: Point, size: float, division_distance: float = 0) -> None:
        super().__init__(center, size, size, division_distance)


class Tape(Shape):
    """Rectangle whose short ends are cut with ``zigzags`` notches, like torn tape."""

    def __init__(self, center: Point, width: float, height: float, zigzags: int = 3) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.zigzags = zigzags

    def to_points(self, local: bool = False) -> list[Point]:
        hw = self.width * 0.5
        hh = self.height * 0.5
        delta = self.width / (self.zigzags * 2)

        pts = [Point(-hw, -hh), Point(-hw, hh)]
        for i in range(self.zigzags):
            pts.append(Point(-hw + delta * (i * 2) + delta, hh - delta))
            if i < self.zigzags - 1:
                pts.append(Point(-hw + delta * ((i + 1) * 2), hh))

        pts.extend([Point(hw, hh), Point(hw, -hh)])
        for i in range(self.zigzags):
            pts.append(Point(hw - delta * (i * 2) - delta, -hh + delta))
            if i < self.zigzags - 1:
                pts.append(Point(hw - delta * ((i + 1) * 2), -hh))

        return self._place(pts, self.center, local)


class RoundedRect(Shape):
    """Rectangle with quarter-circle corners of ``corner_radius``."""

    def __init__(
        self,
        center: Point,
        width: float,
        height: float,
        corner_radius: float,
        corner_segments: int = 12,
        division_distance: float = 0,
    ) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.corner_radius = corner_radius
        self.corner_segments = corner_segments
        self.division_distance = division_distance

    def _arcs(self) -> list[Arc]:
        r = self.corner_radius
        hw = self.width * 0.5
        hh = self.height * 0.5
        segs = self.corner_segments
        return [
            Arc(Point(-hw + r, -hh + r), r, 180, 270, segs).open(),
            Arc(Point(-hw + r, hh - r), r, 270, 360, segs).open(),
            Arc(Point(hw - r, hh - r), r, 0, 90, segs).open(),
            Arc(Point(hw - r, -hh + r), r, 90, 180, segs).open(),
        ]

    def to_points(self, local: bool = False) -> list[Point]:
        arcs = self._arcs()
        pts: list[Point] = []
        for idx, arc in enumerate(arcs):
            pts.extend(arc.to_points())
            if self.division_distance > 0:
                nxt = arcs[(idx + 1) % len(arcs)].to_points()[0]
                pts.extend(subdivide_by_distance(pts[-1], nxt, self.division_distance)[1:-1])
        return self._place(pts, self.center, local)


class CornerRect(Shape):
    """Rectangle anchored at its top-left corner ``(x, y)`` instead of a center."""

    def __init__(
        self, x: float, y: float, width: float, height: float, division_distance: float = 0
    ) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.division_distance = division_distance

    def to_points(self, local: bool = False) -> list[Point]:
        x, y, w, h = self.x, self.y, self.width, self.height
        corners = [Point(x, y), Point(x, y + h), Point(x + w, y + h), Point(x + w, y)]
        pts = subdivide_outline(corners, self.division_distance)
        if not local:
            pts = self.make_absolute(pts)
        return pts


class BranchRect(Shape):
    """Trapezoid growing from its base at the center, ``height`` along +y.

    ``taper`` narrows the far end on both sides. ``end_point`` gives the
    middle of the far end, where a child branch would attach.
    """

    def __init__(
        self,
        center: Point,
        width: float,
        height: float,
        taper: float = 0,
        division_distance: float = 0,
    ) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.taper = taper
        self.division_distance = division_distance

    def end_point(self) -> Point:
        tip = rotate_point_deg(Point(0, self.height), self.rotation)
        return Point(tip.x + self.center.x, tip.y + self.center.y)

    def to_points(self, local: bool = False) -> list[Point]:
        hw = self.width * 0.5
        corners = [
            Point(-hw, 0),
            Point(-hw + self.taper, self.height),
            Point(hw - self.taper, self.height),
            Point(hw, 0),
        ]
        pts = subdivide_outline(corners, self.division_distance)
        return self._place(pts, self.center, local)
