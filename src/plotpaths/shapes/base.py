"""Shape base class.

A shape generates its outline in local space around the origin. The
absolute view rotates by ``rotation`` degrees, translates by ``pivot`` and
then offsets by the shape's own center.
"""

from plotpaths.core.geometry import polygon_is_clockwise
from plotpaths.domain import Point, Segment, SegmentCollection, Segments


class Shape(SegmentCollection):
    """A closed (unless opened) parametric outline.

    Subclasses implement ``to_points``. The default ``to_segments`` orients
    the outline by winding: non-inverted shapes come out counter-clockwise
    in screen space, inverted shapes clockwise.

    Attributes:
        is_inverted: Flip the winding produced by ``to_segments``
    """

    def __init__(self) -> None:
        super().__init__()
        self.is_open = False
        self.is_inverted = False

    def open(self) -> "Shape":
        """Mark as an open polyline; returns self for chaining."""
        self.is_open = True
        return self

    def invert(self) -> "Shape":
        """Toggle winding; returns self for chaining."""
        self.is_inverted = not self.is_inverted
        return self

    def to_points(self, local: bool = False) -> list[Point]:
        raise NotImplementedError(f"{type(self).__name__} does not implement to_points")

    def _place(self, pts: list[Point], center: Point, local: bool) -> list[Point]:
        if not local:
            pts = self.make_absolute(pts)
        return [Point(pt.x + center.x, pt.y + center.y) for pt in pts]

    def to_geom_points(self) -> list[list[list[float]]]:
        """Absolute outline as a single-ring polygon of ``[x, y]`` pairs."""
        return [[[pt.x, pt.y] for pt in self.to_points(False)]]

    def _needs_reverse(self, pts: list[Point]) -> bool:
        return polygon_is_clockwise(pts) == (not self.is_inverted)

    def _link(self, pts: list[Point]) -> list[Segment]:
        segs = []
        count = len(pts)
        for i in range(count):
            if self.is_open and i == count - 1:
                break
            segs.append(Segment(pts[i], pts[(i + 1) % count], dict(self.data)))
        return segs

    def to_segments(self, local: bool = False) -> list[Segment]:
        """Link the outline points into segments.

        Args:
            local: Skip the pivot and rotation transform

        Returns:
            Segments in winding order; no closing segment when open
        """
        pts = self.to_points(local)
        if self._needs_reverse(pts):
            pts = pts[::-1]
        return self._link(pts)

    def result(self) -> Segments:
        """Freeze the current outline into a plain segment collection."""
        return Segments(self.to_segments())
