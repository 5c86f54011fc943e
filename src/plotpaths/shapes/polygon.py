"""Star, free-form polygon and parametric shapes."""

from collections.abc import Callable

from plotpaths.core.geometry import angle_between
from plotpaths.domain import Point, Segment, points_equal, rotate_point_deg
from plotpaths.shapes.base import Shape
from plotpaths.shapes.rect import subdivide_outline


class Star(Shape):
    """Star alternating ``inner_radius`` and ``outer_radius`` vertices.

    Inner vertices sit at ``k * 360 / points`` degrees and outer vertices
    half a step later. The inner start vertex is repeated at the end.
    """

    def __init__(
        self,
        center: Point,
        inner_radius: float,
        outer_radius: float,
        points: int = 5,
        division_distance: float = 0,
    ) -> None:
        super().__init__()
        self.center = center
        self.inner_radius = inner_radius
        self.outer_radius = outer_radius
        self.points = points
        self.division_distance = division_distance

    def to_points(self, local: bool = False) -> list[Point]:
        step = 360 / self.points
        pts = []
        for i in range(self.points + 1):
            pts.append(rotate_point_deg(Point(0, self.inner_radius), i * step))
            if i != self.points:
                pts.append(rotate_point_deg(Point(0, self.outer_radius), i * step + 0.5 * step))
        pts = self._place(pts, self.center, local)
        return subdivide_outline(pts, self.division_distance)


class PolygonShape(Shape):
    """Outline from an explicit point list.

    Unlike other shapes, ``to_segments`` keeps the given point order instead
    of normalizing the winding.
    """

    def __init__(self, points: list[Point], division_distance: float = 0) -> None:
        super().__init__()
        self.points = list(points)
        self.division_distance = division_distance

    def to_points(self, local: bool = False) -> list[Point]:
        pts = list(self.points)
        if not local:
            pts = self.make_absolute(pts)
        return subdivide_outline(pts, self.division_distance)

    def to_segments(self, local: bool = False) -> list[Segment]:
        return self._link(self.to_points(local))

    def optimize(self) -> None:
        """Clean the point list for boolean merging.

        An open outline whose ends meet is closed. For closed outlines the
        list is rotated so it starts at the sharpest turn, then vertices that
        continue in a straight line are removed.
        """
        pts = self.points
        if len(pts) < 2:
            return

        if self.is_open and points_equal(pts[0], pts[-1]):
            self.is_open = False
            pts.pop()
        if self.is_open:
            return

        last_angle: float | None = None
        max_turn = 0.0
        max_idx = 0
        for i in range(len(pts) - 2, -1, -1):
            ang = angle_between(pts[i], pts[i + 1])
            if last_angle is not None and max_turn <= abs(last_angle - ang):
                max_turn = abs(last_angle - ang)
                max_idx = i
            last_angle = ang

        for _ in range(max_idx):
            pts.insert(0, pts.pop())

        last_angle = None
        for i in range(len(pts) - 2, -1, -1):
            ang = angle_between(pts[i], pts[i + 1])
            if last_angle is not None and abs(last_angle - ang) < 0.0001:
                del pts[i + 1]
            last_angle = ang

    @classmethod
    def from_geom_points(cls, geom_points: list[list[float]]) -> "PolygonShape":
        """Build from ``[x, y]`` pairs."""
        return cls([Point(float(gp[0]), float(gp[1])) for gp in geom_points])

    @classmethod
    def from_points(cls, points: list[Point]) -> "PolygonShape":
        return cls(points)


class ParametricShape(Shape):
    """Outline sampled from a function of ``t`` in ``[0, 1]``.

    ``points_function`` may return None to skip a sample.
    """

    def __init__(self, points_function: Callable[[float], Point | None], segments: int = 12) -> None:
        super().__init__()
        self.points_function = points_function
        self.segments = segments

    def to_points(self, local: bool = False) -> list[Point]:
        pts = []
        step = 1 / self.segments
        t = 0.0
        while t <= 1:
            pt = self.points_function(t)
            if pt is not None:
                pts.append(pt)
            t += step
        if not local:
            pts = self.make_absolute(pts)
        return pts
