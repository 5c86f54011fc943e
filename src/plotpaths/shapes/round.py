"""Round shapes: circles, spirals, arcs and capsules."""

import math

from plotpaths.core.clipping import crop_segs_to_bounding_box
from plotpaths.core.geometry import distance_between, lerp_points, rotate_points_deg
from plotpaths.domain import BoundingBox, Point, Segment, rotate_point_deg
from plotpaths.shapes.base import Shape


class Circle(Shape):
    """Regular polygon approximating a circle.

    Points start at ``(0, radius)`` and step ``360 / segments`` degrees.
    ``overdraw_steps`` repeats that many points past the start and opens the
    outline, so a plotter pen overlaps its own start.

    Issue: the radius is used as the vertex distance, so the polygon's edges
    sit inside the nominal circle. This is kept as is.
    """

    def __init__(
        self, center: Point, radius: float, segments: int = 12, overdraw_steps: int = 0
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.segments = segments
        self.overdraw_steps = overdraw_steps
        self.is_open = bool(overdraw_steps)

    def to_points(self, local: bool = False) -> list[Point]:
        pts = [
            rotate_point_deg(Point(0, self.radius), i * (360 / self.segments))
            for i in range(self.segments + self.overdraw_steps)
        ]
        return self._place(pts, self.center, local)


class Spiral(Shape):
    """Archimedean spiral, open.

    Winding ``j`` at angle fraction ``p`` sits at distance
    ``d = (j + p) * radius / windings``, compressed to
    ``d * (radius - d * (1 - dist_scale)) / radius``. Points closer than 1%
    of the radius to the previous point are skipped; with ``remove_center``
    the innermost half winding is dropped.
    """

    def __init__(
        self,
        center: Point,
        radius: float,
        windings: int = 6,
        detail: float = 1,
        remove_center: bool = False,
        dist_scale: float = 1,
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.windings = windings
        self.segments = int(16 * 4 * detail)
        self.remove_center = remove_center
        self.dist_scale = dist_scale
        self.is_open = True

    def to_points(self, local: bool = False) -> list[Point]:
        pts: list[Point] = []
        sep = self.radius / self.windings
        for j in range(self.windings):
            for i in range(self.segments + 1):
                deg = i * (360 / self.segments)
                perc = deg / 360
                dist = j * sep + sep * perc
                scaled = dist * (self.radius - dist * (1 - self.dist_scale)) / self.radius
                pt = rotate_point_deg(Point(0, scaled), deg)
                if pts and distance_between(pts[-1], pt) <= self.radius * 0.01:
                    continue
                if self.remove_center and dist <= self.radius / self.windings * 0.5:
                    continue
                pts.append(pt)
        return self._place(pts, self.center, local)


class MorphSpiral(Shape):
    """Spiral that morphs from round at the center to square at the rim.

    Each point is blended toward the bounding square along its ray by
    ``amt = ((j + p) / (windings - 1)) ** 4``; the last winding stops
    after three eighths of a turn.
    """

    def __init__(self, center: Point, radius: float, windings: int = 6, detail: float = 1) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.windings = windings
        self.segments = int(16 * 4 * detail)
        self.is_open = True

    def to_points(self, local: bool = False) -> list[Point]:
        pts: list[Point] = []
        r = self.radius
        sep = r / self.windings
        span = max(1, self.windings - 1)
        bb = BoundingBox(-r, -r, r, r)

        for j in range(self.windings):
            steps = self.segments
            if j == self.windings - 1:
                steps = math.ceil(steps * 0.375)
            for i in range(steps + 1):
                deg = i * (360 / self.segments)
                perc = deg / 360
                amt = (j / span + perc / span) ** 4

                ray = Segment(Point(0, 0), rotate_point_deg(Point(0, r * 2), deg))
                cropped = crop_segs_to_bounding_box([ray], bb)
                edge = cropped[0].b if cropped else ray.b

                pt = rotate_point_deg(Point(0, j * sep + sep * perc), deg)
                pt = lerp_points(pt, edge, amt)
                if not pts or distance_between(pts[-1], pt) > r * 0.01:
                    pts.append(pt)
        return self._place(pts, self.center, local)


class RoundShape(Shape):
    """Wobbly circle: each vertex is scaled by sine and cosine noise."""

    def __init__(
        self, center: Point, radius: float, segments: int = 12, variance: float = 0.08
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.segments = segments
        self.variance = variance

    def to_points(self, local: bool = False) -> list[Point]:
        pts = []
        r = self.radius
        for i in range(self.segments):
            pt = rotate_point_deg(Point(0, r), i * (360 / self.segments))
            x = pt.x * (1 + math.sin((pt.y + 10000) / r * 1.2) * self.variance)
            y = pt.y * (1 + math.cos((x + 10000) / r * 1.35) * self.variance)
            pts.append(Point(x, y))
        return self._place(pts, self.center, local)


class Capsule(Shape):
    """Circle split at 0 and 180 degrees with a straight shaft of ``length``."""

    def __init__(self, center: Point, radius: float, length: float, segments: int = 12) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.length = length
        self.segments = segments

    def to_points(self, local: bool = False) -> list[Point]:
        pts: list[Point] = []
        half = self.length * 0.5
        step = 360 / self.segments
        for i in range(self.segments):
            deg = i * step
            deg_b = (i + 1) * step
            pt = rotate_point_deg(Point(0, self.radius), deg)
            pt = Point(pt.x + half if deg <= 180 else pt.x - half, pt.y)
            pts.append(pt)
            if deg == 0:
                pts.insert(0, Point(pt.x - self.length, pt.y))
            if deg == 180:
                pts.append(Point(pt.x - self.length, pt.y))
            elif deg < 180 < deg_b:
                bottom = rotate_point_deg(Point(0, self.radius), 180)
                bottom = Point(bottom.x + half, bottom.y)
                pts.append(bottom)
                pts.append(Point(bottom.x - self.length, bottom.y))
        return self._place(pts, self.center, local)


class ArcCapsule(Shape):
    """Capsule bent along an arc of ``angle`` degrees.

    The shaft follows a circle whose radius makes an arc of ``length`` subtend
    ``angle``; negative angles bend the other way.
    """

    def __init__(
        self, center: Point, radius: float, length: float, angle: float, segments: int = 12
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.length = length
        self.angle = angle or 0.01
        self.segments = segments

    def to_points(self, local: bool = False) -> list[Point]:
        sweep = abs(self.angle)
        ang_step = sweep / self.segments
        arc_radius = self.length / math.tan(math.radians(sweep))

        def along(offset: float) -> list[Point]:
            out = []
            deg = 0.0
            while deg <= sweep:
                pt = rotate_point_deg(Point(0, arc_radius + offset), deg + 90)
                out.append(Point(pt.x - arc_radius, pt.y))
                deg += ang_step
            return out

        right = along(self.radius)[::-1]
        left = along(-self.radius)

        start_cap = Arc(Point(0, 0), self.radius, -90, 90, self.segments * 4).open()
        right.extend(start_cap.to_points()[::-1])

        end = rotate_point_deg(Point(0, arc_radius), sweep + 90)
        end_cap = Arc(Point(end.x - arc_radius, end.y), self.radius, 90, 270, self.segments * 4)
        end_cap.open()
        end_cap.rotation = sweep
        left.extend(end_cap.to_points()[::-1])

        pts = right + left
        if self.angle < 0:
            pts = [Point(-pt.x, pt.y) for pt in reversed(pts)]

        pts = rotate_points_deg(-90, pts)
        return self._place(pts, self.center, local)


class Hexagon(Shape):
    """Pointy-side hexagon with vertices at 30 + 60k degrees."""

    def __init__(self, center: Point, radius: float) -> None:
        super().__init__()
        self.center = center
        self.radius = radius

    def to_points(self, local: bool = False) -> list[Point]:
        pts = [rotate_point_deg(Point(0, self.radius), i * 60 + 30) for i in range(6)]
        return self._place(pts, self.center, local)


class Arc(Shape):
    """Circular arc from ``from_angle`` to ``to_angle`` degrees.

    Intermediate points snap to multiples of ``360 / segments``; the exact
    end angles are always included. A closed arc is a pie slice that also
    includes the center.
    """

    def __init__(
        self,
        center: Point,
        radius: float,
        from_angle: float,
        to_angle: float,
        segments: int = 12,
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.from_angle = from_angle
        self.to_angle = to_angle
        while self.to_angle < self.from_angle:
            self.to_angle += 360
        self.segments = segments

    def to_points(self, local: bool = False) -> list[Point]:
        pts: list[Point] = []
        if not self.is_open:
            pts.append(Point(0, 0))

        ang_step = 360 / self.segments
        ang_start = math.ceil(self.from_angle / ang_step) * ang_step
        ang_end = math.floor(self.to_angle / ang_step) * ang_step

        pts.append(rotate_point_deg(Point(0, self.radius), self.from_angle))
        deg = ang_start
        while deg <= ang_end:
            pts.append(rotate_point_deg(Point(0, self.radius), deg))
            deg += ang_step
        pts.append(rotate_point_deg(Point(0, self.radius), self.to_angle))

        return self._place(pts, self.center, local)
