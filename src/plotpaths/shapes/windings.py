"""Open fill patterns: windings, hatches and zigzags.

These shapes are open polylines meant to fill an area with a single pen
stroke (or, for line hatches, with a set of parallel strokes).
"""

import math

from plotpaths.core.geometry import (
    add_points,
    angle_between,
    average_points,
    distance_between,
    lerp_points,
    subdivide_by_distance,
)
from plotpaths.domain import Point, Segment, rotate_point, rotate_point_deg
from plotpaths.shapes.base import Shape


class Winding(Shape):
    """Concentric circles joined into one inward spiral.

    Each lap shrinks the radius by ``offset``; the last point of every lap is
    pulled back by ``offset`` so it steps into the next lap.
    """

    def __init__(self, center: Point, radius: float, segments: int = 12, offset: float = 10) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.segments = segments
        self.offset = offset
        self.is_open = True

    def to_points(self, local: bool = False) -> list[Point]:
        pts: list[Point] = []
        offset = self.offset
        if offset <= 0:
            return self._place(pts, self.center, local)

        current = self.radius
        for j in range(int(math.floor(self.radius / offset + 0.5))):
            for i in range(1, self.segments + 1):
                pt = rotate_point_deg(Point(0, current), i * (360 / self.segments))
                if i == self.segments and pts:
                    delta = distance_between(pts[-1], pt)
                    if delta > 0:
                        pt = lerp_points(pt, pts[-1], offset / delta)
                if j == 0 and i == 2:
                    delta = distance_between(pts[-1], pt)
                    if offset >= delta:
                        continue
                    if distance_between(pt, Point(0, 0)) < offset * 0.75:
                        continue
                    pts[-1] = lerp_points(pts[-1], pt, offset / delta)
                pts.append(pt)
            current -= offset
        return self._place(pts, self.center, local)


class DoubleWinding(Shape):
    """Two interleaved rectangular windings folding in from the ends of a bar.

    The bar spans ``-radius..radius`` on x. Each of the ``steps`` folds moves
    both halves inward by ``radius / steps``; with ``merge_final`` the
    innermost pair collapses to one point.
    """

    def __init__(
        self,
        center: Point,
        radius: float,
        steps: int = 12,
        division_distance: float = 0,
        merge_final: bool = False,
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.steps = steps
        self.division_distance = division_distance
        self.merge_final = merge_final
        self.is_open = True

    def _fold(self, pt_a: Point, pt_b: Point, step: int) -> list[Point]:
        r = self.radius
        gap = r / self.steps
        offset = 0 if step == 0 else gap
        length = r * 2 - offset * step * 2 + offset
        ang = angle_between(pt_a, pt_b)
        if step == 0:
            length -= gap

        mid = average_points(pt_a, pt_b)
        shift_a = rotate_point(Point(0, length * 0.5 - offset), -ang)
        shift_b = rotate_point(Point(0, -length * 0.5 + offset), -ang)

        p0 = add_points(pt_a, shift_a)
        p1 = p0
        p2 = add_points(mid, shift_a)
        p3 = add_points(mid, shift_b)
        p4 = add_points(pt_b, shift_b)
        p5 = p4

        if step == 0:
            side_a = rotate_point(Point(0, gap * 1.5), ang + math.pi * 0.5)
            side_b = rotate_point(Point(0, -gap * 1.5), ang + math.pi * 0.5)
            p0 = p1 = add_points(p0, side_a)
            p4 = p5 = add_points(p4, side_b)

        step += 1
        inner = [p2, p3]
        if step < self.steps:
            inner = self._fold(p2, p3, step)
        elif self.merge_final:
            inner = [average_points(p2, p3)]

        return [p0, p1, *inner, p4, p5]

    def to_points(self, local: bool = False) -> list[Point]:
        pts = self._fold(Point(-self.radius, 0), Point(self.radius, 0), 0)
        if self.division_distance > 0:
            divided = [pts[0]]
            for idx in range(1, len(pts)):
                divided.extend(subdivide_by_distance(pts[idx - 1], pts[idx], self.division_distance)[1:])
            pts = divided
        return self._place(pts, self.center, local)


class SquareWave(Shape):
    """Boustrophedon of ``steps`` rows across a ``width`` x ``height`` box."""

    def __init__(self, center: Point, width: float, height: float, steps: int = 12) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.steps = steps
        self.is_open = True

    def to_points(self, local: bool = False) -> list[Point]:
        hw = self.width * 0.5
        hh = self.height * 0.5
        pts = [Point(-hw, -hh)]

        if self.steps > 0:
            delta = self.height / self.steps
            for i in range(self.steps):
                y = -hh + delta * i
                row = [Point(-hw, y), Point(0, y), Point(hw, y)]
                if i % 2:
                    row.reverse()
                pts.extend(row)

        pts.append(Point(-hw, hh))
        return self._place(pts, self.center, local)


class LineHatch(Shape):
    """Parallel horizontal strokes filling a ``2 * radius`` square.

    Rows alternate direction. Unless ``connected``, the moves between rows
    are not drawn. With ``dashed`` each row is cut into alternating dashes no
    longer than the row spacing, offset by one dash on alternate rows.
    """

    def __init__(
        self,
        center: Point,
        radius: float,
        steps: int = 12,
        division_distance: float = 0,
        connected: bool = False,
        dashed: bool = False,
    ) -> None:
        super().__init__()
        self.center = center
        self.radius = radius
        self.steps = steps
        self.division_distance = division_distance
        self.connected = connected
        self.dashed = dashed
        if dashed:
            self.division_distance = min(self.division_distance, self.radius / self.steps)
        self.is_open = True

    def _rows(self) -> list[list[Point]]:
        r = self.radius
        delta = r * 2 / self.steps
        rows = []
        for i in range(self.steps):
            a = Point(-r, -r + delta * i)
            b = Point(r, -r + delta * i)
            row = [a, b]
            if self.division_distance > 0:
                row = subdivide_by_distance(a, b, self.division_distance)
            if i % 2 == 0:
                row.reverse()
            rows.append(row)
        return rows

    def _placed_rows(self, local: bool) -> tuple[list[Point], list[int]]:
        pts: list[Point] = []
        steps: list[int] = []
        for step, row in enumerate(self._rows()):
            pts.extend(row)
            steps.extend([step] * len(row))
        return self._place(pts, self.center, local), steps

    def to_points(self, local: bool = False) -> list[Point]:
        return self._placed_rows(local)[0]

    def to_segments(self, local: bool = False) -> list[Segment]:
        if self.connected:
            return super().to_segments(local)

        pts, steps = self._placed_rows(local)
        if self._needs_reverse(pts):
            pts = pts[::-1]
            steps = steps[::-1]

        segs: list[Segment] = []
        seg_steps: list[int] = []
        for i in range(len(pts) - 1):
            if steps[i] == steps[i + 1]:
                segs.append(Segment(pts[i], pts[i + 1], dict(self.data)))
                seg_steps.append(steps[i])

        if not self.dashed:
            return segs

        per_row = seg_steps.count(0)
        if per_row == 0:
            return segs

        out = []
        for row, start in enumerate(range(0, len(segs), per_row)):
            for idx, seg in enumerate(segs[start:start + per_row]):
                if (row + idx + per_row % 2) % 2 == 0:
                    out.append(seg)
        return out


class Paperclip(Shape):
    """Stadium-shaped spiral of ``steps`` growing laps, like a paperclip.

    The long axis follows the longer side. With ``enclose`` the spiral ends
    with a final half lap instead of a straight tail.
    """

    def __init__(
        self, center: Point, width: float, height: float, steps: int = 12, enclose: bool = False
    ) -> None:
        super().__init__()
        self.center = center
        self.width = width
        self.height = height
        self.steps = steps
        self.enclose = enclose
        self.is_open = True

    def to_points(self, local: bool = False) -> list[Point]:
        r = min(self.width, self.height) * 0.5
        half_len = abs(self.width - self.height) * 0.5
        step_size = r * 2 / self.steps
        radius = 0.0
        left_x, right_x = -half_len, half_len
        cx, cy = 0.0, 0.0

        def half_lap(from_deg: int, to_deg: int) -> list[Point]:
            return [
                Point(cx + math.cos(math.radians(d)) * radius, cy + math.sin(math.radians(d)) * radius)
                for d in range(from_deg, to_deg, 2)
            ]

        pts = [Point(left_x, 0)]
        for _ in range(self.steps):
            radius += step_size * 0.5
            cx = right_x
            cy += step_size * 0.5
            pts.extend(half_lap(-90, 90))

            radius += step_size * 0.5
            cx = left_x
            cy -= step_size * 0.5
            pts.extend(half_lap(90, 270))

        if self.enclose:
            cx = right_x
            pts.extend(half_lap(-90, 90))
        else:
            pts.append(Point(right_x, -radius))

        if self.width < self.height:
            pts = [Point(pt.y, pt.x) for pt in pts]

        return self._place(pts, self.center, local)
