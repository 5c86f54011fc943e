"""Corner-cutting smoothing for polylines and segment runs."""

from plotpaths.core.geometry import average_points, distance_between
from plotpaths.domain import Point, Segment, points_equal


def spline_points(a: Point, b: Point, c: Point, iterations: int = 0) -> list[Point]:
    """Refine a three-point bend by repeated weighted subdivision.

    Early spans are split 40/60, late spans 60/40 and the middle at halves,
    which rounds the corner at ``b``.
    """

    def divide(pts: list[Point]) -> list[Point]:
        out = [pts[0]]
        count = len(pts)
        for i in range(count - 1):
            p, q = pts[i], pts[i + 1]
            if i + 1 < count * 0.4:
                out.append(Point((p.x * 40 + q.x * 60) * 0.01, (p.y * 40 + q.y * 60) * 0.01))
            elif i + 1 > count * 0.6:
                out.append(Point((p.x * 60 + q.x * 40) * 0.01, (p.y * 60 + q.y * 40) * 0.01))
            else:
                out.append(Point((p.x + q.x) * 0.5, (p.y + q.y) * 0.5))
        out.append(pts[-1])
        return out

    pts = [a, b, c]
    for _ in range(iterations):
        pts = divide(pts)
    return pts


def smooth_line(
    pts: list[Point],
    iterations: int,
    min_dist: float = 5,
    closed: bool = False,
    d1: float = 0.25,
    d2: float = 0.75,
) -> list[Point]:
    """Chaikin-style corner cutting.

    Each pass replaces every span longer than ``2 * min_dist`` with two points
    at the ``d1``/``d2`` fractions. Interior stretches that run exactly along
    one axis for four consecutive points are copied unchanged.

    Args:
        pts: Polyline points
        iterations: Number of passes
        min_dist: Half the minimum span length that gets cut
        closed: Treat the polyline as a loop
        d1: Near cut fraction
        d2: Far cut fraction

    Returns:
        Smoothed points; open lines keep their final endpoint, closed lines
        end on their first point
    """
    if not pts:
        return []
    if iterations <= 0:
        return list(pts)

    prev = list(pts)
    out: list[Point] = []

    for _ in range(iterations):
        out = []
        if prev and not closed:
            out.append(prev[0])

        span_count = len(prev) - 1
        if closed:
            span_count += 1

        for i in range(span_count):
            p1 = prev[i]
            p2 = prev[i + 1] if i + 1 < len(prev) else prev[0]

            if 1 < i < span_count - 2 and i + 2 < len(prev):
                p0 = prev[i - 1]
                p3 = prev[i + 2]
                if p0.x == p1.x == p2.x == p3.x or p0.y == p1.y == p2.y == p3.y:
                    out.append(p1)
                    continue

            if distance_between(p1, p2) > min_dist * 2:
                out.append(Point(d2 * p1.x + d1 * p2.x, d2 * p1.y + d1 * p2.y))
                out.append(Point(d1 * p1.x + d2 * p2.x, d1 * p1.y + d2 * p2.y))
            elif not closed:
                out.append(p2)
            else:
                out.append(average_points(p1, p2))

        prev = out

    if closed and out:
        out.append(out[0])
    else:
        out.append(pts[-1])

    return out


def connected_runs(segs: list[Segment]) -> list[list[Segment]]:
    """Split a segment list wherever a segment does not start at the previous end."""
    runs: list[list[Segment]] = []
    buffer: list[Segment] = []
    for seg in segs:
        if buffer and not points_equal(buffer[-1].b, seg.a):
            runs.append(buffer)
            buffer = []
        buffer.append(seg)
    if buffer:
        runs.append(buffer)
    return runs


def smooth_segments(
    segs: list[Segment],
    iterations: int,
    min_dist: float = 5,
    d1: float = 0.25,
    d2: float = 0.75,
) -> list[Segment]:
    """Smooth every connected run of a segment list independently.

    A run breaks wherever a segment does not start at the previous end; a
    run whose last end meets its first start is smoothed as a loop. Output
    segments inherit the metadata of their run's first segment.
    """
    if iterations <= 0:
        return [seg.clone() for seg in segs]

    out: list[Segment] = []
    for run in connected_runs(segs):
        closed = points_equal(run[0].a, run[-1].b)
        pts = [] if closed else [run[0].a]
        pts.extend(seg.b for seg in run)
        pts = smooth_line(pts, iterations, min_dist, closed, d1, d2)

        data = run[0].data
        out.extend(Segment(pts[i], pts[i + 1], dict(data)) for i in range(len(pts) - 1))
    return out
