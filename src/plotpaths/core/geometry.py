"""Geometric operations on points and segments.

This module provides the stateless geometry library used by shapes, merge,
offset, smoothing and export:
- Measures and transforms (lerp, angles, rotation, polar conversion)
- Tolerance-based equality (points_equal, segments_equal)
- Bounding boxes and polygon winding
- Segment intersection and ray casting
- Point, segment and polygon containment
- Path helpers (ordering, centering, sampling, endpoint detection)

All functions are pure: inputs are never mutated and degenerate input yields
None or an empty result rather than an exception.
"""

import math
from typing import NamedTuple

from plotpaths.domain import (
    BoundingBox,
    Point,
    Segment,
    points_equal,
    rotate_point,
    round_half_up,
)

EPSILON = 0.001


class PathSample(NamedTuple):
    """A point sampled along a path with its drawing angle."""

    pt: Point
    ang: float


class Endpoint(NamedTuple):
    """A dangling segment end and its outward unit direction."""

    point: Point
    offset_x: float
    offset_y: float


# ---------------------------------------------------------------------------
# Measures and transforms
# ---------------------------------------------------------------------------


def lerp(a: float, b: float, d: float) -> float:
    """Linear interpolation between two values."""
    return (1 - d) * a + d * b


def lerp_points(a: Point, b: Point, d: float) -> Point:
    """Linear interpolation between two points.

    ``d`` outside [0, 1] extrapolates along the line.
    """
    return Point(lerp(a.x, b.x, d), lerp(a.y, b.y, d))


def angle_between(a: Point, b: Point) -> float:
    """Direction from ``a`` to ``b`` in radians."""
    return math.atan2(b.y - a.y, b.x - a.x)


def normalize_angle(ang: float) -> float:
    """Wrap an angle into [-pi, pi]."""
    while ang > math.pi:
        ang -= math.pi * 2
    while ang < -math.pi:
        ang += math.pi * 2
    return ang


def same_angle(seg_a: Segment, seg_b: Segment) -> bool:
    """Whether two segments point the same way."""
    return abs(angle_between(seg_a.a, seg_a.b) - angle_between(seg_b.a, seg_b.b)) < EPSILON


def same_angle_rev(seg_a: Segment, seg_b: Segment) -> bool:
    """Whether two segments point in opposite directions."""
    return abs(angle_between(seg_a.a, seg_a.b) - angle_between(seg_b.b, seg_b.a)) < EPSILON


def rotate_points(rad: float, points: list[Point]) -> list[Point]:
    """Rotate points about the origin."""
    return [rotate_point(pt, rad) for pt in points]


def rotate_points_deg(deg: float, points: list[Point]) -> list[Point]:
    """Rotate points about the origin by degrees."""
    return rotate_points(math.radians(deg), points)


def rotate_segments_deg(deg: float, segs: list[Segment]) -> list[Segment]:
    """Rotate segments about the origin by degrees, keeping metadata."""
    rad = math.radians(deg)
    return [
        Segment(rotate_point(seg.a, rad), rotate_point(seg.b, rad), dict(seg.data), dict(seg.tags))
        for seg in segs
    ]


def outer_tangents(pt_a: Point, r_a: float, pt_b: Point, r_b: float) -> list[Segment]:
    """Outer tangent lines of two circles.

    Args:
        pt_a: Center of the first circle
        r_a: Radius of the first circle
        pt_b: Center of the second circle
        r_b: Radius of the second circle

    Returns:
        Two tangent segments, or an empty list when one circle contains the other
    """
    dx = pt_b.x - pt_a.x
    dy = pt_b.y - pt_a.y
    dist = math.hypot(dx, dy)

    if dist <= abs(r_b - r_a):
        return []

    angle1 = math.atan2(dy, dx)
    angle2 = math.acos((r_a - r_b) / dist)

    tangents = []
    for ang in (angle1 + angle2, angle1 - angle2):
        tangents.append(
            Segment(
                Point(pt_a.x + r_a * math.cos(ang), pt_a.y + r_a * math.sin(ang)),
                Point(pt_b.x + r_b * math.cos(ang), pt_b.y + r_b * math.sin(ang)),
            )
        )
    return tangents


def cartesian_to_polar(pt: Point) -> Point:
    """Convert to polar form, returned as Point(distance, angle)."""
    return Point(math.hypot(pt.x, pt.y), math.atan2(pt.y, pt.x))


def polar_to_cartesian(pt: Point) -> Point:
    """Convert Point(distance, angle) back to cartesian coordinates."""
    return Point(pt.x * math.cos(pt.y), pt.x * math.sin(pt.y))


def segments_equal(seg_a: Segment, seg_b: Segment, scale: float = 1) -> bool:
    """Whether two segments coincide in either direction."""
    return Segment.is_equal(seg_a, seg_b, scale)


def distance_between(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def distance_between_squared(a: Point, b: Point) -> float:
    """Squared distance between two points."""
    dx = b.x - a.x
    dy = b.y - a.y
    return dx * dx + dy * dy


def interpolate_points(a: Point, b: Point, num_segs: int) -> list[Point]:
    """Split a line into ``num_segs`` equal parts, endpoints included."""
    pts = [a]
    perc = 1 / num_segs
    delta_x = (b.x - a.x) * perc
    delta_y = (b.y - a.y) * perc
    for i in range(1, num_segs):
        pts.append(Point(a.x + delta_x * i, a.y + delta_y * i))
    pts.append(b)
    return pts


def average_points(*pts: Point) -> Point | None:
    """Centroid of the given points, or None if there are none."""
    if not pts:
        return None
    return Point(sum(pt.x for pt in pts) / len(pts), sum(pt.y for pt in pts) / len(pts))


def remove_coincident_points(pts: list[Point], scale: float = 1) -> list[Point]:
    """Drop points equal to their predecessor."""
    out = []
    for idx, pt in enumerate(pts):
        if idx == 0 or not points_equal(pt, pts[idx - 1], scale):
            out.append(pt)
    return out


def add_points(a: Point, b: Point) -> Point:
    return Point(a.x + b.x, a.y + b.y)


def sub_points(a: Point, b: Point) -> Point:
    return Point(a.x - b.x, a.y - b.y)


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Point, b: Point) -> float:
    return a.x * b.y - a.y * b.x


def line_side(pt: Point, a: Point, b: Point) -> float:
    """Which side of line a->b a point lies on (sign), rounded to 2 decimals."""
    value = (b.x - a.x) * (pt.y - a.y) - (b.y - a.y) * (pt.x - a.x)
    return round_half_up(value * 100) / 100


# ---------------------------------------------------------------------------
# Subdivision
# ---------------------------------------------------------------------------


def subdivide_by_distance(a: Point, b: Point, delta: float) -> list[Point]:
    """Subdivide a line into near-equal steps of about ``delta``.

    The step is stretched so the line divides evenly; endpoints are included.
    A zero ``delta`` or a line shorter than ``delta`` yields just the
    endpoints.

    Args:
        a: Start point
        b: End point
        delta: Target spacing

    Returns:
        Points from ``a`` to ``b``
    """
    if delta == 0:
        return [a, b]
    dist = distance_between(a, b)
    if dist == 0:
        return [a, b]
    perc = delta / dist
    num_fit = math.floor(1 / perc)
    if num_fit == 0:
        return [a, b]
    remain = math.fmod(dist, delta)
    delta += remain / num_fit
    perc = delta / dist
    travel = perc
    delta_x = (b.x - a.x) * perc
    delta_y = (b.y - a.y) * perc
    pts = [a]
    i = 1
    while travel < 1:
        pts.append(Point(a.x + delta_x * i, a.y + delta_y * i))
        travel += perc
        i += 1
    pts.append(b)
    return pts


def subdivide_by_distance_exact(a: Point, b: Point, delta: float) -> list[Point]:
    """Points at exact multiples of ``delta`` from ``a``; ``b`` is not forced."""
    if delta == 0:
        return [a, b]
    dist = distance_between(a, b)
    if dist == 0:
        return [a]
    perc = delta / dist
    travel = perc
    delta_x = (b.x - a.x) * perc
    delta_y = (b.y - a.y) * perc
    pts = []
    i = 0
    while travel <= 1:
        pts.append(Point(a.x + delta_x * i, a.y + delta_y * i))
        travel += perc
        i += 1
    return pts


def subdivide_segment_by_distance(seg: Segment, delta: float) -> list[Segment]:
    """Split a segment into a run of shorter segments."""
    pts = subdivide_by_distance(seg.a, seg.b, delta)
    return [Segment(pts[i], pts[i + 1], dict(seg.data)) for i in range(len(pts) - 1)]


def subdivide_segments_by_distance(segs: list[Segment], delta: float) -> list[Segment]:
    """Split every segment of a run."""
    out: list[Segment] = []
    for seg in segs:
        out.extend(subdivide_segment_by_distance(seg, delta))
    return out


# ---------------------------------------------------------------------------
# Conversion, bounds and winding
# ---------------------------------------------------------------------------


def segments_connected(seg_a: Segment, seg_b: Segment, scale: float = 1) -> bool:
    """Whether ``seg_b`` continues ``seg_a`` (or the reverse)."""
    return points_equal(seg_a.b, seg_b.a, scale) or points_equal(seg_a.a, seg_b.b, scale)


def segments_to_points(segs: list[Segment]) -> list[Point]:
    """Flatten a run into points, dropping consecutive duplicates."""
    pts: list[Point] = []
    for seg in segs:
        for pt in (seg.a, seg.b):
            if pts and points_equal(pt, pts[-1]):
                continue
            pts.append(pt)
    return pts


def points_to_closed_poly_segments(*pts: Point) -> list[Segment]:
    """Link points into a closed polygon."""
    return [Segment(pts[i], pts[(i + 1) % len(pts)]) for i in range(len(pts))]


def polygon_area(pts: list[Point]) -> float:
    """Signed shoelace area. Positive means clockwise in screen space.

    Examples:
        >>> polygon_area([Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)])
        100.0
    """
    area = 0.0
    j = len(pts) - 1
    for i in range(len(pts)):
        area += pts[i].x * pts[j].y
        area -= pts[j].x * pts[i].y
        j = i
    return area / 2


def polygon_is_clockwise(pts: list[Point]) -> bool:
    """Whether a polygon winds clockwise (positive area)."""
    return polygon_area(pts) > 0


def points_bounding_box(pts: list[Point]) -> BoundingBox:
    bb = BoundingBox.empty()
    for pt in pts:
        bb.include_point(pt)
    return bb


def segments_bounding_box(segs: list[Segment]) -> BoundingBox:
    bb = BoundingBox.empty()
    for seg in segs:
        bb.include_point(seg.a)
        bb.include_point(seg.b)
    return bb


def bounding_boxes_bounding_box(boxes: list[BoundingBox | None]) -> BoundingBox:
    """Union of several boxes; None entries are skipped."""
    bb = BoundingBox.empty()
    for box in boxes:
        if box is not None:
            bb.include_box(box)
    return bb


def bounding_boxes_intersect(ab: BoundingBox, bb: BoundingBox) -> bool:
    return ab.max_x >= bb.min_x and ab.max_y >= bb.min_y and ab.min_x <= bb.max_x and ab.min_y <= bb.max_y


def point_within_bounding_box(pt: Point, bb: BoundingBox) -> bool:
    return bb.min_x <= pt.x <= bb.max_x and bb.min_y <= pt.y <= bb.max_y


# ---------------------------------------------------------------------------
# Intersections
# ---------------------------------------------------------------------------


def ccw(p1: Point, p2: Point, p3: Point) -> bool:
    return (p3.y - p1.y) * (p2.x - p1.x) > (p2.y - p1.y) * (p3.x - p1.x)


def segments_intersect(seg_a: Segment, seg_b: Segment) -> bool:
    """Orientation-based crossing test without computing the point."""
    return ccw(seg_a.a, seg_b.a, seg_b.b) != ccw(seg_a.b, seg_b.a, seg_b.b) and ccw(
        seg_a.a, seg_a.b, seg_b.a
    ) != ccw(seg_a.a, seg_a.b, seg_b.b)


def segment_segment_intersect(
    seg_a: Segment, seg_b: Segment, ignore_touching: bool = False
) -> Point | None:
    """Find where two segments cross.

    Solves the 2x2 parametric system; both parameters must lie in [0, 1].

    Args:
        seg_a: First segment
        seg_b: Second segment
        ignore_touching: Suppress hits that coincide with any endpoint

    Returns:
        Intersection point, or None for parallel, degenerate or missing hits
    """
    x1, y1 = seg_a.a.x, seg_a.a.y
    x3, y3 = seg_b.a.x, seg_b.a.y
    s1_x = seg_a.b.x - x1
    s1_y = seg_a.b.y - y1
    s2_x = seg_b.b.x - x3
    s2_y = seg_b.b.y - y3

    denom = -s2_x * s1_y + s1_x * s2_y
    if denom == 0:
        return None

    s = (-s1_y * (x1 - x3) + s1_x * (y1 - y3)) / denom
    t = (s2_x * (y1 - y3) - s2_y * (x1 - x3)) / denom

    if not (0 <= s <= 1 and 0 <= t <= 1):
        return None

    hit = Point(x1 + t * s1_x, y1 + t * s1_y)
    if ignore_touching and (
        points_equal(hit, seg_b.a)
        or points_equal(hit, seg_b.b)
        or points_equal(hit, seg_a.a)
        or points_equal(hit, seg_a.b)
    ):
        return None
    return hit


def segment_segments_intersections(
    seg: Segment,
    segs: list[Segment],
    ignore_touching: bool = False,
    remove_duplicates: bool = False,
) -> list[Point]:
    """All intersections of one segment with a list of segments.

    Args:
        seg: Segment to test
        segs: Segments to test against (``seg`` itself is skipped)
        ignore_touching: Suppress endpoint touches
        remove_duplicates: Collapse equal hit points

    Returns:
        Hit points in the order of ``segs``
    """
    pts: list[Point] = []
    for other in segs:
        if other is seg:
            continue
        hit = segment_segment_intersect(seg, other, ignore_touching)
        if hit is None:
            continue
        if remove_duplicates and any(points_equal(pt, hit) for pt in pts):
            continue
        pts.append(hit)
    return pts


def raycast(a: Point, b: Point, segs: list[Segment], min_dist: float = 0) -> list[Point]:
    """Cast a ray from ``a`` toward ``b`` and collect hits in distance order.

    A first hit at the origin itself is dropped, as are hits closer than
    ``min_dist``.

    Returns:
        Hit points sorted by distance from ``a``, or ``[b]`` if nothing is hit
    """
    hits = segment_segments_intersections(Segment(a, b), segs, False)
    hits.sort(key=lambda pt: distance_between(a, pt))

    if hits and points_equal(hits[0], a, 10):
        hits.pop(0)

    if min_dist:
        while hits and distance_between(hits[0], a) < min_dist:
            hits.pop(0)

    return hits if hits else [b]


# ---------------------------------------------------------------------------
# Proximity
# ---------------------------------------------------------------------------


def closest_pt_point_segment(pt: Point, seg: Segment) -> Point:
    """Closest point on a segment to ``pt``."""
    ab = sub_points(seg.b, seg.a)
    t = dot(sub_points(pt, seg.a), ab)
    if t < 0:
        return seg.a
    denom = dot(ab, ab)
    if t >= denom:
        return seg.b
    t /= denom
    return Point(seg.a.x + t * ab.x, seg.a.y + t * ab.y)


def closest_pt_point_segments(pt: Point, segs: list[Segment]) -> Point | None:
    """Closest point on any of the segments, or None if there are none."""
    closest = None
    closest_dist = math.inf
    for seg in segs:
        candidate = closest_pt_point_segment(pt, seg)
        dist = distance_between(pt, candidate)
        if dist < closest_dist:
            closest = candidate
            closest_dist = dist
    return closest


def distance_point_segment(pt: Point, seg: Segment) -> float:
    return distance_between(pt, closest_pt_point_segment(pt, seg))


# ---------------------------------------------------------------------------
# Containment
# ---------------------------------------------------------------------------


def point_within_polygon(
    pt: Point, poly_segs: list[Segment], ignore_touching: bool = False
) -> bool:
    """Ray-casting point-in-polygon test.

    Points outside the polygon's bounding box are rejected without casting.
    Otherwise a ray from well outside the lower-left corner is cast to ``pt``;
    an odd crossing count is re-checked once from the opposite corner in case
    the first ray grazed a vertex. With ``ignore_touching``, a point lying on
    the outline counts as outside.

    Args:
        pt: Point to test
        poly_segs: Closed outline segments
        ignore_touching: Treat boundary points as outside

    Returns:
        True if the point is inside
    """
    bb = segments_bounding_box(poly_segs)
    if not point_within_bounding_box(pt, bb):
        return False

    start = Point(bb.min_x - math.pi * 72, bb.min_y - math.pi * 100)
    hits = segment_segments_intersections(Segment(start, pt), poly_segs)

    if len(hits) % 2 != 0:
        start = Point(bb.max_x + math.pi * 100, bb.max_y + math.pi * 72)
        hits = segment_segments_intersections(Segment(start, pt), poly_segs)

    if len(hits) % 2 != 0 and ignore_touching and points_equal(pt, hits[0]):
        return False

    return len(hits) % 2 != 0


def segment_within_polygon(seg: Segment, poly_segs: list[Segment], scale: float = 1) -> bool:
    """Whether a segment lies inside a polygon.

    With ``scale`` != 1 both ends are pulled toward each other by
    ``scale - 1`` of the length before testing, so a segment that merely
    touches the outline at an end is judged by its interior.

    A segment counts as inside when both ends are strictly inside, or one is
    strictly inside and the other touches the outline.
    """
    if scale != 1:
        seg = Segment(lerp_points(seg.a, seg.b, scale - 1), lerp_points(seg.a, seg.b, 2 - scale))
    a_touching = point_within_polygon(seg.a, poly_segs, False)
    b_touching = point_within_polygon(seg.b, poly_segs, False)
    a_within = point_within_polygon(seg.a, poly_segs, True)
    b_within = point_within_polygon(seg.b, poly_segs, True)
    return (a_within and b_within) or (a_within and b_touching) or (b_within and a_touching)


def sign(p1: Point, p2: Point, p3: Point) -> float:
    return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)


def point_within_triangle(
    pt: Point, v1: Point, v2: Point, v3: Point, ignore_touching: bool = False
) -> bool:
    """Half-plane point-in-triangle test.

    With ``ignore_touching``, points within one unit of an edge are outside.
    """
    d1 = sign(pt, v1, v2)
    d2 = sign(pt, v2, v3)
    d3 = sign(pt, v3, v1)

    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    inside = not (has_neg and has_pos)

    if inside and ignore_touching:
        for a, b in ((v1, v2), (v2, v3), (v3, v1)):
            if distance_point_segment(pt, Segment(a, b)) < 1:
                return False

    return inside


def segment_within_triangle(seg: Segment, v1: Point, v2: Point, v3: Point) -> bool:
    a_touching = point_within_triangle(seg.a, v1, v2, v3, False)
    b_touching = point_within_triangle(seg.b, v1, v2, v3, False)
    a_within = point_within_triangle(seg.a, v1, v2, v3, True)
    b_within = point_within_triangle(seg.b, v1, v2, v3, True)
    return (
        (a_within and b_within)
        or (a_within and b_touching)
        or (b_within and a_touching)
        or (a_touching and b_touching)
    )


def polygon_within_polygon(poly_a: list[Segment], poly_b: list[Segment]) -> bool:
    """Whether every edge of ``poly_a`` crosses ``poly_b`` an odd number of times."""
    if not bounding_boxes_intersect(segments_bounding_box(poly_a), segments_bounding_box(poly_b)):
        return False
    for seg in poly_a:
        if len(segment_segments_intersections(seg, poly_b)) % 2 == 0:
            return False
    return True


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def order_segments(segs: list[Segment]) -> list[Segment]:
    """Chain segments whose ends meet exactly; unmatched ones keep input order."""
    remaining = list(segs)
    if not remaining:
        return []
    ordered = [remaining.pop(0)]
    while remaining:
        tail = ordered[-1]
        for i, candidate in enumerate(remaining):
            if points_equal(tail.b, candidate.a):
                ordered.append(remaining.pop(i))
                break
        else:
            ordered.append(remaining.pop(0))
    return ordered


def center_segments(segs: list[Segment]) -> list[Segment]:
    """Recenter segments on the mean of their start points."""
    cen = average_points(*(seg.a for seg in segs))
    if cen is None:
        return []
    return [
        Segment(sub_points(seg.a, cen), sub_points(seg.b, cen), dict(seg.data), dict(seg.tags))
        for seg in segs
    ]


def points_along_path(path: list[Segment], total_points: int) -> list[PathSample]:
    """Sample evenly spaced points along a path.

    The angle at each sample is ``pi - segment angle``, averaged with the
    neighboring segment when the sample sits at a segment end.

    Args:
        path: Segments forming the path
        total_points: Number of samples

    Returns:
        Samples in path order
    """
    if not path or total_points <= 0:
        return []

    total_length = sum(seg.length() for seg in path)
    separation = total_length / total_points
    samples = []

    for j in range(total_points):
        point_delta = separation * j
        accumulated = 0.0
        i = 0
        seg = path[0]
        while i < len(path) - 1 and (
            accumulated + seg.length() < point_delta - 0.0001 or seg.length() == 0
        ):
            accumulated += seg.length()
            i += 1
            seg = path[i]

        length = seg.length()
        if not length:
            continue

        prev_seg = path[i - 1] if i > 0 else path[-1]
        next_seg = path[(i + 1) % len(path)]

        point_delta -= accumulated
        frac = point_delta / length
        pt = lerp_points(seg.a, seg.b, frac)
        ang = math.pi - seg.angle()
        if frac < 0.01:
            ang = (ang + math.pi - prev_seg.angle()) * 0.5
        if frac > 0.99:
            ang = (ang + math.pi - next_seg.angle()) * 0.5
        samples.append(PathSample(pt, ang))

    return samples


def midpoints_in_path(path: list[Segment]) -> list[PathSample]:
    """Midpoint of every segment with its drawing angle."""
    return [PathSample(lerp_points(seg.a, seg.b, 0.5), math.pi - seg.angle()) for seg in path]


def find_endpoints(segs: list[Segment]) -> list[Endpoint]:
    """Find segment ends not shared with any other segment.

    Segments no longer than EPSILON are ignored. Each endpoint carries the
    unit direction pointing away from its segment.
    """
    endpoints = []
    for seg in reversed(segs):
        length = seg.length()
        if length <= EPSILON:
            continue
        a_free = True
        b_free = True
        for other in segs:
            if other is seg:
                continue
            if points_equal(seg.a, other.a) or points_equal(seg.a, other.b):
                a_free = False
            if points_equal(seg.b, other.a) or points_equal(seg.b, other.b):
                b_free = False
        if a_free:
            endpoints.append(
                Endpoint(seg.a, (seg.a.x - seg.b.x) / length, (seg.a.y - seg.b.y) / length)
            )
        if b_free:
            endpoints.append(
                Endpoint(seg.b, (seg.b.x - seg.a.x) / length, (seg.b.y - seg.a.y) / length)
            )
    return endpoints
