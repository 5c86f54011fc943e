"""Outline offsetting.

Each segment is shifted perpendicular to its direction, extended at both
ends, and trimmed against its shifted neighbors so the corners meet. Pieces
whose direction flips after trimming (the offset collapsed them) are dropped.
"""

import math

from plotpaths.core.geometry import add_points, lerp_points, segment_segment_intersect
from plotpaths.domain import Point, Segment, rotate_point, round_half_up


def _shifted(seg: Segment, dist: float, keep_start: bool, keep_end: bool) -> Segment:
    length = seg.length()
    if length == 0:
        return seg.clone()
    shift = rotate_point(Point(dist, 0), -seg.angle() + math.pi * 0.5)
    stretch = -dist / length * 2
    a = seg.a if keep_start else lerp_points(seg.a, seg.b, stretch)
    b = seg.b if keep_end else lerp_points(seg.b, seg.a, stretch)
    return Segment(add_points(a, shift), add_points(b, shift), dict(seg.data), dict(seg.tags))


def _angle_key(seg: Segment) -> int:
    return round_half_up(seg.angle() * 100)


def offset_segs(segs: list[Segment], dist: float, is_open: bool = False) -> list[Segment]:
    """Offset a run of segments by ``dist``.

    Positive distances move to the left of the direction of travel in
    screen space (y down), which grows a counter-clockwise outline.
    Zero-length segments are skipped.

    Args:
        segs: Run to offset, closed unless ``is_open``
        dist: Offset distance
        is_open: Keep the first start and last end anchored in place

    Returns:
        Offset segments; pieces whose direction changed are omitted
    """
    out = []
    count = len(segs)
    for idx, seg in enumerate(segs):
        if seg.length() == 0:
            continue

        prev_seg = _shifted(segs[idx - 1], dist, False, False)
        next_seg = _shifted(segs[(idx + 1) % count], dist, False, False)
        this_seg = _shifted(
            seg,
            dist,
            is_open and idx == 0,
            is_open and idx == count - 1,
        )

        start = segment_segment_intersect(prev_seg, this_seg)
        end = segment_segment_intersect(this_seg, next_seg)
        if start is not None:
            this_seg.a = start
        if end is not None:
            this_seg.b = end

        if _angle_key(this_seg) == _angle_key(seg):
            out.append(this_seg)

    return out


def offset_points(points: list[Point], dist: float) -> list[Point]:
    """Offset an open polyline.

    A negative distance offsets to the other side by walking the line in
    reverse.

    Args:
        points: Polyline points
        dist: Offset distance

    Returns:
        Offset polyline points, empty if every piece collapsed
    """
    if dist < 0:
        dist = -dist
        points = list(reversed(points))

    segs = [Segment(points[i - 1], points[i]) for i in range(1, len(points))]
    shifted = offset_segs(segs, dist, True)
    if not shifted:
        return []
    return [shifted[0].a, *(seg.b for seg in shifted)]
