"""Polygon boolean merge by segment splitting.

The merge works directly on outline segments rather than on a polygon
clipping library:

1. Optionally nudge each shape by a small per-index offset so coincident
   vertices of different shapes stop lining up exactly.
2. Collect every crossing between each segment and every other shape.
3. Split crossed segments at those points.
4. Classify each piece against the other shapes' original outlines and drop
   interior pieces (union) or keep only the first shape's exterior and the
   other shapes' pieces inside the first (subtract).
5. Weld the survivors into one ordered run, closing small gaps.
6. Drop sub-epsilon pieces, then optionally remove orphans and recenter.
"""

import copy

from plotpaths.core.geometry import (
    average_points,
    distance_between_squared,
    segment_segments_intersections,
    segment_within_polygon,
    sub_points,
)
from plotpaths.domain import Point, Segment, SegmentCollection, Segments, points_equal

JITTER_BASE = 0.007549
JITTER_STEP = 0.0017
CONTAINMENT_SCALE = 1.01
WELD_SCALE = 10000
MIN_SEGMENT_LENGTH = 0.1
ORPHAN_END_LENGTH = 5
ORPHAN_INNER_LENGTH = 1000


def _jittered(shape: SegmentCollection, idx: int) -> SegmentCollection:
    nudge = JITTER_BASE - idx * JITTER_STEP
    moved = copy.copy(shape)
    moved.pivot = Point(shape.pivot.x + nudge, shape.pivot.y + nudge)
    return moved


def _split_at(seg: Segment, hits: list[Point]) -> list[Segment]:
    ordered = sorted(hits, key=lambda pt: distance_between_squared(seg.a, pt))
    stops = [seg.a, *ordered, seg.b]
    return [Segment(stops[i - 1], stops[i]) for i in range(1, len(stops))]


def _weld(segs: list[Segment]) -> list[Segment]:
    remaining = list(segs)
    ordered = [remaining.pop(0)]
    while remaining:
        tail = ordered[-1]
        for i, candidate in enumerate(remaining):
            if points_equal(tail.b, candidate.a, WELD_SCALE):
                if not points_equal(tail.b, candidate.a):
                    joint = average_points(tail.b, candidate.a)
                    tail.b = joint
                    candidate.a = joint
                ordered.append(remaining.pop(i))
                break
        else:
            ordered.append(remaining.pop(0))
    return ordered


def _drop_short(segs: list[Segment]) -> list[Segment]:
    out = list(segs)
    for i in range(len(out) - 1, -1, -1):
        seg = out[i]
        if seg.length() >= MIN_SEGMENT_LENGTH:
            continue
        if i + 1 < len(out) and points_equal(out[i + 1].a, seg.b):
            out[i + 1].a = seg.a
        del out[i]
    return out


def _remove_orphans(segs: list[Segment]) -> list[Segment]:
    out = list(segs)
    for i in range(len(out) - 1, -1, -1):
        seg = out[i]
        max_len = ORPHAN_END_LENGTH if i in (0, len(out) - 1) else ORPHAN_INNER_LENGTH
        if seg.length() >= max_len:
            continue
        connected = any(
            other is not seg
            and (
                points_equal(seg.a, other.b, WELD_SCALE)
                or points_equal(seg.b, other.a, WELD_SCALE)
            )
            for other in out
        )
        if not connected:
            del out[i]
    return out


def merge_shapes(
    shapes: list[SegmentCollection],
    subtract: bool = False,
    center: bool = False,
    cleanup: bool = False,
    jitter: bool = True,
) -> Segments:
    """Merge shape outlines into one ordered segment run.

    Args:
        shapes: Closed shapes to merge; the caller's shapes are not modified
        subtract: Subtract shapes after the first from the first instead of union
        center: Recenter the result on the mean of its segment start points
        cleanup: Remove short segments not connected to any other segment
        jitter: Nudge pivots by a deterministic per-index offset

    Returns:
        Merged outline (empty if nothing survives)

    Example:
        >>> from plotpaths.shapes import Rectangle
        >>> a = Rectangle(Point(0, 0), 10, 10)
        >>> b = Rectangle(Point(5, 5), 10, 10)
        >>> len(merge_shapes([a, b]).to_segments()) > 0
        True
    """
    if jitter:
        shapes = [_jittered(shape, idx) for idx, shape in enumerate(shapes)]

    seg_sets = [shape.to_segments() for shape in shapes]
    original_sets = [list(segs) for segs in seg_sets]

    # Side table: segment id -> crossings with other shapes
    crossings: dict[int, list[Point]] = {}
    for idx_a, set_a in enumerate(seg_sets):
        for idx_b, set_b in enumerate(seg_sets):
            if idx_a == idx_b:
                continue
            for seg in set_a:
                hits = segment_segments_intersections(seg, set_b, True, True)
                hits = [
                    pt for pt in hits if not points_equal(seg.a, pt) and not points_equal(seg.b, pt)
                ]
                if hits:
                    crossings.setdefault(id(seg), []).extend(hits)

    for idx, segs in enumerate(seg_sets):
        split: list[Segment] = []
        for seg in segs:
            hits = crossings.get(id(seg))
            split.extend(_split_at(seg, hits) if hits else [seg])
        seg_sets[idx] = split

    # Side table: segment id -> deleted
    deleted: set[int] = set()
    for idx_a, set_a in enumerate(seg_sets):
        for idx_b in range(len(seg_sets)):
            if idx_a == idx_b:
                continue
            outline = original_sets[idx_b]
            for seg in set_a:
                if not subtract or idx_a == 0:
                    if segment_within_polygon(seg, outline, CONTAINMENT_SCALE):
                        deleted.add(id(seg))
                elif idx_b == 0 and not segment_within_polygon(seg, outline, CONTAINMENT_SCALE):
                    deleted.add(id(seg))

    survivors: list[Segment] = []
    for idx, segs in enumerate(seg_sets):
        kept = [seg for seg in segs if id(seg) not in deleted]
        if subtract and idx > 0:
            kept = Segment.reverse(kept)
        survivors.extend(kept)

    if not survivors:
        return Segments([])

    ordered = _drop_short(_weld(survivors))

    if cleanup:
        ordered = _remove_orphans(ordered)

    if center and ordered:
        cen = average_points(*(seg.a for seg in ordered))
        ordered = [
            Segment(sub_points(seg.a, cen), sub_points(seg.b, cen), seg.data, seg.tags)
            for seg in ordered
        ]

    return Segments(ordered)
