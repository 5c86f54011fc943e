"""Masking helpers: crop segments to a box or outline, or cut an outline out.

Every function returns a new segment list; inputs are not modified.
"""

import re

from plotpaths.core.geometry import (
    distance_between_squared,
    point_within_bounding_box,
    point_within_polygon,
    segment_segments_intersections,
)
from plotpaths.domain import BoundingBox, Point, Segment, points_equal, round_to

_PATH_COMMAND = re.compile(r"(?=[ML])", re.IGNORECASE)
_PATH_CLOSE = re.compile(r"z", re.IGNORECASE)


def _sorted_hits(seg: Segment, border: list[Segment]) -> list[Point]:
    hits = segment_segments_intersections(seg, border)
    hits.sort(key=lambda pt: distance_between_squared(seg.a, pt))
    return hits


def box_segments(bb: BoundingBox) -> list[Segment]:
    """Outline of a bounding box, clockwise from the top-left corner."""
    tl = Point(bb.min_x, bb.min_y)
    tr = Point(bb.max_x, bb.min_y)
    br = Point(bb.max_x, bb.max_y)
    bl = Point(bb.min_x, bb.max_y)
    return [Segment(tl, tr), Segment(tr, br), Segment(br, bl), Segment(bl, tl)]


def _crop(segs: list[Segment], border: list[Segment], inside) -> list[Segment]:
    out = []
    for seg in segs:
        a_ok = inside(seg.a)
        b_ok = inside(seg.b)

        if a_ok and b_ok:
            out.append(seg.clone())
            continue

        hits = _sorted_hits(seg, border)

        if not a_ok and not b_ok:
            # Both ends outside: keep only the chord that passes through.
            if len(hits) > 1:
                out.append(Segment(hits[0], hits[-1], dict(seg.data), dict(seg.tags)))
            continue

        cropped = seg.clone()
        if a_ok and hits:
            cropped.b = hits[0]
        elif b_ok and hits:
            cropped.a = hits[-1]
        out.append(cropped)
    return out


def crop_segs_to_bounding_box(
    segs: list[Segment], bb: BoundingBox, add_border: bool = False
) -> list[Segment]:
    """Crop segments to a bounding box.

    Args:
        segs: Segments to crop
        bb: Box to crop to
        add_border: Append the box outline to the result

    Returns:
        Cropped segments, with the border last if requested
    """
    border = box_segments(bb)
    out = _crop(segs, border, lambda pt: point_within_bounding_box(pt, bb))
    if add_border:
        out.extend(border)
    return out


def crop_segs_to_shape(segs: list[Segment], border: list[Segment]) -> list[Segment]:
    """Crop segments to the inside of a closed outline."""
    return _crop(segs, border, lambda pt: point_within_polygon(pt, border))


def cut_shape_from_segs(target: list[Segment], shape: list[Segment]) -> list[Segment]:
    """Remove the parts of ``target`` that fall inside a closed outline.

    Segments crossing the outline twice are split into the two outside parts.
    """
    out = []
    for seg in target:
        a_in = point_within_polygon(seg.a, shape, False)
        b_in = point_within_polygon(seg.b, shape, False)

        if a_in and b_in:
            continue

        hits = _sorted_hits(seg, shape)

        if not a_in and not b_in:
            if len(hits) > 1:
                out.append(Segment(seg.a, hits[0], dict(seg.data)))
                out.append(Segment(hits[-1], seg.b, dict(seg.data)))
            else:
                out.append(seg.clone())
            continue

        cut = seg.clone()
        if a_in and hits:
            cut.a = hits[-1]
        elif b_in and hits:
            cut.b = hits[0]
        out.append(cut)
    return out


def path_data_to_segments(d: str) -> list[Segment]:
    """Parse absolute ``M``/``L``/``Z`` path data into segments."""
    segs: list[Segment] = []
    chunks = _PATH_CLOSE.split(d)
    for idx, chunk in enumerate(chunks):
        closed = idx < len(chunks) - 1
        cursor: Point | None = None
        first: Point | None = None
        for cmd in _PATH_COMMAND.split(chunk):
            cmd = cmd.strip()
            if not cmd:
                continue
            coords = [c for c in re.split(r"[,\s]+", cmd[1:].strip()) if c]
            if len(coords) != 2:
                continue
            pt = Point(float(coords[0]), float(coords[1]))
            if cmd[0].upper() == "L" and cursor is not None:
                segs.append(Segment(cursor, pt))
            if first is None:
                first = pt
            cursor = pt
        if closed and cursor is not None and first is not None and cursor != first:
            segs.append(Segment(cursor, first))
    return segs


def segments_to_path_data(segs: list[Segment]) -> str:
    """Serialize segments as ``M``/``L`` path data, moving only at gaps."""
    parts = []
    for i, seg in enumerate(segs):
        if i == 0 or not points_equal(segs[i - 1].b, seg.a):
            parts.append(f"M {round_to(seg.a.x, 2)} {round_to(seg.a.y, 2)} ")
        parts.append(f"L {round_to(seg.b.x, 2)} {round_to(seg.b.y, 2)} ")
    return "".join(parts)


def crop_path_data_to_bounding_box(d: str, bb: BoundingBox) -> str:
    """Crop SVG path data to a bounding box.

    Args:
        d: Path data using absolute ``M``, ``L`` and ``Z`` commands
        bb: Box to crop to

    Returns:
        Cropped path data
    """
    return segments_to_path_data(crop_segs_to_bounding_box(path_data_to_segments(d), bb))
