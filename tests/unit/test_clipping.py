"""Unit tests for cropping and cutting."""

import pytest

from plotpaths.core.clipping import (
    box_segments,
    crop_path_data_to_bounding_box,
    crop_segs_to_bounding_box,
    crop_segs_to_shape,
    cut_shape_from_segs,
    path_data_to_segments,
    segments_to_path_data,
)
from plotpaths.core.geometry import points_to_closed_poly_segments
from plotpaths.domain import BoundingBox, Point, Segment


def ends(segs: list[Segment]) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    return [
        ((pytest.approx(s.a.x), pytest.approx(s.a.y)), (pytest.approx(s.b.x), pytest.approx(s.b.y)))
        for s in segs
    ]


@pytest.fixture
def box() -> BoundingBox:
    return BoundingBox(0, 0, 10, 10)


@pytest.fixture
def square() -> list[Segment]:
    return points_to_closed_poly_segments(Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10))


class TestCropToBox:
    """Tests for crop_segs_to_bounding_box."""

    def test_inside_kept(self, box: BoundingBox) -> None:
        """Test segments inside the box are copied."""
        seg = Segment(Point(2, 2), Point(8, 8), {"color": "red"})
        (out,) = crop_segs_to_bounding_box([seg], box)
        assert out is not seg
        assert (out.a, out.b, out.data) == (seg.a, seg.b, seg.data)

    def test_leaving_segment_cut_at_edge(self, box: BoundingBox) -> None:
        """Test a segment leaving the box ends on the border."""
        out = crop_segs_to_bounding_box([Segment(Point(5, 5), Point(15, 5))], box)
        assert ends(out) == [((5, 5), (10, 5))]

    def test_entering_segment_starts_at_edge(self, box: BoundingBox) -> None:
        """Test a segment entering the box starts on the border."""
        out = crop_segs_to_bounding_box([Segment(Point(15, 5), Point(5, 5))], box)
        assert ends(out) == [((10, 5), (5, 5))]

    def test_crossing_segment_keeps_chord(self, box: BoundingBox) -> None:
        """Test a segment crossing the box keeps the part inside."""
        out = crop_segs_to_bounding_box([Segment(Point(-5, 5), Point(15, 5))], box)
        assert ends(out) == [((0, 5), (10, 5))]

    def test_outside_dropped(self, box: BoundingBox) -> None:
        """Test segments missing the box are removed."""
        assert crop_segs_to_bounding_box([Segment(Point(20, 20), Point(30, 20))], box) == []

    def test_add_border(self, box: BoundingBox) -> None:
        """Test the box outline is appended."""
        out = crop_segs_to_bounding_box([], box, add_border=True)
        assert [(s.a, s.b) for s in out] == [(s.a, s.b) for s in box_segments(box)]
        assert len(out) == 4


class TestCropToShape:
    """Tests for crop_segs_to_shape."""

    def test_chord(self, square: list[Segment]) -> None:
        """Test only the part inside the outline survives."""
        out = crop_segs_to_shape([Segment(Point(-5, 5), Point(15, 5))], square)
        assert ends(out) == [((0, 5), (10, 5))]

    def test_inside_and_outside(self, square: list[Segment]) -> None:
        """Test inside segments stay and outside ones go."""
        inside = Segment(Point(2, 2), Point(4, 4))
        outside = Segment(Point(20, 2), Point(24, 4))
        out = crop_segs_to_shape([inside, outside], square)
        assert [(s.a, s.b) for s in out] == [(inside.a, inside.b)]


class TestCutShape:
    """Tests for cut_shape_from_segs."""

    def test_crossing_split_in_two(self, square: list[Segment]) -> None:
        """Test a crossing segment keeps both outside ends."""
        out = cut_shape_from_segs([Segment(Point(-5, 5), Point(15, 5))], square)
        assert ends(out) == [((-5, 5), (0, 5)), ((10, 5), (15, 5))]

    def test_partial(self, square: list[Segment]) -> None:
        """Test a segment starting inside keeps its outside part."""
        out = cut_shape_from_segs([Segment(Point(5, 5), Point(15, 5))], square)
        assert ends(out) == [((10, 5), (15, 5))]

    def test_inside_removed_outside_kept(self, square: list[Segment]) -> None:
        """Test fully inside segments vanish and outside ones are untouched."""
        inside = Segment(Point(2, 2), Point(4, 4))
        outside = Segment(Point(20, 2), Point(24, 4))
        out = cut_shape_from_segs([inside, outside], square)
        assert [(s.a, s.b) for s in out] == [(outside.a, outside.b)]


class TestPathData:
    """Tests for SVG path data cropping."""

    def test_parse_closed(self) -> None:
        """Test close commands add the closing segment."""
        segs = path_data_to_segments("M 0 0 L 20 0 L 20 20 Z")
        assert [(s.a, s.b) for s in segs] == [
            (Point(0, 0), Point(20, 0)),
            (Point(20, 0), Point(20, 20)),
            (Point(20, 20), Point(0, 0)),
        ]

    def test_parse_moves(self) -> None:
        """Test moves start new runs without a segment."""
        segs = path_data_to_segments("M0,0 L1,0 M5,5 L6,5")
        assert [(s.a, s.b) for s in segs] == [
            (Point(0, 0), Point(1, 0)),
            (Point(5, 5), Point(6, 5)),
        ]

    def test_serialize_moves_at_gaps(self) -> None:
        """Test moves are only emitted where runs break."""
        segs = [
            Segment(Point(0, 0), Point(1, 0)),
            Segment(Point(1, 0), Point(1, 1)),
            Segment(Point(5, 5), Point(6, 5)),
        ]
        assert segments_to_path_data(segs) == (
            "M 0.0 0.0 L 1.0 0.0 L 1.0 1.0 M 5.0 5.0 L 6.0 5.0 "
        )

    def test_crop(self, box: BoundingBox) -> None:
        """Test path data is cropped and re-emitted."""
        assert crop_path_data_to_bounding_box("M 5 5 L 15 5", box) == "M 5.0 5.0 L 10.0 5.0 "
