"""Unit tests for the shape generators and the shape registry."""

import math

import pytest

from plotpaths.core.geometry import points_bounding_box, polygon_is_clockwise, segments_to_points
from plotpaths.domain import Point, Segment, Segments
from plotpaths.exceptions import ShapeSpecError
from plotpaths.shapes import (
    SHAPE_TYPES,
    Arc,
    ArcCapsule,
    BranchRect,
    Capsule,
    Circle,
    CornerRect,
    DoubleWinding,
    Hexagon,
    LineHatch,
    MorphSpiral,
    Paperclip,
    ParametricShape,
    PolygonShape,
    Rectangle,
    RoundedRect,
    RoundShape,
    Shape,
    Spiral,
    Square,
    SquareWave,
    Star,
    Tape,
    Winding,
    build_shape,
)


def is_closed_loop(segs: list[Segment]) -> bool:
    return all(segs[i].b == segs[(i + 1) % len(segs)].a for i in range(len(segs)))


def loop_points(segs: list[Segment]) -> list[Point]:
    return [seg.a for seg in segs]


class TestShapeBase:
    """Tests for the shape base class."""

    def test_abstract_shape(self) -> None:
        """Test calling the base generator is a contract violation."""
        with pytest.raises(NotImplementedError):
            Shape().to_points()

    def test_open_and_invert_chain(self) -> None:
        """Test the chainable flag setters."""
        rect = Rectangle(Point(0, 0), 10, 10)
        assert rect.open() is rect
        assert rect.is_open
        assert rect.invert().is_inverted
        assert not rect.invert().is_inverted

    def test_result_freezes_outline(self) -> None:
        """Test result returns plain segments."""
        result = Rectangle(Point(0, 0), 10, 10).result()
        assert isinstance(result, Segments)
        assert len(result) == 4


class TestRectangle:
    """Tests for rectangular shapes."""

    def test_square_outline(self) -> None:
        """Test a 10x10 rectangle yields four points and four segments."""
        rect = Rectangle(Point(0, 0), 10, 10)
        assert len(rect.to_points()) == 4
        segs = rect.to_segments()
        assert len(segs) == 4
        assert is_closed_loop(segs)
        assert {(pt.x, pt.y) for pt in loop_points(segs)} == {(-5, -5), (-5, 5), (5, 5), (5, -5)}

    def test_inversion_flips_winding(self) -> None:
        """Test the inversion flag selects the winding."""
        rect = Rectangle(Point(0, 0), 10, 10)
        normal = polygon_is_clockwise(loop_points(rect.to_segments()))
        inverted = polygon_is_clockwise(loop_points(rect.invert().to_segments()))
        assert not normal
        assert inverted

    def test_open_drops_closing_segment(self) -> None:
        """Test open outlines have no closing segment."""
        assert len(Rectangle(Point(0, 0), 10, 10).open().to_segments()) == 3

    def test_division_distance(self) -> None:
        """Test subdivided edges list shared corners once."""
        rect = Rectangle(Point(0, 0), 10, 10, division_distance=2.5)
        pts = rect.to_points()
        assert len(pts) == 16
        assert len(set(pts)) == 16

    def test_center_rotation_and_pivot(self) -> None:
        """Test rotation, pivot and center are all applied."""
        rect = Rectangle(Point(100, 0), 10, 20)
        rect.rotation = 90
        rect.pivot = Point(0, 50)
        bb = points_bounding_box(rect.to_points())
        assert bb.width == pytest.approx(20)
        assert bb.height == pytest.approx(10)
        assert bb.center.x == pytest.approx(100)
        assert bb.center.y == pytest.approx(50)

    def test_local_skips_transform(self) -> None:
        """Test local points ignore rotation and pivot but keep the center."""
        rect = Rectangle(Point(100, 0), 10, 20)
        rect.rotation = 45
        rect.pivot = Point(3, 3)
        bb = points_bounding_box(rect.to_points(local=True))
        assert bb.to_dict() == {"min_x": 95, "min_y": -10, "max_x": 105, "max_y": 10}

    def test_square(self) -> None:
        """Test squares are equal-sided rectangles."""
        bb = Square(Point(0, 0), 8).bounding_box()
        assert (bb.width, bb.height) == (8, 8)

    def test_tape_notches(self) -> None:
        """Test torn tape has notches on both ends."""
        pts = Tape(Point(0, 0), 30, 10, zigzags=3).to_points()
        assert len(pts) == 4 + 2 * (3 + 2)

    def test_rounded_rect_bounds(self) -> None:
        """Test rounded corners stay inside the rectangle."""
        bb = RoundedRect(Point(0, 0), 40, 20, 5).bounding_box()
        assert bb.width == pytest.approx(40)
        assert bb.height == pytest.approx(20)

    def test_corner_rect(self) -> None:
        """Test corner-anchored rectangles."""
        bb = CornerRect(10, 20, 30, 40).bounding_box()
        assert bb.to_dict() == {"min_x": 10, "min_y": 20, "max_x": 40, "max_y": 60}

    def test_branch_rect_end_point(self) -> None:
        """Test the attachment point follows rotation."""
        branch = BranchRect(Point(10, 10), 4, 20, taper=1)
        assert branch.end_point() == Point(10, 30)
        branch.rotation = 90
        end = branch.end_point()
        assert end.x == pytest.approx(30)
        assert end.y == pytest.approx(10)


class TestRoundShapes:
    """Tests for round shapes."""

    def test_circle_points_on_radius(self) -> None:
        """Test circle vertices sit at the radius from the center."""
        circle = Circle(Point(100, 50), 20, segments=16)
        pts = circle.to_points()
        assert len(pts) == 16
        for pt in pts:
            assert math.hypot(pt.x - 100, pt.y - 50) == pytest.approx(20)

    def test_circle_overdraw(self) -> None:
        """Test overdraw repeats points and opens the outline."""
        circle = Circle(Point(0, 0), 10, segments=12, overdraw_steps=2)
        assert circle.is_open
        assert len(circle.to_points()) == 14
        assert len(circle.to_segments()) == 13

    def test_hexagon(self) -> None:
        """Test hexagon vertex count and radius."""
        pts = Hexagon(Point(0, 0), 10).to_points()
        assert len(pts) == 6
        assert all(math.hypot(pt.x, pt.y) == pytest.approx(10) for pt in pts)

    def test_closed_arc_includes_center(self) -> None:
        """Test pie slices start at the center."""
        arc = Arc(Point(5, 5), 10, 0, 90, segments=12)
        pts = arc.to_points()
        assert pts[0] == Point(5, 5)
        assert len(pts) == 7
        assert len(arc.open().to_points()) == 6

    def test_arc_wraps_end_angle(self) -> None:
        """Test end angles below the start wrap by a full turn."""
        assert Arc(Point(0, 0), 10, 270, 90).to_angle == 450

    def test_spiral_is_open_and_bounded(self) -> None:
        """Test spirals stay inside their radius."""
        spiral = Spiral(Point(0, 0), 50, windings=4)
        pts = spiral.to_points()
        assert spiral.is_open
        assert pts[0] == Point(0, 0)
        assert all(math.hypot(pt.x, pt.y) <= 50 + 1e-9 for pt in pts)

    def test_spiral_remove_center(self) -> None:
        """Test the innermost half winding can be dropped."""
        pts = Spiral(Point(0, 0), 50, windings=4, remove_center=True).to_points()
        assert min(math.hypot(pt.x, pt.y) for pt in pts) > 50 / 4 * 0.5

    def test_morph_spiral_reaches_square(self) -> None:
        """Test the spiral starts at the center and morphs past the inscribed circle."""
        pts = MorphSpiral(Point(0, 0), 20, windings=3).to_points()
        assert pts[0] == Point(0, 0)
        assert max(math.hypot(pt.x, pt.y) for pt in pts) > 20

    def test_morph_spiral_single_winding(self) -> None:
        """Test a single winding does not divide by zero."""
        assert MorphSpiral(Point(0, 0), 20, windings=1).to_points()

    def test_round_shape(self) -> None:
        """Test wobbly circles keep their vertex count."""
        assert len(RoundShape(Point(0, 0), 30, segments=20).to_points()) == 20

    def test_capsule_bounds(self) -> None:
        """Test the capsule spans shaft plus caps."""
        bb = Capsule(Point(0, 0), 5, 20).bounding_box()
        assert bb.width == pytest.approx(30)
        assert bb.height == pytest.approx(10)

    def test_arc_capsule(self) -> None:
        """Test bent capsules in both directions."""
        for angle in (45, -45):
            pts = ArcCapsule(Point(0, 0), 5, 40, angle).to_points()
            assert len(pts) > 10
            assert all(math.isfinite(pt.x) and math.isfinite(pt.y) for pt in pts)


class TestFillPatterns:
    """Tests for open fill patterns."""

    def test_square_wave(self) -> None:
        """Test rows of three points between the corner anchors."""
        wave = SquareWave(Point(0, 0), 20, 10, steps=3)
        assert wave.is_open
        assert len(wave.to_points()) == 1 + 3 * 3 + 1

    def test_line_hatch_rows_not_connected(self) -> None:
        """Test unconnected hatches draw only the rows."""
        segs = LineHatch(Point(0, 0), 10, steps=4).to_segments()
        assert len(segs) == 4
        assert all(seg.a.y == seg.b.y for seg in segs)

    def test_line_hatch_connected(self) -> None:
        """Test connected hatches draw the moves between rows."""
        segs = LineHatch(Point(0, 0), 10, steps=4, connected=True).to_segments()
        assert len(segs) == 7
        assert segments_to_points(segs)

    def test_line_hatch_dashed(self) -> None:
        """Test dashed hatches keep every other piece."""
        solid = LineHatch(Point(0, 0), 10, steps=4, division_distance=2.5).to_segments()
        dashed = LineHatch(Point(0, 0), 10, steps=4, division_distance=100, dashed=True).to_segments()
        assert len(solid) == 32
        assert len(dashed) == 16

    def test_winding_bounded(self) -> None:
        """Test windings stay inside the radius."""
        pts = Winding(Point(0, 0), 50, segments=12, offset=10).to_points()
        assert pts
        assert all(math.hypot(pt.x, pt.y) <= 50 + 1e-9 for pt in pts)

    def test_winding_zero_offset(self) -> None:
        """Test a zero offset yields nothing."""
        assert Winding(Point(0, 0), 50, offset=0).to_points() == []

    def test_double_winding_point_count(self) -> None:
        """Test each fold adds four points around its inner pair."""
        assert len(DoubleWinding(Point(0, 0), 30, steps=3).to_points()) == 14
        assert len(DoubleWinding(Point(0, 0), 30, steps=3, merge_final=True).to_points()) == 13

    def test_paperclip(self) -> None:
        """Test laps and orientation."""
        wide = Paperclip(Point(0, 0), 40, 20, steps=2).to_points()
        assert len(wide) == 1 + 2 * 180 + 1
        tall = points_bounding_box(Paperclip(Point(0, 0), 20, 40, steps=2).to_points())
        assert tall.height > tall.width


class TestPolygonShapes:
    """Tests for star, polygon and parametric shapes."""

    def test_star(self) -> None:
        """Test alternating radii with the start repeated."""
        pts = Star(Point(0, 0), 5, 10, points=5).to_points()
        assert len(pts) == 11
        assert pts[0].x == pytest.approx(pts[-1].x)
        assert pts[0].y == pytest.approx(pts[-1].y)
        radii = [round(math.hypot(pt.x, pt.y), 6) for pt in pts]
        assert radii[:4] == [5, 10, 5, 10]

    def test_polygon_keeps_order(self) -> None:
        """Test polygon segments follow the given point order."""
        pts = [Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)]
        segs = PolygonShape(pts).to_segments()
        assert [seg.a for seg in segs] == pts

    def test_polygon_transform(self) -> None:
        """Test polygons honor pivot and rotation."""
        poly = PolygonShape([Point(0, 0), Point(10, 0), Point(10, 10)])
        poly.pivot = Point(5, 5)
        assert poly.to_points()[0] == Point(5, 5)
        assert poly.to_points(local=True)[0] == Point(0, 0)

    def test_optimize_removes_collinear(self) -> None:
        """Test straight-through vertices are removed."""
        poly = PolygonShape([Point(0, 0), Point(5, 0), Point(10, 0), Point(10, 10), Point(0, 10)])
        poly.optimize()
        assert len(poly.points) == 4
        assert Point(5, 0) not in poly.points

    def test_optimize_closes_matching_ends(self) -> None:
        """Test an open outline whose ends meet becomes closed."""
        poly = PolygonShape([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 0)])
        poly.open()
        poly.optimize()
        assert not poly.is_open
        assert len(poly.points) == 3

    def test_from_geom_points(self) -> None:
        """Test building from coordinate pairs."""
        poly = PolygonShape.from_geom_points([[0, 0], [1, 0], [1, 1]])
        assert poly.to_geom_points() == [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]]]

    def test_parametric(self) -> None:
        """Test sampling a function over [0, 1], skipping None."""
        shape = ParametricShape(lambda t: Point(t * 10, 0), segments=4)
        assert [pt.x for pt in shape.to_points()] == [0, 2.5, 5, 7.5, 10]
        sparse = ParametricShape(lambda t: None if t == 0.5 else Point(t, t), segments=4)
        assert len(sparse.to_points()) == 4


class TestBuildShape:
    """Tests for building shapes from mappings."""

    def test_circle(self) -> None:
        """Test a basic spec with shape attributes."""
        shape = build_shape(
            {
                "type": "circle",
                "center": [10, 20],
                "radius": 5,
                "segments": 8,
                "rotation": 45,
                "pivot": {"x": 1, "y": 2},
                "inverted": True,
                "data": {"color": "#f00"},
            }
        )
        assert isinstance(shape, Circle)
        assert shape.center == Point(10, 20)
        assert shape.segments == 8
        assert shape.rotation == 45
        assert shape.pivot == Point(1, 2)
        assert shape.is_inverted
        assert all(seg.data == {"color": "#f00"} for seg in shape.to_segments())

    def test_open_flag(self) -> None:
        """Test the open key overrides the class default."""
        assert build_shape({"type": "square", "center": [0, 0], "size": 4, "open": True}).is_open

    def test_polygon_points(self) -> None:
        """Test polygon point lists are converted."""
        shape = build_shape({"type": "polygon", "points": [[0, 0], [4, 0], [4, 4]]})
        assert isinstance(shape, PolygonShape)
        assert shape.points[1] == Point(4, 0)

    def test_every_registered_type_is_a_shape(self) -> None:
        """Test the registry only holds shape classes."""
        assert all(issubclass(cls, Shape) for cls in SHAPE_TYPES.values())

    def test_unknown_type(self) -> None:
        """Test unknown types are rejected."""
        with pytest.raises(ShapeSpecError) as exc_info:
            build_shape({"type": "blob"}, index=3)
        assert exc_info.value.index == 3

    def test_missing_argument(self) -> None:
        """Test constructor errors become spec errors."""
        with pytest.raises(ShapeSpecError, match="#1"):
            build_shape({"type": "circle", "center": [0, 0]}, index=1)

    def test_bad_center(self) -> None:
        """Test malformed points are rejected."""
        with pytest.raises(ShapeSpecError):
            build_shape({"type": "circle", "center": [0, 0, 0], "radius": 2})

    def test_not_a_mapping(self) -> None:
        """Test non-mapping specs are rejected."""
        with pytest.raises(ShapeSpecError):
            build_shape(["circle"])  # type: ignore[arg-type]

    def test_incomplete_center_mapping(self) -> None:
        """Test a point mapping missing a coordinate is rejected."""
        with pytest.raises(ShapeSpecError, match="missing coordinate"):
            build_shape({"type": "circle", "center": {"x": 1}, "radius": 5})

    @pytest.mark.parametrize(
        "extra",
        [
            {"rotation": "abc"},
            {"pivot": [1]},
            {"pivot": {"y": 2}},
            {"data": 5},
        ],
    )
    def test_bad_attributes(self, extra: dict) -> None:
        """Test malformed shape attributes are rejected."""
        spec = {"type": "circle", "center": [0, 0], "radius": 5, **extra}
        with pytest.raises(ShapeSpecError, match="#2"):
            build_shape(spec, index=2)

    def test_bad_polygon_point(self) -> None:
        """Test malformed polygon points are rejected."""
        with pytest.raises(ShapeSpecError):
            build_shape({"type": "polygon", "points": [[0, 0], ["a", 1], [4, 4]]})

    def test_undrawable_arguments(self) -> None:
        """Test arguments that break outline generation are rejected up front."""
        with pytest.raises(ShapeSpecError) as exc_info:
            build_shape({"type": "spiral", "center": [0, 0], "radius": 5, "windings": 0}, index=4)
        assert exc_info.value.index == 4
