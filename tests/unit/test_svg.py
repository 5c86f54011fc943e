"""Unit tests for the SVG exporter."""

import pytest

from plotpaths.config import DocumentSize, RenderOptions
from plotpaths.domain import BoundingBox, Curve, Point, Segment, Segments
from plotpaths.io import SVGExporter, lop
from plotpaths.io.svg import LAYER_MARKERS, format_color, format_number
from plotpaths.shapes import Rectangle


def layer(svg: str, name: str) -> str:
    """Markup inside one layer group."""
    start = svg.index(">", svg.index(f'<g id="{name}_layer"')) + 1
    end = svg.find('\n  <g id="', start)
    if end == -1:
        end = svg.index("\n</svg>", start)
    assert svg[end - 4 : end] == "</g>"
    return svg[start : end - 4]


def line(*pts: tuple[float, float]) -> Segments:
    return Segments([Segment(Point(*pts[i - 1]), Point(*pts[i])) for i in range(1, len(pts))])


class TestFormatting:
    """Tests for number and colour formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [(3, "3.00"), (1.25, "1.25"), (-2.5, "-2.5"), (10.126, "10.13"), (0.004, "0.00")],
    )
    def test_lop(self, value: float, expected: str) -> None:
        """Test half-up rounding to two decimals."""
        assert lop(value) == expected

    def test_format_number(self) -> None:
        """Test integral floats drop their fraction."""
        assert format_number(2.0) == "2"
        assert format_number(1.5) == "1.5"

    def test_format_color(self) -> None:
        """Test integer colours become hex strings."""
        assert format_color(0xFF0000) == "#ff0000"
        assert format_color("red") == "red"


class TestEmptyDocument:
    """Tests for documents without content."""

    def test_all_layers_present_and_empty(self) -> None:
        """Test an empty render keeps every layer with no content."""
        svg = SVGExporter().mixed_to_svg([])
        for name in ("grid", "skirt", "title", "paths", "groups", "outline", "debug"):
            assert layer(svg, name) == ""
        for marker in LAYER_MARKERS:
            assert f"<!--{marker}-->" not in svg
        assert 'width="0"' in svg
        assert 'height="0"' in svg
        assert 'viewBox="0 0 0 0"' in svg

    def test_none_items_skipped(self) -> None:
        """Test None entries are ignored."""
        assert SVGExporter().mixed_to_svg([None]) == SVGExporter().mixed_to_svg([])

    def test_background_color(self) -> None:
        """Test the background colour is written to the root element."""
        svg = SVGExporter(RenderOptions(background_color="#fff")).mixed_to_svg([])
        assert 'style="background-color: #fff"' in svg


class TestPlacement:
    """Tests for the content-to-document mapping."""

    def test_content_corner_maps_to_margin(self) -> None:
        """Test the content minimum lands on the margin corner."""
        svg = SVGExporter(RenderOptions(margin=1)).mixed_to_svg([line((5, 5), (15, 5))])
        assert layer(svg, "paths") == (
            '<g><path d="M 96.00 96.00 L 106.00 96.00 " fill="none" stroke="#000" '
            'stroke-width="1" /></g>\n'
        )
        assert 'width="202"' in svg
        assert 'height="192"' in svg

    def test_offsets_shift_content(self) -> None:
        """Test inch offsets are added after the margin."""
        options = RenderOptions(margin=1, offset_x=0.5, offset_y=0.25)
        svg = SVGExporter(options).mixed_to_svg([line((5, 5), (15, 5))])
        assert 'd="M 144.00 120.00 L 154.00 120.00 "' in svg

    def test_fixed_page_size(self) -> None:
        """Test a fixed page overrides content bounds."""
        exporter = SVGExporter(RenderOptions(document_size=DocumentSize(width=8, height=10)))
        assert exporter.document_size(BoundingBox(0, 0, 1, 1), 0) == (768, 960)

    def test_fit_scales_and_centers(self) -> None:
        """Test wide content fills the width and centers vertically."""
        exporter = SVGExporter(RenderOptions(document_size=DocumentSize(width=8, height=10)))
        scale, offset_x, offset_y = exporter.fit(BoundingBox(0, 0, 100, 50), 0)
        assert scale == pytest.approx(7.68)
        assert offset_x == 0
        assert offset_y == pytest.approx(288)

    def test_fit_identity_without_page(self) -> None:
        """Test content-sized documents are not scaled."""
        assert SVGExporter().fit(BoundingBox(0, 0, 100, 50), 10) == (1.0, 0.0, 0.0)


class TestLines:
    """Tests for open line export."""

    def test_connected_run_single_move(self) -> None:
        """Test a connected run draws with one pen-down."""
        svg = SVGExporter().mixed_to_svg([line((0, 0), (10, 0), (10, 10))])
        assert layer(svg, "paths").count("M ") == 1

    def test_gap_lifts_pen(self) -> None:
        """Test disconnected segments start a new move."""
        segs = Segments([Segment(Point(0, 0), Point(10, 0)), Segment(Point(20, 0), Point(30, 0))])
        svg = SVGExporter().mixed_to_svg([segs])
        assert layer(svg, "paths").count("M ") == 2

    def test_no_pen_up(self) -> None:
        """Test moves are suppressed after the first when requested."""
        segs = Segments([Segment(Point(0, 0), Point(10, 0)), Segment(Point(20, 0), Point(30, 0))])
        svg = SVGExporter(RenderOptions(no_pen_up=True)).mixed_to_svg([segs])
        assert layer(svg, "paths").count("M ") == 1

    def test_back_and_forth(self) -> None:
        """Test the final run is retraced in reverse."""
        exporter = SVGExporter(RenderOptions(draw_lines_back_and_forth=True))
        run = line((0, 0), (10, 0), (10, 10))
        markup = exporter.lines_to_paths([run], run.bounding_box())
        assert (
            'd="M 0.00 0.00 L 10.00 0.00 L 10.00 10.00 '
            'L 10.00 10.00 L 10.00 0.00 L 0.00 0.00 "'
        ) in markup

    def test_back_and_forth_retraces_before_pen_lift(self) -> None:
        """Test each disconnected run is retraced before the pen moves on."""
        exporter = SVGExporter(RenderOptions(draw_lines_back_and_forth=True))
        first = line((0, 0), (10, 0), (10, 10))
        second = line((20, 0), (30, 0))
        markup = exporter.lines_to_paths([first, second], BoundingBox(0, 0, 30, 10))
        assert (
            'd="M 0.00 0.00 L 10.00 0.00 L 10.00 10.00 '
            "L 10.00 10.00 L 10.00 0.00 L 0.00 0.00 "
            "M 20.00 0.00 L 30.00 0.00 "
            'L 30.00 0.00 L 20.00 0.00 "'
        ) in markup

    def test_segment_color_and_width(self) -> None:
        """Test stroke style comes from the first segment's metadata."""
        segs = Segments([Segment(Point(0, 0), Point(10, 0), {"color": "#123", "width": 2})])
        svg = SVGExporter().mixed_to_svg([segs])
        assert 'stroke="#123" stroke-width="2"' in layer(svg, "paths")


class TestOutlines:
    """Tests for closed outline export."""

    def test_closed_shape_goes_to_outline_layer(self) -> None:
        """Test closed shapes close their path and use the wider stroke."""
        svg = SVGExporter().mixed_to_svg([Rectangle(Point(0, 0), 10, 10)])
        outlines = layer(svg, "outline")
        assert layer(svg, "paths") == ""
        assert outlines.count("M ") == 1
        assert 'z" fill="none" stroke="#000" stroke-width="1.5"' in outlines

    def test_fill_color(self) -> None:
        """Test fill colour fills and strokes the outline."""
        rect = Rectangle(Point(0, 0), 10, 10)
        rect.data["fill_color"] = "#f00"
        svg = SVGExporter().mixed_to_svg([rect])
        assert 'fill="#f00" stroke="#f00" stroke-width="1"' in layer(svg, "outline")

    def test_outline_flag(self) -> None:
        """Test collections flagged as outlines go to the outline layer."""
        segs = line((0, 0), (10, 0), (10, 10))
        segs.data["outline"] = True
        svg = SVGExporter().mixed_to_svg([segs])
        assert layer(svg, "paths") == ""
        assert "z" not in layer(svg, "outline")
        segs.is_open = False
        assert 'z" fill' in layer(SVGExporter().mixed_to_svg([segs]), "outline")

    def test_force_to_shapes(self) -> None:
        """Test every collection can be forced into the outline layer."""
        svg = SVGExporter().mixed_to_svg([line((0, 0), (10, 0))], force_to_shapes=True)
        assert layer(svg, "paths") == ""
        assert layer(svg, "outline") != ""

    def test_discrete_collections_in_paths_layer(self) -> None:
        """Test discrete collections keep one path each and stay open."""
        a = line((0, 0), (10, 0))
        b = line((0, 5), (10, 5))
        for item in (a, b):
            item.data["discrete"] = True
        paths = layer(SVGExporter().mixed_to_svg([a, b]), "paths")
        assert paths.count("<path") == 2
        assert 'fill="none"' in paths
        assert "z" not in paths

    def test_back_and_forth_shape_runs(self) -> None:
        """Test every run of a shape is retraced before the next move."""
        exporter = SVGExporter(RenderOptions(draw_lines_back_and_forth=True))
        shape = Segments(
            [
                Segment(Point(0, 0), Point(10, 0)),
                Segment(Point(10, 0), Point(10, 10)),
                Segment(Point(20, 0), Point(30, 0)),
            ]
        )
        shape.is_open = True
        markup = exporter.shapes_to_paths([shape], BoundingBox(0, 0, 30, 10))
        assert (
            'd="M 0.00 0.00 L 10.00 0.00 L 10.00 10.00 '
            "L 10.00 10.00 L 10.00 0.00 L 0.00 0.00 "
            "M 20.00 0.00 L 30.00 0.00 "
            'L 30.00 0.00 L 20.00 0.00 "'
        ) in markup


class TestGroupsAndCurves:
    """Tests for line groups and curves."""

    def test_group_color(self) -> None:
        """Test groups get their own path with the group colour."""
        group = line((0, 0), (10, 0))
        group.is_group = True
        svg = SVGExporter().mixed_to_svg([group], group_color="#00f")
        assert 'stroke="#00f" stroke-width="1.5"' in layer(svg, "groups")
        assert layer(svg, "paths") == ""

    def test_force_grouped(self) -> None:
        """Test lines can be forced into the groups layer."""
        svg = SVGExporter().mixed_to_svg([line((0, 0), (10, 0)), line((0, 5), (10, 5))], force_grouped=True)
        assert layer(svg, "groups").count("<path") == 2

    def test_curve(self) -> None:
        """Test curves emit one move and a cubic per span."""
        curve = Curve.from_array([[[0, 0], [1, 1], [2, 1], [3, 0]]], {"color": "#abc"})
        paths = layer(SVGExporter().mixed_to_svg([curve]), "paths")
        assert 'd="M 0.00 0.00 C 1.00 1.00 2.00 1.00 3.00 0.00 "' in paths
        assert 'stroke="#abc"' in paths


class TestDecorations:
    """Tests for skirt, grid and debug overlays."""

    def test_skirt_needs_fixed_page(self) -> None:
        """Test the skirt is only drawn on fixed pages."""
        assert layer(SVGExporter(RenderOptions(draw_skirt=True)).mixed_to_svg([]), "skirt") == ""
        options = RenderOptions(draw_skirt=True, document_size=DocumentSize(width=8, height=10))
        assert 'stroke="red"' in layer(SVGExporter(options).mixed_to_svg([]), "skirt")

    def test_debug_grid(self) -> None:
        """Test the debug grid pattern."""
        svg = SVGExporter(RenderOptions(debug_grid=16)).mixed_to_svg([])
        assert 'pattern id="grid" width="16"' in layer(svg, "grid")

    def test_debug_points(self) -> None:
        """Test every point gets a dot plus one for the origin."""
        svg = SVGExporter(RenderOptions(debug_mode=True)).mixed_to_svg([line((0, 0), (10, 0))])
        assert layer(svg, "debug").count("<circle") == 3
