"""SVG document export with pen-travel semantics.

The exporter maps shapes, segment collections and curves into a single
document sized either to the content or to a fixed page. Each input kind is
routed to its own path builder:

- closed outlines (and anything flagged ``outline``) go to the outlines layer
- line groups go to the groups layer, one path per group
- discrete collections, open polylines and curves go to the paths layer

All coordinates are rounded half-up to two decimals at emission time.
"""

from typing import Any

from plotpaths.config import RenderOptions
from plotpaths.config.settings import UNITS_PER_INCH
from plotpaths.core.geometry import bounding_boxes_bounding_box, segments_connected
from plotpaths.domain import BoundingBox, Curve, SegmentCollection, points_equal, round_half_up
from plotpaths.shapes import Shape

SVG_TEMPLATE = """<svg
  xmlns:dc="http://purl.org/dc/elements/1.1/"
  xmlns:cc="http://creativecommons.org/ns#"
  xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
  xmlns:svg="http://www.w3.org/2000/svg"
  xmlns="http://www.w3.org/2000/svg"
  xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
  xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
  style="background-color: {{bgcolor}}"
  width="{{w}}"
  height="{{h}}"
  viewBox="0 0 {{w}} {{h}}"
  version="1.1"
  id="plotpaths">
  <g id="grid_layer" inkscape:label="grid" inkscape:groupmode="layer"><!--grid--></g>
  <g id="skirt_layer" inkscape:label="skirt" inkscape:groupmode="layer"><!--skirt--></g>
  <g id="title_layer" inkscape:label="title" inkscape:groupmode="layer"><!--title--></g>
  <g id="paths_layer" inkscape:label="paths" inkscape:groupmode="layer"><!--paths--></g>
  <g id="groups_layer" inkscape:label="groups" inkscape:groupmode="layer"><!--groups--></g>
  <g id="outline_layer" inkscape:label="outlines" inkscape:groupmode="layer"><!--shapes--></g>
  <g id="debug_layer"><!--debug--></g>
</svg>
"""

LAYER_MARKERS = ("grid", "skirt", "title", "paths", "groups", "shapes", "debug")

PATH_MARKUP = (
    '<g><path d="{{path}}" fill="{{fill}}" stroke="{{stroke}}" '
    'stroke-width="{{stroke-width}}" /></g>'
)
SHAPE_PATH_MARKUP = (
    '<g><path d="{{path}}" {{fill}} stroke="{{stroke}}" stroke-width="{{stroke-width}}" /></g>'
)


def lop(value: float) -> str:
    """Format a coordinate rounded half-up to two decimals.

    Examples:
        >>> lop(3)
        '3.00'
        >>> lop(1.25)
        '1.25'
        >>> lop(-2.5)
        '-2.5'
    """
    val = round_half_up(value * 100) / 100
    if val % 1 == 0:
        return f"{int(val)}.00"
    return repr(val)


def format_number(value: float) -> str:
    """Plain number formatting: integral floats print without a fraction."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_color(color: Any) -> str:
    """Colour metadata may be a CSS string or an integer RGB value."""
    if isinstance(color, int) and not isinstance(color, bool):
        return f"#{color:x}"
    return str(color)


class _Frame:
    """Content-to-document coordinate mapping."""

    def __init__(
        self, bb: BoundingBox, margin: float, offset_x: float, offset_y: float, scale: float
    ) -> None:
        self.min_x = 0.0 if bb.is_empty else bb.min_x
        self.min_y = 0.0 if bb.is_empty else bb.min_y
        self.margin = margin
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.scale = scale

    def x(self, value: float) -> float:
        return (value - self.min_x) * self.scale + self.offset_x + self.margin

    def y(self, value: float) -> float:
        return (value - self.min_y) * self.scale + self.offset_y + self.margin

    def coords(self, x: float, y: float) -> str:
        return f"{lop(self.x(x))} {lop(self.y(y))}"


class SVGExporter:
    """Serializes geometry into an SVG document for pen plotters.

    All style and layout comes from the immutable ``RenderOptions`` passed
    in; the exporter keeps no other state.

    Example:
        exporter = SVGExporter(RenderOptions(stroke_width=0.5))
        svg = exporter.mixed_to_svg([Circle(Point(0, 0), 20)])
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        """Initialize the exporter.

        Args:
            options: Render options (defaults when None)
        """
        self.options = options or RenderOptions()

    def _flush(self, cache: list[str]) -> str:
        return "".join(reversed(cache))

    def shapes_to_paths(
        self,
        shapes: list[SegmentCollection],
        bb: BoundingBox,
        margin: float = 0,
        line_width: float = 1,
        offset_x: float = 0,
        offset_y: float = 0,
        scale: float = 1,
    ) -> str:
        """One ``<path>`` per collection.

        A move starts every run that does not continue the previous segment.
        Closed outlines end with ``z`` and are filled from
        ``data["fill_color"]`` when present, which also forces them closed.

        Args:
            shapes: Collections to emit
            bb: Content bounding box (its minimum maps to the margin corner)
            margin: Margin in document units
            line_width: Default stroke width
            offset_x: Horizontal offset in document units
            offset_y: Vertical offset in document units
            scale: Content scale

        Returns:
            Path markup, one line per collection
        """
        frame = _Frame(bb, margin, offset_x, offset_y, scale)
        back_and_forth = self.options.draw_lines_back_and_forth
        paths = []

        for shape in shapes:
            segs = shape.to_segments()
            if not segs:
                continue

            data = shape.data or {}
            stroke = self.options.foreground_color
            fill = "none"
            stroke_width = format_number(line_width)
            is_open = shape.is_open

            if data.get("color"):
                stroke = format_color(data["color"])
            if data.get("width"):
                stroke_width = format_number(data["width"])
            if data.get("fill_color"):
                is_open = False
                fill = stroke = format_color(data["fill_color"])
                stroke_width = "1"

            markup = SHAPE_PATH_MARKUP.replace("{{fill}}", 'fill="none"' if is_open else f'fill="{fill}"')
            markup = markup.replace("{{stroke}}", stroke).replace("{{stroke-width}}", stroke_width)

            parts: list[str] = []
            cache: list[str] = []
            for i, seg in enumerate(segs):
                if i == 0 or not segments_connected(segs[i - 1], seg):
                    if back_and_forth and len(cache) > 1:
                        parts.append(self._flush(cache))
                    start = f" {frame.coords(seg.a.x, seg.a.y)} "
                    cache = ["L" + start]
                    parts.append("M" + start)
                step = f"L {frame.coords(seg.b.x, seg.b.y)} "
                cache.append(step)
                parts.append(step)

            if back_and_forth and len(cache) > 1:
                parts.append(self._flush(cache))

            points = "".join(parts)
            if not is_open and not points.endswith("z"):
                points += "z"

            paths.append(markup.replace("{{path}}", points) + "\n")

        return "".join(paths)

    def lines_to_paths(
        self,
        lines: list[SegmentCollection],
        bb: BoundingBox,
        margin: float = 0,
        line_width: float = 1,
        offset_x: float = 0,
        offset_y: float = 0,
        scale: float = 1,
        group_color: str | None = None,
    ) -> str:
        """A single ``<path>`` for all segments of all lines.

        The pen lifts (``M``) wherever a segment does not start at the previous
        end, compared at ``equal_scale``, unless ``no_pen_up`` is set. Stroke
        colour and width come from the first segment's metadata, falling back
        to the first line's metadata.
        """
        frame = _Frame(bb, margin, offset_x, offset_y, scale)
        back_and_forth = self.options.draw_lines_back_and_forth
        segs = [seg for line in lines for seg in line.to_segments()]

        stroke = group_color or self.options.foreground_color
        stroke_width = format_number(line_width)
        if segs:
            first = {**(lines[0].data or {}), **(segs[0].data or {})}
            if first.get("color"):
                stroke = format_color(first["color"])
            if first.get("width"):
                stroke_width = format_number(first["width"])

        markup = PATH_MARKUP.replace("{{fill}}", "none")
        markup = markup.replace("{{stroke}}", stroke).replace("{{stroke-width}}", stroke_width)

        parts: list[str] = []
        cache: list[str] = []
        for i, seg in enumerate(segs):
            lift = i == 0 or (
                not self.options.no_pen_up
                and not points_equal(segs[i - 1].b, seg.a, self.options.equal_scale)
            )
            if lift:
                if back_and_forth and len(cache) > 1:
                    parts.append(self._flush(cache))
                start = frame.coords(seg.a.x, seg.a.y)
                parts.append(f"M {start} ")
                cache = [f"L {start} "]
            step = f"L {frame.coords(seg.b.x, seg.b.y)} "
            cache.append(step)
            parts.append(step)

        if back_and_forth and len(cache) > 1:
            parts.append(self._flush(cache))

        return markup.replace("{{path}}", "".join(parts)) + "\n"

    def curves_to_paths(
        self,
        curves: list[Curve],
        bb: BoundingBox,
        margin: float = 0,
        line_width: float = 1,
        offset_x: float = 0,
        offset_y: float = 0,
        scale: float = 1,
    ) -> str:
        """One ``<path>`` per curve: a move to the first span, then ``C`` per span."""
        frame = _Frame(bb, margin, offset_x, offset_y, scale)
        paths = []

        for curve in curves:
            spans = curve.to_points()
            if not spans:
                continue

            data = curve.data or {}
            stroke = format_color(data["color"]) if data.get("color") else self.options.foreground_color
            stroke_width = format_number(data["width"]) if data.get("width") else format_number(line_width)

            markup = SHAPE_PATH_MARKUP.replace("{{fill}}", 'fill="none"')
            markup = markup.replace("{{stroke}}", stroke).replace("{{stroke-width}}", stroke_width)

            parts = [f"M {frame.coords(spans[0].x, spans[0].y)} "]
            for span in spans:
                parts.append(
                    f"C {frame.coords(span.cx, span.cy)} "
                    f"{frame.coords(span.cx2, span.cy2)} "
                    f"{frame.coords(span.x2, span.y2)} "
                )

            paths.append(markup.replace("{{path}}", "".join(parts)) + "\n")

        return "".join(paths)

    def debug_grid(self, margin: float) -> str:
        """Pattern-filled background grid with cells of ``debug_grid`` units."""
        g = self.options.debug_grid
        s = g**0.5
        m = format_number(margin)
        m2 = format_number(margin % s)
        gm2 = format_number(g + margin % s)
        gm = format_number(g + margin)
        sv = format_number(s)
        return f"""
      <defs>
        <pattern id="smallGrid" width="{sv}" height="{sv}" patternUnits="userSpaceOnUse">
          <path d="M {gm2} {m2} L 0 {m2} M {m2} {gm2} L {m2} 0" fill="none" stroke="gray" stroke-width="2" />
        </pattern>
        <pattern id="grid" width="{g}" height="{g}" patternUnits="userSpaceOnUse">
          <rect width="{g}" height="{g}" fill="url(#smallGrid)"/>
          <path d="M {gm} {m} L 0 {m} M {m} {gm} L {m} 0" fill="none" stroke="gray" stroke-width="2"/>
        </pattern>
      </defs>
      <rect width="100%" height="100%" fill="url(#grid)" />
    """

    def skirt(self) -> str:
        """Registration mark in the top-right corner of a fixed page."""
        w = self.options.document_size.width * UNITS_PER_INCH - 10
        left = format_number(w - 80)
        right = format_number(w)
        edge = format_number(w + 2)
        return (
            f'<path d="M {left} 8 L {left} 10 L {right} 10 L {right} 90 L {edge} 90" '
            'fill="none" stroke="red" stroke-width="2" />'
        )

    def document_size(self, bb: BoundingBox, margin: float) -> tuple[float, float]:
        """Document width and height in user units.

        A fixed page size wins; otherwise the content bounds plus margins,
        or zero for empty content.
        """
        doc = self.options.document_size
        if doc.is_fixed:
            return doc.width * UNITS_PER_INCH, doc.height * UNITS_PER_INCH
        if bb.is_empty:
            return 0.0, 0.0
        return bb.width + margin * 2, bb.height + margin * 2

    def fit(self, bb: BoundingBox, margin: float) -> tuple[float, float, float]:
        """Scale and centering offsets that fit content on the page.

        Args:
            bb: Content bounding box
            margin: Margin in document units

        Returns:
            Tuple of (scale, offset_x, offset_y); identity when no page size is
            set or the content has no area
        """
        doc = self.options.document_size
        if not doc.is_fixed or bb.is_empty or bb.width <= 0 or bb.height <= 0:
            return 1.0, 0.0, 0.0

        doc_w = doc.width * UNITS_PER_INCH - margin * 2
        doc_h = doc.height * UNITS_PER_INCH - margin * 2
        if bb.width / bb.height > doc_w / doc_h:
            scale = doc_w / bb.width
            return scale, 0.0, (doc_h - bb.height * scale) * 0.5
        scale = doc_h / bb.height
        return scale, (doc_w - bb.width * scale) * 0.5, 0.0

    def mixed_to_svg(
        self,
        items: list[SegmentCollection | Curve | None],
        margin: float | None = None,
        force_grouped: bool = False,
        force_to_shapes: bool = False,
        group_color: str | None = None,
    ) -> str:
        """Render a mix of collections and curves into a complete document.

        Args:
            items: Shapes, segment collections and curves; None entries are skipped
            margin: Margin in inches (the configured margin when None)
            force_grouped: Treat every non-outline collection as a line group
            force_to_shapes: Treat every collection as an outline
            group_color: Stroke colour for line groups

        Returns:
            The SVG document. An empty input still yields every layer, empty.
        """
        opts = self.options
        margin = (opts.margin if margin is None else margin) * UNITS_PER_INCH

        items = [item for item in items if item is not None]
        curves = [item for item in items if isinstance(item, Curve)]
        collections = [item for item in items if not isinstance(item, Curve)]

        bb = bounding_boxes_bounding_box([item.bounding_box() for item in items])
        scale, offset_x, offset_y = self.fit(bb, margin)

        outlines: list[SegmentCollection] = []
        discrete: list[SegmentCollection] = []
        lines: list[SegmentCollection] = []
        groups: list[SegmentCollection] = []

        for item in collections:
            data = item.data or {}
            if force_to_shapes or (isinstance(item, Shape) and not item.is_open) or data.get("outline"):
                outlines.append(item)
            elif force_grouped or item.is_group:
                groups.append(item)
            elif data.get("discrete"):
                discrete.append(item)
            else:
                lines.append(item)

        offset_x += opts.offset_x * UNITS_PER_INCH
        offset_y += opts.offset_y * UNITS_PER_INCH

        line_paths = ""
        if lines:
            line_paths += self.lines_to_paths(
                lines, bb, margin, opts.stroke_width, offset_x, offset_y, scale
            )
        if curves:
            line_paths += self.curves_to_paths(
                curves, bb, margin, opts.stroke_width, offset_x, offset_y, scale
            )
        if discrete:
            line_paths += self.shapes_to_paths(
                discrete, bb, margin, opts.stroke_width, offset_x, offset_y, scale
            )
        shape_paths = self.shapes_to_paths(
            outlines, bb, margin, opts.stroke_width * 1.5, offset_x, offset_y, scale
        )
        group_paths = "".join(
            self.lines_to_paths([group], bb, margin, 1.5, offset_x, offset_y, scale, group_color)
            for group in groups
        )

        width, height = self.document_size(bb, margin)

        out = SVG_TEMPLATE.replace("{{bgcolor}}", opts.background_color)
        out = out.replace("{{w}}", format_number(width)).replace("{{h}}", format_number(height))

        layers = dict.fromkeys(LAYER_MARKERS, "")
        layers["paths"] = line_paths
        layers["groups"] = group_paths
        layers["shapes"] = shape_paths

        if opts.draw_skirt and opts.document_size.is_fixed:
            layers["skirt"] = self.skirt()
        if opts.debug_grid:
            layers["grid"] = self.debug_grid(margin)
        if opts.debug_mode:
            layers["debug"] = self._debug_points(items, _Frame(bb, margin, offset_x, offset_y, scale))

        for marker, content in layers.items():
            out = out.replace(f"<!--{marker}-->", content)
        return out

    def _debug_points(self, items: list[SegmentCollection | Curve], frame: _Frame) -> str:
        dots = []
        for item in items:
            for pt in item.to_points():
                dots.append(f'<circle cx="{lop(frame.x(pt.x))}" cy="{lop(frame.y(pt.y))}" r="2" fill="#336699" />\n')
        dots.append(f'<circle cx="{lop(frame.x(0))}" cy="{lop(frame.y(0))}" r="4" fill="#cc3300" />\n')
        return "".join(dots)
