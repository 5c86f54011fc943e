"""Render orchestration: generate, transform, export.

This module coordinates the two rendering workflows:

- Shapes: colour sampling, merge, offset and smoothing, then export
- Meshes: flow-line extraction, colour sampling and smoothing, then export

Key components:
- RenderResult: Document, statistics and exported geometry of one run
- PlotPipeline: Runs a workflow from a settings object
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

import structlog

from plotpaths.config import PlotPathsSettings, UNITS_PER_INCH, get_default_settings
from plotpaths.core.coloring import ColorSampler, apply_colors
from plotpaths.core.geometry import bounding_boxes_bounding_box
from plotpaths.core.merge import merge_shapes
from plotpaths.core.offset import offset_segs
from plotpaths.core.pathfinder import MeshGraph, MeshNode, PathSearchResult, Triangle
from plotpaths.core.smoothing import connected_runs, smooth_segments
from plotpaths.domain import Point, Segment, SegmentCollection, Segments, points_equal
from plotpaths.io.svg import SVGExporter
from plotpaths.shapes import Shape
from plotpaths.utils import ProcessingLogger, ProcessingStats, configure_logging

T = TypeVar("T")


@dataclass
class RenderResult:
    """Outcome of a render run.

    Attributes:
        svg: The rendered document
        stats: Counts and timings collected during the run
        paths: Collections that were exported, in export order
        search: Flow-line search result (mesh runs only)
        triangles: Source triangles (mesh runs only)
        unused: Mesh nodes left out of every flow line (mesh runs only)
    """

    svg: str
    stats: ProcessingStats
    paths: list[SegmentCollection] = field(default_factory=list)
    search: PathSearchResult | None = None
    triangles: list[Triangle] = field(default_factory=list)
    unused: list[MeshNode] = field(default_factory=list)


def path_to_segments(path: Sequence[MeshNode]) -> Segments:
    """Open segment run through the nodes of a flow line."""
    pts = [Point(node.x, node.y) for node in path]
    line = Segments([Segment(pts[i - 1], pts[i]) for i in range(1, len(pts))])
    line.is_open = True
    return line


def _with_segments(item: SegmentCollection, segs: list[Segment]) -> Segments:
    out = Segments(segs)
    out.is_open = item.is_open
    out.is_group = item.is_group
    out.is_strong = item.is_strong
    out.data = dict(item.data)
    if isinstance(item, Shape) and not item.is_open:
        out.data.setdefault("outline", True)
    return out


class PlotPipeline:
    """Runs the render workflows configured by ``PlotPathsSettings``.

    Example:
        pipeline = PlotPipeline(settings)
        result = pipeline.render_mesh(triangles)
        Path("mesh-paths.svg").write_text(result.svg)
    """

    def __init__(
        self,
        settings: PlotPathsSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
        color_sampler: ColorSampler | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Pipeline settings (defaults when None)
            logger: Logger to use; logging is configured from settings when None
            color_sampler: Optional colour sampling collaborator
        """
        self.settings = settings or get_default_settings()
        if logger is None:
            logger = configure_logging(
                log_file=self.settings.logging.log_file,
                console_level=self.settings.logging.log_level,
                file_level=self.settings.logging.file_log_level,
                quiet=False,
            )
        self.logger = logger
        self.color_sampler = color_sampler
        self.exporter = SVGExporter(self.settings.render)

    def _timed(
        self,
        plog: ProcessingLogger,
        step: str,
        func: Callable[..., T],
        *args: Any,
        **details: Any,
    ) -> T:
        start = time.perf_counter()
        value = func(*args)
        plog.log_step(step, (time.perf_counter() - start) * 1000, **details)
        return value

    def _colorize(
        self, plog: ProcessingLogger, items: list[SegmentCollection]
    ) -> list[SegmentCollection]:
        if self.color_sampler is None:
            return items
        kept, dropped = apply_colors(items, self.color_sampler, self.settings.color.min_alpha)
        plog.log_dropped(dropped, "below minimum alpha")
        return kept

    def _merge(self, items: list[SegmentCollection]) -> list[SegmentCollection]:
        cfg = self.settings.merge
        merged = merge_shapes(
            items,
            subtract=cfg.subtract,
            center=cfg.center,
            cleanup=cfg.cleanup,
            jitter=cfg.jitter,
        )
        if not len(merged):
            return []
        merged.is_open = False
        merged.data = {**items[0].data, "outline": True}
        return [merged]

    def _offset(self, items: list[SegmentCollection]) -> list[SegmentCollection]:
        distance = self.settings.offset.distance
        out: list[SegmentCollection] = []
        for item in items:
            segs: list[Segment] = []
            for run in connected_runs(item.to_segments()):
                closed = len(run) > 1 and points_equal(run[0].a, run[-1].b)
                segs.extend(offset_segs(run, distance, not closed))
            if segs:
                out.append(_with_segments(item, segs))
        return out

    def _smooth(self, items: list[SegmentCollection]) -> list[SegmentCollection]:
        cfg = self.settings.smoothing
        return [
            _with_segments(
                item,
                smooth_segments(item.to_segments(), cfg.iterations, cfg.min_dist, cfg.d1, cfg.d2),
            )
            for item in items
        ]

    def _export(
        self, plog: ProcessingLogger, items: list[SegmentCollection]
    ) -> str:
        svg = self._timed(plog, "export", self.exporter.mixed_to_svg, items)
        margin = self.settings.render.margin * UNITS_PER_INCH
        bb = bounding_boxes_bounding_box([item.bounding_box() for item in items])
        width, height = self.exporter.document_size(bb, margin)
        plog.log_export(len(svg.encode("utf-8")), width, height)
        return svg

    def render_shapes(self, shapes: Sequence[SegmentCollection]) -> RenderResult:
        """Render shapes through merge, offset and smoothing.

        Args:
            shapes: Shapes or segment collections to render

        Returns:
            RenderResult with the document and statistics
        """
        plog = ProcessingLogger(self.logger)
        plog.stats.start_time = time.time()

        items = list(shapes)
        plog.log_shapes(len(items), sum(len(item.to_segments()) for item in items))
        items = self._colorize(plog, items)

        if self.settings.merge.enabled and items:
            items = self._timed(
                plog, "merge", self._merge, items, subtract=self.settings.merge.subtract
            )
        if self.settings.offset.distance:
            items = self._timed(
                plog, "offset", self._offset, items, distance=self.settings.offset.distance
            )
        if self.settings.smoothing.iterations:
            items = self._timed(
                plog, "smooth", self._smooth, items, iterations=self.settings.smoothing.iterations
            )

        svg = self._export(plog, items)
        plog.stats.end_time = time.time()

        self.logger.info(
            "Shape render complete",
            shapes=plog.stats.shapes_count,
            exported=len(items),
            duration_seconds=round(plog.stats.duration_seconds, 3),
        )
        return RenderResult(svg=svg, stats=plog.stats, paths=items)

    def render_mesh(self, triangles: list[Triangle]) -> RenderResult:
        """Render flow lines walked across a triangle mesh.

        Args:
            triangles: Triangles as three ``[x, y]`` pairs each

        Returns:
            RenderResult with the document, statistics and search result
        """
        plog = ProcessingLogger(self.logger)
        plog.stats.start_time = time.time()
        cfg = self.settings.pathfinder

        graph = self._timed(plog, "graph", MeshGraph, triangles, triangles=len(triangles))
        search = self._timed(
            plog,
            "find_paths",
            graph.find_paths,
            cfg.angle_threshold,
            cfg.length_threshold,
            cfg.path_length_threshold,
            cfg.swirl,
            cfg.extend_ends,
        )
        plog.log_paths(
            len(search.paths),
            search.iterations,
            search.hit_iteration_cap,
            search.unused_count,
        )

        used = {node for path in search.paths for node in path}
        unused = [node for node in graph.nodes if node not in used]

        items: list[SegmentCollection] = [path_to_segments(path) for path in search.paths]
        items = self._colorize(plog, items)
        if self.settings.smoothing.iterations:
            items = self._timed(
                plog, "smooth", self._smooth, items, iterations=self.settings.smoothing.iterations
            )

        svg = self._export(plog, items)
        plog.stats.end_time = time.time()

        self.logger.info(
            "Mesh render complete",
            nodes=len(graph),
            paths=len(items),
            duration_seconds=round(plog.stats.duration_seconds, 3),
        )
        return RenderResult(
            svg=svg,
            stats=plog.stats,
            paths=items,
            search=search,
            triangles=graph.triangles,
            unused=unused,
        )
