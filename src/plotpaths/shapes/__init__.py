"""Parametric shape generators.

Every shape produces an ordered point list in local space (around the
origin) or in absolute space (rotated, moved to its pivot and offset by its
center) and derives its segment list from those points.

Key classes:
- Shape: Base class with the default winding-aware to_segments
- Circle, Arc, Spiral, Hexagon, ...: Round generators
- Rectangle, RoundedRect, BranchRect, ...: Rectangular generators
- Winding, LineHatch, SquareWave, ...: Open fill patterns
- Star, PolygonShape, ParametricShape: Free-form outlines
- build_shape: Construct a shape from a plain mapping
"""

from plotpaths.shapes.base import Shape
from plotpaths.shapes.polygon import ParametricShape, PolygonShape, Star
from plotpaths.shapes.rect import (
    BranchRect,
    CornerRect,
    Rectangle,
    RoundedRect,
    Square,
    Tape,
    subdivide_outline,
)
from plotpaths.shapes.registry import SHAPE_TYPES, build_shape
from plotpaths.shapes.round import (
    Arc,
    ArcCapsule,
    Capsule,
    Circle,
    Hexagon,
    MorphSpiral,
    RoundShape,
    Spiral,
)
from plotpaths.shapes.windings import DoubleWinding, LineHatch, Paperclip, SquareWave, Winding

__all__: list[str] = [
    # Base
    "Shape",
    # Round
    "Circle",
    "Spiral",
    "MorphSpiral",
    "RoundShape",
    "Capsule",
    "ArcCapsule",
    "Hexagon",
    "Arc",
    # Rectangular
    "Rectangle",
    "Square",
    "Tape",
    "RoundedRect",
    "CornerRect",
    "BranchRect",
    # Fill patterns
    "Winding",
    "DoubleWinding",
    "SquareWave",
    "LineHatch",
    "Paperclip",
    # Free-form
    "Star",
    "PolygonShape",
    "ParametricShape",
    # Construction
    "SHAPE_TYPES",
    "build_shape",
    "subdivide_outline",
]
