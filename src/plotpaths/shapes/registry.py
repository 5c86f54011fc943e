"""Build shapes from plain mappings (as loaded from JSON)."""

from typing import Any

from plotpaths.domain import Point
from plotpaths.exceptions import ShapeSpecError
from plotpaths.shapes.base import Shape
from plotpaths.shapes.polygon import PolygonShape, Star
from plotpaths.shapes.rect import BranchRect, CornerRect, Rectangle, RoundedRect, Square, Tape
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

SHAPE_TYPES: dict[str, type[Shape]] = {
    "circle": Circle,
    "spiral": Spiral,
    "morph_spiral": MorphSpiral,
    "round_shape": RoundShape,
    "capsule": Capsule,
    "arc_capsule": ArcCapsule,
    "hexagon": Hexagon,
    "arc": Arc,
    "rectangle": Rectangle,
    "square": Square,
    "tape": Tape,
    "rounded_rect": RoundedRect,
    "corner_rect": CornerRect,
    "branch_rect": BranchRect,
    "star": Star,
    "polygon": PolygonShape,
    "winding": Winding,
    "double_winding": DoubleWinding,
    "square_wave": SquareWave,
    "line_hatch": LineHatch,
    "paperclip": Paperclip,
}


def _point(value: Any, name: str) -> Point:
    if isinstance(value, dict):
        return Point.from_dict(value)
    if isinstance(value, list | tuple) and len(value) == 2:
        return Point(float(value[0]), float(value[1]))
    raise ValueError(f"'{name}' must be [x, y] or {{x, y}}")


def build_shape(spec: dict[str, Any], index: int = 0) -> Shape:
    """Create a shape from a mapping.

    The ``type`` key selects the class from ``SHAPE_TYPES``; remaining keys
    are constructor arguments. ``center`` and ``points`` accept ``[x, y]``
    pairs. The keys ``rotation``, ``pivot``, ``open``, ``inverted`` and
    ``data`` set the corresponding shape attributes. The shape's outline is
    generated once so that arguments it cannot be drawn from are rejected
    here rather than at render time.

    Args:
        spec: Shape description
        index: Position of the spec in its source, for error messages

    Returns:
        The constructed shape

    Raises:
        ShapeSpecError: If the type is unknown or the arguments do not fit

    Example:
        >>> shape = build_shape({"type": "circle", "center": [0, 0], "radius": 5})
        >>> type(shape).__name__
        'Circle'
    """
    if not isinstance(spec, dict):
        raise ShapeSpecError(index, "spec must be a mapping")

    kwargs = dict(spec)
    type_name = kwargs.pop("type", None)
    if type_name not in SHAPE_TYPES:
        raise ShapeSpecError(index, f"unknown shape type {type_name!r}")

    rotation = kwargs.pop("rotation", 0.0)
    pivot = kwargs.pop("pivot", None)
    is_open = kwargs.pop("open", None)
    inverted = kwargs.pop("inverted", False)
    data = kwargs.pop("data", {})

    try:
        if "center" in kwargs:
            kwargs["center"] = _point(kwargs["center"], "center")
        if "points" in kwargs and type_name == "polygon":
            kwargs["points"] = [_point(pt, "points") for pt in kwargs["points"]]

        shape = SHAPE_TYPES[type_name](**kwargs)
        shape.rotation = float(rotation)
        if pivot is not None:
            shape.pivot = _point(pivot, "pivot")
        if is_open is not None:
            shape.is_open = bool(is_open)
        shape.is_inverted = bool(inverted)
        shape.data = dict(data)
        shape.to_segments()
    except KeyError as e:
        raise ShapeSpecError(index, f"missing coordinate {e}") from e
    except (TypeError, ValueError, ZeroDivisionError, OverflowError) as e:
        raise ShapeSpecError(index, str(e) or type(e).__name__) from e
    return shape
