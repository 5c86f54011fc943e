"""Diagnostic records for downstream tooling.

Points become ``{x, y}`` objects, paths become lists of points and triangles
become ``{a, b, c}`` objects; every coordinate is rounded to one decimal.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from plotpaths.domain import round_to
from plotpaths.exceptions import DocumentSaveError


def _xy(x: float, y: float) -> dict[str, float]:
    return {"x": round_to(x, 1), "y": round_to(y, 1)}


def points_to_records(points: Iterable[Any]) -> list[dict[str, float]]:
    """Serialize anything with ``x`` and ``y`` attributes."""
    return [_xy(pt.x, pt.y) for pt in points]


def paths_to_records(paths: Iterable[Iterable[Any]]) -> list[list[dict[str, float]]]:
    """Serialize each path as a list of point records."""
    return [points_to_records(path) for path in paths]


def triangles_to_records(triangles: Iterable[list[list[float]]]) -> list[dict[str, dict[str, float]]]:
    """Serialize ``[[x, y], [x, y], [x, y]]`` triangles as ``{a, b, c}``."""
    return [
        {
            "a": _xy(tri[0][0], tri[0][1]),
            "b": _xy(tri[1][0], tri[1][1]),
            "c": _xy(tri[2][0], tri[2][1]),
        }
        for tri in triangles
    ]


def write_diagnostics(
    path: Path,
    points: Iterable[Any] = (),
    paths: Iterable[Iterable[Any]] = (),
    triangles: Iterable[list[list[float]]] = (),
) -> dict[str, list[Any]]:
    """Write the three record collections to a JSON file.

    Args:
        path: Output JSON path
        points: Loose points (e.g. unused mesh nodes)
        paths: Extracted paths
        triangles: Source triangles

    Returns:
        The document that was written

    Raises:
        DocumentSaveError: If the file cannot be written
    """
    document = {
        "points": points_to_records(points),
        "paths": paths_to_records(paths),
        "triangles": triangles_to_records(triangles),
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(document, f)
    except OSError as e:
        raise DocumentSaveError(str(path), str(e)) from e
    return document
