"""JSON readers for triangle meshes and shape specifications.

This module provides the MeshReader and ShapeReader classes for loading
input geometry into domain objects.
"""

import json
from pathlib import Path
from typing import Any

from plotpaths.exceptions import MeshLoadError, ShapeSpecError
from plotpaths.shapes import Shape, build_shape

Triangle = list[list[float]]


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with path.open(encoding="utf-8") as f:
        return json.load(f)


class MeshReader:
    """Loads a triangle mesh from JSON.

    Accepted layouts are a bare list of triangles or an object with a
    ``triangles`` key; each triangle is three ``[x, y]`` pairs.

    Example:
        reader = MeshReader(Path("mesh.json"))
        triangles = reader.load()
    """

    def __init__(self, path: Path) -> None:
        """Initialize the mesh reader.

        Args:
            path: Path to the mesh JSON file
        """
        self._path = path

    def load(self) -> list[Triangle]:
        """Load and validate the mesh.

        Returns:
            Triangles as lists of three ``[x, y]`` float pairs

        Raises:
            MeshLoadError: If the file is missing, not JSON, or malformed
        """
        try:
            raw = _load_json(self._path)
        except (OSError, json.JSONDecodeError) as e:
            raise MeshLoadError(str(self._path), str(e)) from e

        if isinstance(raw, dict):
            raw = raw.get("triangles")
        if not isinstance(raw, list):
            raise MeshLoadError(str(self._path), "expected a list of triangles")

        triangles: list[Triangle] = []
        for idx, tri in enumerate(raw):
            if not isinstance(tri, list) or len(tri) != 3:
                raise MeshLoadError(str(self._path), f"triangle {idx} must have 3 vertices")
            try:
                triangles.append([[float(v[0]), float(v[1])] for v in tri])
            except (TypeError, ValueError, IndexError) as e:
                raise MeshLoadError(str(self._path), f"triangle {idx}: {e}") from e
        return triangles


class ShapeReader:
    """Loads shape specifications from JSON.

    The file holds a list of mappings (or an object with a ``shapes`` key),
    each handed to ``build_shape``.

    Example:
        shapes = ShapeReader(Path("shapes.json")).load()
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> list[Shape]:
        """Load and build every shape.

        Raises:
            FileNotFoundError: If the file does not exist
            ShapeSpecError: If the document or any spec is invalid
        """
        try:
            raw = _load_json(self._path)
        except json.JSONDecodeError as e:
            raise ShapeSpecError(0, f"{self._path}: {e}") from e

        if isinstance(raw, dict):
            raw = raw.get("shapes")
        if not isinstance(raw, list):
            raise ShapeSpecError(0, f"{self._path}: expected a list of shapes")

        return [build_shape(spec, idx) for idx, spec in enumerate(raw)]
