"""Unit tests for the I/O layer.

Tests for MeshReader, ShapeReader, SVGWriter and diagnostic records.
"""

import json
from pathlib import Path

import pytest

from plotpaths.domain import Point
from plotpaths.exceptions import DocumentSaveError, MeshLoadError, ShapeSpecError
from plotpaths.io import (
    MeshReader,
    ShapeReader,
    SVGWriter,
    paths_to_records,
    points_to_records,
    triangles_to_records,
    write_diagnostics,
)
from plotpaths.shapes import Circle, Rectangle


def write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestMeshReader:
    """Tests for MeshReader class."""

    def test_load_list(self, tmp_path: Path) -> None:
        """Test loading a bare triangle list."""
        path = write_json(tmp_path / "mesh.json", [[[0, 0], [1, 0], [1, 1]]])
        assert MeshReader(path).load() == [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]]]

    def test_load_object(self, tmp_path: Path) -> None:
        """Test loading triangles from an object."""
        path = write_json(tmp_path / "mesh.json", {"triangles": [[[0, 0], [1, 0], ["2", 1]]]})
        (tri,) = MeshReader(path).load()
        assert tri[2] == [2.0, 1.0]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is a load error."""
        with pytest.raises(MeshLoadError) as exc_info:
            MeshReader(tmp_path / "missing.json").load()
        assert exc_info.value.path.endswith("missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test unparsable JSON."""
        path = tmp_path / "mesh.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MeshLoadError):
            MeshReader(path).load()

    @pytest.mark.parametrize(
        "data,reason",
        [
            ({"mesh": []}, "expected a list"),
            ([[[0, 0], [1, 0]]], "must have 3 vertices"),
            ([[[0, 0], [1, 0], ["a", 1]]], "triangle 0"),
            ([[[0, 0], [1, 0], [1]]], "triangle 0"),
        ],
    )
    def test_malformed(self, tmp_path: Path, data: object, reason: str) -> None:
        """Test malformed meshes are rejected with a reason."""
        path = write_json(tmp_path / "mesh.json", data)
        with pytest.raises(MeshLoadError, match=reason):
            MeshReader(path).load()


class TestShapeReader:
    """Tests for ShapeReader class."""

    def test_load(self, tmp_path: Path) -> None:
        """Test shapes are built in file order."""
        path = write_json(
            tmp_path / "shapes.json",
            {
                "shapes": [
                    {"type": "circle", "center": [0, 0], "radius": 5},
                    {"type": "rectangle", "center": {"x": 10, "y": 0}, "width": 4, "height": 2},
                ]
            },
        )
        shapes = ShapeReader(path).load()
        assert isinstance(shapes[0], Circle)
        assert isinstance(shapes[1], Rectangle)
        assert shapes[1].center == Point(10, 0)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ShapeReader(tmp_path / "missing.json").load()

    def test_not_a_list(self, tmp_path: Path) -> None:
        """Test documents without a shape list are rejected."""
        path = write_json(tmp_path / "shapes.json", {"type": "circle"})
        with pytest.raises(ShapeSpecError, match="expected a list"):
            ShapeReader(path).load()

    def test_bad_spec_reports_index(self, tmp_path: Path) -> None:
        """Test the failing spec's position is reported."""
        path = write_json(
            tmp_path / "shapes.json",
            [{"type": "circle", "center": [0, 0], "radius": 5}, {"type": "blob"}],
        )
        with pytest.raises(ShapeSpecError) as exc_info:
            ShapeReader(path).load()
        assert exc_info.value.index == 1


class TestSVGWriter:
    """Tests for SVGWriter class."""

    def test_save_creates_parents(self, tmp_path: Path) -> None:
        """Test saving into a new directory."""
        target = tmp_path / "out" / "doc.svg"
        size = SVGWriter(target).save("<svg/>")
        assert target.read_text(encoding="utf-8") == "<svg/>"
        assert size == 6

    def test_save_reports_bytes(self, tmp_path: Path) -> None:
        """Test the byte count covers multi-byte characters."""
        assert SVGWriter(tmp_path / "doc.svg").save("é") == 2

    def test_save_failure(self, tmp_path: Path) -> None:
        """Test an unwritable target raises DocumentSaveError."""
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(DocumentSaveError):
            SVGWriter(blocker / "doc.svg").save("<svg/>")

    def test_output_path(self) -> None:
        """Test the default output naming."""
        assert SVGWriter.get_output_path(Path("mesh.json")) == Path("mesh-paths.svg")
        assert SVGWriter.get_output_path(Path("shapes/star.json")) == Path("shapes/star-paths.svg")


class TestDiagnostics:
    """Tests for diagnostic records."""

    def test_points_rounded(self) -> None:
        """Test coordinates are rounded half-up to one decimal."""
        assert points_to_records([Point(1.25, -0.04)]) == [{"x": 1.3, "y": 0.0}]

    def test_paths(self) -> None:
        """Test paths become lists of point records."""
        records = paths_to_records([[Point(0, 0), Point(1, 1)], [Point(2, 2)]])
        assert records == [[{"x": 0, "y": 0}, {"x": 1, "y": 1}], [{"x": 2, "y": 2}]]

    def test_triangles(self) -> None:
        """Test triangles become a/b/c records."""
        (record,) = triangles_to_records([[[0, 0], [1.06, 0], [1, 1]]])
        assert record == {"a": {"x": 0, "y": 0}, "b": {"x": 1.1, "y": 0}, "c": {"x": 1, "y": 1}}

    def test_write(self, tmp_path: Path) -> None:
        """Test the written file matches the returned document."""
        target = tmp_path / "diag" / "mesh.json"
        document = write_diagnostics(target, points=[Point(1, 2)], triangles=[[[0, 0], [1, 0], [1, 1]]])
        assert json.loads(target.read_text(encoding="utf-8")) == document
        assert document["paths"] == []
        assert document["points"] == [{"x": 1, "y": 2}]
