"""Document writer for SVG output.

This module provides the SVGWriter class for saving rendered documents
with the ``-paths`` naming convention.
"""

from pathlib import Path

from plotpaths.exceptions import DocumentSaveError


class SVGWriter:
    """Writes rendered SVG documents.

    Example:
        writer = SVGWriter(Path("mesh-paths.svg"))
        writer.save(svg)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def save(self, document: str) -> int:
        """Save the document, creating parent directories as needed.

        Args:
            document: SVG markup

        Returns:
            Number of bytes written

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        data = document.encode("utf-8")
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_bytes(data)
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e
        return len(data)

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the default output path for an input file.

        Converts: mesh.json -> mesh-paths.svg
                  shapes/star.json -> shapes/star-paths.svg

        Args:
            input_path: Input geometry file path

        Returns:
            Sibling path with a ``-paths.svg`` suffix
        """
        return input_path.parent / f"{input_path.stem}-paths.svg"
