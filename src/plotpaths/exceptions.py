"""Exception hierarchy for PlotPaths.

Geometric degeneracy never raises; these errors cover input loading,
shape construction from external specs, and document export.
"""


class PlotPathsError(Exception):
    """Base exception for all PlotPaths errors."""

    pass


class InputError(PlotPathsError):
    """Errors related to loading geometry input."""

    pass


class MeshLoadError(InputError):
    """Error loading a triangle mesh file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load mesh '{path}': {reason}")


class ShapeSpecError(InputError):
    """Invalid shape specification."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid shape spec #{index}: {reason}")


class ExportError(PlotPathsError):
    """Errors related to document export."""

    pass


class DocumentSaveError(ExportError):
    """Error writing an output document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")
