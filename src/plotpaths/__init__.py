"""PlotPaths - Turn parametric shapes and triangle meshes into plotter paths.

PlotPaths generates ordered point and segment runs from a family of parametric
shapes (circles, spirals, stars, hatches, ...) or from a triangulated mesh, runs
them through polygon merge, offset and smoothing operators, and serializes the
result to an SVG document tuned for pen plotters.

Example:
    $ plotpaths flowlines mesh.json

This will create mesh-paths.svg with long, low-curvature flow lines walked
across the mesh.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
