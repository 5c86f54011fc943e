"""Command-line interface for plotpaths.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Flow-line extraction from triangle meshes
- Shape rendering with merge, offset and smoothing
- Verbose/quiet output modes
- Diagnostic record export
"""

from plotpaths.cli.app import cli, main

__all__ = ["cli", "main"]
