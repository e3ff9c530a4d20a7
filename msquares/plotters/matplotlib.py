#!/usr/bin/env python3
"""
Matplotlib plotter for mesh lists.

Draws every mesh of a MeshList with ``matplotlib.tri``, either filled,
as a wireframe, or as a 3D surface for meshes with heights.
"""

import logging
from typing import Any, Optional, Tuple

import numpy as np

from ..core.mesh import Mesh, MeshList

# Set up logger
logger = logging.getLogger(__name__)


def color_to_rgba(color: int) -> Tuple[float, float, float, float]:
    """
    Convert a packed mesh color to a matplotlib RGBA tuple.

    The low 24 bits are read as ``0xRRGGBB``. A zero alpha byte is shown
    opaque so that colors packed without alpha stay visible.
    """
    alpha = (color >> 24) & 0xFF
    return (
        ((color >> 16) & 0xFF) / 255.0,
        ((color >> 8) & 0xFF) / 255.0,
        (color & 0xFF) / 255.0,
        alpha / 255.0 if alpha else 1.0,
    )


class MatplotlibMeshPlotter:
    """Renders tessellation results with Matplotlib."""

    NAME = "matplotlib"
    DEFAULT_COLORMAP = "viridis"
    SUPPORTED_MODES = ["filled", "wireframe", "3d"]

    def __init__(self) -> None:
        """Initialize the plotter, loading matplotlib lazily."""
        try:
            import matplotlib
            import matplotlib.pyplot as plt
            import matplotlib.tri as mtri
            self.colormaps = matplotlib.colormaps
            self.plt = plt
            self.mtri = mtri
        except ImportError:
            raise ImportError("matplotlib is required for MatplotlibMeshPlotter")

    def plot(self, meshes: MeshList, ax: Optional[Any] = None, **kwargs) -> Any:
        """
        Plot every mesh of a list.

        Args:
            meshes: MeshList to draw
            ax: Existing axes to draw into; a new figure is created if None
            **kwargs: Additional options such as:
                - mode: "filled", "wireframe" or "3d" (default: "filled")
                - colormap: Colormap for meshes without a color (default: "viridis")
                - figsize: Figure size in inches (default: (8, 8))
                - title: Plot title (default: "Tessellation")
                - show_connectors: Draw side-wall triangles (default: False)

        Returns:
            Matplotlib Figure object.
        """
        mode = kwargs.get("mode", "filled").lower()
        if mode not in self.SUPPORTED_MODES:
            raise ValueError(f"Unsupported plot mode '{mode}', expected one of {self.SUPPORTED_MODES}")
        show_connectors = kwargs.get("show_connectors", False)
        cmap = self.colormaps[kwargs.get("colormap", self.DEFAULT_COLORMAP)]

        if ax is None:
            fig = self.plt.figure(figsize=kwargs.get("figsize", (8, 8)))
            ax = fig.add_subplot(111, projection="3d" if mode == "3d" else None)
        else:
            fig = ax.figure

        count = len(meshes)
        for i, mesh in enumerate(meshes):
            if mesh.is_empty:
                continue
            triangles = mesh.triangles
            if not show_connectors:
                triangles = triangles[~mesh.connectors]
            if len(triangles) == 0:
                continue
            if mesh.color is not None:
                face = color_to_rgba(mesh.color)
            else:
                face = cmap(i / max(count - 1, 1))
            self._draw(ax, mesh, triangles, face, mode)

        if mode != "3d":
            ax.set_aspect("equal")
        ax.set_title(kwargs.get("title", "Tessellation"))
        logger.debug(f"Plotted {count} meshes in {mode} mode")
        return fig

    def _draw(self, ax: Any, mesh: Mesh, triangles: np.ndarray, face: Any, mode: str) -> None:
        x = mesh.points[:, 0]
        y = mesh.points[:, 1]
        if mode == "3d":
            z = mesh.points[:, 2] if mesh.dim == 3 else np.zeros_like(x)
            ax.plot_trisurf(x, y, z, triangles=triangles, color=face, linewidth=0.2)
            return
        tri = self.mtri.Triangulation(x, y, triangles)
        if mode == "wireframe":
            ax.triplot(tri, color=face, linewidth=0.5)
        else:
            ax.tripcolor(tri, facecolors=np.zeros(len(triangles)),
                         cmap=self._single_color_map(face), vmin=0.0, vmax=1.0,
                         edgecolors="none")

    def _single_color_map(self, face: Any) -> Any:
        from matplotlib.colors import ListedColormap
        return ListedColormap([face])


def plot_meshlist(meshes: MeshList, ax: Optional[Any] = None, **kwargs) -> Any:
    """
    Plot a mesh list with the matplotlib plotter.

    See :meth:`MatplotlibMeshPlotter.plot` for the supported options.
    """
    return MatplotlibMeshPlotter().plot(meshes, ax=ax, **kwargs)
