"""
Base marcher module for grid tessellation.

This module provides an abstract base class for the marching squares
implementations, holding the grid walk helpers they share: corner sample
lookup, slot placement, midpoint refinement, welding, and statistics.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from ..config import MarchConfig
from ..core.mesh import MeshList
from ..core.tables import get_case_tables
from ..sources import GridSource

# Set up logging
logger = logging.getLogger(__name__)

# Slot placement as (dx, dy) in cell units. dy is measured from the cell's
# north edge (its first sample row) and grows southwards.
SLOT_OFFSETS = (
    (0.0, 1.0),
    (0.5, 1.0),
    (1.0, 1.0),
    (1.0, 0.5),
    (1.0, 0.0),
    (0.5, 0.0),
    (0.0, 0.0),
    (0.0, 0.5),
    (0.5, 0.5),
)

# Slot in the west (or north) neighbor that coincides with a slot of the
# current cell, -1 when there is none.
WEST_TO_EAST = (2, -1, -1, -1, -1, -1, 4, 3, -1)
NORTH_TO_SOUTH = (-1, -1, -1, -1, 2, 1, 0, -1, -1)

# A neighbor cell as (slot bitmask, slot -> point index).
CellState = Tuple[int, Sequence[int]]


class CellCorners(NamedTuple):
    """Linear sample indices of a cell's four corners."""
    nw: int
    ne: int
    sw: int
    se: int


class BaseMarcher(ABC):
    """Abstract base class for marching squares over a sample grid."""

    # Output Y grows with the raster row unless flipped to 1 - y.
    flip_y = False

    def __init__(
        self,
        source: GridSource,
        config: MarchConfig,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        """Initialize the base marcher."""
        self.source = source
        self.config = config
        self.flags = config.effective_flags()
        self.tables = get_case_tables()
        self.progress_callback = progress_callback
        self.stats = self._init_stats()
        self.start_time = time.time()

    def _init_stats(self) -> Dict[str, Any]:
        """Initialize statistics dictionary."""
        return {
            "cells": self.config.ncells,
            "meshes": 0,
            "points": 0,
            "triangles": 0,
            "connector_triangles": 0,
            "eliminated_triangles": 0,
            "processing_time": 0.0,
        }

    @abstractmethod
    def march(self) -> MeshList:
        """
        Run the tessellation.

        Returns:
            MeshList holding the generated meshes
        """
        pass

    def cell_corners(self, row: int, col: int) -> CellCorners:
        """
        Get the corner sample indices of a cell.

        The last row and column reuse the boundary samples so that no corner
        reads past the grid.
        """
        width = self.config.width
        cellsize = self.config.cellsize
        north = row * cellsize * width
        south = min(north + cellsize * width, (self.config.height - 1) * width)
        west = col * cellsize
        east = min(west + cellsize, width - 1)
        return CellCorners(north + west, north + east, south + west, south + east)

    def find_crossing(self, classify: Callable[[int], Any], start: int, stride: int) -> Optional[int]:
        """
        Walk along a cell edge and find where the classification changes.

        The walk runs straight from the edge's first corner, so on an edge
        that changes class more than once the crossing nearest that corner
        wins. A scan outward from the edge midpoint would pick the crossing
        nearest the middle instead; both agree on edges with one crossing.

        Args:
            classify: Sample classifier
            start: Linear index of the edge's first corner
            stride: Index step between consecutive edge samples

        Returns:
            Step count of the first differing sample, or None
        """
        first = classify(start)
        for step in range(1, self.config.cellsize):
            if classify(start + step * stride) != first:
                return step
        return None

    def slot_offset(self, slot: int, corners: CellCorners,
                    classify: Callable[[int], Any]) -> Tuple[float, float]:
        """
        Get a slot's (dx, dy) cell offset, moving midpoints to the crossing.
        """
        dx, dy = SLOT_OFFSETS[slot]
        cellsize = self.config.cellsize
        if slot == 1:
            step = self.find_crossing(classify, corners.sw, 1)
            if step is not None:
                dx = step / cellsize
        elif slot == 5:
            step = self.find_crossing(classify, corners.nw, 1)
            if step is not None:
                dx = step / cellsize
        elif slot == 7:
            step = self.find_crossing(classify, corners.nw, self.config.width)
            if step is not None:
                dy = step / cellsize
        elif slot == 3:
            step = self.find_crossing(classify, corners.ne, self.config.width)
            if step is not None:
                dy = step / cellsize
        return dx, dy

    def position(self, row: int, col: int, dx: float, dy: float) -> Tuple[float, float]:
        """Map a cell offset to normalized output coordinates."""
        extent = self.config.cell_extent
        x = (col + dx) * extent
        y = (row + dy) * extent
        if self.flip_y:
            y = 1.0 - y
        return x, y

    @staticmethod
    def weld(slot: int, west: Optional[CellState], north: Optional[CellState]) -> Optional[int]:
        """
        Look up an existing point for a slot in the west or north neighbor.

        Returns:
            The neighbor's point index, or None if a new point is needed
        """
        if west is not None:
            prev = WEST_TO_EAST[slot]
            if prev >= 0 and west[0] & (1 << prev):
                return west[1][prev]
        if north is not None:
            prev = NORTH_TO_SOUTH[slot]
            if prev >= 0 and north[0] & (1 << prev):
                return north[1][prev]
        return None

    def finalize_stats(self, meshes: MeshList) -> None:
        """Update statistics after tessellation is complete."""
        self.stats["meshes"] = len(meshes)
        self.stats["points"] = sum(m.npoints for m in meshes)
        self.stats["triangles"] = sum(m.ntriangles for m in meshes)
        self.stats["connector_triangles"] = sum(m.nconnectors for m in meshes)
        self.stats["processing_time"] = time.time() - self.start_time

        logger.debug(
            f"{type(self).__name__} produced {self.stats['triangles']} triangles and "
            f"{self.stats['points']} points from {self.stats['cells']} cells in "
            f"{self.stats['processing_time']:.3f}s"
        )

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the tessellation.

        Returns:
            Dictionary with statistics
        """
        return self.stats.copy()

    def report_progress(self, progress: float) -> None:
        """
        Report progress to callback if provided.

        Args:
            progress: Progress value between 0.0 and 1.0
        """
        if self.progress_callback:
            self.progress_callback(max(0.0, min(1.0, progress)))
