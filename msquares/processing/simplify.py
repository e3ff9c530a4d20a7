"""
Greedy row-pair simplification.

Cells are visited two rows at a time. Columns where both the north and the
south cell are completely covered form a run, and every run is replaced by
two triangles spanning its outer corners. This is quick and by no means
optimal: only axis-aligned runs inside a row pair are merged.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..core.mesh import MeshBuilder

# Set up logging
logger = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]


def _run_triangles(builder: MeshBuilder, ncols: int, row: int, start: int, end: int,
                   reverse_winding: bool) -> List[Triangle]:
    """Two triangles covering columns ``start..end`` of rows ``row`` and ``row + 1``."""
    north_start = builder.complete_cells[row * ncols + start]
    north_end = builder.complete_cells[row * ncols + end]
    south_start = builder.complete_cells[(row + 1) * ncols + start]
    south_end = builder.complete_cells[(row + 1) * ncols + end]

    # Corner tuples hold the points of slots (0, 2, 4, 6).
    nw = north_start[3]
    ne = north_end[2]
    sw = south_start[0]
    se = south_end[1]
    if reverse_winding:
        return [(se, sw, nw), (nw, ne, se)]
    return [(nw, sw, se), (se, ne, nw)]


def simplify_builder(builder: MeshBuilder, nrows: int, ncols: int,
                     reverse_winding: bool = False) -> int:
    """
    Replace runs of complete cells with two triangles each.

    Args:
        builder: Mesh staging data with ``cell_ranges`` and ``complete_cells``
        nrows: Number of cell rows
        ncols: Number of cell columns
        reverse_winding: Emit the run triangles in reversed order

    Returns:
        Number of triangles eliminated
    """
    complete = builder.complete_cells
    new_triangles: List[Triangle] = []

    def flush(row: int, start: int, end: int) -> None:
        new_triangles.extend(_run_triangles(builder, ncols, row, start, end, reverse_winding))

    for row in range(0, nrows - 1, 2):
        run_start = None
        for col in range(ncols):
            north = row * ncols + col
            south = north + ncols
            if north in complete and south in complete:
                if run_start is None:
                    run_start = col
                continue
            if run_start is not None:
                flush(row, run_start, col - 1)
                run_start = None
            new_triangles.extend(builder.cell_triangles(north))
            new_triangles.extend(builder.cell_triangles(south))
        if run_start is not None:
            flush(row, run_start, ncols - 1)

    # A trailing odd row has no partner and is kept as is.
    if nrows % 2:
        row = nrows - 1
        for col in range(ncols):
            new_triangles.extend(builder.cell_triangles(row * ncols + col))

    eliminated = len(builder.triangles) - len(new_triangles)
    builder.triangles = new_triangles
    builder.cell_ranges.clear()
    builder.complete_cells.clear()

    logger.debug(f"Simplification eliminated {eliminated} triangles")
    return eliminated


def build_point_remap(npoints: int, triangle_sets: Sequence[Sequence[Triangle]]) -> np.ndarray:
    """
    Map every point to its index after unreferenced points are dropped.

    Args:
        npoints: Number of points before compaction
        triangle_sets: Triangle lists whose references keep points alive

    Returns:
        Int array of length ``npoints``; -1 marks an unused point
    """
    used = np.zeros(npoints, dtype=bool)
    for triangles in triangle_sets:
        if len(triangles):
            used[np.asarray(triangles, dtype=np.int64).reshape(-1)] = True
    remap = np.full(npoints, -1, dtype=np.int64)
    remap[used] = np.arange(np.count_nonzero(used))
    return remap


def apply_point_remap(builder: MeshBuilder, remap: np.ndarray) -> None:
    """Rewrite a builder's points and triangles through ``remap``."""
    keep = np.flatnonzero(remap >= 0)
    builder.points = [builder.points[i] for i in keep]
    builder.extruded = [builder.extruded[i] for i in keep]
    mapping = remap.tolist()
    builder.triangles = [(mapping[a], mapping[b], mapping[c]) for a, b, c in builder.triangles]
    builder.connectors = [(mapping[a], mapping[b], mapping[c]) for a, b, c in builder.connectors]


def compact_builder(builder: MeshBuilder) -> int:
    """
    Drop points no triangle references.

    Returns:
        Number of points removed
    """
    before = builder.npoints
    remap = build_point_remap(before, [builder.triangles, builder.connectors])
    apply_point_remap(builder, remap)
    removed = before - builder.npoints
    logger.debug(f"Compaction removed {removed} unreferenced points")
    return removed
