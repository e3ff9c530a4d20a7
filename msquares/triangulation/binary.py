"""
Binary (two region) marching squares.

Every sample is either inside or outside. Each cell's four corners form a
4-bit code that selects one of 16 triangulations from the binary case table.
Points on shared cell edges are welded so that neighboring cells reuse the
same vertex.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..core.mesh import MeshBuilder, MeshList
from ..flags import Flags
from ..processing.simplify import compact_builder, simplify_builder
from .base import BaseMarcher, CellCorners, CellState

# Set up logging
logger = logging.getLogger(__name__)

# Code of a cell whose four corners are all inside.
FULL_CODE = 0xF


class BinaryMarcher(BaseMarcher):
    """
    Tessellate the inside region of a binary classification.

    The output frame keeps raster orientation: ``y`` grows with the row index
    and the table triangles are emitted with reversed winding.
    """

    def march(self) -> MeshList:
        config = self.config
        flags = self.flags
        invert = bool(flags & Flags.INVERT)
        connect = bool(flags & Flags.CONNECT)
        simplify = bool(flags & Flags.SIMPLIFY)
        ncols, nrows = config.ncols, config.nrows

        classify = self.source.classify
        point_table = self.tables.binary_points
        triangle_table = self.tables.binary_triangles
        builder = MeshBuilder(config.dim)

        prev_row: List[Optional[CellState]] = [None] * ncols
        for row in range(nrows):
            west: Optional[CellState] = None
            for col in range(ncols):
                corners = self.cell_corners(row, col)
                northwest = bool(classify(corners.nw)) ^ invert
                northeast = bool(classify(corners.ne)) ^ invert
                southwest = bool(classify(corners.sw)) ^ invert
                southeast = bool(classify(corners.se)) ^ invert
                code = southwest | (southeast << 1) | (northwest << 2) | (northeast << 3)

                inds = [0] * 8
                mask = 0
                for slot in point_table[code]:
                    mask |= 1 << slot
                    index = self.weld(slot, west, prev_row[col])
                    if index is None:
                        index = self._add_point(builder, slot, row, col, corners)
                    inds[slot] = index

                first = len(builder.triangles)
                for a, b, c in triangle_table[code]:
                    builder.add_triangle(inds[c], inds[b], inds[a])

                if connect:
                    self._add_connectors(builder, triangle_table[code], inds)

                if simplify:
                    cell = row * ncols + col
                    builder.record_cell(cell, first)
                    if code == FULL_CODE:
                        builder.complete_cells[cell] = (inds[0], inds[2], inds[4], inds[6])

                west = (mask, inds)
                prev_row[col] = west
            self.report_progress((row + 1) / nrows)

        if simplify:
            self.stats["eliminated_triangles"] = simplify_builder(
                builder, nrows, ncols, reverse_winding=True
            )
            compact_builder(builder)

        meshes = MeshList([builder.build()])
        self.finalize_stats(meshes)
        return meshes

    def _add_point(self, builder: MeshBuilder, slot: int, row: int, col: int,
                   corners: CellCorners) -> int:
        dx, dy = self.slot_offset(slot, corners, self.source.classify)
        x, y = self.position(row, col, dx, dy)
        if builder.dim == 3:
            return builder.add_point((x, y, self.source.height(x, y)))
        return builder.add_point((x, y))

    @staticmethod
    def _add_connectors(builder: MeshBuilder,
                        triangles: Sequence[Tuple[int, int, int]],
                        inds: Sequence[int]) -> None:
        """
        Emit two side-wall triangles per boundary edge of the cell.

        A table triangle whose corners include exactly two midpoints has its
        boundary edge between them. The second triangle of every pair starts
        with the two extrusion copies.
        """
        for a, b, c in triangles:
            i, j, k = inds[a], inds[b], inds[c]
            if a % 2 and b % 2:
                ei = builder.extrude(i)
                ej = builder.extrude(j)
                builder.add_connector(i, j, ej)
                builder.add_connector(ej, ei, i)
            elif a % 2 and c % 2:
                ei = builder.extrude(i)
                ek = builder.extrude(k)
                builder.add_connector(ek, k, i)
                builder.add_connector(ei, ek, i)
            elif b % 2 and c % 2:
                ej = builder.extrude(j)
                ek = builder.extrude(k)
                builder.add_connector(j, k, ek)
                builder.add_connector(ek, ej, j)
