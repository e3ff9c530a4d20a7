"""
Multi-color (quaternary) marching squares.

Each cell corner carries one of up to 256 color ids, so a cell can touch up
to four distinct regions. The corner ids are reduced to a canonical code
that selects, per corner, the triangles and boundary polyline that belong
to that corner's color. Every color gets its own output mesh.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import MarchConfig
from ..core.mesh import MeshBuilder, MeshList
from ..exceptions import SampleFormatError
from ..flags import Flags
from ..processing.simplify import compact_builder, simplify_builder
from ..sources import MultiColorSource
from .base import BaseMarcher, CellCorners, CellState

# Set up logging
logger = logging.getLogger(__name__)


def multi_code(sw: int, se: int, ne: int, nw: int) -> int:
    """
    Compute the canonical 8-bit code of four corner colors.

    Local indices 0-3 are handed out in the order SW, SE, NE, NW, reusing the
    index of an earlier corner with the same color. Each corner contributes
    two bits, SW in the lowest pair, so the SW pair is always zero.
    """
    code = [0, 0, 0, 0]
    ncolors = 1
    if se == sw:
        code[1] = code[0]
    else:
        code[1] = ncolors
        ncolors += 1
    if ne == se:
        code[2] = code[1]
    elif ne == sw:
        code[2] = code[0]
    else:
        code[2] = ncolors
        ncolors += 1
    if nw == ne:
        code[3] = code[2]
    elif nw == se:
        code[3] = code[1]
    elif nw == sw:
        code[3] = code[0]
    else:
        code[3] = ncolors
    return code[0] | (code[1] << 2) | (code[2] << 4) | (code[3] << 6)


class QuaternaryMarcher(BaseMarcher):
    """
    Tessellate every color region of a multi-color grid.

    The output frame is flipped so that ``y`` points up (row 0 at the top)
    and the table winding is kept.
    """

    flip_y = True

    def __init__(
        self,
        source: MultiColorSource,
        config: MarchConfig,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        config.validate_multicolor()
        if config.has(Flags.HEIGHTS) and not source.has_heights:
            raise SampleFormatError("HEIGHTS with color_multi requires 4 bytes per sample")
        super().__init__(source, config, progress_callback)

    def march(self) -> MeshList:
        config = self.config
        connect = bool(self.flags & Flags.CONNECT)
        simplify = bool(self.flags & Flags.SIMPLIFY)
        ncols, nrows = config.ncols, config.nrows
        source = self.source

        builders = [MeshBuilder(config.dim, color) for color in source.colors]
        alphas = [source.alpha(i) for i in range(source.ncolors)]
        floors = [min(alphas[:i + 1]) / 255.0 for i in range(len(alphas))]

        prev_row: List[Dict[int, CellState]] = [{} for _ in range(ncols)]
        for row in range(nrows):
            west: Dict[int, CellState] = {}
            curr_row: List[Dict[int, CellState]] = []
            for col in range(ncols):
                corners = self.cell_corners(row, col)
                vals = (
                    source.classify(corners.sw),
                    source.classify(corners.se),
                    source.classify(corners.ne),
                    source.classify(corners.nw),
                )
                code = multi_code(*vals) >> 2
                triangle_lists = self.tables.quaternary_triangles[code]
                edge_lists = self.tables.quaternary_boundaries[code]
                cell = row * ncols + col

                states: Dict[int, Tuple[int, List[int]]] = {}
                firsts: Dict[int, int] = {}
                for corner, color in enumerate(vals):
                    triangles = triangle_lists[corner]
                    if not triangles:
                        continue
                    builder = builders[color]
                    mask, inds = states.get(color, (0, [0] * 9))
                    firsts.setdefault(color, len(builder.triangles))

                    for triangle in triangles:
                        for slot in triangle:
                            if mask & (1 << slot):
                                continue
                            mask |= 1 << slot
                            index = self.weld(slot, west.get(color), prev_row[col].get(color))
                            if index is None:
                                index = self._add_point(builder, slot, row, col, corners, color)
                            inds[slot] = index
                    for a, b, c in triangles:
                        builder.add_triangle(inds[a], inds[b], inds[c])
                    states[color] = (mask, inds)

                    if connect and color > 0:
                        self._add_connectors(builder, edge_lists[corner], inds, floors[color])

                if simplify:
                    for color, first in firsts.items():
                        builders[color].record_cell(cell, first)
                    if vals[0] == vals[1] == vals[2] == vals[3]:
                        inds = states[vals[0]][1]
                        builders[vals[0]].complete_cells[cell] = (inds[0], inds[2], inds[4], inds[6])

                west = states
                curr_row.append(states)
            prev_row = curr_row
            self.report_progress((row + 1) / nrows)

        if simplify:
            eliminated = 0
            for builder in builders:
                if builder.complete_cells:
                    eliminated += simplify_builder(builder, nrows, ncols)
                    compact_builder(builder)
            self.stats["eliminated_triangles"] = eliminated

        meshes = MeshList([builder.build() for builder in builders])
        self.finalize_stats(meshes)
        return meshes

    def _add_point(self, builder: MeshBuilder, slot: int, row: int, col: int,
                   corners: CellCorners, color: int) -> int:
        dx, dy = self.slot_offset(slot, corners, self.source.classify)
        x, y = self.position(row, col, dx, dy)
        if builder.dim == 3:
            return builder.add_point((x, y, self.source.alpha(color) / 255.0))
        return builder.add_point((x, y))

    @staticmethod
    def _add_connectors(builder: MeshBuilder, edge: Sequence[int],
                        inds: Sequence[int], floor: float) -> None:
        """
        Extrude a boundary polyline down to ``floor``.

        Every polyline point gets its own copy; consecutive points form a
        quad of two connector triangles.
        """
        prev_copy = None
        for e, slot in enumerate(edge):
            point = inds[slot]
            x, y = builder.points[point][:2]
            copy = builder.add_point((x, y, floor), extruded=True)
            if e > 0:
                prev_point = inds[edge[e - 1]]
                builder.add_connector(prev_point, prev_copy, copy)
                builder.add_connector(copy, point, prev_point)
            prev_copy = copy
