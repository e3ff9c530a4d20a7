"""Core mesh containers produced by the marchers."""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import logging

from ..exceptions import MeshIndexError, MeshValidationError

logger = logging.getLogger(__name__)


def validate_points(points: np.ndarray, dim: int) -> bool:
    """Validate point array."""
    if points is None:
        return False
    if not isinstance(points, np.ndarray):
        return False
    if points.ndim != 2:
        return False
    if points.shape[1] != dim:
        return False
    return True


def validate_triangles(triangles: np.ndarray, point_count: int) -> bool:
    """Validate triangle array."""
    if triangles is None:
        return False
    if not isinstance(triangles, np.ndarray):
        return False
    if triangles.ndim != 2:
        return False
    if triangles.shape[1] != 3:
        return False
    if triangles.size == 0:
        return True  # Empty meshes are valid

    # Check that all triangle indices are valid
    if np.any(triangles < 0) or np.any(triangles >= point_count):
        return False

    return True


@dataclass
class Mesh:
    """Triangle mesh produced by a marching squares run."""
    points: np.ndarray     # Nx2 or Nx3 array of point coordinates
    triangles: np.ndarray  # Mx3 array of counter-clockwise point indices
    dim: int = 2
    color: Optional[int] = None               # Packed id (multi-color only)
    connectors: Optional[np.ndarray] = None   # M bools, True for side walls
    extruded: Optional[np.ndarray] = None     # N bools, True for wall copies

    def __post_init__(self):
        """Validate mesh data on creation."""
        if self.dim not in (2, 3):
            raise MeshValidationError(f"Mesh dimension must be 2 or 3, got {self.dim}")
        self.points = np.asarray(self.points, dtype=np.float32).reshape(-1, self.dim)
        self.triangles = np.asarray(self.triangles, dtype=np.int32).reshape(-1, 3)

        if not validate_points(self.points, self.dim):
            raise MeshValidationError("Invalid point data")
        if not validate_triangles(self.triangles, len(self.points)):
            raise MeshValidationError("Invalid triangle data")

        if self.connectors is None:
            self.connectors = np.zeros(len(self.triangles), dtype=bool)
        else:
            self.connectors = np.asarray(self.connectors, dtype=bool)
        if self.connectors.shape != (len(self.triangles),):
            raise MeshValidationError("Connector mask doesn't match triangles")

        if self.extruded is None:
            self.extruded = np.zeros(len(self.points), dtype=bool)
        else:
            self.extruded = np.asarray(self.extruded, dtype=bool)
        if self.extruded.shape != (len(self.points),):
            raise MeshValidationError("Extrusion mask doesn't match points")

    @property
    def npoints(self) -> int:
        """Get number of points."""
        return len(self.points)

    @property
    def ntriangles(self) -> int:
        """Get number of triangles, connectors included."""
        return len(self.triangles)

    @property
    def nconnectors(self) -> int:
        """Get number of side-wall triangles."""
        return int(np.count_nonzero(self.connectors))

    @property
    def is_empty(self) -> bool:
        return self.ntriangles == 0

    def get_bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Get mesh bounding box."""
        if self.npoints == 0:
            raise MeshValidationError("Empty mesh has no bounding box")
        return np.min(self.points, axis=0), np.max(self.points, axis=0)

    def signed_areas(self) -> np.ndarray:
        """Signed XY area of every triangle, positive when counter-clockwise."""
        a = self.points[self.triangles[:, 0], :2].astype(np.float64)
        b = self.points[self.triangles[:, 1], :2].astype(np.float64)
        c = self.points[self.triangles[:, 2], :2].astype(np.float64)
        return 0.5 * ((b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) -
                      (c[:, 0] - a[:, 0]) * (b[:, 1] - a[:, 1]))

    def copy(self) -> 'Mesh':
        """Create a copy of the mesh."""
        return Mesh(
            points=self.points.copy(),
            triangles=self.triangles.copy(),
            dim=self.dim,
            color=self.color,
            connectors=self.connectors.copy(),
            extruded=self.extruded.copy(),
        )


class MeshList:
    """Ordered collection of meshes returned by every entry point."""

    def __init__(self, meshes: Optional[Sequence[Mesh]] = None):
        self._meshes: List[Mesh] = list(meshes) if meshes is not None else []

    @property
    def count(self) -> int:
        """Get number of meshes."""
        return len(self._meshes)

    def get_mesh(self, index: int) -> Mesh:
        """
        Get a mesh by position.

        Args:
            index: Zero-based position, negative values are not accepted

        Returns:
            The mesh at ``index``

        Raises:
            MeshIndexError: If ``index`` is out of range
        """
        if not 0 <= index < len(self._meshes):
            raise MeshIndexError(
                f"Mesh index {index} out of range for {len(self._meshes)} meshes"
            )
        return self._meshes[index]

    def release(self) -> None:
        """Drop every mesh and the arrays it owns."""
        for mesh in self._meshes:
            mesh.points = np.zeros((0, mesh.dim), dtype=np.float32)
            mesh.triangles = np.zeros((0, 3), dtype=np.int32)
            mesh.connectors = np.zeros(0, dtype=bool)
            mesh.extruded = np.zeros(0, dtype=bool)
        self._meshes.clear()

    def take(self) -> List[Mesh]:
        """Move all meshes out of this list, leaving it empty."""
        meshes, self._meshes = self._meshes, []
        return meshes

    def append(self, mesh: Mesh) -> None:
        self._meshes.append(mesh)

    def __len__(self) -> int:
        return len(self._meshes)

    def __getitem__(self, index: int) -> Mesh:
        return self.get_mesh(index)

    def __iter__(self) -> Iterator[Mesh]:
        return iter(self._meshes)

    def __repr__(self) -> str:
        summary = ", ".join(f"{m.npoints}p/{m.ntriangles}t" for m in self._meshes)
        return f"MeshList([{summary}])"


class MeshBuilder:
    """
    Growable staging area for one output mesh.

    Ordinary triangles and connector (side-wall) triangles are kept apart
    until :meth:`build`, which appends the connectors after the ordinary
    triangles. The simplifier bookkeeping lives here as well.
    """

    def __init__(self, dim: int, color: Optional[int] = None):
        self.dim = dim
        self.color = color
        self.points: List[Tuple[float, ...]] = []
        self.extruded: List[bool] = []
        self.triangles: List[Tuple[int, int, int]] = []
        self.connectors: List[Tuple[int, int, int]] = []
        self._extrusions: Dict[int, int] = {}

        # cell -> (first triangle, triangle count)
        self.cell_ranges: Dict[int, Tuple[int, int]] = {}
        # cell -> point indices of slots 0, 2, 4, 6 for fully covered cells
        self.complete_cells: Dict[int, Tuple[int, int, int, int]] = {}

    @property
    def npoints(self) -> int:
        return len(self.points)

    def add_point(self, point: Sequence[float], extruded: bool = False) -> int:
        """Append a point and return its index."""
        self.points.append(tuple(point))
        self.extruded.append(extruded)
        return len(self.points) - 1

    def extrude(self, index: int) -> int:
        """Return the extrusion copy of point ``index``, creating it once."""
        copy = self._extrusions.get(index)
        if copy is None:
            copy = self.add_point(self.points[index], extruded=True)
            self._extrusions[index] = copy
        return copy

    def add_triangle(self, a: int, b: int, c: int) -> None:
        self.triangles.append((a, b, c))

    def add_connector(self, a: int, b: int, c: int) -> None:
        self.connectors.append((a, b, c))

    def record_cell(self, cell: int, first: int) -> None:
        """Record the triangles emitted for ``cell`` since index ``first``."""
        self.cell_ranges[cell] = (first, len(self.triangles) - first)

    def cell_triangles(self, cell: int) -> List[Tuple[int, int, int]]:
        first, count = self.cell_ranges.get(cell, (0, 0))
        return self.triangles[first:first + count]

    def build(self) -> Mesh:
        """Finalize the staged data into a Mesh."""
        triangles = self.triangles + self.connectors
        connectors = [False] * len(self.triangles) + [True] * len(self.connectors)
        if self.points:
            points = np.array(self.points, dtype=np.float32)
        else:
            points = np.zeros((0, self.dim), dtype=np.float32)
        if triangles:
            tris = np.array(triangles, dtype=np.int32)
        else:
            tris = np.zeros((0, 3), dtype=np.int32)
        return Mesh(
            points=points,
            triangles=tris,
            dim=self.dim,
            color=self.color,
            connectors=np.array(connectors, dtype=bool),
            extruded=np.array(self.extruded, dtype=bool),
        )
