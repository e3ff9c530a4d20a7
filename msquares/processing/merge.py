"""
Mesh-list merging.

Mesh lists from dual or multi-level runs are combined by moving their meshes
into one list. Optionally every mesh is snapped to a single Z level given by
its position in the merged list, and extrusion copies are pushed down to the
level below to form vertical walls.
"""

import logging
from typing import Sequence

import numpy as np

from ..core.mesh import MeshList

# Set up logging
logger = logging.getLogger(__name__)


def snap_levels(meshes: MeshList) -> np.ndarray:
    """
    Assign one uniform Z per mesh, evenly spaced between the global extremes.

    Args:
        meshes: Mesh list whose 3D meshes are snapped in place

    Returns:
        Array with the Z level of every mesh position
    """
    zs = [m.points[:, 2] for m in meshes if m.dim == 3 and m.npoints]
    if not zs:
        return np.zeros(len(meshes), dtype=np.float32)
    zmin = min(float(z.min()) for z in zs)
    zmax = max(float(z.max()) for z in zs)

    nmeshes = len(meshes)
    if nmeshes > 1:
        levels = [zmin + (zmax - zmin) * i / (nmeshes - 1) for i in range(nmeshes)]
    else:
        levels = [zmin]
    levels = np.array(levels, dtype=np.float32)

    for mesh, level in zip(meshes, levels):
        if mesh.dim == 3:
            mesh.points[:, 2] = level
    logger.debug(f"Snapped {nmeshes} meshes between z={zmin:.4f} and z={zmax:.4f}")
    return levels


def drop_extrusions(meshes: MeshList, levels: np.ndarray) -> int:
    """
    Move the extrusion copies of every mesh but the first to the level below.

    Returns:
        Number of points moved
    """
    moved = 0
    for i in range(1, len(meshes)):
        mesh = meshes[i]
        if mesh.dim != 3:
            continue
        mesh.points[mesh.extruded, 2] = levels[i - 1]
        moved += int(np.count_nonzero(mesh.extruded))
    return moved


def merge_meshlists(lists: Sequence[MeshList], snap: bool = False,
                    connect: bool = False) -> MeshList:
    """
    Merge mesh lists, moving their meshes in order into a new list.

    Args:
        lists: Mesh lists to merge; each is left empty
        snap: Assign each mesh a Z level by its position in the result
        connect: With ``snap``, drop extrusion copies to the previous level

    Returns:
        The merged MeshList
    """
    merged = MeshList()
    for meshlist in lists:
        for mesh in meshlist.take():
            merged.append(mesh)

    if not snap:
        return merged

    levels = snap_levels(merged)
    if connect:
        moved = drop_extrusions(merged, levels)
        logger.debug(f"Dropped {moved} extrusion points to the level below")
    return merged
