"""
Tessellation flags.

Flags are independent bits and can be combined with ``|``. Some modes reject
particular combinations, see :mod:`msquares.config`.
"""

from enum import IntFlag


class Flags(IntFlag):
    """Bitset controlling a marching squares run."""

    NONE = 0
    # Reverses the insideness test.
    INVERT = 1 << 0
    # Produces two meshes: one for the outside, one for the inside.
    DUAL = 1 << 1
    # Points get a third coordinate taken from the height source.
    HEIGHTS = 1 << 2
    # Assigns one Z level per mesh. Requires HEIGHTS and DUAL or levels.
    SNAP = 1 << 3
    # Adds side-wall triangles to every mesh but the lowest. Requires HEIGHTS.
    CONNECT = 1 << 4
    # Quick, non-optimal merging of fully covered cells.
    SIMPLIFY = 1 << 5


INVERT = Flags.INVERT
DUAL = Flags.DUAL
HEIGHTS = Flags.HEIGHTS
SNAP = Flags.SNAP
CONNECT = Flags.CONNECT
SIMPLIFY = Flags.SIMPLIFY

__all__ = ['Flags', 'INVERT', 'DUAL', 'HEIGHTS', 'SNAP', 'CONNECT', 'SIMPLIFY']
