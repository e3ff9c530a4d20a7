"""
Mesh post-processing.

This package provides the row-pair simplifier and the mesh-list merger.
"""

from .merge import merge_meshlists
from .simplify import build_point_remap, apply_point_remap, compact_builder, simplify_builder

# Define package exports
__all__ = [
    'merge_meshlists',
    'simplify_builder',
    'compact_builder',
    'build_point_remap',
    'apply_point_remap'
]
