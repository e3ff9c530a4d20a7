"""
msquares Package.

Table-driven marching squares: converts a binary or multi-color
classification of a sample grid into triangle meshes, optionally extruded
into a height dimension.
"""

__version__ = "0.1.0"

# Import the main exception classes for easy access
from msquares.exceptions import (
    MSquaresError, PreconditionError, GridError, FlagError, SampleFormatError,
    ColorLimitError, MeshIndexError, MeshValidationError, TableIntegrityError
)

from msquares.flags import Flags, INVERT, DUAL, HEIGHTS, SNAP, CONNECT, SIMPLIFY
from msquares.config import MarchConfig
from msquares.core import Mesh, MeshList
from msquares.sources import (
    GridSource, FunctionSource, GrayscaleSource, BandSource, ColorSource, MultiColorSource
)
from msquares.api import (
    tessellate_source,
    tessellate_grayscale,
    tessellate_color,
    tessellate_custom,
    tessellate_grayscale_levels,
    tessellate_color_multi,
)
from msquares.processing import merge_meshlists

__all__ = [
    '__version__',
    'MSquaresError', 'PreconditionError', 'GridError', 'FlagError',
    'SampleFormatError', 'ColorLimitError', 'MeshIndexError',
    'MeshValidationError', 'TableIntegrityError',
    'Flags', 'INVERT', 'DUAL', 'HEIGHTS', 'SNAP', 'CONNECT', 'SIMPLIFY',
    'MarchConfig', 'Mesh', 'MeshList',
    'GridSource', 'FunctionSource', 'GrayscaleSource', 'BandSource',
    'ColorSource', 'MultiColorSource',
    'tessellate_source', 'tessellate_grayscale', 'tessellate_color',
    'tessellate_custom', 'tessellate_grayscale_levels', 'tessellate_color_multi',
    'merge_meshlists',
]
