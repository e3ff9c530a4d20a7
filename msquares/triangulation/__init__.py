"""
Marching squares tessellators.

This package provides the binary (inside/outside) and quaternary
(multi-color) marchers built on the shared case tables.
"""

from .base import BaseMarcher
from .binary import BinaryMarcher
from .quaternary import QuaternaryMarcher, multi_code

# Define package exports
__all__ = [
    'BaseMarcher',
    'BinaryMarcher',
    'QuaternaryMarcher',
    'multi_code'
]
