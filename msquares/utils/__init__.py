"""
msquares utilities module.
"""

from .image import grayscale_from_image, samples_from_image
from .logging import StructuredLogger, march_logger
from .validation import as_color_samples, as_grayscale_samples, validate_bpp

__all__ = [
    'grayscale_from_image',
    'samples_from_image',
    'StructuredLogger',
    'march_logger',
    'as_color_samples',
    'as_grayscale_samples',
    'validate_bpp'
]
