"""Validation utilities for sample buffers."""

import logging
from typing import Any

import numpy as np

from ..exceptions import GridError, SampleFormatError

# Set up logging
logger = logging.getLogger(__name__)


def validate_bpp(bpp: int) -> int:
    """
    Validate a bytes-per-sample value.

    Args:
        bpp: Bytes per sample (1 gray, 2 gray+alpha, 3 RGB, 4 RGBA)

    Returns:
        The value as an int

    Raises:
        SampleFormatError: If bpp is not 1, 2, 3 or 4
    """
    if isinstance(bpp, bool) or not isinstance(bpp, (int, np.integer)) or not 1 <= bpp <= 4:
        raise SampleFormatError(f"Bytes per sample must be 1, 2, 3, or 4, got {bpp!r}")
    return int(bpp)


def as_grayscale_samples(samples: Any, width: int, height: int) -> np.ndarray:
    """
    Flatten grayscale samples into a row-major float32 vector.

    Args:
        samples: Array-like of ``width * height`` values, flat or (height, width)
        width: Samples per row
        height: Number of rows

    Returns:
        1D float32 array of length ``width * height``

    Raises:
        GridError: If the sample count does not match the grid
    """
    data = np.asarray(samples, dtype=np.float32)
    if data.size != width * height:
        raise GridError(
            f"Expected {width * height} grayscale samples for a {width}x{height} grid, "
            f"got {data.size}"
        )
    if data.ndim == 2 and data.shape != (height, width):
        raise GridError(f"Sample array shape {data.shape} doesn't match ({height}, {width})")
    return data.reshape(-1)


def as_color_samples(samples: Any, width: int, height: int, bpp: int) -> np.ndarray:
    """
    Reshape color samples into a (width * height, bpp) uint8 array.

    Args:
        samples: Bytes or array-like of ``width * height * bpp`` bytes
        width: Samples per row
        height: Number of rows
        bpp: Bytes per sample

    Returns:
        2D uint8 array with one row per sample

    Raises:
        GridError: If the byte count does not match the grid
        SampleFormatError: If bpp is invalid
    """
    bpp = validate_bpp(bpp)
    if isinstance(samples, (bytes, bytearray, memoryview)):
        data = np.frombuffer(samples, dtype=np.uint8)
    else:
        data = np.asarray(samples)
        if data.dtype != np.uint8:
            if np.any(data < 0) or np.any(data > 255):
                raise SampleFormatError("Color samples must lie in 0..255")
            data = data.astype(np.uint8)
    if data.size != width * height * bpp:
        raise GridError(
            f"Expected {width * height * bpp} bytes for a {width}x{height} grid "
            f"with {bpp} bytes per sample, got {data.size}"
        )
    return data.reshape(-1, bpp)
