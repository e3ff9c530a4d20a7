"""
Image adapters.

Helpers that turn Pillow images or numpy arrays into the flat sample buffers
expected by the tessellation entry points. Decoding image files stays with
the caller; these functions only rearrange pixels that are already loaded.
"""

import logging
from typing import Any, Tuple

import numpy as np
from PIL import Image

from ..exceptions import SampleFormatError

# Set up logging
logger = logging.getLogger(__name__)

# Pillow modes that map directly onto a byte count per sample.
MODE_BPP = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


def samples_from_image(image: Any) -> Tuple[np.ndarray, int, int, int]:
    """
    Convert an image into a color sample buffer.

    Args:
        image: PIL Image, or uint8 array shaped (height, width) or
            (height, width, channels) with 1-4 channels

    Returns:
        Tuple of (samples, width, height, bpp) with ``samples`` a flat uint8
        array in row-major order
    """
    if isinstance(image, Image.Image):
        if image.mode not in MODE_BPP:
            logger.debug(f"Converting image mode {image.mode} to RGBA")
            image = image.convert("RGBA")
        bpp = MODE_BPP[image.mode]
        width, height = image.size
        data = np.asarray(image, dtype=np.uint8)
        return data.reshape(-1), width, height, bpp

    data = np.asarray(image)
    if data.ndim == 2:
        data = data[:, :, np.newaxis]
    if data.ndim != 3 or not 1 <= data.shape[2] <= 4:
        raise SampleFormatError(f"Unsupported image array shape {data.shape}")
    if data.dtype != np.uint8:
        raise SampleFormatError(f"Color image arrays must be uint8, got {data.dtype}")
    height, width, bpp = data.shape
    return data.reshape(-1), width, height, bpp


def grayscale_from_image(image: Any) -> Tuple[np.ndarray, int, int]:
    """
    Convert an image into float32 grayscale samples in [0, 1].

    Args:
        image: PIL Image (converted to luminance) or 2D numeric array;
            uint8 arrays are scaled by 1/255, float arrays are kept

    Returns:
        Tuple of (samples, width, height) with ``samples`` flat and row-major
    """
    if isinstance(image, Image.Image):
        if image.mode == "F":
            data = np.asarray(image, dtype=np.float32)
        else:
            data = np.asarray(image.convert("L"), dtype=np.float32) / 255.0
    else:
        data = np.asarray(image)
        if data.ndim != 2:
            raise SampleFormatError(f"Grayscale arrays must be 2D, got shape {data.shape}")
        if data.dtype == np.uint8:
            data = data.astype(np.float32) / 255.0
        else:
            data = data.astype(np.float32)
    height, width = data.shape
    return data.reshape(-1), width, height
