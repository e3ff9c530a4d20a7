"""
Grid classification sources.

A source answers two questions for the marchers: how a sample is classified
(inside/outside for the binary marcher, a small color id for the quaternary
marcher) and how high the surface is at a normalized output position.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

import numpy as np

from .exceptions import ColorLimitError, SampleFormatError
from .utils.validation import as_color_samples, as_grayscale_samples

# Set up logging
logger = logging.getLogger(__name__)

MAX_COLORS = 256

InsideFunction = Callable[[int], Any]
HeightFunction = Callable[[float, float], float]


def pack_samples(pixels: np.ndarray, bpp: int) -> np.ndarray:
    """
    Pack per-sample bytes into 32-bit color values.

    Four-byte samples are read as RGBA and packed as ``A<<24 | R<<16 | G<<8 | B``.
    Shorter samples are packed big-endian, so a gray byte ``g`` packs to ``g``
    and an RGB triple packs to ``0xRRGGBB``.

    Args:
        pixels: (N, bpp) uint8 array
        bpp: Bytes per sample

    Returns:
        1D uint32 array of packed colors
    """
    px = pixels.astype(np.uint32)
    if bpp == 4:
        return (px[:, 3] << 24) | (px[:, 0] << 16) | (px[:, 1] << 8) | px[:, 2]
    packed = np.zeros(len(px), dtype=np.uint32)
    for channel in range(bpp):
        packed = (packed << 8) | px[:, channel]
    return packed


class GridSource(ABC):
    """Abstract classification capability consumed by the marchers."""

    @abstractmethod
    def classify(self, index: int) -> Any:
        """
        Classify the sample at a row-major linear index.

        Returns:
            A bool for binary sources, a small int id for color id sources
        """
        pass

    @property
    def has_heights(self) -> bool:
        """True when :meth:`height` can be called."""
        return False

    def height(self, x: float, y: float) -> float:
        """Elevation at normalized output coordinates."""
        raise SampleFormatError(f"{type(self).__name__} does not provide heights")


class FunctionSource(GridSource):
    """Wraps caller-supplied inside and height callables."""

    def __init__(self, inside_fn: InsideFunction, height_fn: Optional[HeightFunction] = None):
        self.inside_fn = inside_fn
        self.height_fn = height_fn

    def classify(self, index: int) -> bool:
        return bool(self.inside_fn(index))

    @property
    def has_heights(self) -> bool:
        return self.height_fn is not None

    def height(self, x: float, y: float) -> float:
        if self.height_fn is None:
            return super().height(x, y)
        return float(self.height_fn(x, y))


class SampleGridSource(GridSource):
    """Base for sources backed by a row-major sample buffer."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height_px = height
        self.extent = max(width, height)
        self._inside: List[Any] = []

    def classify(self, index: int) -> Any:
        return self._inside[index]

    def nearest_index(self, x: float, y: float) -> int:
        """Linear index of the sample nearest to normalized ``(x, y)``."""
        i = min(max(int(x * self.extent), 0), self.width - 1)
        j = min(max(int(y * self.extent), 0), self.height_px - 1)
        return i + j * self.width


class GrayscaleSource(SampleGridSource):
    """Inside where ``value > threshold``; heights are the nearest sample."""

    def __init__(self, samples: Any, width: int, height: int, threshold: float):
        super().__init__(width, height)
        self.data = as_grayscale_samples(samples, width, height)
        self.threshold = threshold
        self._inside = (self.data > threshold).tolist()

    @property
    def has_heights(self) -> bool:
        return True

    def height(self, x: float, y: float) -> float:
        return float(self.data[self.nearest_index(x, y)])


class BandSource(GrayscaleSource):
    """Inside where ``lower <= value < upper``."""

    def __init__(self, samples: Any, width: int, height: int,
                 lower: float = -np.inf, upper: float = np.inf):
        super().__init__(samples, width, height, threshold=lower)
        self.lower = lower
        self.upper = upper
        self._inside = ((self.data >= lower) & (self.data < upper)).tolist()


class ColorSource(SampleGridSource):
    """Inside where the packed sample color equals ``color`` exactly."""

    def __init__(self, samples: Any, width: int, height: int, color: int, bpp: int):
        super().__init__(width, height)
        self.pixels = as_color_samples(samples, width, height, bpp)
        self.bpp = self.pixels.shape[1]
        self.color = int(color)
        self.packed = pack_samples(self.pixels, self.bpp)
        self._inside = (self.packed == self.color).tolist()

    @property
    def has_heights(self) -> bool:
        return self.bpp == 4

    def height(self, x: float, y: float) -> float:
        if self.bpp != 4:
            return super().height(x, y)
        return self.pixels[self.nearest_index(x, y), 3] / 255.0


class MultiColorSource(SampleGridSource):
    """
    Classifies every sample by a small id into the sorted set of distinct colors.

    Attributes:
        colors: Distinct packed colors in ascending order; ``colors[id]``
        ids: Per-sample ids as a numpy array
    """

    def __init__(self, samples: Any, width: int, height: int, bpp: int):
        super().__init__(width, height)
        self.pixels = as_color_samples(samples, width, height, bpp)
        self.bpp = self.pixels.shape[1]
        packed = pack_samples(self.pixels, self.bpp)

        colors = np.unique(packed)
        if len(colors) > MAX_COLORS:
            raise ColorLimitError(
                f"Found {len(colors)} distinct colors, at most {MAX_COLORS} are supported"
            )
        self.colors = [int(c) for c in colors]
        self.ids = np.searchsorted(colors, packed)
        self._inside = self.ids.tolist()
        logger.debug(f"Discovered {len(self.colors)} distinct colors")

    @property
    def ncolors(self) -> int:
        return len(self.colors)

    @property
    def has_heights(self) -> bool:
        return self.bpp == 4

    def alpha(self, color_id: int) -> int:
        """Alpha byte of a color id, zero for colors without alpha."""
        if self.bpp != 4:
            return 0
        return self.colors[color_id] >> 24

    def height(self, x: float, y: float) -> float:
        if self.bpp != 4:
            return super().height(x, y)
        return self.alpha(self.classify(self.nearest_index(x, y))) / 255.0
