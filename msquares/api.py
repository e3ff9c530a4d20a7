"""
Tessellation entry points.

Every public ``tessellate_*`` function builds a :class:`MarchConfig`, wraps
the caller's samples in a grid source, and runs the matching marcher. DUAL
runs and grayscale levels are assembled here from several binary marches
joined by :func:`merge_meshlists`.
"""

import logging
from typing import Any, Callable, Optional, Sequence

import numpy as np

from .config import MarchConfig
from .core.mesh import MeshList
from .exceptions import SampleFormatError
from .flags import Flags
from .processing.merge import merge_meshlists
from .sources import (BandSource, ColorSource, FunctionSource, GrayscaleSource,
                      GridSource, HeightFunction, InsideFunction, MultiColorSource)
from .triangulation.binary import BinaryMarcher
from .triangulation.quaternary import QuaternaryMarcher
from .utils.logging import march_logger
from .utils.validation import as_grayscale_samples

# Set up logging
logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


def _scaled_progress(callback: Optional[ProgressCallback], start: float,
                     span: float) -> Optional[ProgressCallback]:
    """Map a sub-run's [0, 1] progress onto a slice of the overall run."""
    if callback is None:
        return None
    return lambda progress: callback(start + span * progress)


def _log_summary(mode: str, config: MarchConfig, meshes: MeshList) -> None:
    march_logger.info(
        "Tessellation complete",
        mode=mode,
        width=config.width,
        height=config.height,
        cellsize=config.cellsize,
        flags=int(config.flags),
        meshes=len(meshes),
        points=sum(m.npoints for m in meshes),
        triangles=sum(m.ntriangles for m in meshes),
    )


def _resolve_config(width: int, height: int, cellsize: int, flags: int) -> MarchConfig:
    """Build a config holding only the flags that will be honoured."""
    config = MarchConfig(width, height, cellsize, flags)
    return config.replace(flags=config.effective_flags())


def _march_binary(source: GridSource, config: MarchConfig,
                  progress_callback: Optional[ProgressCallback]) -> MeshList:
    if config.has(Flags.HEIGHTS) and not source.has_heights:
        raise SampleFormatError(f"HEIGHTS requires a height source, {type(source).__name__} has none")

    if not config.has(Flags.DUAL):
        if config.has(Flags.SNAP):
            logger.debug("SNAP has no effect on a single mesh, ignoring")
        return BinaryMarcher(source, config, progress_callback).march()

    base = config.flags & ~Flags.DUAL
    outside = config.replace(flags=(base ^ Flags.INVERT) & ~Flags.CONNECT)
    inside = config.replace(flags=base)
    logger.debug("Running dual tessellation: outside mesh first")

    first = BinaryMarcher(source, outside, _scaled_progress(progress_callback, 0.0, 0.5)).march()
    second = BinaryMarcher(source, inside, _scaled_progress(progress_callback, 0.5, 0.5)).march()
    return merge_meshlists(
        [first, second],
        snap=config.has(Flags.SNAP),
        connect=config.has(Flags.CONNECT),
    )


def tessellate_source(
    source: GridSource,
    width: int,
    height: int,
    cellsize: int,
    flags: int = 0,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate the inside region of an arbitrary binary source.

    Args:
        source: Classification capability with a boolean ``classify``
        width: Samples per row
        height: Number of rows
        cellsize: Samples per cell side, dividing both dimensions
        flags: Combination of :class:`Flags`
        progress_callback: Optional callable receiving progress in [0, 1]

    Returns:
        MeshList with one mesh, or two with DUAL (outside then inside)
    """
    config = _resolve_config(width, height, cellsize, flags)
    meshes = _march_binary(source, config, progress_callback)
    _log_summary("source", config, meshes)
    return meshes


def tessellate_grayscale(
    samples: Any,
    width: int,
    height: int,
    cellsize: int,
    threshold: float,
    flags: int = 0,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate the region of a grayscale grid that lies above a threshold.

    Samples strictly greater than ``threshold`` are inside. With HEIGHTS the
    Z coordinate of each point is the nearest sample value.

    Args:
        samples: ``width * height`` numeric values, flat or (height, width)
        width: Samples per row
        height: Number of rows
        cellsize: Samples per cell side
        threshold: Insideness threshold
        flags: Combination of :class:`Flags`
        progress_callback: Optional callable receiving progress in [0, 1]

    Returns:
        MeshList with one mesh, or two with DUAL
    """
    config = _resolve_config(width, height, cellsize, flags)
    source = GrayscaleSource(samples, width, height, threshold)
    meshes = _march_binary(source, config, progress_callback)
    _log_summary("grayscale", config, meshes)
    return meshes


def tessellate_color(
    samples: Any,
    width: int,
    height: int,
    cellsize: int,
    color: int,
    bpp: int,
    flags: int = 0,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate the region whose packed sample color equals ``color``.

    ``color`` is compared against each sample packed the same way as
    :attr:`Mesh.color` from :func:`tessellate_color_multi`:

    - ``bpp == 4``: RGBA bytes pack as ``0xAARRGGBB``.
    - ``bpp == 3``: RGB bytes pack as ``0xRRGGBB``.
    - ``bpp == 2``: gray and alpha pack as ``0xGGAA``.
    - ``bpp == 1``: a gray byte packs as its own value, so gray 200 is
      matched by ``color=200``, not ``200 << 16``.

    HEIGHTS takes Z from the alpha byte and so requires ``bpp == 4``.
    """
    config = _resolve_config(width, height, cellsize, flags)
    source = ColorSource(samples, width, height, color, bpp)
    if config.has(Flags.HEIGHTS) and not source.has_heights:
        raise SampleFormatError(f"HEIGHTS with color requires 4 bytes per sample, got {source.bpp}")
    meshes = _march_binary(source, config, progress_callback)
    _log_summary("color", config, meshes)
    return meshes


def tessellate_custom(
    width: int,
    height: int,
    cellsize: int,
    flags: int,
    inside_fn: InsideFunction,
    height_fn: Optional[HeightFunction] = None,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate using caller-supplied classification callables.

    Args:
        width: Samples per row
        height: Number of rows
        cellsize: Samples per cell side
        flags: Combination of :class:`Flags`
        inside_fn: Called with a linear sample index, truthy when inside
        height_fn: Called with normalized ``(x, y)``, required for HEIGHTS
        progress_callback: Optional callable receiving progress in [0, 1]

    Returns:
        MeshList with one mesh, or two with DUAL
    """
    config = _resolve_config(width, height, cellsize, flags)
    if config.has(Flags.HEIGHTS) and height_fn is None:
        raise SampleFormatError("HEIGHTS requires a height function")
    source = FunctionSource(inside_fn, height_fn)
    meshes = _march_binary(source, config, progress_callback)
    _log_summary("custom", config, meshes)
    return meshes


def tessellate_grayscale_levels(
    samples: Any,
    width: int,
    height: int,
    cellsize: int,
    thresholds: Sequence[float],
    flags: int = 0,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate a grayscale grid into one mesh per threshold band.

    Band ``i`` holds the samples in ``[thresholds[i - 1], thresholds[i])``,
    with the first band open below and the last open above. INVERT and DUAL
    are ignored. CONNECT adds side walls to every band but the first, and
    SNAP/CONNECT are applied once when the bands are merged.

    Args:
        samples: ``width * height`` numeric values
        width: Samples per row
        height: Number of rows
        cellsize: Samples per cell side
        thresholds: Non-decreasing band boundaries
        flags: Combination of :class:`Flags`
        progress_callback: Optional callable receiving progress in [0, 1]

    Returns:
        MeshList with ``len(thresholds) + 1`` meshes, lowest band first
    """
    config = _resolve_config(width, height, cellsize, flags)
    bounds = [float(t) for t in thresholds]
    if any(b < a for a, b in zip(bounds, bounds[1:])):
        raise SampleFormatError(f"Thresholds must be non-decreasing, got {bounds}")
    data = as_grayscale_samples(samples, width, height)

    ignored = config.flags & (Flags.INVERT | Flags.DUAL)
    if ignored:
        logger.debug(f"Ignoring {ignored!r} for grayscale levels")
    band_flags = config.flags & ~(Flags.INVERT | Flags.DUAL | Flags.SNAP | Flags.CONNECT)
    connect = config.has(Flags.CONNECT)

    edges = [-np.inf] + bounds + [np.inf]
    nbands = len(edges) - 1
    bands = []
    for i in range(nbands):
        band_config = config.replace(
            flags=band_flags | (Flags.CONNECT if connect and i > 0 else Flags.NONE)
        )
        source = BandSource(data, width, height, edges[i], edges[i + 1])
        callback = _scaled_progress(progress_callback, i / nbands, 1.0 / nbands)
        bands.append(BinaryMarcher(source, band_config, callback).march())
        logger.debug(f"Band {i} [{edges[i]}, {edges[i + 1]}) tessellated")

    meshes = merge_meshlists(bands, snap=config.has(Flags.SNAP), connect=connect)
    _log_summary("grayscale_levels", config, meshes)
    return meshes


def tessellate_color_multi(
    samples: Any,
    width: int,
    height: int,
    cellsize: int,
    bpp: int,
    flags: int = 0,
    progress_callback: Optional[ProgressCallback] = None
) -> MeshList:
    """
    Tessellate every distinct color of a grid into its own mesh.

    Meshes are ordered by ascending packed color and carry that value in
    :attr:`Mesh.color`. INVERT, DUAL and SNAP are rejected; HEIGHTS takes Z
    from the alpha byte and requires ``bpp == 4``.

    Raises:
        FlagError: If INVERT, DUAL or SNAP is set
        ColorLimitError: If the grid has more than 256 distinct colors
    """
    config = MarchConfig(width, height, cellsize, flags)
    config.validate_multicolor()
    config = config.replace(flags=config.effective_flags())
    source = MultiColorSource(samples, width, height, bpp)
    meshes = QuaternaryMarcher(source, config, progress_callback).march()
    _log_summary("color_multi", config, meshes)
    return meshes
