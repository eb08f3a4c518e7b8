# -*- coding: utf-8 -*-
"""
Block Decoder - Rebuild an RGBA raster from flat or tiled pixel planes.

Image segments store pixel data either as one block covering the whole
image or as a row-major grid of fixed-size blocks. ``decode`` partitions
the raw plane into per-block sample arrays, maps samples to color for the
segment's representation (mono, RGB, palette), and places each block at
its origin in the output raster.

The output raster covers the full tiled extent. Pixels outside the
declared significant extent are padding and get alpha 0; all other
pixels get alpha 255.

All sample-to-pixel mapping is vectorised over the whole plane, and each
block is written to a disjoint slice of the raster, so the result does
not depend on the order blocks are visited.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-03

Modified
--------
2026-10-14
"""

# Standard library
import logging
from typing import List, NamedTuple, Union

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.exceptions import (
    UnsupportedBitDepth,
    UnsupportedCompression,
    UnsupportedRepresentation,
    ValidationError,
)
from nitfviz.IO.models import SegmentDescriptor
from nitfviz.vocabulary import ImageMode, ImageRepresentation

logger = logging.getLogger(__name__)

_DECODABLE = (
    ImageRepresentation.MONO,
    ImageRepresentation.RGB,
    ImageRepresentation.RGB_LUT,
)


class BlockInfo(NamedTuple):
    """Placement of one block in the output raster.

    Attributes
    ----------
    x : int
        Column of the block's top-left pixel.
    y : int
        Row of the block's top-left pixel.
    width : int
        Block width in pixels.
    height : int
        Block height in pixels.
    """

    x: int
    y: int
    width: int
    height: int


def block_layout(descriptor: SegmentDescriptor) -> List[BlockInfo]:
    """Compute the placement of every block, in storage order.

    Blocks are stored row-major, so block ``bx + by * nbpr`` sits at
    ``(bx * width, by * height)``. An unblocked segment yields one block
    spanning the significant extent.

    Parameters
    ----------
    descriptor : SegmentDescriptor
        Segment layout.

    Returns
    -------
    List[BlockInfo]
        One entry per block, indexed by block number.
    """
    if not descriptor.is_blocked:
        return [BlockInfo(0, 0, descriptor.ncols, descriptor.nrows)]

    width = descriptor.block_width
    height = descriptor.block_height
    return [
        BlockInfo(bx * width, by * height, width, height)
        for by in range(descriptor.nbpc)
        for bx in range(descriptor.nbpr)
    ]


def _check_decodable(descriptor: SegmentDescriptor) -> int:
    """Validate the layout and return the samples per pixel."""
    if descriptor.nbpp != 8:
        raise UnsupportedBitDepth(descriptor.nbpp, descriptor.index)
    if descriptor.irep not in _DECODABLE:
        raise UnsupportedRepresentation(descriptor.irep.value,
                                        descriptor.index)
    if descriptor.ic != "NC":
        raise UnsupportedCompression(descriptor.ic, descriptor.index)

    spp = 3 if descriptor.irep is ImageRepresentation.RGB else 1
    if descriptor.nbands != spp:
        raise ValidationError(
            f"{descriptor.irep.value} segment {descriptor.index} must have "
            f"{spp} band(s), got {descriptor.nbands}"
        )
    if descriptor.irep is ImageRepresentation.RGB_LUT:
        lut = descriptor.lut
        if lut is None or lut.shape[0] < 3 or lut.shape[1] < 256:
            shape = None if lut is None else lut.shape
            raise ValidationError(
                f"RGB/LUT segment {descriptor.index} needs three 256-entry "
                f"lookup tables on band 0, got {shape}"
            )
    return spp


def block_samples(
    raw_plane,
    blocks: List[BlockInfo],
    spp: int,
    imode: ImageMode = ImageMode.PIXEL,
    dtype: Union[str, np.dtype] = np.uint8,
    segment_index: int = 0,
) -> np.ndarray:
    """View a raw plane as ``(n_blocks, height, width, spp)`` samples.

    The view is zero-copy; interleave modes other than ``P`` are
    expressed as transposed strides.

    Parameters
    ----------
    raw_plane : buffer
        Pixel bytes.
    blocks : List[BlockInfo]
        Block placements from :func:`block_layout`. All blocks share one
        size.
    spp : int
        Samples per pixel.
    imode : ImageMode
        Interleave of the samples of one pixel.
    dtype : str or np.dtype
        Sample type, with explicit byte order for multi-byte samples
        (e.g. ``'>f4'``).
    segment_index : int
        Segment index for error messages.

    Returns
    -------
    np.ndarray
        Read-only sample view.

    Raises
    ------
    ValidationError
        If the plane is shorter than the layout requires.
    """
    dtype = np.dtype(dtype)
    height, width = blocks[0].height, blocks[0].width
    n_blocks = len(blocks)
    count = n_blocks * height * width * spp

    nbytes = memoryview(raw_plane).nbytes
    if nbytes < count * dtype.itemsize:
        raise ValidationError(
            f"Raw plane for segment {segment_index} holds {nbytes} "
            f"bytes; layout requires {count * dtype.itemsize}"
        )
    if count == 0:
        data = np.empty(0, dtype=dtype)
    else:
        data = np.frombuffer(raw_plane, dtype=dtype, count=count)

    if spp == 1:
        return data.reshape(n_blocks, height, width, 1)

    if imode is ImageMode.PIXEL:
        return data.reshape(n_blocks, height, width, spp)
    if imode is ImageMode.BLOCK:
        return data.reshape(n_blocks, spp, height, width).transpose(0, 2, 3, 1)
    if imode is ImageMode.ROW:
        return data.reshape(n_blocks, height, spp, width).transpose(0, 1, 3, 2)
    # Band sequential: every block of band 0, then band 1, ...
    return data.reshape(spp, n_blocks, height, width).transpose(1, 2, 3, 0)


def _colorize(descriptor: SegmentDescriptor, samples: np.ndarray) -> np.ndarray:
    """Map samples to RGB, shape ``(..., 3)``."""
    irep = descriptor.irep
    if irep is ImageRepresentation.MONO:
        return np.repeat(samples, 3, axis=-1)
    if irep is ImageRepresentation.RGB:
        return samples
    lut = descriptor.lut
    return np.moveaxis(lut[:3, samples[..., 0]], 0, -1)


def decode(descriptor: SegmentDescriptor, raw_plane) -> np.ndarray:
    """Decode a raw pixel plane into an RGBA raster.

    Parameters
    ----------
    descriptor : SegmentDescriptor
        Segment layout.
    raw_plane : buffer
        Uncompressed pixel bytes (``bytes``, ``memoryview``, ``mmap`` or
        ``numpy.memmap``). Never modified.

    Returns
    -------
    np.ndarray
        RGBA raster, dtype uint8, shape ``(rows, cols, 4)`` where
        ``(rows, cols) == descriptor.raster_shape``.

    Raises
    ------
    UnsupportedBitDepth
        If samples are not 8 bits.
    UnsupportedRepresentation
        If the representation is not MONO, RGB or RGB/LUT.
    UnsupportedCompression
        If the data is compressed.
    ValidationError
        If the band count, lookup tables or plane length do not match
        the layout.
    """
    logger.debug(
        "Segment %d: %d x %d, irep=%s, pvtype=%s, ic=%s, nbands=%d, "
        "nbpp=%d, imode=%s",
        descriptor.index, descriptor.nrows, descriptor.ncols,
        descriptor.irep.value, descriptor.pvtype.value, descriptor.ic,
        descriptor.nbands, descriptor.nbpp, descriptor.imode.value,
    )
    logger.debug(
        "Segment %d blocks: nbpr=%d, nbpc=%d, nppbh=%d, nppbv=%d",
        descriptor.index, descriptor.nbpr, descriptor.nbpc,
        descriptor.nppbh, descriptor.nppbv,
    )
    spp = _check_decodable(descriptor)

    blocks = block_layout(descriptor)
    samples = block_samples(raw_plane, blocks, spp, descriptor.imode,
                            segment_index=descriptor.index)
    rgb = _colorize(descriptor, samples)

    rows, cols = descriptor.raster_shape
    raster = np.zeros((rows, cols, 4), dtype=np.uint8)
    for block, tile in zip(blocks, rgb):
        height = min(block.height, rows - block.y)
        width = min(block.width, cols - block.x)
        if height <= 0 or width <= 0:
            continue
        raster[block.y:block.y + height,
               block.x:block.x + width, :3] = tile[:height, :width]

    # Padding beyond the significant extent stays transparent
    raster[:descriptor.nrows, :descriptor.ncols, 3] = 255
    logger.debug("Segment %d decoded to %d x %d raster (%d blocks)",
                 descriptor.index, rows, cols, len(blocks))
    return raster


def complex_view(raw_plane, rows: int, cols: int,
                 segment_index: int = 0) -> np.ndarray:
    """View an unblocked plane of big-endian float32 I/Q pairs.

    Parameters
    ----------
    raw_plane : buffer
        Pixel bytes holding ``rows * cols`` (real, imaginary) pairs.
    rows : int
        Number of rows.
    cols : int
        Number of columns.
    segment_index : int
        Segment index for error messages.

    Returns
    -------
    np.ndarray
        Zero-copy view, dtype ``>f4``, shape ``(rows, cols, 2)``.
    """
    block = [BlockInfo(0, 0, cols, rows)]
    return block_samples(raw_plane, block, 2, ImageMode.PIXEL, '>f4',
                         segment_index)[0]


def complex_samples(descriptor: SegmentDescriptor, raw_plane) -> np.ndarray:
    """Read a complex segment as ``(nrows, ncols, 2)`` I/Q samples.

    Accepts 32-bit float pairs stored either as two ``R`` bands (any
    interleave) or as one 64-bit ``C`` band. Unblocked planes are
    returned as a zero-copy view; blocked planes are assembled into one
    array cropped to the significant extent.

    Parameters
    ----------
    descriptor : SegmentDescriptor
        Segment layout.
    raw_plane : buffer
        Pixel bytes.

    Returns
    -------
    np.ndarray
        Samples, dtype ``>f4``, shape ``(nrows, ncols, 2)``.

    Raises
    ------
    UnsupportedCompression
        If the data is compressed.
    ValidationError
        If the samples are not 32-bit float I/Q pairs or the plane is
        too short.
    """
    if descriptor.ic != "NC":
        raise UnsupportedCompression(descriptor.ic, descriptor.index)

    pvtype = descriptor.pvtype.value
    if pvtype == "C" and descriptor.nbpp == 64 and descriptor.nbands == 1:
        imode = ImageMode.PIXEL
    elif pvtype == "R" and descriptor.nbpp == 32 and descriptor.nbands == 2:
        imode = descriptor.imode
    else:
        raise ValidationError(
            f"Complex segment {descriptor.index} must hold 32-bit float I/Q "
            f"pairs, got pvtype={pvtype}, nbpp={descriptor.nbpp}, "
            f"nbands={descriptor.nbands}"
        )

    blocks = block_layout(descriptor)
    samples = block_samples(raw_plane, blocks, 2, imode, '>f4',
                            descriptor.index)
    if not descriptor.is_blocked:
        return samples[0]

    rows, cols = descriptor.raster_shape
    assembled = np.zeros((rows, cols, 2), dtype='>f4')
    for block, tile in zip(blocks, samples):
        height = min(block.height, rows - block.y)
        width = min(block.width, cols - block.x)
        if height <= 0 or width <= 0:
            continue
        assembled[block.y:block.y + height,
                  block.x:block.x + width] = tile[:height, :width]
    return assembled[:descriptor.nrows, :descriptor.ncols]
