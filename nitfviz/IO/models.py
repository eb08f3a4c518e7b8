# -*- coding: utf-8 -*-
"""
IO Models - Typed metadata containers for image segments.

Provides the immutable layout record every decoder works from
(``SegmentDescriptor`` with its per-band ``BandInfo``) and the sensor
geometry record (``SensorGeometry``) that drives aspect correction of
complex mosaics. Both are created once by a reader and treated as
read-only for the lifetime of a render. ``Segment`` pairs a descriptor
with the raw pixel bytes it describes.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-02

Modified
--------
2026-10-11
"""

# Standard library
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.vocabulary import ImageMode, ImageRepresentation, PixelValueType


@dataclass(frozen=True)
class BandInfo:
    """Metadata for one band of an image segment.

    Parameters
    ----------
    irepband : str
        Band representation code (``'M'``, ``'R'``, ``'G'``, ``'B'``,
        ``'LU'``, ...).
    isubcat : str
        Band subcategory.
    lut : np.ndarray, optional
        Lookup tables with shape ``(nluts, nelut)``, dtype uint8. Palette
        segments carry three 256-entry tables (red, green, blue) on
        band 0.
    """

    irepband: str = ""
    isubcat: str = ""
    lut: Optional[np.ndarray] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.lut is not None:
            lut = np.asarray(self.lut, dtype=np.uint8)
            if lut.ndim != 2:
                raise ValidationError(
                    f"lut must be 2D (nluts, nelut), got shape {lut.shape}"
                )
            lut.setflags(write=False)
            object.__setattr__(self, 'lut', lut)


@dataclass(frozen=True)
class SegmentDescriptor:
    """Layout metadata for one image segment.

    Field names follow the image subheader they are read from.

    Parameters
    ----------
    nrows : int
        Number of significant rows.
    ncols : int
        Number of significant columns.
    pvtype : PixelValueType
        Pixel value type.
    irep : ImageRepresentation
        Image representation.
    nbpp : int
        Bits per pixel per band.
    nbands : int
        Number of bands.
    imode : ImageMode
        Band interleave mode.
    ic : str
        Image compression code. Only ``'NC'`` is decodable.
    nbpr : int
        Number of blocks per row.
    nbpc : int
        Number of blocks per column.
    nppbh : int
        Pixels per block horizontal. ``0`` means the block spans all
        columns.
    nppbv : int
        Pixels per block vertical. ``0`` means the block spans all rows.
    bands : Tuple[BandInfo, ...]
        Per-band metadata.
    abpp : int, optional
        Actual bits per pixel, informational only.
    index : int
        Position of the segment in its container.
    """

    nrows: int
    ncols: int
    pvtype: PixelValueType = PixelValueType.INT
    irep: ImageRepresentation = ImageRepresentation.MONO
    nbpp: int = 8
    nbands: int = 1
    imode: ImageMode = ImageMode.PIXEL
    ic: str = "NC"
    nbpr: int = 1
    nbpc: int = 1
    nppbh: int = 0
    nppbv: int = 0
    bands: Tuple[BandInfo, ...] = ()
    abpp: Optional[int] = None
    index: int = 0

    def __post_init__(self) -> None:
        if self.nrows <= 0 or self.ncols <= 0:
            raise ValidationError(
                f"nrows and ncols must be positive, got "
                f"nrows={self.nrows}, ncols={self.ncols}"
            )
        if self.nbpr < 1 or self.nbpc < 1:
            raise ValidationError(
                f"nbpr and nbpc must be at least 1, got "
                f"nbpr={self.nbpr}, nbpc={self.nbpc}"
            )
        object.__setattr__(self, 'bands', tuple(self.bands))

    @property
    def block_width(self) -> int:
        """Pixels per block horizontally, resolving the ``0`` sentinel."""
        return self.nppbh if self.nppbh > 0 else self.ncols

    @property
    def block_height(self) -> int:
        """Pixels per block vertically, resolving the ``0`` sentinel."""
        return self.nppbv if self.nppbv > 0 else self.nrows

    @property
    def is_blocked(self) -> bool:
        """Whether pixel data is split into more than one block."""
        return self.nbpr > 1 or self.nbpc > 1

    @property
    def is_complex(self) -> bool:
        """Whether the segment holds complex (I/Q) samples."""
        return (self.irep is ImageRepresentation.NODISPLY
                or self.pvtype is PixelValueType.C)

    @property
    def raster_shape(self) -> Tuple[int, int]:
        """The ``(rows, cols)`` of the decoded raster.

        Axes with fewer than two blocks use the significant extent; tiled
        axes use the full tiled extent, which may exceed it.
        """
        rows = self.nrows if self.nbpc < 2 else self.nbpc * self.block_height
        cols = self.ncols if self.nbpr < 2 else self.nbpr * self.block_width
        return rows, cols

    @property
    def lut(self) -> Optional[np.ndarray]:
        """Palette tables of band 0, shape ``(3, 256)``, if present."""
        if not self.bands:
            return None
        return self.bands[0].lut


@dataclass(frozen=True)
class SensorGeometry:
    """Collection geometry of a complex product.

    Parameters
    ----------
    row_sample_spacing : float
        Row sample spacing (meters).
    col_sample_spacing : float
        Column sample spacing (meters).
    graze_angle : float
        Grazing angle (degrees).
    twist_angle : float
        Twist angle (degrees).
    """

    row_sample_spacing: float
    col_sample_spacing: float
    graze_angle: float = 0.0
    twist_angle: float = 0.0

    @property
    def resolution(self) -> Tuple[float, float]:
        """Ground-projected ``(row_resolution, col_resolution)``.

        ``row = |rss / cos(g)|`` and
        ``col = sqrt((rss tan(g) tan(t))^2 + (css / cos(t))^2)``.
        """
        graze = np.radians(self.graze_angle)
        twist = np.radians(self.twist_angle)
        rss = self.row_sample_spacing
        css = self.col_sample_spacing
        row_res = abs(rss / np.cos(graze))
        col_res = np.sqrt(
            (rss * np.tan(graze) * np.tan(twist)) ** 2
            + (css / np.cos(twist)) ** 2
        )
        return float(row_res), float(col_res)


class Segment(NamedTuple):
    """One image segment: its layout and its raw pixel bytes.

    ``plane`` is any bytes-like object, typically a read-only memmap of
    the segment's data in the container.
    """

    descriptor: SegmentDescriptor
    plane: object
