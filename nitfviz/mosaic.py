# -*- coding: utf-8 -*-
"""
Mosaic Index - One logical raster over vertically stacked segments.

Large complex products are split into several image segments that share
a column count and stack top to bottom. ``MosaicIndex`` keeps a
zero-copy view of each segment's I/Q samples and maps a global row to
``(segment, local_row)`` by binary search over the cumulative row
counts. Nothing is copied until rows are requested with ``read_rows``.

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
2026-10-05

Modified
--------
2026-10-12
"""

# Standard library
import logging
from typing import List, Sequence, Tuple

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.blocks import complex_samples, complex_view
from nitfviz.exceptions import RowOutOfRange, ValidationError
from nitfviz.IO.models import SegmentDescriptor

logger = logging.getLogger(__name__)


class MosaicIndex:
    """Read-only view over row-stacked complex segments.

    Parameters
    ----------
    planes : Sequence[buffer]
        Raw planes of big-endian float32 I/Q pairs, top to bottom.
    rows : Sequence[int]
        Row count of each plane. Zero-row segments are allowed.
    ncols : int
        Column count shared by all planes.

    Raises
    ------
    ValidationError
        If the plane and row lists differ in length, a row count is
        negative, ``ncols`` is not positive, or a plane is too short.

    Examples
    --------
    >>> mosaic = MosaicIndex(planes, rows=[100, 50, 30], ncols=512)
    >>> mosaic.resolve(120)
    (1, 20)
    """

    def __init__(
        self,
        planes: Sequence,
        rows: Sequence[int],
        ncols: int,
    ) -> None:
        if len(planes) != len(rows):
            raise ValidationError(
                f"Got {len(planes)} planes but {len(rows)} row counts"
            )
        if ncols <= 0:
            raise ValidationError(f"ncols must be positive, got {ncols}")
        for i_seg, n_rows in enumerate(rows):
            if n_rows < 0:
                raise ValidationError(
                    f"Row count of segment {i_seg} is negative: {n_rows}"
                )
        self._set_arrays([
            complex_view(plane, n_rows, ncols, i_seg)
            for i_seg, (plane, n_rows) in enumerate(zip(planes, rows))
        ], ncols)

    @classmethod
    def from_segments(
        cls,
        descriptors: Sequence[SegmentDescriptor],
        planes: Sequence,
    ) -> 'MosaicIndex':
        """Build a mosaic from complex segment descriptors and planes.

        Blocked segments are assembled; unblocked ones stay zero-copy.

        Raises
        ------
        ValidationError
            If there are no segments, a segment is not complex, or the
            column counts differ.
        """
        if not descriptors or len(descriptors) != len(planes):
            raise ValidationError(
                f"Need matching, non-empty descriptor and plane lists, got "
                f"{len(descriptors)} and {len(planes)}"
            )
        ncols = descriptors[0].ncols
        arrays = []
        for descriptor, plane in zip(descriptors, planes):
            if not descriptor.is_complex:
                raise ValidationError(
                    f"Segment {descriptor.index} is not complex "
                    f"(irep={descriptor.irep.value})"
                )
            if descriptor.ncols != ncols:
                raise ValidationError(
                    f"Segment {descriptor.index} has {descriptor.ncols} "
                    f"columns; mosaic needs {ncols}"
                )
            arrays.append(complex_samples(descriptor, plane))
        mosaic = cls.__new__(cls)
        mosaic._set_arrays(arrays, ncols)
        return mosaic

    def _set_arrays(self, arrays: List[np.ndarray], ncols: int) -> None:
        self._arrays = arrays
        self._ncols = ncols
        counts = np.array([a.shape[0] for a in arrays], dtype=np.int64)
        self._offsets = np.concatenate(([0], np.cumsum(counts)))
        logger.debug("Mosaic of %d segments, rows %s, %d columns",
                     len(arrays), counts.tolist(), ncols)

    @property
    def ncols(self) -> int:
        """Columns shared by every segment."""
        return self._ncols

    @property
    def total_rows(self) -> int:
        """Rows across all segments."""
        return int(self._offsets[-1])

    @property
    def n_segments(self) -> int:
        """Number of segments."""
        return len(self._arrays)

    @property
    def row_counts(self) -> Tuple[int, ...]:
        """Row count of each segment."""
        return tuple(int(n) for n in np.diff(self._offsets))

    @property
    def shape(self) -> Tuple[int, int]:
        """Logical ``(rows, cols)`` of the mosaic."""
        return self.total_rows, self._ncols

    def segment(self, index: int) -> np.ndarray:
        """I/Q samples of one segment, dtype ``>f4``, ``(rows, cols, 2)``."""
        return self._arrays[index]

    def resolve(self, global_row: int) -> Tuple[int, int]:
        """Map a global row to ``(segment_index, local_row)``.

        Parameters
        ----------
        global_row : int
            Row in mosaic coordinates.

        Returns
        -------
        Tuple[int, int]

        Raises
        ------
        RowOutOfRange
            If ``global_row`` is negative or ``>= total_rows``.
        """
        total = self.total_rows
        if global_row < 0 or global_row >= total:
            raise RowOutOfRange(global_row, total)
        # side='right' skips zero-row segments sharing an offset
        i_seg = int(np.searchsorted(self._offsets, global_row,
                                    side='right')) - 1
        return i_seg, int(global_row - self._offsets[i_seg])

    def read_rows(self, start: int, stop: int) -> np.ndarray:
        """Read global rows ``[start, stop)`` across segment boundaries.

        Parameters
        ----------
        start : int
            First row (inclusive).
        stop : int
            Last row (exclusive).

        Returns
        -------
        np.ndarray
            Native float32 I/Q samples, shape ``(stop - start, ncols, 2)``.

        Raises
        ------
        RowOutOfRange
            If the range is not within ``[0, total_rows]``.
        """
        total = self.total_rows
        if start < 0 or start > total:
            raise RowOutOfRange(start, total)
        if stop < start or stop > total:
            raise RowOutOfRange(stop, total)
        if start == stop:
            return np.empty((0, self._ncols, 2), dtype=np.float32)

        pieces = []
        row = start
        while row < stop:
            i_seg, local = self.resolve(row)
            take = min(stop - row, self._arrays[i_seg].shape[0] - local)
            pieces.append(self._arrays[i_seg][local:local + take])
            row += take
        return np.concatenate(pieces).astype(np.float32)

    def __repr__(self) -> str:
        return (f"MosaicIndex(rows={list(self.row_counts)}, "
                f"ncols={self._ncols})")
