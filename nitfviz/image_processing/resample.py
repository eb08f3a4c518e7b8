# -*- coding: utf-8 -*-
"""
Area Resampler - Aspect-correct, sub-pixel box filter for complex mosaics.

Down-samples a (possibly multi-segment) complex product straight from
its I/Q samples to a thumbnail. Each output pixel covers a real-valued
box of ``x_ratio`` by ``y_ratio`` source samples, and one of four cases
applies depending on whether the box crosses a whole-sample boundary
along each axis:

1. both axes: mean of every covered sample;
2. rows only: the two neighbouring columns' row means, blended by the
   horizontal position of the box centre;
3. columns only: the symmetric blend of two neighbouring rows;
4. neither: bilinear blend of the four neighbouring samples.

Samples are remapped to 8-bit intensity *before* they are averaged.
Averaging raw amplitudes first would change the result because the
remap is nonlinear.

The output grid is processed in bands of rows. For each band only the
source rows it touches are read from the mosaic and remapped, then a
numba ``prange`` kernel fills the band; every output cell is written by
exactly one iteration.

Output dimensions follow the true ground aspect of the collection when
a ``SensorGeometry`` is known (``display_aspect``), so anisotropic pixel
spacing does not stretch the thumbnail.

Dependencies
------------
numba
Pillow

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
2026-10-06

Modified
--------
2026-10-16
"""

# Standard library
import logging
import math
from typing import Optional, Tuple

# Third-party
import numba as nb
import numpy as np
from PIL import Image

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.image_processing.remap import RemapCalibration
from nitfviz.IO.models import SensorGeometry

logger = logging.getLogger(__name__)

#: Default bytes of I/Q samples decoded per output band.
BAND_BYTES = 1 << 28


# ── Numba-parallel kernel ───────────────────────────────────────────────

@nb.njit(parallel=True, cache=True)
def _area_kernel(src, src_row0, n_rows, n_cols, out, out_row0,
                 x_ratio, y_ratio):
    """Fill ``out`` with box-filtered values of ``src``.

    Parameters
    ----------
    src : ndarray, shape (R, n_cols), uint8
        Remapped source rows ``[src_row0, src_row0 + R)``.
    src_row0 : int
        Global row of ``src[0]``.
    n_rows, n_cols : int
        Full source extent.
    out : ndarray, shape (B, out_cols), uint8
        Output rows ``[out_row0, out_row0 + B)``.
    out_row0 : int
        Global output row of ``out[0]``.
    x_ratio, y_ratio : float
        Source samples per output pixel.
    """
    band_rows = out.shape[0]
    out_cols = out.shape[1]

    for i in nb.prange(band_rows * out_cols):
        oy = i // out_cols
        ox = i - oy * out_cols

        bottomf = (out_row0 + oy) * y_ratio
        topf = bottomf + y_ratio
        leftf = ox * x_ratio
        rightf = leftf + x_ratio

        # Whole samples covered by the box
        bottom = min(int(np.ceil(bottomf)), n_rows - 1)
        top = min(max(int(np.ceil(topf)), bottom), n_rows)
        left = min(int(np.ceil(leftf)), n_cols - 1)
        right = min(max(int(np.ceil(rightf)), left), n_cols)

        # Neighbouring samples and the box centre's offset between them
        r0 = min(int(np.floor(bottomf)), n_rows - 1)
        r1 = min(r0 + 1, n_rows - 1)
        c0 = min(int(np.floor(leftf)), n_cols - 1)
        c1 = min(c0 + 1, n_cols - 1)
        fv = min(max(0.5 * (bottomf + topf) - r0, 0.0), 1.0)
        fh = min(max(0.5 * (leftf + rightf) - c0, 0.0), 1.0)

        if bottom != top and left != right:
            acc = 0.0
            for r in range(bottom, top):
                for c in range(left, right):
                    acc += src[r - src_row0, c]
            value = acc / ((top - bottom) * (right - left))
        elif bottom != top:
            n = top - bottom
            s0 = 0.0
            s1 = 0.0
            for r in range(bottom, top):
                s0 += src[r - src_row0, c0]
                s1 += src[r - src_row0, c1]
            a = s0 / n
            b = s1 / n
            value = a + fh * (b - a)
        elif left != right:
            n = right - left
            s0 = 0.0
            s1 = 0.0
            for c in range(left, right):
                s0 += src[r0 - src_row0, c]
                s1 += src[r1 - src_row0, c]
            a = s0 / n
            b = s1 / n
            value = a + fv * (b - a)
        else:
            k_00 = float(src[r0 - src_row0, c0])
            k_01 = float(src[r0 - src_row0, c1])
            k_10 = float(src[r1 - src_row0, c0])
            k_11 = float(src[r1 - src_row0, c1])
            upper = k_00 + fh * (k_01 - k_00)
            lower = k_10 + fh * (k_11 - k_10)
            value = upper + fv * (lower - upper)

        value = min(max(value, 0.0), 255.0)
        out[oy, ox] = int(value)


# ── Output geometry ─────────────────────────────────────────────────────

def display_aspect(
    rows: int,
    cols: int,
    geometry: Optional[SensorGeometry] = None,
) -> float:
    """Width-to-height ratio of the image on the ground.

    Parameters
    ----------
    rows : int
        Source rows.
    cols : int
        Source columns.
    geometry : SensorGeometry, optional
        Collection geometry. Without it the raw ``cols / rows`` is used.

    Returns
    -------
    float
        ``(cols * col_res) / (rows * row_res)``.
    """
    if rows <= 0 or cols <= 0:
        raise ValidationError(
            f"rows and cols must be positive, got rows={rows}, cols={cols}"
        )
    if geometry is None:
        return cols / rows
    row_res, col_res = geometry.resolution
    logger.debug("Found resolution %g X %g", row_res, col_res)
    if not (math.isfinite(row_res) and math.isfinite(col_res)) \
            or row_res <= 0 or col_res <= 0:
        raise ValidationError(
            f"Sensor geometry gives unusable resolution "
            f"({row_res}, {col_res})"
        )
    return (cols * col_res) / (rows * row_res)


def thumbnail_shape(aspect: float, size: int) -> Tuple[int, int]:
    """Output ``(rows, cols)`` holding about ``size**2`` pixels.

    ``cols = floor(sqrt(aspect * size**2))`` and
    ``rows = floor(size**2 / cols)``, each at least 1.

    Parameters
    ----------
    aspect : float
        Width-to-height ratio.
    size : int
        Square root of the target pixel count.
    """
    if size <= 0:
        raise ValidationError(f"size must be positive, got {size}")
    if not math.isfinite(aspect) or aspect <= 0:
        raise ValidationError(f"aspect must be positive, got {aspect}")
    max_size = float(size) ** 2
    out_cols = max(1, int(math.sqrt(aspect * max_size)))
    out_rows = max(1, int(max_size / out_cols))
    return out_rows, out_cols


def thumbnail(raster: np.ndarray, out_shape: Tuple[int, int]) -> np.ndarray:
    """Box-filter resize a decoded raster with Pillow.

    Parameters
    ----------
    raster : np.ndarray
        uint8 raster, ``(rows, cols)``, ``(rows, cols, 3)`` or
        ``(rows, cols, 4)``.
    out_shape : Tuple[int, int]
        Output ``(rows, cols)``.

    Returns
    -------
    np.ndarray
        Resized uint8 raster with the same channel count.
    """
    out_rows, out_cols = out_shape
    if raster.shape[:2] == (out_rows, out_cols):
        return raster.copy()
    image = Image.fromarray(np.ascontiguousarray(raster))
    resized = image.resize((out_cols, out_rows), Image.Resampling.BOX)
    return np.asarray(resized, dtype=np.uint8).copy()


# ── Resampling ──────────────────────────────────────────────────────────

def area_filter(remapped: np.ndarray, out_shape: Tuple[int, int]) -> np.ndarray:
    """Box-filter an already remapped intensity image.

    Parameters
    ----------
    remapped : np.ndarray
        2D uint8 intensities.
    out_shape : Tuple[int, int]
        Output ``(rows, cols)``.

    Returns
    -------
    np.ndarray
        uint8 array of ``out_shape``.
    """
    remapped = np.ascontiguousarray(remapped, dtype=np.uint8)
    if remapped.ndim != 2 or remapped.size == 0:
        raise ValidationError(
            f"Expected non-empty 2D intensities, got shape {remapped.shape}"
        )
    n_rows, n_cols = remapped.shape
    out_rows, out_cols = _check_shape(out_shape)
    out = np.zeros((out_rows, out_cols), dtype=np.uint8)
    _area_kernel(remapped, 0, n_rows, n_cols, out, 0,
                 n_cols / out_cols, n_rows / out_rows)
    return out


def _check_shape(out_shape: Tuple[int, int]) -> Tuple[int, int]:
    out_rows, out_cols = (int(v) for v in out_shape)
    if out_rows <= 0 or out_cols <= 0:
        raise ValidationError(f"Output shape must be positive, got {out_shape}")
    return out_rows, out_cols


class AreaResampler:
    """Remap-then-average down-sampler for complex mosaics.

    Parameters
    ----------
    out_shape : Tuple[int, int]
        Output ``(rows, cols)``.
    band_bytes : int
        Budget of decoded I/Q bytes per band of output rows.

    Examples
    --------
    >>> from nitfviz.mosaic import MosaicIndex
    >>> from nitfviz.image_processing.remap import calibrate_mosaic
    >>> mosaic = MosaicIndex(planes, rows, ncols)
    >>> resampler = AreaResampler((256, 192))
    >>> gray = resampler.resample(mosaic, calibrate_mosaic(mosaic))
    """

    def __init__(self, out_shape: Tuple[int, int],
                 band_bytes: int = BAND_BYTES) -> None:
        self.out_shape = _check_shape(out_shape)
        if band_bytes <= 0:
            raise ValidationError(
                f"band_bytes must be positive, got {band_bytes}"
            )
        self.band_bytes = band_bytes

    def resample(self, mosaic, calibration: RemapCalibration) -> np.ndarray:
        """Down-sample ``mosaic`` to ``out_shape``.

        Parameters
        ----------
        mosaic : MosaicIndex
            Source samples.
        calibration : RemapCalibration
            Remap applied to every source sample before averaging.

        Returns
        -------
        np.ndarray
            uint8 intensities of ``out_shape``.
        """
        n_rows, n_cols = mosaic.shape
        if n_rows == 0:
            raise ValidationError("Cannot resample an empty mosaic")
        out_rows, out_cols = self.out_shape
        x_ratio = n_cols / out_cols
        y_ratio = n_rows / out_rows

        row_bytes = n_cols * 8
        src_rows_budget = max(1, self.band_bytes // row_bytes)
        band = max(1, int(src_rows_budget / max(y_ratio, 1.0)))
        logger.debug("Resampling %d X %d -> %d X %d in bands of %d rows",
                     n_rows, n_cols, out_rows, out_cols, band)

        out = np.zeros((out_rows, out_cols), dtype=np.uint8)
        for out_row0 in range(0, out_rows, band):
            out_row1 = min(out_rows, out_row0 + band)
            src_lo = min(max(0, int(math.floor(out_row0 * y_ratio)) - 1),
                         n_rows - 1)
            src_hi = min(n_rows, int(math.ceil(out_row1 * y_ratio)) + 2)
            remapped = calibration.apply(mosaic.read_rows(src_lo, src_hi))
            _area_kernel(remapped, src_lo, n_rows, n_cols,
                         out[out_row0:out_row1], out_row0, x_ratio, y_ratio)
        return out


def area_resample(
    mosaic,
    calibration: RemapCalibration,
    out_shape: Tuple[int, int],
    band_bytes: int = BAND_BYTES,
) -> np.ndarray:
    """Functional form of :meth:`AreaResampler.resample`."""
    return AreaResampler(out_shape, band_bytes).resample(mosaic, calibration)
