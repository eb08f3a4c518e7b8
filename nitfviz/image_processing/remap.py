# -*- coding: utf-8 -*-
"""
Density Remap - Calibrated amplitude-to-intensity map for complex data.

Complex (I/Q) imagery has a dynamic range far wider than a display can
show. The density remap compresses sample amplitude into an 8-bit
intensity with two calibration terms derived from the data's mean
amplitude:

    c_low    = 0.8 * mean
    c_high   = 40 * c_low
    slope    = (255 - 30) / log10(c_high / c_low)
    constant = 30 - slope * log10(c_low)

and maps each sample as

    density = slope * max(|z|, eps) + constant
    out     = density                    if density <= 127
              0.5 * (density + 127)      otherwise

clamped to [0, 255] and truncated to uint8.

The mean is the sum of finite amplitudes divided by the total sample
count, so non-finite samples lower the mean rather than being skipped.

Calibration is computed once per segment (``calibrate``) or once per
mosaic (``calibrate_mosaic``) and the resulting ``RemapCalibration`` is
immutable, so it can be shared by every parallel remap call.

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
2026-10-04

Modified
--------
2026-10-15
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator, Optional

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.blocks import complex_view
from nitfviz.exceptions import CalibrationDegenerate, ValidationError
from nitfviz.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)

#: Minimum display density.
DMIN = 30.0
#: Ratio of the high to the low calibration amplitude.
MMULT = 40.0
#: Amplitude floor.
EPS = 1e-5
_HALF = 127.0
_F32_MAX = np.finfo(np.float32).max

#: Bytes of I/Q samples held per chunk during the statistics pass.
CHUNK_BYTES = 1 << 26


def amplitude(samples: np.ndarray) -> np.ndarray:
    """Magnitude of I/Q samples, saturated to the finite float32 range.

    Parameters
    ----------
    samples : np.ndarray
        Array of shape ``(..., 2)`` holding (real, imaginary) pairs in
        any byte order.

    Returns
    -------
    np.ndarray
        float32 amplitudes, shape ``samples.shape[:-1]``. Overflowing
        magnitudes saturate to the float32 maximum; NaN passes through.
    """
    real = samples[..., 0].astype(np.float32)
    imag = samples[..., 1].astype(np.float32)
    with np.errstate(over='ignore', invalid='ignore'):
        amp = np.sqrt(real * real + imag * imag)
    np.clip(amp, -_F32_MAX, _F32_MAX, out=amp)
    return amp


def _row_chunks(samples: np.ndarray) -> Iterator[np.ndarray]:
    rows = samples.shape[0]
    if rows == 0:
        return
    row_bytes = max(1, samples[0].size * samples.dtype.itemsize)
    step = max(1, CHUNK_BYTES // row_bytes)
    for start in range(0, rows, step):
        yield samples[start:start + step]


def finite_amplitude_sum(samples: np.ndarray) -> float:
    """Sum of the finite amplitudes of ``samples``.

    Streams over row chunks so memory-mapped planes are never
    materialized in full.

    Parameters
    ----------
    samples : np.ndarray
        I/Q samples, shape ``(rows, cols, 2)``.

    Returns
    -------
    float
        Sum accumulated in float64.
    """
    total = 0.0
    for chunk in _row_chunks(samples):
        amp = amplitude(chunk)
        total += float(np.sum(amp[np.isfinite(amp)], dtype=np.float64))
    return total


@dataclass(frozen=True)
class RemapCalibration:
    """Immutable density remap parameters.

    Parameters
    ----------
    eps : float
        Amplitude floor.
    slope : float
        Density slope.
    constant : float
        Density offset.
    mean : float
        Mean amplitude the parameters were derived from.
    """

    eps: float
    slope: float
    constant: float
    mean: float = math.nan

    @classmethod
    def from_mean(
        cls,
        mean: float,
        segment_index: Optional[int] = None,
    ) -> 'RemapCalibration':
        """Derive the calibration from a mean amplitude.

        Parameters
        ----------
        mean : float
            Mean amplitude of the data.
        segment_index : int, optional
            Segment index for error reporting.

        Raises
        ------
        CalibrationDegenerate
            If ``mean`` is not a positive finite number.
        """
        if not math.isfinite(mean) or mean <= 0.0:
            raise CalibrationDegenerate(mean, segment_index)
        c_low = 0.8 * mean
        c_high = MMULT * c_low
        slope = (255.0 - DMIN) / math.log10(c_high / c_low)
        constant = DMIN - slope * math.log10(c_low)
        return cls(eps=EPS, slope=slope, constant=constant, mean=mean)

    def apply(self, samples: np.ndarray) -> np.ndarray:
        """Remap I/Q samples to 8-bit intensity.

        Parameters
        ----------
        samples : np.ndarray
            Array of shape ``(..., 2)`` holding (real, imaginary) pairs.

        Returns
        -------
        np.ndarray
            uint8 intensities, shape ``samples.shape[:-1]``.
        """
        # fmax drops NaN amplitudes to the floor
        amp = np.fmax(amplitude(samples).astype(np.float64), self.eps)
        density = self.slope * amp + self.constant
        out = np.where(density <= _HALF, density, 0.5 * (density + _HALF))
        np.clip(out, 0.0, 255.0, out=out)
        return out.astype(np.uint8)


def calibrate(
    raw_plane,
    rows: int,
    cols: int,
    segment_index: Optional[int] = None,
) -> RemapCalibration:
    """Calibrate the density remap from one plane of I/Q samples.

    Parameters
    ----------
    raw_plane : buffer
        Row-major big-endian float32 (real, imaginary) pairs.
    rows : int
        Number of rows.
    cols : int
        Number of columns.
    segment_index : int, optional
        Segment index for error reporting.

    Returns
    -------
    RemapCalibration

    Raises
    ------
    ValidationError
        If the plane is shorter than ``rows * cols`` pairs.
    CalibrationDegenerate
        If the mean amplitude is not positive and finite.
    """
    samples = complex_view(raw_plane, rows, cols,
                           0 if segment_index is None else segment_index)
    return calibrate_samples(samples, segment_index)


def calibrate_samples(
    samples: np.ndarray,
    segment_index: Optional[int] = None,
) -> RemapCalibration:
    """Calibrate the density remap from decoded I/Q samples.

    Parameters
    ----------
    samples : np.ndarray
        I/Q samples, shape ``(rows, cols, 2)``.
    segment_index : int, optional
        Segment index for error reporting.

    Returns
    -------
    RemapCalibration
    """
    n_elem = samples.shape[0] * samples.shape[1]
    if n_elem == 0:
        raise CalibrationDegenerate(math.nan, segment_index)
    mean = finite_amplitude_sum(samples) / n_elem
    logger.debug("Mean amplitude %g over %d samples", mean, n_elem)
    return RemapCalibration.from_mean(mean, segment_index)


def calibrate_mosaic(
    mosaic: Any,
    segment_index: Optional[int] = None,
) -> RemapCalibration:
    """Calibrate one density remap across every segment of a mosaic.

    The mean is the sum of finite amplitudes over all segments divided
    by the total sample count of the mosaic.

    Parameters
    ----------
    mosaic : MosaicIndex
        Stacked complex segments.
    segment_index : int, optional
        Segment index for error reporting, when the mosaic holds one
        segment.

    Returns
    -------
    RemapCalibration
    """
    n_elem = mosaic.total_rows * mosaic.ncols
    if n_elem == 0:
        raise CalibrationDegenerate(math.nan, segment_index)
    total = 0.0
    for i_seg in range(mosaic.n_segments):
        total += finite_amplitude_sum(mosaic.segment(i_seg))
    mean = total / n_elem
    logger.debug("Mosaic mean amplitude %g over %d segments",
                 mean, mosaic.n_segments)
    return RemapCalibration.from_mean(mean, segment_index)


def apply(calibration: RemapCalibration, samples: np.ndarray) -> np.ndarray:
    """Remap I/Q samples with ``calibration``.

    See :meth:`RemapCalibration.apply`.
    """
    return calibration.apply(samples)


class DensityRemap(ImageTransform):
    """Density remap as an ``ImageTransform``.

    Accepts complex-valued arrays or ``(..., 2)`` real/imaginary pairs and
    returns uint8 intensity.

    Parameters
    ----------
    calibration : RemapCalibration
        Calibration to apply. Use :meth:`from_data` to derive it from the
        array being remapped.

    Examples
    --------
    >>> from nitfviz.image_processing.remap import DensityRemap
    >>> remap = DensityRemap.from_data(chip)
    >>> gray = remap.apply(chip)
    """

    def __init__(self, calibration: RemapCalibration) -> None:
        if not isinstance(calibration, RemapCalibration):
            raise TypeError(
                f"calibration must be RemapCalibration, got "
                f"{type(calibration).__name__}"
            )
        self.calibration = calibration

    @staticmethod
    def _as_pairs(source: np.ndarray) -> np.ndarray:
        source = np.asarray(source)
        if np.iscomplexobj(source):
            return np.stack([source.real, source.imag], axis=-1)
        if source.ndim < 1 or source.shape[-1] != 2:
            raise ValidationError(
                f"Expected complex array or (..., 2) I/Q pairs, got "
                f"shape {source.shape} dtype {source.dtype}"
            )
        return source

    @classmethod
    def from_data(cls, source: np.ndarray) -> 'DensityRemap':
        """Build a remap calibrated on ``source`` itself."""
        pairs = cls._as_pairs(source)
        if pairs.ndim != 3:
            raise ValidationError(
                f"Calibration needs a 2D image, got shape {pairs.shape[:-1]}"
            )
        return cls(calibrate_samples(pairs))

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Remap to 8-bit intensity.

        Parameters
        ----------
        source : np.ndarray
            Complex array or ``(..., 2)`` I/Q pairs.

        Returns
        -------
        np.ndarray
            uint8 array with the spatial shape of ``source``.
        """
        return self.calibration.apply(self._as_pairs(source))

    def __repr__(self) -> str:
        return (f"DensityRemap(slope={self.calibration.slope:.4g}, "
                f"constant={self.calibration.constant:.4g})")
