# -*- coding: utf-8 -*-
"""
Tests for nitfviz.image_processing.remap - density remap calibration.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-06
"""

import math

import numpy as np
import pytest

from nitfviz.exceptions import CalibrationDegenerate, ValidationError
from nitfviz.image_processing.remap import (
    DMIN,
    EPS,
    MMULT,
    DensityRemap,
    RemapCalibration,
    amplitude,
    apply,
    calibrate,
    calibrate_mosaic,
    calibrate_samples,
)
from nitfviz.mosaic import MosaicIndex


def _uniform_plane(rows, cols, real=3.0, imag=4.0):
    pairs = np.empty((rows, cols, 2), dtype='>f4')
    pairs[..., 0] = real
    pairs[..., 1] = imag
    return pairs.tobytes()


def _expected(calibration, amp):
    amp = np.maximum(np.asarray(amp, dtype=np.float64), calibration.eps)
    d = calibration.slope * amp + calibration.constant
    d = np.where(d <= 127.0, d, 0.5 * (d + 127.0))
    return np.clip(d, 0.0, 255.0).astype(np.uint8)


# ---------------------------------------------------------------------------
# Amplitude
# ---------------------------------------------------------------------------

class TestAmplitude:
    def test_pythagorean(self):
        pairs = np.array([[3.0, 4.0], [0.0, 0.0], [-6.0, 8.0]], dtype='>f4')
        np.testing.assert_array_equal(amplitude(pairs), [5.0, 0.0, 10.0])

    def test_overflow_saturates(self):
        big = np.finfo(np.float32).max
        pairs = np.array([[big, big]], dtype=np.float32)
        amp = amplitude(pairs)
        assert np.isfinite(amp[0])
        assert amp[0] == np.finfo(np.float32).max

    def test_nan_passes_through(self):
        pairs = np.array([[np.nan, 1.0]], dtype=np.float32)
        assert np.isnan(amplitude(pairs)[0])


# ---------------------------------------------------------------------------
# Calibration
# ---------------------------------------------------------------------------

class TestCalibration:
    def test_closed_form(self):
        cal = calibrate(_uniform_plane(8, 6), 8, 6)
        c_low = 0.8 * 5.0
        c_high = MMULT * c_low
        slope = (255.0 - DMIN) / math.log10(c_high / c_low)
        assert cal.mean == 5.0
        assert cal.eps == EPS
        assert cal.slope == slope
        assert cal.constant == DMIN - slope * math.log10(c_low)

    def test_from_mean_matches_calibrate(self):
        assert calibrate(_uniform_plane(4, 4), 4, 4) \
            == RemapCalibration.from_mean(5.0)

    def test_zero_data_is_degenerate(self):
        with pytest.raises(CalibrationDegenerate) as exc_info:
            calibrate(_uniform_plane(3, 3, 0.0, 0.0), 3, 3, segment_index=2)
        assert exc_info.value.mean == 0.0
        assert exc_info.value.segment_index == 2
        assert isinstance(exc_info.value, ArithmeticError)

    def test_non_finite_mean_is_degenerate(self):
        with pytest.raises(CalibrationDegenerate):
            RemapCalibration.from_mean(float('inf'))

    def test_nan_samples_count_in_denominator(self):
        pairs = np.zeros((2, 2, 2), dtype='>f4')
        pairs[..., 0] = 3.0
        pairs[..., 1] = 4.0
        pairs[1, 1, 0] = np.nan
        cal = calibrate_samples(pairs)
        assert cal.mean == pytest.approx(15.0 / 4.0)

    def test_short_plane(self):
        with pytest.raises(ValidationError):
            calibrate(bytes(8 * 5), 2, 3)

    def test_mosaic_mean_over_total_samples(self):
        planes = [_uniform_plane(2, 4, 3.0, 4.0),
                  _uniform_plane(6, 4, 0.0, 0.0)]
        mosaic = MosaicIndex(planes, [2, 6], 4)
        cal = calibrate_mosaic(mosaic)
        assert cal.mean == pytest.approx(5.0 * 8 / 32)

    def test_mosaic_degenerate_carries_segment(self):
        mosaic = MosaicIndex([_uniform_plane(3, 4, 0.0, 0.0)], [3], 4)
        with pytest.raises(CalibrationDegenerate) as info:
            calibrate_mosaic(mosaic, segment_index=2)
        assert info.value.segment_index == 2


# ---------------------------------------------------------------------------
# Remap
# ---------------------------------------------------------------------------

class TestApply:
    def test_known_values(self):
        cal = RemapCalibration.from_mean(5.0)
        pairs = np.array([[0.0, 0.0], [0.0, 0.5], [3.0, 4.0]], dtype='>f4')
        out = apply(cal, pairs)
        assert out.dtype == np.uint8
        np.testing.assert_array_equal(out, _expected(cal, [0.0, 0.5, 5.0]))
        np.testing.assert_array_equal(out, [0, 15, 255])

    def test_nan_maps_to_floor(self):
        cal = RemapCalibration.from_mean(5.0)
        pairs = np.array([[np.nan, 0.0], [0.0, 0.0]], dtype=np.float32)
        out = cal.apply(pairs)
        assert out[0] == out[1]

    def test_output_shape(self):
        cal = RemapCalibration.from_mean(1.0)
        pairs = np.random.randn(5, 7, 2).astype(np.float32)
        assert cal.apply(pairs).shape == (5, 7)


class TestDensityRemap:
    def test_complex_input(self):
        chip = np.full((4, 4), 3 + 4j, dtype=np.complex64)
        remap = DensityRemap.from_data(chip)
        assert remap.calibration.mean == pytest.approx(5.0)
        result = remap(chip)
        assert result.shape == (4, 4)
        assert result.dtype == np.uint8

    def test_pairs_match_complex(self):
        chip = (np.random.randn(6, 6) + 1j * np.random.randn(6, 6)) \
            .astype(np.complex64)
        pairs = np.stack([chip.real, chip.imag], axis=-1)
        remap = DensityRemap(RemapCalibration.from_mean(1.0))
        np.testing.assert_array_equal(remap.apply(chip), remap.apply(pairs))

    def test_rejects_real_image(self):
        remap = DensityRemap(RemapCalibration.from_mean(1.0))
        with pytest.raises(ValidationError):
            remap.apply(np.ones((4, 3)))

    def test_rejects_non_calibration(self):
        with pytest.raises(TypeError):
            DensityRemap(1.0)
