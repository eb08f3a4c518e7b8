# -*- coding: utf-8 -*-
"""
Resampler Tests - Unit tests for the area-weighted down-sampler.

Covers the four box cases on uniform and known inputs, output geometry
(aspect and dimensions), banded processing, and the Pillow thumbnail.

Dependencies
------------
pytest
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
2026-10-08

Modified
--------
2026-10-14
"""

# Standard library
import math

# Third-party
import numpy as np
import pytest

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.image_processing.remap import RemapCalibration
from nitfviz.image_processing.resample import (
    AreaResampler,
    area_filter,
    area_resample,
    display_aspect,
    thumbnail,
    thumbnail_shape,
)
from nitfviz.IO.models import SensorGeometry
from nitfviz.mosaic import MosaicIndex


def _plane(pairs):
    return np.asarray(pairs, dtype='>f4').tobytes()


def _random_mosaic(rows, ncols, seed=0):
    rng = np.random.default_rng(seed)
    planes = [
        _plane(rng.normal(size=(n, ncols, 2)) * 5.0) for n in rows
    ]
    return MosaicIndex(planes, rows, ncols)


# ---------------------------------------------------------------------------
# Box cases
# ---------------------------------------------------------------------------

class TestAreaFilterUniform:
    """A uniform source gives the same value in every case."""

    @pytest.mark.parametrize("k", [0, 1, 77, 128, 255])
    @pytest.mark.parametrize("src_shape, out_shape", [
        ((8, 8), (2, 2)),      # both axes cover whole samples
        ((2, 2), (4, 4)),      # all four cases
        ((3, 5), (7, 2)),      # mixed
        ((9, 4), (2, 11)),
    ])
    def test_uniform(self, k, src_shape, out_shape):
        src = np.full(src_shape, k, dtype=np.uint8)
        out = area_filter(src, out_shape)
        assert out.shape == out_shape
        assert np.all(out == k)


class TestAreaFilterCases:
    @pytest.fixture
    def upsampled(self):
        # 2x2 -> 4x4: pixel (0, 0) covers whole samples on both axes,
        # (0, 1) only vertically, (1, 0) only horizontally, (1, 1) neither
        src = np.array([[0, 100], [200, 40]], dtype=np.uint8)
        return area_filter(src, (4, 4))

    def test_box_average(self, upsampled):
        assert upsampled[0, 0] == 0

    def test_vertical_only(self, upsampled):
        # Columns 0 and 1 averaged over row 0, blended 0.75 toward column 1
        assert upsampled[0, 1] == 75

    def test_horizontal_only(self, upsampled):
        # Rows 0 and 1 averaged over column 0, blended 0.75 toward row 1
        assert upsampled[1, 0] == 150

    def test_bilinear(self, upsampled):
        # upper 75, lower 80, blended 0.75 -> 78.75
        assert upsampled[1, 1] == 78

    def test_block_means(self):
        src = np.arange(16, dtype=np.uint8).reshape(4, 4)
        out = area_filter(src, (2, 2))
        # Means of the 2x2 quadrants, truncated
        np.testing.assert_array_equal(out, [[2, 4], [10, 12]])

    def test_identity_size(self):
        src = np.random.randint(0, 256, (5, 6), dtype=np.uint8)
        np.testing.assert_array_equal(area_filter(src, (5, 6)), src)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            area_filter(np.zeros((0, 4), dtype=np.uint8), (1, 1))

    def test_rejects_bad_shape(self):
        with pytest.raises(ValidationError):
            area_filter(np.zeros((4, 4), dtype=np.uint8), (0, 2))


# ---------------------------------------------------------------------------
# Complex mosaics
# ---------------------------------------------------------------------------

class TestAreaResampler:
    def test_uniform_complex(self):
        rows = [6, 3, 5]
        planes = []
        for n in rows:
            pairs = np.zeros((n, 7, 2))
            pairs[..., 0] = 0.3
            pairs[..., 1] = 0.4
            planes.append(_plane(pairs))
        mosaic = MosaicIndex(planes, rows, 7)
        cal = RemapCalibration.from_mean(5.0)
        k = cal.apply(np.array([[0.3, 0.4]], dtype='>f4'))[0]

        for out_shape in [(3, 2), (4, 4), (20, 15), (14, 7)]:
            out = area_resample(mosaic, cal, out_shape)
            assert out.shape == out_shape
            assert np.all(out == k)

    def test_matches_remap_then_filter(self):
        mosaic = _random_mosaic([10, 7, 13], 9)
        cal = RemapCalibration.from_mean(3.0)
        remapped = cal.apply(mosaic.read_rows(0, 30))
        expected = area_filter(remapped, (6, 4))
        out = AreaResampler((6, 4)).resample(mosaic, cal)
        np.testing.assert_array_equal(out, expected)

    def test_banding_is_invisible(self):
        mosaic = _random_mosaic([17, 11, 23], 13, seed=3)
        cal = RemapCalibration.from_mean(4.0)
        for out_shape in [(7, 5), (19, 6), (60, 20)]:
            whole = AreaResampler(out_shape).resample(mosaic, cal)
            # One source row of 13 pairs per band
            banded = AreaResampler(out_shape, band_bytes=13 * 8) \
                .resample(mosaic, cal)
            np.testing.assert_array_equal(banded, whole)

    def test_rejects_bad_budget(self):
        with pytest.raises(ValidationError):
            AreaResampler((4, 4), band_bytes=0)


# ---------------------------------------------------------------------------
# Output geometry
# ---------------------------------------------------------------------------

class TestDisplayAspect:
    def test_raw_aspect(self):
        assert display_aspect(100, 250) == 2.5

    def test_broadside_geometry(self):
        geom = SensorGeometry(row_sample_spacing=1.0, col_sample_spacing=1.0,
                              graze_angle=60.0, twist_angle=0.0)
        # row resolution doubles at 60 degrees graze
        assert display_aspect(100, 100, geom) == pytest.approx(0.5)

    def test_twist(self):
        geom = SensorGeometry(row_sample_spacing=0.5, col_sample_spacing=0.7,
                              graze_angle=30.0, twist_angle=10.0)
        g = math.radians(30.0)
        t = math.radians(10.0)
        row_res = abs(0.5 / math.cos(g))
        col_res = math.sqrt((0.5 * math.tan(g) * math.tan(t)) ** 2
                            + (0.7 / math.cos(t)) ** 2)
        expected = (300 * col_res) / (200 * row_res)
        assert display_aspect(200, 300, geom) == pytest.approx(expected)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            display_aspect(0, 10)


class TestThumbnailShape:
    def test_square(self):
        assert thumbnail_shape(1.0, 256) == (256, 256)

    def test_wide(self):
        rows, cols = thumbnail_shape(4.0, 100)
        assert cols == 200
        assert rows == 50

    def test_pixel_budget(self):
        for aspect in (0.3, 1.7, 2.2, 9.0):
            rows, cols = thumbnail_shape(aspect, 128)
            assert rows * cols <= 128 ** 2
            assert cols / rows == pytest.approx(aspect, rel=0.05)

    def test_extreme_aspect_keeps_one_pixel(self):
        rows, cols = thumbnail_shape(1e-9, 4)
        assert cols == 1
        assert rows == 16

    def test_rejects_bad_size(self):
        with pytest.raises(ValidationError):
            thumbnail_shape(1.0, 0)


class TestThumbnail:
    def test_rgba_shape(self):
        raster = np.random.randint(0, 256, (40, 60, 4), dtype=np.uint8)
        out = thumbnail(raster, (10, 15))
        assert out.shape == (10, 15, 4)
        assert out.dtype == np.uint8

    def test_uniform_stays_uniform(self):
        raster = np.full((33, 21, 4), 90, dtype=np.uint8)
        raster[..., 3] = 255
        out = thumbnail(raster, (7, 5))
        assert np.all(out[..., :3] == 90)
        assert np.all(out[..., 3] == 255)

    def test_same_size_copies(self):
        raster = np.random.randint(0, 256, (8, 8, 4), dtype=np.uint8)
        out = thumbnail(raster, (8, 8))
        np.testing.assert_array_equal(out, raster)
        assert out is not raster
