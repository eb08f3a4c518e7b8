# -*- coding: utf-8 -*-
"""
NITF Segment Source Tests - Unit tests for NITFSegmentSource.

Subheader translation is tested with stand-in header objects; file
reading uses synthetic NITF files created with rasterio/GDAL.

Dependencies
------------
pytest
rasterio
sarpy

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
2026-10-09

Modified
--------
2026-10-14
"""

from types import SimpleNamespace

import pytest
import numpy as np

try:
    import rasterio
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

try:
    import sarpy  # noqa: F401
    _HAS_SARPY = True
except ImportError:
    _HAS_SARPY = False

from nitfviz.blocks import decode
from nitfviz.exceptions import ValidationError
from nitfviz.IO.nitf import descriptor_from_header
from nitfviz.vocabulary import ImageMode, ImageRepresentation, PixelValueType

requires_files = pytest.mark.skipif(
    not (_HAS_RASTERIO and _HAS_SARPY),
    reason="rasterio and sarpy required",
)


def _header(**overrides):
    fields = dict(
        NROWS='00000064', NCOLS='00000128', PVTYPE='INT', IREP='MONO    ',
        IC='NC', NBPP='08', ABPP='08', IMODE='B', NBPR='0001',
        NBPC='0001', NPPBH='0128', NPPBV='0064',
        Bands=SimpleNamespace(values=[
            SimpleNamespace(IREPBAND='M ', ISUBCAT='      ', LUTD=None),
        ]),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestDescriptorFromHeader:
    def test_mono(self):
        desc = descriptor_from_header(_header(), index=2)
        assert (desc.nrows, desc.ncols) == (64, 128)
        assert desc.pvtype is PixelValueType.INT
        assert desc.irep is ImageRepresentation.MONO
        assert desc.imode is ImageMode.BLOCK
        assert desc.nbands == 1
        assert desc.nbpp == 8
        assert desc.abpp == 8
        assert desc.ic == 'NC'
        assert desc.index == 2
        assert desc.bands[0].irepband == 'M'
        assert not desc.is_blocked

    def test_palette_lut(self):
        lut = np.arange(768, dtype=np.uint8).reshape(3, 256)
        header = _header(
            IREP='RGB/LUT',
            Bands=SimpleNamespace(values=[
                SimpleNamespace(IREPBAND='LU', ISUBCAT='', LUTD=lut),
            ]),
        )
        desc = descriptor_from_header(header)
        assert desc.irep is ImageRepresentation.RGB_LUT
        np.testing.assert_array_equal(desc.lut, lut)

    def test_complex(self):
        header = _header(
            PVTYPE='R', IREP='NODISPLY', NBPP='32', ABPP='32', IMODE='P',
            Bands=SimpleNamespace(values=[
                SimpleNamespace(IREPBAND='  ', ISUBCAT='I', LUTD=None),
                SimpleNamespace(IREPBAND='  ', ISUBCAT='Q', LUTD=None),
            ]),
        )
        desc = descriptor_from_header(header)
        assert desc.is_complex
        assert desc.nbands == 2
        assert desc.imode is ImageMode.PIXEL

    def test_blocked(self):
        header = _header(NBPR='0002', NBPC='0003', NPPBH='0064',
                         NPPBV='0022')
        desc = descriptor_from_header(header)
        assert desc.is_blocked
        assert desc.raster_shape == (66, 128)

    def test_unknown_representation(self):
        with pytest.raises(ValidationError, match="IREP"):
            descriptor_from_header(_header(IREP='BOGUS'))

    def test_bad_integer(self):
        with pytest.raises(ValidationError, match="NROWS"):
            descriptor_from_header(_header(NROWS='abc'))


@pytest.fixture
def nitf_mono(tmp_path):
    """Create a single-band NITF file."""
    filepath = tmp_path / "mono.ntf"
    data = np.random.randint(0, 255, (64, 128), dtype=np.uint8)
    with rasterio.open(
        str(filepath), 'w', driver='NITF',
        height=64, width=128, count=1, dtype='uint8',
    ) as ds:
        ds.write(data, 1)
    return filepath, data


@pytest.fixture
def nitf_rgb(tmp_path):
    """Create a three-band RGB NITF file."""
    filepath = tmp_path / "rgb.ntf"
    data = np.random.randint(0, 255, (3, 50, 100), dtype=np.uint8)
    with rasterio.open(
        str(filepath), 'w', driver='NITF',
        height=50, width=100, count=3, dtype='uint8',
        IREP='RGB',
    ) as ds:
        ds.write(data)
    return filepath, data


@requires_files
class TestNITFSegmentSource:
    def test_descriptor(self, nitf_mono):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath, _ = nitf_mono
        source = NITFSegmentSource(filepath)
        assert source.image_count == 1
        desc = source.descriptor(0)
        assert (desc.nrows, desc.ncols) == (64, 128)
        assert desc.irep is ImageRepresentation.MONO
        assert desc.nbpp == 8

    def test_plane_is_read_only(self, nitf_mono):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath, _ = nitf_mono
        plane = NITFSegmentSource(filepath).plane(0)
        assert plane.size >= 64 * 128
        assert not plane.flags.writeable

    def test_decode_mono(self, nitf_mono):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath, data = nitf_mono
        segment = NITFSegmentSource(filepath).segments()[0]
        raster = decode(segment.descriptor, segment.plane)
        np.testing.assert_array_equal(raster[..., 0], data)

    def test_decode_rgb(self, nitf_rgb):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath, data = nitf_rgb
        segment = NITFSegmentSource(filepath).segments()[0]
        assert segment.descriptor.irep is ImageRepresentation.RGB
        raster = decode(segment.descriptor, segment.plane)
        np.testing.assert_array_equal(raster[..., :3],
                                      np.moveaxis(data, 0, -1))

    def test_no_sicd(self, nitf_mono):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath, _ = nitf_mono
        assert NITFSegmentSource(filepath).sicd_xml() is None

    def test_missing_file(self, tmp_path):
        from nitfviz.IO.nitf import NITFSegmentSource

        with pytest.raises(FileNotFoundError):
            NITFSegmentSource(tmp_path / "nope.ntf")


@pytest.mark.skipif(not _HAS_SARPY, reason="sarpy not installed")
class TestNITFSegmentSourceErrors:
    def test_not_a_nitf(self, tmp_path):
        from nitfviz.IO.nitf import NITFSegmentSource

        filepath = tmp_path / "notes.ntf"
        filepath.write_bytes(b"plain text, no file header" * 20)
        with pytest.raises(ValidationError, match="Cannot parse"):
            NITFSegmentSource(filepath)
