# -*- coding: utf-8 -*-
"""
IO Module - Segment sources, metadata models, and raster writers.

Reads image segment layouts and pixel planes from NITF containers,
extracts SICD collection geometry, and writes display rasters as PNG
stills or GIF animations.

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
2026-10-14
"""

from nitfviz.IO.base import ImageWriter
from nitfviz.IO.gif import GifWriter
from nitfviz.IO.models import BandInfo, Segment, SegmentDescriptor, SensorGeometry
from nitfviz.IO.nitf import NITFSegmentSource, descriptor_from_header
from nitfviz.IO.png import PngWriter
from nitfviz.IO.sicd import is_sicd_xml, read_sensor_geometry

__all__ = [
    'ImageWriter',
    'GifWriter',
    'PngWriter',
    'BandInfo',
    'Segment',
    'SegmentDescriptor',
    'SensorGeometry',
    'NITFSegmentSource',
    'descriptor_from_header',
    'is_sicd_xml',
    'read_sensor_geometry',
]
