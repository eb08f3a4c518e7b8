# -*- coding: utf-8 -*-
"""
nitfviz - Thumbnails and animations of NITF image segments.

Decodes raw pixel planes (grayscale, RGB, palette, blocked or not),
remaps complex SAR samples to display intensities, stacks row segments
into one mosaic with aspect-correct area resampling, and writes PNG
stills or looping GIF animations.

Dependencies
------------
numpy
numba
Pillow
sarpy
PyYAML

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
2026-10-15
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from nitfviz.exceptions import (
    NitfVizError,
    ValidationError,
    DependencyError,
    UnsupportedBitDepth,
    UnsupportedRepresentation,
    UnsupportedCompression,
    RowOutOfRange,
    CalibrationDegenerate,
)
from nitfviz.vocabulary import (
    PixelValueType,
    ImageRepresentation,
    ImageMode,
    OutputMode,
)
from nitfviz.IO.models import BandInfo, Segment, SegmentDescriptor, SensorGeometry
from nitfviz.blocks import decode
from nitfviz.mosaic import MosaicIndex
from nitfviz.config import ThumbnailConfig, load_config
from nitfviz.handler import SegmentResult, ThumbnailHandler

__all__ = [
    'NitfVizError',
    'ValidationError',
    'DependencyError',
    'UnsupportedBitDepth',
    'UnsupportedRepresentation',
    'UnsupportedCompression',
    'RowOutOfRange',
    'CalibrationDegenerate',
    'PixelValueType',
    'ImageRepresentation',
    'ImageMode',
    'OutputMode',
    'BandInfo',
    'Segment',
    'SegmentDescriptor',
    'SensorGeometry',
    'decode',
    'MosaicIndex',
    'ThumbnailConfig',
    'load_config',
    'SegmentResult',
    'ThumbnailHandler',
]
