# -*- coding: utf-8 -*-
"""
Image Processing - Remap, resampling, and display adjustment.

Transforms that turn decoded or complex samples into display rasters:
the calibrated density remap for I/Q data, the aspect-correct area
resampler for complex mosaics, and brightness/contrast adjustment.

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
2026-10-13
"""

from nitfviz.image_processing.base import ImageTransform
from nitfviz.image_processing.intensity import Brighten, Contrast
from nitfviz.image_processing.pipeline import Pipeline
from nitfviz.image_processing.remap import (
    DensityRemap,
    RemapCalibration,
    amplitude,
    calibrate,
    calibrate_mosaic,
    calibrate_samples,
)
from nitfviz.image_processing.resample import (
    AreaResampler,
    area_filter,
    area_resample,
    display_aspect,
    thumbnail,
    thumbnail_shape,
)

__all__ = [
    'ImageTransform',
    'Brighten',
    'Contrast',
    'Pipeline',
    'DensityRemap',
    'RemapCalibration',
    'amplitude',
    'calibrate',
    'calibrate_mosaic',
    'calibrate_samples',
    'AreaResampler',
    'area_filter',
    'area_resample',
    'display_aspect',
    'thumbnail',
    'thumbnail_shape',
]
