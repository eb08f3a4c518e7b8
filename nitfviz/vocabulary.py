# -*- coding: utf-8 -*-
"""
nitfviz Vocabulary - Enumerations shared across decoding and output.

Defines the closed sets of codes that image segment metadata can carry
(pixel value type, image representation, band interleave mode) and the
output modes the thumbnail handler can produce.

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
2026-10-09
"""

from enum import Enum


class PixelValueType(Enum):
    """Pixel value type codes (``PVTYPE``)."""

    INT = "INT"
    B = "B"
    SI = "SI"
    R = "R"
    C = "C"


class ImageRepresentation(Enum):
    """Image representation codes (``IREP``).

    Only ``MONO``, ``RGB`` and ``RGB_LUT`` have a display decoding.
    ``NODISPLY`` segments hold complex samples and are rendered through
    the density remap instead.
    """

    MONO = "MONO"
    RGB = "RGB"
    RGB_LUT = "RGB/LUT"
    MULTI = "MULTI"
    NODISPLY = "NODISPLY"
    NVECTOR = "NVECTOR"
    POLAR = "POLAR"
    VPH = "VPH"
    YCBCR601 = "YCbCr601"


class ImageMode(Enum):
    """Band interleave modes (``IMODE``).

    Only meaningful for multi-band data.
    """

    BLOCK = "B"
    PIXEL = "P"
    ROW = "R"
    SEQUENTIAL = "S"


class OutputMode(Enum):
    """What the thumbnail handler writes.

    ``AUTO`` resolves at run time: one segment gives ``SINGLE``, stacked
    complex segments give ``MOSAIC``, anything else gives ``ANIMATION``.
    """

    AUTO = "auto"
    SINGLE = "single"
    INDIVIDUAL = "individual"
    ANIMATION = "animation"
    MOSAIC = "mosaic"
