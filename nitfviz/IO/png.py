# -*- coding: utf-8 -*-
"""
PNG Writer - Write uint8 grayscale, RGB and RGBA rasters to PNG.

Writes still thumbnails using Pillow. PNG is lossless, so reading the
file back reproduces the raster exactly.

Dependencies
------------
Pillow

Author
------
Steven Siebert

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
2026-10-12
"""

# Standard library
from pathlib import Path
from typing import Union

# Third-party
import numpy as np

try:
    from PIL import Image
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

# nitfviz internal
from nitfviz.exceptions import DependencyError
from nitfviz.IO.base import ImageWriter


class PngWriter(ImageWriter):
    """Write a uint8 raster to a PNG file.

    Accepts ``(rows, cols)`` grayscale, ``(rows, cols, 3)`` RGB and
    ``(rows, cols, 4)`` RGBA arrays.

    Parameters
    ----------
    filepath : str or Path
        Output PNG file path.

    Raises
    ------
    DependencyError
        If Pillow is not installed.

    Examples
    --------
    >>> from nitfviz.IO.png import PngWriter
    >>> with PngWriter('thumb.png') as writer:
    ...     writer.write(raster)
    """

    format_name = 'PNG'

    def __init__(self, filepath: Union[str, Path]) -> None:
        if not _HAS_PIL:
            raise DependencyError(
                "Pillow is required for PNG writing. "
                "Install with: pip install Pillow"
            )
        super().__init__(filepath)

    def write(self, data: np.ndarray) -> None:
        """Write a raster to the PNG file.

        Parameters
        ----------
        data : np.ndarray
            uint8 raster.

        Raises
        ------
        ValueError
            If the shape is not grayscale, RGB or RGBA, or the dtype is
            not uint8.
        """
        img = Image.fromarray(self.check_frame(data))
        img.save(str(self.filepath), format='PNG')
