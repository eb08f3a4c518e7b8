# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interface for raster writers.

Defines the abstract base class for writing display rasters. Concrete
writers (PNG stills, GIF animations) encode uint8 arrays into an image
container on disk and share the frame validation defined here.

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
2026-10-18
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

import numpy as np

_MODES = {2: 'L', 3: 'RGB', 4: 'RGBA'}


def image_mode(data: np.ndarray) -> str:
    """Pillow mode for a raster shape.

    Parameters
    ----------
    data : np.ndarray
        ``(rows, cols)``, ``(rows, cols, 3)`` or ``(rows, cols, 4)``.

    Returns
    -------
    str
        ``'L'``, ``'RGB'`` or ``'RGBA'``.

    Raises
    ------
    ValueError
        If the shape is none of the above.
    """
    if data.ndim == 2:
        return _MODES[2]
    if data.ndim == 3 and data.shape[2] in (3, 4):
        return _MODES[data.shape[2]]
    raise ValueError(
        f"Expected 2D grayscale (rows, cols), 3D RGB (rows, cols, 3) or "
        f"RGBA (rows, cols, 4), got shape {data.shape}"
    )


class ImageWriter(ABC):
    """
    Abstract base class for display raster writers.

    Attributes
    ----------
    filepath : Path
        Path of the image file to write.
    """

    #: Container name used in error messages.
    format_name = 'image'

    def __init__(self, filepath: Union[str, Path]) -> None:
        self.filepath = Path(filepath)

    def check_frame(self, data: np.ndarray) -> np.ndarray:
        """Validate one display raster and return it C-contiguous.

        Parameters
        ----------
        data : np.ndarray
            uint8 grayscale, RGB or RGBA raster.

        Returns
        -------
        np.ndarray

        Raises
        ------
        ValueError
            If the shape is unsupported or the dtype is not uint8.
        """
        image_mode(data)
        if data.dtype != np.uint8:
            raise ValueError(
                f"{self.format_name} output needs a uint8 raster, "
                f"got dtype {data.dtype}"
            )
        return np.ascontiguousarray(data)

    @abstractmethod
    def write(self, data: Any) -> None:
        """
        Encode display rasters to ``filepath``.

        Parameters
        ----------
        data : Any
            Raster (or rasters) to encode.

        Raises
        ------
        ValueError
            If data shape or type is incompatible with the format.
        """
        pass

    def close(self) -> None:
        """Release resources. Writers here encode in one call."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
