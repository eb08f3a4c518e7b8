# -*- coding: utf-8 -*-
"""
Intensity Transforms - Brightness and contrast adjustment of rasters.

Provides reusable ``ImageTransform`` components for the final display
adjustment of 8-bit rasters:

- ``Brighten``: add a signed offset to every color channel
- ``Contrast``: scale color channels about mid-gray by
  ``((100 + c) / 100) ** 2``

Both leave the alpha channel of ``(rows, cols, 2)`` and
``(rows, cols, 4)`` rasters untouched, clamp to ``[0, 255]`` and
truncate back to uint8.

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
2026-10-07

Modified
--------
2026-10-07
"""

# Standard library
from typing import Any

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.image_processing.base import ImageTransform


def _color_channels(source: np.ndarray) -> slice:
    """Slice of the last axis holding color (everything except alpha)."""
    if source.ndim == 3 and source.shape[2] in (2, 4):
        return slice(0, source.shape[2] - 1)
    return slice(None)


def _check_uint8(source: np.ndarray) -> None:
    if source.dtype != np.uint8:
        raise ValidationError(
            f"Expected uint8 raster, got dtype {source.dtype}"
        )


class Brighten(ImageTransform):
    """Add a constant to every color channel.

    Parameters
    ----------
    value : int
        Signed offset. ``0`` leaves the raster unchanged.

    Examples
    --------
    >>> from nitfviz.image_processing.intensity import Brighten
    >>> brighter = Brighten(20).apply(raster)
    """

    def __init__(self, value: int = 0) -> None:
        self.value = int(value)

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the offset.

        Parameters
        ----------
        source : np.ndarray
            uint8 raster of any shape.

        Returns
        -------
        np.ndarray
            New uint8 raster, same shape.
        """
        _check_uint8(source)
        out = source.copy()
        color = _color_channels(source)
        shifted = source[..., color].astype(np.int32) + self.value
        out[..., color] = np.clip(shifted, 0, 255).astype(np.uint8)
        return out

    def __repr__(self) -> str:
        return f"Brighten(value={self.value})"


class Contrast(ImageTransform):
    """Stretch or compress color channels about mid-gray.

    Each channel value ``v`` becomes
    ``((v / 255 - 0.5) * ((100 + c) / 100) ** 2 + 0.5) * 255``.

    Parameters
    ----------
    contrast : float
        Contrast adjustment. Positive values increase contrast,
        negative values reduce it; ``-100`` flattens to mid-gray.

    Examples
    --------
    >>> from nitfviz.image_processing.intensity import Contrast
    >>> punchier = Contrast(25.0).apply(raster)
    """

    def __init__(self, contrast: float = 0.0) -> None:
        self.contrast = float(contrast)

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply the contrast curve.

        Parameters
        ----------
        source : np.ndarray
            uint8 raster of any shape.

        Returns
        -------
        np.ndarray
            New uint8 raster, same shape.
        """
        _check_uint8(source)
        out = source.copy()
        color = _color_channels(source)
        percent = np.float32(((100.0 + self.contrast) / 100.0) ** 2)
        vals = source[..., color].astype(np.float32) / np.float32(255.0)
        vals = ((vals - np.float32(0.5)) * percent + np.float32(0.5)) \
            * np.float32(255.0)
        out[..., color] = np.clip(vals, 0.0, 255.0).astype(np.uint8)
        return out

    def __repr__(self) -> str:
        return f"Contrast(contrast={self.contrast})"
