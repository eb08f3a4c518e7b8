# -*- coding: utf-8 -*-
"""
GIF Writer - Write a sequence of rasters as a looping animation.

Each raster becomes one frame, in the order given; the animation loops
forever. Frames are palettized by Pillow, so unlike PNG the encoding is
lossy for images with more than 256 colors.

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
from typing import Sequence, Union

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


class GifWriter(ImageWriter):
    """Write uint8 rasters to an infinitely looping GIF.

    Parameters
    ----------
    filepath : str or Path
        Output GIF file path.
    duration : int
        Display time of each frame in milliseconds.

    Raises
    ------
    DependencyError
        If Pillow is not installed.

    Examples
    --------
    >>> from nitfviz.IO.gif import GifWriter
    >>> with GifWriter('segments.gif') as writer:
    ...     writer.write([frame_0, frame_1])
    """

    format_name = 'GIF'

    def __init__(
        self,
        filepath: Union[str, Path],
        duration: int = 500,
    ) -> None:
        if not _HAS_PIL:
            raise DependencyError(
                "Pillow is required for GIF writing. "
                "Install with: pip install Pillow"
            )
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        super().__init__(filepath)
        self.duration = duration

    def write(self, data: Sequence[np.ndarray]) -> None:
        """Write frames to the GIF file.

        Parameters
        ----------
        data : Sequence[np.ndarray]
            uint8 rasters, one per frame, in playback order.

        Raises
        ------
        ValueError
            If there are no frames, or a frame has an unsupported shape
            or is not uint8.
        """
        frames = list(data)
        if not frames:
            raise ValueError("GIF output needs at least one frame")
        images = [Image.fromarray(self.check_frame(f)) for f in frames]
        images[0].save(
            str(self.filepath),
            format='GIF',
            save_all=True,
            append_images=images[1:],
            loop=0,
            duration=self.duration,
        )
