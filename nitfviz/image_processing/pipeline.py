# -*- coding: utf-8 -*-
"""
Pipeline - Composable sequence of image transforms.

Chains multiple ``ImageTransform`` instances into a single callable
pipeline. The output of each transform feeds into the next, so the
display adjustments run in a fixed order (brightness, then contrast).

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
2026-10-13
"""

# Standard library
import logging
from typing import Any, List, Sequence

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.image_processing.base import ImageTransform
from nitfviz.image_processing.intensity import Brighten, Contrast

logger = logging.getLogger(__name__)


class Pipeline(ImageTransform):
    """Sequential chain of image transforms.

    The pipeline itself is an ``ImageTransform``, so it can be nested
    inside other pipelines. An empty pipeline returns its input
    unchanged.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Ordered transforms to apply.

    Examples
    --------
    >>> from nitfviz.image_processing import Brighten, Contrast, Pipeline
    >>> pipe = Pipeline([Brighten(10), Contrast(15.0)])
    >>> adjusted = pipe.apply(raster)
    """

    def __init__(self, steps: Sequence[ImageTransform] = ()) -> None:
        for i, step in enumerate(steps):
            if not isinstance(step, ImageTransform):
                raise TypeError(
                    f"Step {i} is not an ImageTransform: {type(step).__name__}"
                )
        self._steps: List[ImageTransform] = list(steps)

    @classmethod
    def display_adjustment(cls, brightness: int = 0,
                           contrast: float = 0.0) -> 'Pipeline':
        """Brightness then contrast, skipping zero adjustments."""
        steps: List[ImageTransform] = []
        if brightness != 0:
            steps.append(Brighten(brightness))
        if contrast != 0.0:
            steps.append(Contrast(contrast))
        return cls(steps)

    @property
    def steps(self) -> List[ImageTransform]:
        """Shallow copy of the ordered step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline({self._steps!r})"

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply all transforms in sequence.

        Parameters
        ----------
        source : np.ndarray
            Input array.
        **kwargs
            Forwarded to each step's ``apply()``.

        Returns
        -------
        np.ndarray
            Output after every step.
        """
        n = len(self._steps)
        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %r", i + 1, n, step)
            result = step.apply(result, **kwargs)
        return result
