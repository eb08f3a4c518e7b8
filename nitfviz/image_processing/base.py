# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interface for raster transforms.

Defines the ``ImageTransform`` ABC shared by the density remap, the
brightness/contrast adjustments, and the ``Pipeline`` that chains them.
A transform maps one array to another of the same spatial shape and
holds only immutable configuration, so one instance can be applied from
many threads.

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
2026-10-10
"""

# Standard library
import logging
from abc import ABC, abstractmethod
from typing import Any

# Third-party
import numpy as np

logger = logging.getLogger(__name__)


class ImageTransform(ABC):
    """
    Abstract base class for dense raster transforms.

    Subclasses implement ``apply()``; calling the instance is the same
    as calling ``apply()``.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageTransform':
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform.

        Parameters
        ----------
        source : np.ndarray
            Input array.
        **kwargs
            Transform-specific options.

        Returns
        -------
        np.ndarray
            Transformed array.
        """
        pass

    def __call__(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        return self.apply(source, **kwargs)
