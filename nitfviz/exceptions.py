# -*- coding: utf-8 -*-
"""
nitfviz Exception Hierarchy - Domain-specific exceptions for rendering.

Provides a small exception hierarchy that lets callers (the thumbnail
handler, the CLI, or any embedding application) catch rendering errors
distinctly from Python built-in exceptions. All nitfviz exceptions subclass
both ``NitfVizError`` and the appropriate built-in exception.

Errors raised while decoding a specific image segment carry that
segment's index so a best-effort run can report exactly which segment
was skipped and why.

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
2026-10-02

Modified
--------
2026-10-14
"""

# Standard library
from typing import Optional


def _segment_suffix(segment_index: Optional[int]) -> str:
    return f" (segment {segment_index})" if segment_index is not None else ""


class NitfVizError(Exception):
    """Base exception for all nitfviz errors."""


class ValidationError(NitfVizError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for truncated raw planes, mismatched mosaic geometry,
    out-of-range configuration values, and other input validation
    failures.
    """


class DependencyError(NitfVizError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a collaborator needs a package (sarpy, Pillow) that is
    not installed.
    """


class UnsupportedBitDepth(NitfVizError, ValueError):
    """Pixel samples are not 8-bit.

    Parameters
    ----------
    nbpp : int
        Declared number of bits per pixel per band.
    segment_index : int, optional
        Index of the offending image segment.
    """

    def __init__(self, nbpp: int, segment_index: Optional[int] = None) -> None:
        self.nbpp = nbpp
        self.segment_index = segment_index
        if nbpp % 8 != 0:
            reason = "is not byte aligned"
        else:
            reason = "is not supported; only 8-bit samples are decoded"
        super().__init__(
            f"{nbpp} bits per pixel {reason}{_segment_suffix(segment_index)}"
        )


class UnsupportedRepresentation(NitfVizError, ValueError):
    """Image representation has no display decoding.

    Parameters
    ----------
    kind : str
        The image representation code (e.g. ``'MULTI'``, ``'NODISPLY'``).
    segment_index : int, optional
        Index of the offending image segment.
    """

    def __init__(self, kind: str, segment_index: Optional[int] = None) -> None:
        self.kind = kind
        self.segment_index = segment_index
        super().__init__(
            f"Image representation {kind!r} is not implemented"
            f"{_segment_suffix(segment_index)}"
        )


class UnsupportedCompression(NitfVizError, ValueError):
    """Pixel data is stored with a compression code other than ``NC``.

    Parameters
    ----------
    code : str
        The image compression code.
    segment_index : int, optional
        Index of the offending image segment.
    """

    def __init__(self, code: str, segment_index: Optional[int] = None) -> None:
        self.code = code
        self.segment_index = segment_index
        super().__init__(
            f"Image compression {code!r} is not implemented"
            f"{_segment_suffix(segment_index)}"
        )


class RowOutOfRange(NitfVizError, IndexError):
    """Global row index lies outside a mosaic.

    Parameters
    ----------
    row : int
        The requested global row.
    total_rows : int
        Number of rows in the mosaic.
    """

    def __init__(self, row: int, total_rows: int) -> None:
        self.row = row
        self.total_rows = total_rows
        super().__init__(
            f"Row {row} is outside mosaic of {total_rows} rows"
        )


class CalibrationDegenerate(NitfVizError, ArithmeticError):
    """Remap calibration cannot be derived from the data.

    Raised when the mean amplitude is not a positive finite number, which
    would make the logarithmic calibration terms non-finite.

    Parameters
    ----------
    mean : float
        The offending mean amplitude.
    segment_index : int, optional
        Index of the image segment, when calibrating a single segment.
    """

    def __init__(self, mean: float, segment_index: Optional[int] = None) -> None:
        self.mean = mean
        self.segment_index = segment_index
        super().__init__(
            f"Mean amplitude {mean!r} is not positive and finite; "
            f"cannot calibrate remap{_segment_suffix(segment_index)}"
        )
