# -*- coding: utf-8 -*-
"""
Tests for nitfviz.exceptions - error hierarchy and carried context.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-03
"""

import pytest

from nitfviz.exceptions import (
    CalibrationDegenerate,
    DependencyError,
    NitfVizError,
    RowOutOfRange,
    UnsupportedBitDepth,
    UnsupportedCompression,
    UnsupportedRepresentation,
    ValidationError,
)


@pytest.mark.parametrize("error, builtin", [
    (ValidationError("bad"), ValueError),
    (DependencyError("missing"), ImportError),
    (UnsupportedBitDepth(16), ValueError),
    (UnsupportedRepresentation("MULTI"), ValueError),
    (UnsupportedCompression("C3"), ValueError),
    (RowOutOfRange(10, 5), IndexError),
    (CalibrationDegenerate(0.0), ArithmeticError),
])
def test_hierarchy(error, builtin):
    assert isinstance(error, NitfVizError)
    assert isinstance(error, builtin)


def test_segment_in_message():
    assert "segment 4" in str(UnsupportedRepresentation("VPH", 4))
    assert "segment" not in str(UnsupportedRepresentation("VPH"))


def test_bit_depth_reason():
    assert "byte aligned" in str(UnsupportedBitDepth(12))
    assert "only 8-bit" in str(UnsupportedBitDepth(16))


def test_row_context():
    error = RowOutOfRange(180, 180)
    assert (error.row, error.total_rows) == (180, 180)
