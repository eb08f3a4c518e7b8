# -*- coding: utf-8 -*-
"""
GIF Writer Tests - Unit tests for GifWriter.

Dependencies
------------
pytest
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

import numpy as np
import pytest

try:
    from PIL import Image, ImageSequence
    _HAS_PIL = True
except ImportError:
    _HAS_PIL = False

pytestmark = pytest.mark.skipif(
    not _HAS_PIL, reason="Pillow not installed"
)


def _frame(value, shape=(12, 16)):
    frame = np.zeros(shape + (4,), dtype=np.uint8)
    frame[..., :3] = value
    frame[..., 3] = 255
    return frame


class TestGifWriter:
    def test_frames_in_order(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        filepath = tmp_path / "anim.gif"
        with GifWriter(filepath) as writer:
            writer.write([_frame(0), _frame(128), _frame(255)])

        img = Image.open(str(filepath))
        assert img.n_frames == 3
        grays = [
            np.array(f.convert('L'))[0, 0]
            for f in ImageSequence.Iterator(img)
        ]
        assert grays[0] < grays[1] < grays[2]

    def test_loops_forever(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        filepath = tmp_path / "loop.gif"
        with GifWriter(filepath) as writer:
            writer.write([_frame(10), _frame(200)])
        assert Image.open(str(filepath)).info['loop'] == 0

    def test_single_frame(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        filepath = tmp_path / "one.gif"
        with GifWriter(filepath) as writer:
            writer.write([_frame(90)])
        img = Image.open(str(filepath))
        assert img.size == (16, 12)
        assert getattr(img, 'n_frames', 1) == 1

    def test_rejects_empty(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        with GifWriter(tmp_path / "x.gif") as writer:
            with pytest.raises(ValueError, match="at least one"):
                writer.write([])

    def test_rejects_float_frame(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        with GifWriter(tmp_path / "x.gif") as writer:
            with pytest.raises(ValueError, match="GIF output needs a uint8"):
                writer.write([_frame(0), np.zeros((12, 16, 4))])

    def test_rejects_bad_duration(self, tmp_path):
        from nitfviz.IO.gif import GifWriter

        with pytest.raises(ValueError):
            GifWriter(tmp_path / "x.gif", duration=0)
