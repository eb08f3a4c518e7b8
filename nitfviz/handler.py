# -*- coding: utf-8 -*-
"""
Thumbnail Handler - Render image segments and write display products.

Drives the whole render: each displayable segment is decoded and box
filtered to a thumbnail, complex segments are stacked into a mosaic,
calibrated, and area resampled with aspect correction, and the results
are adjusted for display and written as a still PNG, one PNG per
segment, or a looping GIF.

Segments are rendered independently into ``SegmentResult`` records. With
``fail_fast`` the first failure propagates; otherwise failed segments
are logged and left out of the output.

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
2026-10-10

Modified
--------
2026-10-15
"""

# Standard library
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

# Third-party
import numpy as np

# nitfviz internal
from nitfviz.blocks import decode
from nitfviz.config import ThumbnailConfig
from nitfviz.exceptions import NitfVizError, ValidationError
from nitfviz.image_processing.pipeline import Pipeline
from nitfviz.image_processing.remap import calibrate_mosaic
from nitfviz.image_processing.resample import (
    AreaResampler,
    display_aspect,
    thumbnail,
    thumbnail_shape,
)
from nitfviz.IO.gif import GifWriter
from nitfviz.IO.models import Segment, SensorGeometry
from nitfviz.IO.nitf import NITFSegmentSource
from nitfviz.IO.png import PngWriter
from nitfviz.IO.sicd import read_sensor_geometry
from nitfviz.mosaic import MosaicIndex
from nitfviz.vocabulary import OutputMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentResult:
    """Outcome of rendering one segment.

    Parameters
    ----------
    index : int
        Segment index.
    raster : np.ndarray, optional
        RGBA thumbnail, when rendering succeeded.
    error : NitfVizError, optional
        Why rendering failed.
    """

    index: int
    raster: Optional[np.ndarray] = None
    error: Optional[NitfVizError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def gray_to_rgba(gray: np.ndarray) -> np.ndarray:
    """Expand 2D uint8 intensities to an opaque RGBA raster."""
    alpha = np.full(gray.shape, 255, dtype=np.uint8)
    return np.dstack((gray, gray, gray, alpha))


class ThumbnailHandler:
    """Render the image segments of one product.

    Parameters
    ----------
    segments : Sequence[Segment]
        Segments in container order.
    config : ThumbnailConfig, optional
        Render settings. Defaults to ``ThumbnailConfig()``.
    geometry : SensorGeometry, optional
        Collection geometry for aspect correction of complex data.
    stem : str
        Output file prefix used when ``config.prefix`` is not set.

    Examples
    --------
    >>> handler = ThumbnailHandler.from_nitf('collect.ntf')
    >>> handler.run()
    [PosixPath('collect_256.png')]
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        config: Optional[ThumbnailConfig] = None,
        geometry: Optional[SensorGeometry] = None,
        stem: str = 'thumbnail',
    ) -> None:
        if not segments:
            raise ValidationError("No image segments to render")
        self._segments = list(segments)
        self.config = config if config is not None else ThumbnailConfig()
        self.geometry = geometry
        self.stem = stem
        self._adjust = Pipeline.display_adjustment(
            self.config.brightness, self.config.contrast
        )

    @classmethod
    def from_nitf(
        cls,
        filepath: Union[str, Path],
        config: Optional[ThumbnailConfig] = None,
    ) -> 'ThumbnailHandler':
        """Open a NITF file and read its segments and SICD geometry.

        Geometry that is missing or unreadable leaves the mosaic
        path on the raw column-to-row aspect.
        """
        filepath = Path(filepath)
        source = NITFSegmentSource(filepath)
        segments = source.segments()
        geometry = None
        if any(s.descriptor.is_complex for s in segments):
            xml = source.sicd_xml()
            if xml is None:
                logger.info("No SICD metadata found; using raw aspect")
            else:
                try:
                    geometry = read_sensor_geometry(xml)
                except ValidationError as e:
                    logger.warning("Ignoring SICD geometry: %s", e)
        return cls(segments, config, geometry, stem=filepath.stem)

    @property
    def n_segments(self) -> int:
        return len(self._segments)

    @property
    def prefix(self) -> str:
        return self.config.prefix or self.stem

    def resolve_mode(self) -> OutputMode:
        """The concrete output mode for these segments.

        ``AUTO`` resolves to ``SINGLE`` for one segment, ``MOSAIC`` when
        every segment is complex, and ``ANIMATION`` otherwise.
        """
        mode = self.config.mode
        if mode is not OutputMode.AUTO:
            return mode
        if self.n_segments == 1:
            return OutputMode.SINGLE
        if all(s.descriptor.is_complex for s in self._segments):
            return OutputMode.MOSAIC
        return OutputMode.ANIMATION

    # ── Rendering ────────────────────────────────────────────────────

    def _render_complex(self, segments: Sequence[Segment]) -> np.ndarray:
        mosaic = MosaicIndex.from_segments(
            [s.descriptor for s in segments], [s.plane for s in segments]
        )
        index = segments[0].descriptor.index if len(segments) == 1 else None
        calibration = calibrate_mosaic(mosaic, index)
        n_rows, n_cols = mosaic.shape
        aspect = display_aspect(n_rows, n_cols, self.geometry)
        out_shape = thumbnail_shape(aspect, self.config.size)
        logger.debug("Thumbnail dimensions: %d X %d", out_shape[1], out_shape[0])
        resampler = AreaResampler(out_shape, self.config.band_bytes)
        gray = resampler.resample(mosaic, calibration)
        return self._adjust.apply(gray_to_rgba(gray))

    def render_segment(self, index: int) -> np.ndarray:
        """Render one segment to an adjusted RGBA thumbnail.

        Parameters
        ----------
        index : int
            Segment index.

        Returns
        -------
        np.ndarray
            uint8 ``(rows, cols, 4)`` raster.

        Raises
        ------
        NitfVizError
            If the segment cannot be decoded or calibrated.
        """
        segment = self._segments[index]
        descriptor = segment.descriptor
        if descriptor.is_complex:
            return self._render_complex([segment])
        raster = decode(descriptor, segment.plane)
        aspect = descriptor.ncols / descriptor.nrows
        logger.debug("Original dimensions: %d X %d",
                     descriptor.ncols, descriptor.nrows)
        out_shape = thumbnail_shape(aspect, self.config.size)
        logger.debug("Thumbnail dimensions: %d X %d", out_shape[1], out_shape[0])
        return self._adjust.apply(thumbnail(raster, out_shape))

    def render_mosaic(self) -> np.ndarray:
        """Stack every segment into one complex mosaic and render it."""
        return self._render_complex(self._segments)

    def _result(self, index: int) -> SegmentResult:
        try:
            return SegmentResult(index, raster=self.render_segment(index))
        except NitfVizError as e:
            if self.config.fail_fast:
                raise
            logger.warning("Skipping segment %d: %s", index, e)
            return SegmentResult(index, error=e)

    def render_segments(self) -> List[SegmentResult]:
        """Render every segment in order.

        Returns
        -------
        List[SegmentResult]
            One result per segment. Failed segments only appear when
            ``fail_fast`` is off.
        """
        return [self._result(i) for i in range(self.n_segments)]

    # ── Output ───────────────────────────────────────────────────────

    def _write_png(self, raster: np.ndarray, path: Path) -> Path:
        with PngWriter(path) as writer:
            writer.write(raster)
        logger.info("Finished writing %s", path)
        return path

    def run(self, output_dir: Optional[Union[str, Path]] = None) -> List[Path]:
        """Render and write the products for the resolved output mode.

        Parameters
        ----------
        output_dir : str or Path, optional
            Overrides ``config.output_dir``.

        Returns
        -------
        List[Path]
            Files written, in order.
        """
        out_dir = Path(output_dir) if output_dir is not None \
            else self.config.output_dir
        size = self.config.size
        mode = self.resolve_mode()
        logger.debug("Output mode: %s", mode.value)

        if mode is OutputMode.MOSAIC:
            path = out_dir / f"{self.prefix}_{size}.png"
            return [self._write_png(self.render_mosaic(), path)]

        if mode is OutputMode.SINGLE:
            path = out_dir / f"{self.prefix}_{size}.png"
            return [self._write_png(self.render_segment(0), path)]

        results = self.render_segments()
        rendered = [r for r in results if r.ok]
        if not rendered:
            logger.error("No segment of %d could be rendered", len(results))
            return []

        if mode is OutputMode.INDIVIDUAL:
            return [
                self._write_png(
                    r.raster, out_dir / f"{self.prefix}_{r.index}_{size}.png"
                )
                for r in rendered
            ]

        path = out_dir / f"{self.prefix}_{size}.gif"
        logger.info("Writing %d frame(s)", len(rendered))
        with GifWriter(path) as writer:
            writer.write([r.raster for r in rendered])
        logger.info("Finished writing %s", path)
        return [path]

    def __repr__(self) -> str:
        return (
            f"ThumbnailHandler(segments={self.n_segments}, "
            f"mode={self.config.mode.value}, size={self.config.size})"
        )
