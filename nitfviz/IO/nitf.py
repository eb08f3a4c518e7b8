# -*- coding: utf-8 -*-
"""
NITF Segment Source - Image segment layouts and pixel planes from NITF.

Parses the file and image subheaders with sarpy's ``NITFDetails`` and
exposes each image segment as a ``SegmentDescriptor`` paired with a
read-only memory map of its pixel bytes. Nothing is decoded here; the
planes are handed to ``nitfviz.blocks`` or ``nitfviz.mosaic`` as-is. The
SICD XML data extension, when present, is returned as raw bytes.

Dependencies
------------
sarpy

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
2026-10-09

Modified
--------
2026-10-14
"""

# Standard library
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

# Third-party
import numpy as np

try:
    from sarpy.io.general.base import SarpyIOError
    from sarpy.io.general.nitf import NITFDetails
    _HAS_SARPY = True
except ImportError:
    _HAS_SARPY = False

# nitfviz internal
from nitfviz.exceptions import DependencyError, ValidationError
from nitfviz.IO.models import BandInfo, Segment, SegmentDescriptor
from nitfviz.IO.sicd import is_sicd_xml
from nitfviz.vocabulary import ImageMode, ImageRepresentation, PixelValueType

logger = logging.getLogger(__name__)


def _text(header: Any, name: str) -> str:
    val = getattr(header, name, None)
    if val is None:
        return ""
    if isinstance(val, bytes):
        val = val.decode('ascii', errors='replace')
    return str(val).strip()


def _int(header: Any, name: str, default: int = 0) -> int:
    val = _text(header, name)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValidationError(
            f"Image subheader field {name} is not an integer: {val!r}"
        ) from None


def _code(enum_cls, value: str, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Unknown {field_name} code {value!r}"
        ) from None


def _band_list(header: Any) -> List[Any]:
    bands = getattr(header, 'Bands', None)
    if bands is None:
        return []
    return list(getattr(bands, 'values', bands))


def _band_info(band: Any) -> BandInfo:
    lut = getattr(band, 'LUTD', None)
    if lut is not None:
        lut = np.asarray(lut, dtype=np.uint8)
        if lut.ndim == 1:
            lut = lut.reshape(1, -1)
    return BandInfo(
        irepband=_text(band, 'IREPBAND'),
        isubcat=_text(band, 'ISUBCAT'),
        lut=lut,
    )


def descriptor_from_header(header: Any, index: int = 0) -> SegmentDescriptor:
    """Build a ``SegmentDescriptor`` from a parsed image subheader.

    Parameters
    ----------
    header : Any
        Object exposing the image subheader fields as attributes
        (``NROWS``, ``NCOLS``, ``PVTYPE``, ``IREP``, ``IC``, ``NBPP``,
        ``ABPP``, ``IMODE``, ``NBPR``, ``NBPC``, ``NPPBH``, ``NPPBV``,
        ``Bands``), such as sarpy's ``ImageSegmentHeader``.
    index : int
        Position of the segment in the file.

    Returns
    -------
    SegmentDescriptor

    Raises
    ------
    ValidationError
        If a numeric field does not parse or a code is unknown.
    """
    bands = tuple(_band_info(b) for b in _band_list(header))
    nbands = len(bands) if bands else _int(header, 'NBANDS', 1)
    abpp = _int(header, 'ABPP', 0) or None
    return SegmentDescriptor(
        nrows=_int(header, 'NROWS'),
        ncols=_int(header, 'NCOLS'),
        pvtype=_code(PixelValueType, _text(header, 'PVTYPE'), 'PVTYPE'),
        irep=_code(ImageRepresentation, _text(header, 'IREP'), 'IREP'),
        nbpp=_int(header, 'NBPP'),
        nbands=nbands,
        imode=_code(ImageMode, _text(header, 'IMODE'), 'IMODE'),
        ic=_text(header, 'IC') or "NC",
        nbpr=_int(header, 'NBPR', 1),
        nbpc=_int(header, 'NBPC', 1),
        nppbh=_int(header, 'NPPBH'),
        nppbv=_int(header, 'NPPBV'),
        bands=bands,
        abpp=abpp,
        index=index,
    )


class NITFSegmentSource:
    """Image segments of a NITF 2.1 file.

    Parameters
    ----------
    filepath : str or Path
        Path to the NITF file.

    Raises
    ------
    DependencyError
        If sarpy is not installed.
    FileNotFoundError
        If the file does not exist.
    ValidationError
        If the file cannot be parsed as NITF.

    Examples
    --------
    >>> from nitfviz.IO.nitf import NITFSegmentSource
    >>> source = NITFSegmentSource('collect.ntf')
    >>> for segment in source.segments():
    ...     print(segment.descriptor.nrows, segment.descriptor.ncols)
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        if not _HAS_SARPY:
            raise DependencyError(
                "sarpy is required for NITF parsing. "
                "Install with: pip install sarpy"
            )
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")
        try:
            self._details = NITFDetails(str(self.filepath))
        except (SarpyIOError, ValueError) as e:
            raise ValidationError(
                f"Cannot parse {self.filepath} as NITF: {e}"
            ) from e
        self._descriptors = [
            descriptor_from_header(header, index=i)
            for i, header in enumerate(self._details.img_headers)
        ]
        logger.info(
            "Opened %s: %d image segment(s), %d data extension(s)",
            self.filepath, len(self._descriptors), self.des_count,
        )

    @property
    def image_count(self) -> int:
        return len(self._descriptors)

    @property
    def des_count(self) -> int:
        offsets = self._details.des_segment_offsets
        return 0 if offsets is None else len(offsets)

    def descriptor(self, index: int) -> SegmentDescriptor:
        """Layout of image segment ``index``."""
        return self._descriptors[index]

    def plane(self, index: int) -> np.ndarray:
        """Read-only byte view of image segment ``index``'s pixel data.

        Parameters
        ----------
        index : int
            Image segment index.

        Returns
        -------
        np.ndarray
            1D uint8 memmap, or an empty array for an empty segment.
        """
        offset = int(self._details.img_segment_offsets[index])
        size = int(self._details.img_segment_sizes[index])
        if size == 0:
            return np.empty(0, dtype=np.uint8)
        return np.memmap(
            self.filepath, dtype=np.uint8, mode='r',
            offset=offset, shape=(size,),
        )

    def segments(self) -> List[Segment]:
        """Every image segment in file order."""
        return [
            Segment(self._descriptors[i], self.plane(i))
            for i in range(self.image_count)
        ]

    def sicd_xml(self) -> Optional[bytes]:
        """The first data extension holding SICD XML, if any."""
        if self.des_count == 0:
            return None
        with open(self.filepath, 'rb') as fi:
            for offset, size in zip(self._details.des_segment_offsets,
                                    self._details.des_segment_sizes):
                fi.seek(int(offset))
                data = fi.read(int(size))
                if is_sicd_xml(data):
                    return data
        return None

    def __repr__(self) -> str:
        return (
            f"NITFSegmentSource({str(self.filepath)!r}, "
            f"images={self.image_count})"
        )
