# -*- coding: utf-8 -*-
"""
SICD XML - Extract collection geometry from a SICD metadata document.

Complex NITF products carry their SICD metadata as an XML data extension
segment. Only the four values needed for aspect correction are read:
row and column sample spacing from ``Grid`` and the grazing and twist
angles from ``SCPCOA``. Namespaces are matched with ``{*}`` wildcards so
every SICD version parses the same way.

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
2026-10-12
"""

# Standard library
import logging
import xml.etree.ElementTree as ET
from typing import Optional, Union

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.IO.models import SensorGeometry

logger = logging.getLogger(__name__)


def _xml_float(elem: Optional[ET.Element], path: str) -> Optional[float]:
    val = elem.findtext(path) if elem is not None else None
    return float(val) if val is not None else None


def _parse(xml: Union[str, bytes]) -> Optional[ET.Element]:
    if isinstance(xml, bytes):
        xml = xml.rstrip(b'\x00 \r\n\t')
    try:
        return ET.fromstring(xml)
    except ET.ParseError:
        return None


def is_sicd_xml(xml: Union[str, bytes]) -> bool:
    """Whether ``xml`` is a SICD metadata document."""
    root = _parse(xml)
    if root is None:
        return False
    return root.tag.rsplit('}', 1)[-1] == 'SICD'


def read_sensor_geometry(xml: Union[str, bytes]) -> SensorGeometry:
    """Read sample spacing and collection angles from SICD XML.

    Parameters
    ----------
    xml : str or bytes
        SICD XML document.

    Returns
    -------
    SensorGeometry

    Raises
    ------
    ValidationError
        If the document does not parse or any of ``Grid/Row/SS``,
        ``Grid/Col/SS``, ``SCPCOA/GrazeAng`` or ``SCPCOA/TwistAng`` is
        missing.
    """
    root = _parse(xml)
    if root is None:
        raise ValidationError("SICD metadata is not well-formed XML")

    values = {
        'row_sample_spacing': _xml_float(root, '{*}Grid/{*}Row/{*}SS'),
        'col_sample_spacing': _xml_float(root, '{*}Grid/{*}Col/{*}SS'),
        'graze_angle': _xml_float(root, '{*}SCPCOA/{*}GrazeAng'),
        'twist_angle': _xml_float(root, '{*}SCPCOA/{*}TwistAng'),
    }
    missing = [name for name, val in values.items() if val is None]
    if missing:
        raise ValidationError(
            f"SICD metadata is missing {', '.join(missing)}"
        )
    geometry = SensorGeometry(**values)
    logger.debug("SICD geometry: %s", geometry)
    return geometry
