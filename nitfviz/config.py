# -*- coding: utf-8 -*-
"""
Configuration - Render settings and YAML loading.

``ThumbnailConfig`` gathers everything a render needs besides the input
data: output size, display adjustments, output mode, file naming, and
the resampler's working budget. Settings can be loaded from a YAML file;
command-line flags override file values.

Example ``nitfviz.yaml``::

    size: 512
    brightness: 10
    contrast: 15.0
    mode: animation
    output_dir: thumbs
    fail_fast: false

Dependencies
------------
PyYAML

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
2026-10-14
"""

# Standard library
import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import yaml

# nitfviz internal
from nitfviz.exceptions import ValidationError
from nitfviz.image_processing.resample import BAND_BYTES
from nitfviz.vocabulary import OutputMode

logger = logging.getLogger(__name__)


@dataclass
class ThumbnailConfig:
    """Settings for one render.

    Parameters
    ----------
    size : int
        Square root of the output pixel count.
    brightness : int
        Additive brightness adjustment. ``0`` disables it.
    contrast : float
        Contrast adjustment in percent. ``0.0`` disables it.
    mode : OutputMode
        What to write. ``AUTO`` picks from the segment kinds.
    prefix : str, optional
        Output file name prefix. Defaults to the input file stem.
    output_dir : Path
        Directory output files are written to.
    fail_fast : bool
        Stop at the first segment that fails to render. Otherwise
        failed segments are logged and skipped.
    band_bytes : int
        Bytes of complex samples the resampler reads per band of
        output rows.
    """

    size: int = 256
    brightness: int = 0
    contrast: float = 0.0
    mode: OutputMode = OutputMode.AUTO
    prefix: Optional[str] = None
    output_dir: Path = Path('.')
    fail_fast: bool = True
    band_bytes: int = BAND_BYTES

    def __post_init__(self) -> None:
        if isinstance(self.mode, str):
            try:
                self.mode = OutputMode(self.mode.lower())
            except ValueError:
                choices = ', '.join(m.value for m in OutputMode)
                raise ValidationError(
                    f"Unknown output mode {self.mode!r}; "
                    f"expected one of {choices}"
                ) from None
        self.output_dir = Path(self.output_dir)
        if self.size <= 0:
            raise ValidationError(f"size must be positive, got {self.size}")
        if self.band_bytes <= 0:
            raise ValidationError(
                f"band_bytes must be positive, got {self.band_bytes}"
            )
        self.brightness = int(self.brightness)
        self.contrast = float(self.contrast)

    def replace(self, **changes: Any) -> 'ThumbnailConfig':
        """Copy with ``changes`` applied, skipping ``None`` values."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)


def load_config(path: Union[str, Path]) -> ThumbnailConfig:
    """Load a ``ThumbnailConfig`` from a YAML file.

    Parameters
    ----------
    path : str or Path
        YAML file with any subset of the ``ThumbnailConfig`` fields.

    Returns
    -------
    ThumbnailConfig

    Raises
    ------
    ValidationError
        If the file is not a mapping or names an unknown setting.
    """
    path = Path(path)
    with open(path, 'r') as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ValidationError(
            f"Config {path} must be a mapping, got {type(cfg).__name__}"
        )
    known = {f.name for f in dataclasses.fields(ThumbnailConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValidationError(
            f"Unknown setting(s) in {path}: {', '.join(unknown)}"
        )
    settings: Dict[str, Any] = dict(cfg)
    logger.debug("Loaded config from %s: %s", path, settings)
    return ThumbnailConfig(**settings)
