# -*- coding: utf-8 -*-
"""
Command Line - Write a thumbnail or animation of a NITF file.

Usage::

    nitfviz collect.ntf --output thumbs --size 512
    nitfviz multi.ntf --mode individual --brightness 10 --contrast 20
    nitfviz collect.ntf --config nitfviz.yaml --level debug --nitf-log

Settings come from ``--config`` when given; any flag on the command line
overrides the file.

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
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# nitfviz internal
from nitfviz.config import ThumbnailConfig, load_config
from nitfviz.exceptions import NitfVizError
from nitfviz.handler import ThumbnailHandler
from nitfviz.vocabulary import OutputMode

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    'off': logging.CRITICAL + 10,
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'debug': logging.DEBUG,
}


# ── CLI ───────────────────────────────────────────────────────────────


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments. Render settings left unset are ``None``.
    """
    parser = argparse.ArgumentParser(
        prog='nitfviz',
        description=(
            "Render a thumbnail, per-segment thumbnails, or a looping "
            "animation from the image segments of a NITF file."
        ),
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Path to the NITF file.",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output directory, created if missing (default: .).",
    )
    parser.add_argument(
        "-p", "--prefix",
        type=str,
        default=None,
        help="Output file name prefix (default: input file stem).",
    )
    parser.add_argument(
        "-s", "--size",
        type=int,
        default=None,
        help="Square root of the output pixel count (default: 256).",
    )
    parser.add_argument(
        "-b", "--brightness",
        type=int,
        default=None,
        help="Additive brightness adjustment (default: 0).",
    )
    parser.add_argument(
        "-c", "--contrast",
        type=float,
        default=None,
        help="Contrast adjustment in percent (default: 0).",
    )
    parser.add_argument(
        "-m", "--mode",
        choices=[m.value for m in OutputMode],
        default=None,
        help="Output kind (default: auto).",
    )
    parser.add_argument(
        "--individual",
        dest="mode",
        action="store_const",
        const=OutputMode.INDIVIDUAL.value,
        help="Shorthand for --mode individual.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file of render settings.",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Skip segments that fail to render instead of stopping.",
    )
    parser.add_argument(
        "-l", "--level",
        choices=list(LOG_LEVELS),
        default="info",
        help="Log level (default: info).",
    )
    parser.add_argument(
        "--nitf-log",
        action="store_true",
        help="Show log messages from the NITF parser at --level.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, nitf_log: bool = False) -> None:
    """Set up the root logger and the NITF parser's logger."""
    numeric = LOG_LEVELS[level]
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(numeric)
    logging.getLogger('sarpy').setLevel(
        numeric if nitf_log else LOG_LEVELS['off']
    )


def build_config(args: argparse.Namespace) -> ThumbnailConfig:
    """Merge ``--config`` file settings with command-line flags."""
    base = load_config(args.config) if args.config else ThumbnailConfig()
    return base.replace(
        size=args.size,
        brightness=args.brightness,
        contrast=args.contrast,
        mode=OutputMode(args.mode) if args.mode else None,
        prefix=args.prefix,
        output_dir=args.output,
        fail_fast=False if args.best_effort else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line.

    Returns
    -------
    int
        ``0`` when at least one file was written, ``1`` otherwise.
    """
    args = parse_args(argv)
    configure_logging(args.level, args.nitf_log)
    try:
        config = build_config(args)
        config.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Reading %s", args.input)
        handler = ThumbnailHandler.from_nitf(args.input, config)
        written = handler.run()
    except (NitfVizError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0 if written else 1


if __name__ == "__main__":
    raise SystemExit(main())
