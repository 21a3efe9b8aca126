#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Argument parser for the txt2epub command
# - --rename POS=TITLE and --merge POS address chapters by position
#

"""
cli_parser.py - Command-line argument parsing for txt2epub
==========================================================

Builds the argument parser, using configuration values as defaults, and
validates the parsed arguments.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from .epub_constants import PARAGRAPH_MODES
from .models import Language


def parse_rename(value: str) -> tuple[int, str]:
    """Parse a POS=TITLE rename argument."""
    position, sep, title = value.partition("=")
    if not sep or not title.strip():
        raise argparse.ArgumentTypeError(f"Expected POS=TITLE, got '{value}'")
    try:
        pos = int(position)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Chapter position must be an integer, got '{position}'") from None
    if pos < 1:
        raise argparse.ArgumentTypeError(f"Chapter position must be 1 or greater, got {pos}")
    return pos, title.strip()


def parse_position(value: str) -> int:
    """Parse a 1-based chapter position."""
    try:
        pos = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Chapter position must be an integer, got '{value}'") from None
    if pos < 1:
        raise argparse.ArgumentTypeError(f"Chapter position must be 1 or greater, got {pos}")
    return pos


def create_parser(config: dict[str, Any]) -> argparse.ArgumentParser:
    """Create the argument parser.

    Args:
        config: Configuration dictionary for default values

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="txt2epub",
        description="Convert a plain-text novel into an EPUB 3 e-book.",
    )

    parser.add_argument("input", type=str, help="Path to the plain-text novel")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output EPUB path (default: input file with .epub extension)",
    )
    parser.add_argument("--title", type=str, help="Book title (default: input file name)")
    parser.add_argument(
        "--author",
        type=str,
        help=f"Book author (default: '{config['epub']['author']}')",
    )
    parser.add_argument(
        "--language",
        type=str,
        choices=[lang.value for lang in Language],
        help=f"Book language (default: {config['text_processing']['language']})",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        help=f"Input encoding, or 'auto' to detect. Common: utf-8, gbk, gb18030, big5 (default: {config['text_processing']['encoding']})",
    )
    parser.add_argument("--cover", type=str, help="Cover image (.jpg, .jpeg, .png, .gif)")
    parser.add_argument(
        "--paragraph-mode",
        dest="paragraph_mode",
        choices=PARAGRAPH_MODES,
        help=f"One paragraph per line, or per block of lines (default: {config['epub']['paragraph_mode']})",
    )
    parser.add_argument("--css", type=str, help="CSS file replacing the default stylesheet")
    parser.add_argument(
        "--rename",
        type=parse_rename,
        action="append",
        default=[],
        metavar="POS=TITLE",
        help="Rename the chapter at 1-based position POS (repeatable)",
    )
    parser.add_argument(
        "--merge",
        type=parse_position,
        action="append",
        default=[],
        metavar="POS",
        help="Merge the chapter at 1-based position POS into the previous one (repeatable)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the detected chapters and exit without writing an EPUB",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file (default: txt2epub_config.yml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Validate parsed arguments, exiting through the parser on errors."""
    if not Path(args.input).is_file():
        parser.error(f"input file not found: {args.input}")
    if args.output and Path(args.output).suffix.lower() != ".epub":
        parser.error("--output must end with .epub")
    if args.cover and not Path(args.cover).is_file():
        parser.error(f"cover file not found: {args.cover}")
    if args.css and not Path(args.css).is_file():
        parser.error(f"CSS file not found: {args.css}")
