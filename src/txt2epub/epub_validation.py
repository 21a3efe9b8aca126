#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Validation helpers for input manuscript, output EPUB path and cover image
# - load_cover reads a cover file into a Cover value
#

"""
epub_validation.py - Input/output validation for EPUB creation
==============================================================

Filesystem checks performed before a conversion starts, so that problems are
reported as ValidationError instead of surfacing halfway through.
"""

from __future__ import annotations

import os
from pathlib import Path

from .epub_constants import COVER_MEDIA_TYPES
from .models import Cover


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def ensure_input_ok(path: Path) -> None:
    """
    Ensure the manuscript exists and is readable.

    Args:
        path: Path to the text file

    Raises:
        ValidationError: If the file is missing, not a file, or unreadable
    """
    if not path.exists():
        raise ValidationError(f"Input file not found: {path}")
    if not path.is_file():
        raise ValidationError(f"Input path is not a file: {path}")
    if not os.access(path, os.R_OK):
        raise ValidationError(f"No read permission for '{path}'.")


def ensure_output_ok(path: Path) -> None:
    """
    Ensure an EPUB can be written to path.

    Creates missing parent directories.

    Args:
        path: Output file path

    Raises:
        ValidationError: If the suffix is wrong or the location is not writable
    """
    if path.suffix.lower() != ".epub":
        raise ValidationError(f"Output file must have an .epub extension: {path}")
    if path.exists() and path.is_dir():
        raise ValidationError(f"Output path is a directory: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ValidationError(f"Cannot create output directory '{path.parent}': {e}") from e
    if not os.access(path.parent, os.W_OK):
        raise ValidationError(f"No write permission for '{path.parent}'.")


def ensure_cover_ok(path: Path) -> None:
    """
    Ensure the cover image exists and has a supported format.

    Raises:
        ValidationError: If the cover is missing or has an unsupported suffix
    """
    if not path.is_file():
        raise ValidationError(f"Cover file not found: {path}")
    if path.suffix.lower() not in COVER_MEDIA_TYPES:
        supported = "/".join(sorted(COVER_MEDIA_TYPES))
        raise ValidationError(f"Cover must be {supported}: {path.name}")


def load_cover(path: Path) -> Cover:
    """
    Read a cover image into a Cover value.

    Args:
        path: Path to the image

    Returns:
        Cover with the image bytes and MIME type

    Raises:
        ValidationError: If the cover fails validation or cannot be read
    """
    ensure_cover_ok(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValidationError(f"Cannot read cover '{path}': {e}") from e
    return Cover(data=data, mime_type=COVER_MEDIA_TYPES[path.suffix.lower()], file_name=path.name)
