#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Line normalization for raw decoded text
# - Blank lines are kept as empty strings; they separate sections
#

"""
text_processing.py - Text normalization utilities for txt2epub
==============================================================

Turns a decoded manuscript into the ordered list of trimmed lines consumed by
the chapter segmenter.
"""

from __future__ import annotations

import re

# Line terminators other than a bare LF
_LINE_BREAK_RE = re.compile(r"\r\n?")

# Python's \s already covers U+3000, it is listed for readers
_LEADING_SPACE_RE = re.compile(r"^[\s\u3000]+")
_TRAILING_SPACE_RE = re.compile(r"[\s\u3000]+$")


def normalize_line_breaks(text: str) -> str:
    """Convert CRLF and bare CR terminators to LF."""
    return _LINE_BREAK_RE.sub("\n", text)


def normalize_lines(raw_text: str) -> list[str]:
    """
    Split raw text into trimmed lines.

    - CRLF and CR terminators become LF before splitting.
    - Leading whitespace (full-width space included) and trailing whitespace
      are stripped from every line.
    - Lines that end up empty are kept as "".

    Args:
        raw_text: Decoded file content

    Returns:
        List of lines; a single "" for empty input
    """
    lines = normalize_line_breaks(raw_text).split("\n")
    return [_TRAILING_SPACE_RE.sub("", _LEADING_SPACE_RE.sub("", line)) for line in lines]


def has_meaningful_content(lines: list[str] | tuple[str, ...]) -> bool:
    """Return True if any line has non-whitespace characters."""
    return any(line.strip() for line in lines)
