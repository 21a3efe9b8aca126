#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Heading dialects are kept as an ordered list of named patterns
# - Added Chinese numeral dialect (第N章) and Latin "Chapter N" dialect
# - Added compile_extra_dialects for user-configured patterns
#

"""
chapter_patterns.py - Heading dialects for chapter detection
============================================================

A heading dialect is a named regular expression plus the rule that extracts
the chapter title from a match. Dialects are tried in list order and the
first one that matches a line wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

# ────────────────────────── regexes & tables ────────────────────────── #

# Digits and Chinese numerals accepted as a chapter number: ASCII and
# full-width digits, simple and compound numerals, both zero glyphs.
CHINESE_NUMERALS = "0-9０-９零一二三四五六七八九十百千万两〇○"

# "第十二章 标题", "第12章：标题", "第１２章"
CHINESE_CHAPTER_RE = re.compile(rf"^第([{CHINESE_NUMERALS}]+)章(?:[\s·、，,：:.-]*)(.*)$")

# Two or more dash-like characters introduce a chapter range
_RANGE_DASHES = r"[-‐‑‒–—―－~～]{2,}"

# "Chapter 3 Title", "1. Chapter 3", "CHAPTER １２", "Chapter 1--3 Omnibus"
LATIN_CHAPTER_RE = re.compile(
    r"^(?:[0-9０-９]+[.．、]?\s*)?"  # optional numeric prefix, dropped from the title
    r"(?P<title>chapter\s*[0-9０-９]+"  # "Chapter" and its number
    rf"(?:\s*{_RANGE_DASHES}\s*[0-9０-９]+)?"  # optional range suffix
    r".*)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class HeadingDialect:
    """
    One recognised heading format.

    title_group names the regex group holding the chapter title; 0 means the
    whole match.
    """

    name: str
    pattern: re.Pattern[str]
    title_group: Union[int, str] = 0

    def extract_title(self, line: str) -> Optional[str]:
        """Return the chapter title if the line is a heading of this dialect."""
        match = self.pattern.match(line)
        if match is None:
            return None
        return match.group(self.title_group)


HEADING_DIALECTS: tuple[HeadingDialect, ...] = (
    HeadingDialect("chinese_numeral", CHINESE_CHAPTER_RE, 0),
    HeadingDialect("latin_chapter", LATIN_CHAPTER_RE, "title"),
)


def match_heading(
    line: str,
    dialects: Sequence[HeadingDialect] = HEADING_DIALECTS,
) -> Optional[tuple[str, str]]:
    """
    Test a line against the heading dialects in priority order.

    Args:
        line: Line to test; it is trimmed before matching
        dialects: Ordered dialects to try

    Returns:
        (dialect name, chapter title) for the first matching dialect, or None
    """
    trimmed = line.strip()
    if not trimmed:
        return None
    for dialect in dialects:
        title = dialect.extract_title(trimmed)
        if title is not None:
            return dialect.name, title
    return None


def compile_extra_dialects(patterns: Iterable[str]) -> list[HeadingDialect]:
    """
    Compile user-supplied heading patterns into dialects.

    The title is the named group "title" when the pattern defines one, the
    whole match otherwise.

    Args:
        patterns: Regular expression sources

    Returns:
        Dialects named "custom_1", "custom_2", ... in input order

    Raises:
        ValueError: If a pattern does not compile
    """
    dialects = []
    for idx, source in enumerate(patterns, 1):
        try:
            compiled = re.compile(source)
        except re.error as e:
            raise ValueError(f"Invalid chapter pattern '{source}': {e}") from e
        group: Union[int, str] = "title" if "title" in compiled.groupindex else 0
        dialects.append(HeadingDialect(f"custom_{idx}", compiled, group))
    return dialects


def build_dialects(extra_patterns: Iterable[str] | None = None) -> list[HeadingDialect]:
    """Built-in dialects followed by any extra user patterns."""
    dialects = list(HEADING_DIALECTS)
    if extra_patterns:
        dialects.extend(compile_extra_dialects(extra_patterns))
    return dialects
