#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Single-pass heading scan producing HeadingMatch records
# - Front matter becomes an introduction chapter only when it has content
# - Chapter ids come from an injectable factory (uuid4 by default)
#

"""
chapter_parser.py - Chapter segmentation
========================================

Partitions a list of normalized lines into titled chapters. Every input line
ends up either in exactly one chapter body or as the title of the chapter it
opens.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .chapter_patterns import HEADING_DIALECTS, HeadingDialect, match_heading
from .common_constants import locale_label
from .models import Chapter, Language
from .text_processing import has_meaningful_content

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_chapter_id() -> str:
    """Random chapter identifier."""
    return str(uuid.uuid4())


def counter_id_factory(prefix: str = "chapter") -> IdFactory:
    """Return a factory producing "prefix-1", "prefix-2", ... ids."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@dataclass(frozen=True)
class HeadingMatch:
    """A line recognised as a chapter heading."""

    line_index: int
    title: str
    dialect: str


def find_headings(
    lines: Sequence[str],
    dialects: Sequence[HeadingDialect] = HEADING_DIALECTS,
) -> list[HeadingMatch]:
    """Scan lines once, in order, and collect every heading."""
    headings = []
    for idx, line in enumerate(lines):
        found = match_heading(line, dialects)
        if found is not None:
            dialect, title = found
            headings.append(HeadingMatch(idx, title, dialect))
    return headings


def segment(
    lines: Sequence[str],
    language: Language | str = Language.ZH_CN,
    id_factory: Optional[IdFactory] = None,
    dialects: Optional[Sequence[HeadingDialect]] = None,
) -> list[Chapter]:
    """
    Split normalized lines into chapters.

    - No headings: one chapter holding every line, titled with the
      language's default content title.
    - Otherwise: lines before the first heading form an introduction chapter
      when they contain anything but whitespace, then each heading opens a
      chapter holding the lines up to the next heading. Heading lines are
      consumed as titles and never appear in a chapter body.

    Args:
        lines: Normalized lines (see text_processing.normalize_lines)
        language: Book language, selects default titles
        id_factory: Callable returning a fresh unique id per call
        dialects: Heading dialects to try, in priority order

    Returns:
        Non-empty list of chapters in document order
    """
    language = Language.parse(language)
    make_id = id_factory or new_chapter_id
    headings = find_headings(lines, dialects if dialects is not None else HEADING_DIALECTS)

    if not headings:
        logger.debug("No chapter headings found, using a single chapter")
        return [Chapter.create(make_id(), locale_label(language, "content"), lines)]

    chapters: list[Chapter] = []

    front_matter = lines[: headings[0].line_index]
    if has_meaningful_content(front_matter):
        chapters.append(Chapter.create(make_id(), locale_label(language, "intro"), front_matter, is_intro=True))

    ends = [h.line_index for h in headings[1:]] + [len(lines)]
    for heading, end in zip(headings, ends):
        chapters.append(Chapter.create(make_id(), heading.title, lines[heading.line_index + 1 : end]))

    logger.debug(f"Detected {len(headings)} chapter headings ({len(chapters)} chapters)")
    return chapters
