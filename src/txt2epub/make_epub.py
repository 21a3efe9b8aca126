#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
make_epub.py – build an EPUB from a plain-text novel
====================================================

* Reads a manuscript of unknown encoding and decodes it (``encoding_resolver``).
* Normalizes it into trimmed lines (``text_processing``).
* Splits it into chapters on headings such as **“第十章 标题”** or
  **“Chapter 12”** (``chapter_parser``), with an introduction chapter for
  any front matter.
* Applies optional renames and merges, addressed by 1-based chapter position
  (``chapter_ops``).
* Writes an EPUB 3 book (``epub_generator``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

from .chapter_ops import merge_with_previous, rename_chapter
from .chapter_parser import IdFactory, segment
from .chapter_patterns import HeadingDialect, build_dialects
from .common_constants import AUTO_ENCODING
from .encoding_resolver import read_text_file
from .epub_constants import PARAGRAPH_MODE_LINE
from .epub_generator import write_epub
from .epub_validation import ensure_input_ok, ensure_output_ok, load_cover
from .models import BookMeta, Chapter, Language, ReadResult
from .text_processing import normalize_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """What a conversion produced."""

    output_path: Path
    read_result: ReadResult
    chapters: list[Chapter]


def load_chapters(
    txt_path: Path,
    language: Language | str = Language.ZH_CN,
    encoding_choice: str | None = AUTO_ENCODING,
    dialects: Optional[Sequence[HeadingDialect]] = None,
    id_factory: Optional[IdFactory] = None,
    logger: logging.Logger | None = None,
) -> tuple[ReadResult, list[Chapter]]:
    """
    Read a manuscript and split it into chapters.

    Args:
        txt_path: Path to the text file
        language: Book language
        encoding_choice: "auto" or an explicit encoding
        dialects: Heading dialects (default: built-in ones)
        id_factory: Chapter id factory (default: uuid4)
        logger: Optional logger

    Returns:
        Tuple of (ReadResult, chapters)

    Raises:
        ValidationError: If the input file is missing or unreadable
        OSError: If reading fails
    """
    if logger is None:
        logger = globals()["logger"]

    ensure_input_ok(txt_path)
    read_result = read_text_file(txt_path, encoding_choice, logger=logger)
    lines = normalize_lines(read_result.text)
    chapters = segment(lines, language, id_factory=id_factory, dialects=dialects)
    logger.info(f"Parsed {len(lines)} lines into {len(chapters)} chapters")
    return read_result, chapters


def apply_edits(
    chapters: Sequence[Chapter],
    renames: Optional[Mapping[int, str]] = None,
    merges: Optional[Iterable[int]] = None,
    logger: logging.Logger | None = None,
) -> list[Chapter]:
    """
    Apply renames and merges addressed by 1-based chapter position.

    Positions refer to the list as passed in. Renames are applied first,
    then merges from the highest position down so that earlier positions
    keep pointing at the same chapters. Positions out of range are skipped.

    Args:
        chapters: Chapters as produced by the segmenter
        renames: {position: new title}
        merges: Positions of chapters to fold into their predecessor

    Returns:
        The edited chapter list
    """
    if logger is None:
        logger = globals()["logger"]

    original = list(chapters)
    result = list(original)

    def _chapter_at(position: int) -> Chapter | None:
        if 1 <= position <= len(original):
            return original[position - 1]
        logger.warning(f"Chapter position {position} is out of range (1-{len(original)}), ignored")
        return None

    for position, title in (renames or {}).items():
        target = _chapter_at(position)
        if target is not None:
            result = rename_chapter(result, target.id, title)

    for position in sorted(set(merges or ()), reverse=True):
        target = _chapter_at(position)
        if target is None:
            continue
        if position == 1:
            logger.warning("Chapter 1 has no predecessor and cannot be merged")
            continue
        result = merge_with_previous(result, target.id)

    return result


def create_epub_from_txt_file(
    txt_path: Path,
    output_path: Path | None = None,
    title: str | None = None,
    author: str = "",
    language: Language | str = Language.ZH_CN,
    encoding_choice: str | None = AUTO_ENCODING,
    cover_path: Path | None = None,
    paragraph_mode: str = PARAGRAPH_MODE_LINE,
    custom_css: str | None = None,
    extra_patterns: Iterable[str] | None = None,
    renames: Optional[Mapping[int, str]] = None,
    merges: Optional[Iterable[int]] = None,
    metadata: dict[str, Any] | None = None,
    logger: logging.Logger | None = None,
) -> ConversionResult:
    """
    Convert a plain-text novel to an EPUB file.

    Args:
        txt_path: Path to the text file
        output_path: Where to write the EPUB (default: txt_path with .epub)
        title: Book title (default: input file stem)
        author: Book author
        language: Book language
        encoding_choice: "auto" or an explicit encoding
        cover_path: Optional cover image (.jpg/.jpeg/.png/.gif)
        paragraph_mode: "line" or "block"
        custom_css: Optional stylesheet content
        extra_patterns: Extra heading regexes tried after the built-in ones
        renames: {1-based position: new title}
        merges: 1-based positions to merge into their predecessor
        metadata: Optional extra OPF metadata
        logger: Optional logger

    Returns:
        ConversionResult with the written path, decoding info and chapters

    Raises:
        ValidationError: If there are issues with inputs
        ValueError: If an extra pattern is invalid
        OSError: If there are file system errors
    """
    if logger is None:
        logger = globals()["logger"]

    txt_path = Path(txt_path)
    output_path = Path(output_path) if output_path else txt_path.with_suffix(".epub")
    ensure_output_ok(output_path)
    cover = load_cover(Path(cover_path)) if cover_path else None

    read_result, chapters = load_chapters(
        txt_path,
        language,
        encoding_choice,
        dialects=build_dialects(extra_patterns),
        logger=logger,
    )
    chapters = apply_edits(chapters, renames, merges, logger=logger)

    meta = BookMeta(title=title or txt_path.stem, author=author, language=language)
    write_epub(output_path, meta, chapters, cover, paragraph_mode, custom_css, metadata)
    return ConversionResult(output_path=output_path, read_result=read_result, chapters=chapters)
