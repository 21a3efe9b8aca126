#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - EPUB 3 packaging: build_epub returns the archive bytes, write_epub saves them
# - Optional cover image and cover page
# - Archive is assembled in memory
#

"""
epub_generator.py - EPUB file generation
========================================

Turns chapters and book metadata into an EPUB 3 archive. The mimetype entry
is written first and uncompressed, as the OCF container format requires.
"""

from __future__ import annotations

import io
import logging
import uuid
import zipfile
from pathlib import Path
from typing import Any, Sequence

from .epub_builders import (
    build_chap_xhtml,
    build_container_xml,
    build_content_opf,
    build_cover_xhtml,
    build_nav_xhtml,
    build_style_css,
)
from .epub_constants import (
    CONTAINER_PATH,
    COVER_PAGE_HREF,
    ENCODING,
    MIMETYPE,
    NAV_HREF,
    OEBPS_DIR,
    OPF_PATH,
    PARAGRAPH_MODE_LINE,
    PARAGRAPH_MODES,
    STYLE_HREF,
    XHTML_MEDIA_TYPE,
    chapter_href,
)
from .models import BookMeta, Chapter, Cover

logger = logging.getLogger(__name__)


def build_epub(
    meta: BookMeta,
    chapters: Sequence[Chapter],
    cover: Cover | None = None,
    paragraph_mode: str = PARAGRAPH_MODE_LINE,
    custom_css: str | None = None,
    uid: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> bytes:
    """Create an EPUB archive from chapters.

    Args:
        meta: Book title, author and language
        chapters: Chapters in reading order
        cover: Optional cover image
        paragraph_mode: "line" or "block", see epub_builders.paragraphize
        custom_css: Optional stylesheet replacing the default one
        uid: Book identifier (default: random UUID)
        metadata: Optional extra metadata ('publisher', 'description')

    Returns:
        The EPUB file content
    """
    if paragraph_mode not in PARAGRAPH_MODES:
        raise ValueError(f"Unknown paragraph mode: {paragraph_mode}")

    uid = uid or str(uuid.uuid4())
    manifest = [
        f'<item id="nav" href="{NAV_HREF}" media-type="{XHTML_MEDIA_TYPE}" properties="nav"/>',
        f'<item id="css" href="{STYLE_HREF}" media-type="text/css"/>',
    ]
    spine: list[str] = []
    cover_id = None

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as z:
        # mimetype must be first and uncompressed
        z.writestr("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)
        z.writestr(CONTAINER_PATH, build_container_xml().encode(ENCODING))
        z.writestr(f"{OEBPS_DIR}/{STYLE_HREF}", build_style_css(custom_css).encode(ENCODING))

        if cover:
            cover_id = "cover-image"
            img_rel = f"images/cover{cover.extension}"
            z.writestr(f"{OEBPS_DIR}/{img_rel}", cover.data)
            manifest.append(f'<item id="{cover_id}" href="{img_rel}" media-type="{cover.mime_type}" properties="cover-image"/>')
            z.writestr(f"{OEBPS_DIR}/{COVER_PAGE_HREF}", build_cover_xhtml(img_rel, meta.language).encode(ENCODING))
            manifest.append(f'<item id="coverpage" href="{COVER_PAGE_HREF}" media-type="{XHTML_MEDIA_TYPE}"/>')
            spine.append('<itemref idref="coverpage" linear="yes"/>')

        for idx, chapter in enumerate(chapters, 1):
            href = chapter_href(idx)
            z.writestr(
                f"{OEBPS_DIR}/{href}",
                build_chap_xhtml(chapter, idx, meta.language, paragraph_mode).encode(ENCODING),
            )
            manifest.append(f'<item id="chapter-{idx}" href="{href}" media-type="{XHTML_MEDIA_TYPE}"/>')
            spine.append(f'<itemref idref="chapter-{idx}"/>')

        z.writestr(f"{OEBPS_DIR}/{NAV_HREF}", build_nav_xhtml(meta, chapters).encode(ENCODING))
        z.writestr(
            OPF_PATH,
            build_content_opf(meta, manifest, spine, uid, cover_id, extra_metadata=metadata).encode(ENCODING),
        )

    logger.debug(f"Built EPUB with {len(chapters)} chapters (cover: {bool(cover)})")
    return buffer.getvalue()


def write_epub(
    out: Path,
    meta: BookMeta,
    chapters: Sequence[Chapter],
    cover: Cover | None = None,
    paragraph_mode: str = PARAGRAPH_MODE_LINE,
    custom_css: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Path:
    """Build an EPUB and write it to out.

    Returns:
        The output path

    Raises:
        OSError: If the file cannot be written
    """
    data = build_epub(meta, chapters, cover, paragraph_mode, custom_css, metadata=metadata)
    out.write_bytes(data)
    logger.info(f"Wrote {out} ({len(data)} bytes)")
    return out
