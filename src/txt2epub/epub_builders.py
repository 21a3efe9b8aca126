#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - XHTML/XML builders for EPUB 3 components
# - Chapter, cover and nav documents are generated with ElementTree
# - Paragraph policy is selectable: one paragraph per line, or per block
#

"""
epub_builders.py - EPUB component builders
==========================================

Provides functions to build the EPUB 3 parts: XHTML chapters, the navigation
document, the cover page, the OPF package file and container.xml.
ElementTree takes care of XML escaping for the XHTML documents.
"""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Sequence
import xml.etree.ElementTree as ET

from .common_constants import locale_label
from .epub_constants import (
    CONTAINER_NS,
    DC_NS,
    DEFAULT_CSS,
    OPF_NS,
    OPF_PATH,
    OPS_NS,
    PARAGRAPH_MODE_BLOCK,
    PARAGRAPH_MODE_LINE,
    STYLE_HREF,
    XHTML_NS,
    XML_LANG,
    chapter_anchor,
    chapter_href,
)
from .models import BookMeta, Chapter, Language


# Characters XML 1.0 does not allow, even as character references
_XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def xml_text(text: str) -> str:
    """Remove characters that would make an XML document ill-formed."""
    return _XML_INVALID_RE.sub("", text)


def _escape(text: str) -> str:
    return html.escape(xml_text(text))


def _tag(name: str) -> str:
    return f"{{{XHTML_NS}}}{name}"


def paragraphize(
    lines: Sequence[str],
    mode: str = PARAGRAPH_MODE_LINE,
    language: Language | str = Language.ZH_CN,
) -> list[str]:
    """
    Group chapter lines into paragraph texts.

    - "line": every non-blank line is its own paragraph
    - "block": runs of non-blank lines separated by blank lines are merged,
      joined with a space for English and with nothing for Chinese

    Blank lines never produce a paragraph.

    Args:
        lines: Chapter body lines
        mode: Paragraph policy
        language: Book language, selects the block joiner

    Returns:
        Paragraph texts in order (unescaped)
    """
    if mode == PARAGRAPH_MODE_LINE:
        return [ln.strip() for ln in lines if ln.strip()]
    if mode != PARAGRAPH_MODE_BLOCK:
        raise ValueError(f"Unknown paragraph mode: {mode}")

    joiner = "" if Language.parse(language) is Language.ZH_CN else " "
    out: list[str] = []
    buf: list[str] = []
    for ln in lines:
        if ln.strip():
            buf.append(ln.strip())
        elif buf:
            out.append(joiner.join(buf))
            buf.clear()
    if buf:
        out.append(joiner.join(buf))
    return out


def _xhtml_root(language: Language | str, title: str, with_style: bool = True) -> tuple[ET.Element, ET.Element]:
    """Create <html> with a populated <head>. Returns (html, body)."""
    ET.register_namespace("", XHTML_NS)
    ET.register_namespace("epub", OPS_NS)

    html_elem = ET.Element(_tag("html"))
    html_elem.set(XML_LANG, str(language))

    head = ET.SubElement(html_elem, _tag("head"))
    meta = ET.SubElement(head, _tag("meta"))
    meta.set("charset", "utf-8")
    title_elem = ET.SubElement(head, _tag("title"))
    title_elem.text = xml_text(title)

    if with_style:
        link = ET.SubElement(head, _tag("link"))
        link.set("href", STYLE_HREF)
        link.set("rel", "stylesheet")
        link.set("type", "text/css")

    body = ET.SubElement(html_elem, _tag("body"))
    return html_elem, body


def _serialize_xhtml(html_elem: ET.Element) -> str:
    """Serialize with XML declaration and HTML5 doctype."""
    tree = ET.ElementTree(html_elem)
    output = StringIO()
    tree.write(output, encoding="unicode", method="xml")

    result = '<?xml version="1.0" encoding="utf-8"?>\n'
    result += "<!DOCTYPE html>\n"
    result += output.getvalue()
    return result


def build_chap_xhtml(
    chapter: Chapter,
    index: int,
    language: Language | str = Language.ZH_CN,
    paragraph_mode: str = PARAGRAPH_MODE_LINE,
) -> str:
    """
    Build one chapter document.

    Args:
        chapter: Chapter to render
        index: 1-based position of the chapter in the book
        language: Book language
        paragraph_mode: Paragraph policy, see paragraphize()

    Returns:
        Complete XHTML document as string
    """
    html_elem, body = _xhtml_root(language, chapter.title)

    section = ET.SubElement(body, _tag("section"))
    section.set("id", chapter_anchor(index))
    h1 = ET.SubElement(section, _tag("h1"))
    h1.text = xml_text(chapter.title)

    lines = [xml_text(ln) for ln in chapter.lines]
    for text in paragraphize(lines, paragraph_mode, language):
        p = ET.SubElement(section, _tag("p"))
        p.text = text

    return _serialize_xhtml(html_elem)


def build_nav_xhtml(meta: BookMeta, chapters: Sequence[Chapter]) -> str:
    """
    Build the EPUB 3 navigation document.

    Args:
        meta: Book metadata
        chapters: Chapters in reading order

    Returns:
        nav.xhtml content
    """
    book_title = meta.title or locale_label(meta.language, "untitled")
    html_elem, body = _xhtml_root(meta.language, book_title, with_style=False)

    nav = ET.SubElement(body, _tag("nav"))
    nav.set(f"{{{OPS_NS}}}type", "toc")
    nav.set("id", "toc")
    h1 = ET.SubElement(nav, _tag("h1"))
    h1.text = locale_label(meta.language, "toc")

    ol = ET.SubElement(nav, _tag("ol"))
    for idx, chapter in enumerate(chapters, 1):
        li = ET.SubElement(ol, _tag("li"))
        a = ET.SubElement(li, _tag("a"))
        a.set("href", f"{chapter_href(idx)}#{chapter_anchor(idx)}")
        a.text = xml_text(chapter.title)

    return _serialize_xhtml(html_elem)


def build_cover_xhtml(img_rel: str, language: Language | str = Language.ZH_CN) -> str:
    """
    Build the cover page.

    Args:
        img_rel: Cover image path relative to the OEBPS directory
        language: Book language

    Returns:
        Complete XHTML document for cover page
    """
    html_elem, body = _xhtml_root(language, locale_label(language, "cover"), with_style=False)
    head = html_elem.find(_tag("head"))
    if head is not None:
        style = ET.SubElement(head, _tag("style"))
        style.text = "html,body{margin:0;padding:0}img{max-width:100%;height:auto;display:block;margin:0 auto}"

    div = ET.SubElement(body, _tag("div"))
    img = ET.SubElement(div, _tag("img"))
    img.set("src", img_rel)
    img.set("alt", locale_label(language, "cover"))

    return _serialize_xhtml(html_elem)


def build_container_xml() -> str:
    """
    Build container.xml using ElementTree.

    Creates the EPUB container XML that points to the OPF file.

    Returns:
        Container XML as string
    """
    ET.register_namespace("", CONTAINER_NS)

    container = ET.Element(f"{{{CONTAINER_NS}}}container", version="1.0")

    rootfiles = ET.SubElement(container, f"{{{CONTAINER_NS}}}rootfiles")
    rootfile = ET.SubElement(rootfiles, f"{{{CONTAINER_NS}}}rootfile")
    rootfile.set("full-path", OPF_PATH)
    rootfile.set("media-type", "application/oebps-package+xml")

    return ET.tostring(container, encoding="unicode", method="xml", xml_declaration=True)


def build_style_css(custom_css: str | None = None) -> str:
    """Build CSS content, using custom CSS if provided."""
    if custom_css:
        return custom_css
    return DEFAULT_CSS


def build_content_opf(
    meta: BookMeta,
    manifest: list[str],
    spine: list[str],
    uid: str,
    cover_id: str | None = None,
    modified: datetime | None = None,
    extra_metadata: dict[str, Any] | None = None,
) -> str:
    """Build the EPUB 3 package document.

    Args:
        meta: Book metadata
        manifest: List of manifest <item> strings
        spine: List of spine <itemref> strings
        uid: Unique identifier UUID
        cover_id: Manifest id of the cover image (if any)
        modified: Modification timestamp (default: now, UTC)
        extra_metadata: Optional dict with 'publisher' and/or 'description'

    Returns:
        Complete OPF XML as string
    """
    stamp = (modified or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")
    lang = html.escape(str(meta.language))
    title = _escape(meta.title or locale_label(meta.language, "untitled"))

    meta_lines = [
        f'<dc:identifier id="bookid">urn:uuid:{uid}</dc:identifier>',
        f"<dc:title>{title}</dc:title>",
    ]
    if meta.author:
        meta_lines.append(f"<dc:creator>{_escape(meta.author)}</dc:creator>")
    meta_lines.append(f"<dc:language>{lang}</dc:language>")
    meta_lines.append(f'<meta property="dcterms:modified">{stamp}</meta>')
    if cover_id:
        meta_lines.append(f'<meta name="cover" content="{cover_id}"/>')
    if extra_metadata:
        if extra_metadata.get("publisher"):
            meta_lines.append(f"<dc:publisher>{_escape(extra_metadata['publisher'])}</dc:publisher>")
        if extra_metadata.get("description"):
            meta_lines.append(f"<dc:description>{_escape(extra_metadata['description'])}</dc:description>")

    metadata_block = "\n    ".join(meta_lines)
    manifest_block = "\n    ".join(manifest)
    spine_block = "\n    ".join(spine)

    return f"""<?xml version="1.0" encoding="utf-8"?>
<package xmlns="{OPF_NS}" version="3.0" unique-identifier="bookid" xml:lang="{lang}">
  <metadata xmlns:dc="{DC_NS}">
    {metadata_block}
  </metadata>
  <manifest>
    {manifest_block}
  </manifest>
  <spine>
    {spine_block}
  </spine>
</package>
"""
