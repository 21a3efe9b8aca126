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
Shared constants for EPUB modules.
"""

# Constants
ENCODING = "utf-8"
MIMETYPE = "application/epub+zip"

# Namespaces
XHTML_NS = "http://www.w3.org/1999/xhtml"
OPS_NS = "http://www.idpf.org/2007/ops"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

# Archive layout
OEBPS_DIR = "OEBPS"
CONTAINER_PATH = "META-INF/container.xml"
OPF_PATH = f"{OEBPS_DIR}/content.opf"
NAV_HREF = "nav.xhtml"
STYLE_HREF = "style.css"
COVER_PAGE_HREF = "cover.xhtml"
XHTML_MEDIA_TYPE = "application/xhtml+xml"

# Paragraph policies for chapter bodies
PARAGRAPH_MODE_LINE = "line"
PARAGRAPH_MODE_BLOCK = "block"
PARAGRAPH_MODES = (PARAGRAPH_MODE_LINE, PARAGRAPH_MODE_BLOCK)

# Cover images by suffix
COVER_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}

DEFAULT_CSS = "body{font-family:serif;line-height:1.6;margin:5%}h1{text-align:center;margin:2em 0 1em}p{text-indent:2em;margin:0 0 0.8em}img{max-width:100%;height:auto}"


def chapter_href(index: int) -> str:
    """File name of the 1-based chapter document."""
    return f"chapter-{index}.xhtml"


def chapter_anchor(index: int) -> str:
    """Section id of the 1-based chapter."""
    return f"chap-{index}"
