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
txt2epub - plain-text novel to EPUB converter

Detects the encoding of a plain-text novel, splits it into chapters and
writes an EPUB 3 book.
"""

__version__ = "1.0.0"
__author__ = "Emasoft"
__email__ = "713559+Emasoft@users.noreply.github.com"
__license__ = "Apache-2.0"

from .chapter_ops import merge_with_previous, rename_chapter
from .chapter_parser import counter_id_factory, segment
from .encoding_resolver import read_text_file, resolve_encoding
from .epub_generator import build_epub, write_epub
from .make_epub import create_epub_from_txt_file
from .models import BookMeta, Chapter, Cover, Language, ReadResult
from .text_processing import normalize_lines

__all__ = [
    "BookMeta",
    "Chapter",
    "Cover",
    "Language",
    "ReadResult",
    "build_epub",
    "counter_id_factory",
    "create_epub_from_txt_file",
    "merge_with_previous",
    "normalize_lines",
    "read_text_file",
    "rename_chapter",
    "resolve_encoding",
    "segment",
    "write_epub",
]
