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
common_constants.py - Shared constants for txt2epub modules
===========================================================

Encoding aliases and the locale-dependent labels used by the chapter
segmenter and the EPUB serializer.
"""

from .models import Language

# ────────────────────────── encodings ────────────────────────── #

DEFAULT_ENCODING = "utf-8"
AUTO_ENCODING = "auto"
UNKNOWN_ENCODING = "unknown"
BOM = "\ufeff"

# Below this chardet confidence the UniversalDetector gets a second look
DETECTION_CONFIDENCE_THRESHOLD = 0.5

# Detector labels and user spellings collapsed onto the codec actually used.
# GB2312 and GBK are subsets of GB18030, so the widest codec decodes all three.
ENCODING_ALIASES: dict[str, str] = {
    "utf8": "utf-8",
    "utf-8": "utf-8",
    "utf-8-sig": "utf-8",
    "ascii": "utf-8",
    "gbk": "gb18030",
    "gb2312": "gb18030",
    "gb18030": "gb18030",
    "cp936": "gb18030",
    "big5": "big5",
    "big-5": "big5",
    "cp950": "big5",
    "shift_jis": "shift_jis",
    "shift-jis": "shift_jis",
    "sjis": "shift_jis",
}

# ────────────────────────── locale labels ────────────────────────── #

LOCALE_LABELS: dict[Language, dict[str, str]] = {
    Language.ZH_CN: {
        "content": "正文",
        "intro": "简介",
        "toc": "目录",
        "untitled": "未命名",
        "cover": "封面",
    },
    Language.EN: {
        "content": "Content",
        "intro": "Introduction",
        "toc": "Contents",
        "untitled": "Untitled",
        "cover": "Cover",
    },
}


def locale_label(language: Language | str, key: str) -> str:
    """Look up a locale-dependent label such as the default chapter title."""
    return LOCALE_LABELS[Language.parse(language)][key]
