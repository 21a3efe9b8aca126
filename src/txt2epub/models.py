#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2025 Emasoft
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
#
# CHANGELOG:
# - Added Language enum
# - Added Chapter, BookMeta, ReadResult and Cover value types
# - Chapter lines are frozen to a tuple on construction
#

"""Data models for the txt2epub conversion pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable


class Language(str, enum.Enum):
    """Book language. Drives default chapter titles and EPUB labels."""

    ZH_CN = "zh-CN"
    """Simplified Chinese."""
    EN = "en"
    """English."""

    @classmethod
    def parse(cls, value: str | Language) -> Language:
        """
        Convert a language code to a Language member.

        Args:
            value: Language member or code string ("zh-CN", "en")

        Returns:
            The matching Language

        Raises:
            ValueError: If the code is not supported
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        supported = ", ".join(m.value for m in cls)
        raise ValueError(f"Unsupported language '{value}' (expected one of: {supported})")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Chapter:
    """
    One chapter of a parsed book.

    Chapters are values: editing operations build new instances instead of
    changing existing ones.
    """

    id: str
    title: str
    lines: tuple[str, ...] = field(default_factory=tuple)
    is_intro: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))

    @classmethod
    def create(cls, chapter_id: str, title: str, lines: Iterable[str], is_intro: bool = False) -> Chapter:
        """Build a chapter from any iterable of lines."""
        return cls(id=chapter_id, title=title, lines=tuple(lines), is_intro=is_intro)


@dataclass(frozen=True)
class BookMeta:
    """Book-level metadata supplied by the caller."""

    title: str
    author: str = ""
    language: Language = Language.ZH_CN

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", Language.parse(self.language))


@dataclass(frozen=True)
class ReadResult:
    """Outcome of decoding one input file."""

    text: str
    detected_encoding: str
    used_encoding: str
    confidence: float = 0.0


@dataclass(frozen=True)
class Cover:
    """Cover image passed through to the EPUB serializer untouched."""

    data: bytes
    mime_type: str
    file_name: str

    @property
    def extension(self) -> str:
        """File extension of the cover, lower-cased and including the dot."""
        dot = self.file_name.rfind(".")
        return self.file_name[dot:].lower() if dot != -1 else ""
