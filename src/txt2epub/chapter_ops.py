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
chapter_ops.py - Post-parse chapter corrections

Both operations return a new list and leave the input untouched. An unknown
chapter id is not an error: the result simply equals the input.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from .models import Chapter


def _index_of(chapters: Sequence[Chapter], chapter_id: str) -> int:
    for idx, chapter in enumerate(chapters):
        if chapter.id == chapter_id:
            return idx
    return -1


def rename_chapter(chapters: Sequence[Chapter], chapter_id: str, new_title: str) -> list[Chapter]:
    """Return a copy of chapters with the matching chapter retitled."""
    return [replace(ch, title=new_title) if ch.id == chapter_id else ch for ch in chapters]


def merge_with_previous(chapters: Sequence[Chapter], chapter_id: str) -> list[Chapter]:
    """
    Fold a chapter into the one before it.

    The merged chapter keeps the predecessor's id and title, its lines are the
    predecessor's followed by the target's, and it is an introduction if
    either part was.

    Args:
        chapters: Current chapter list
        chapter_id: Id of the chapter to merge away

    Returns:
        New chapter list; equal to the input when the id is unknown or
        belongs to the first chapter
    """
    index = _index_of(chapters, chapter_id)
    if index <= 0:
        return list(chapters)

    prev, current = chapters[index - 1], chapters[index]
    merged = replace(
        prev,
        lines=prev.lines + current.lines,
        is_intro=prev.is_intro or current.is_intro,
    )
    return [*chapters[: index - 1], merged, *chapters[index + 1 :]]
