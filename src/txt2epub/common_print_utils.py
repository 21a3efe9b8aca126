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
Common print utilities for console output with rich formatting.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich import print as rich_print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import Chapter, ReadResult


def safe_print(*args: Any, **kwargs: Any) -> None:
    """Print with rich markup support.

    Args:
        *args: Arguments to print
        **kwargs: Keyword arguments for rich's print function
    """
    rich_print(*args, **kwargs)


def chapter_table(chapters: Sequence[Chapter], read_result: ReadResult | None = None) -> Table:
    """Build a table listing chapters by position."""
    caption = None
    if read_result is not None:
        caption = escape(f"encoding: detected {read_result.detected_encoding}, used {read_result.used_encoding}")
    table = Table(title="Chapters", caption=caption)
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Lines", justify="right")
    table.add_column("Intro", justify="center")
    for idx, chapter in enumerate(chapters, 1):
        # Titles come from the manuscript and may contain rich markup brackets
        table.add_row(str(idx), escape(chapter.title), str(len(chapter.lines)), "yes" if chapter.is_intro else "")
    return table


def print_chapter_table(
    chapters: Sequence[Chapter],
    read_result: ReadResult | None = None,
    console: Console | None = None,
) -> None:
    """Print the chapter listing to the console."""
    (console or Console()).print(chapter_table(chapters, read_result))
