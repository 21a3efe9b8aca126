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

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Entry point for the txt2epub command
# - Configuration file < command-line precedence
# - --list previews chapters (after renames and merges) without writing
#

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from .chapter_patterns import build_dialects
from .cli_parser import create_parser, validate_args
from .cli_setup import setup_configuration, setup_logging, setup_signal_handler
from .common_print_utils import print_chapter_table, safe_print
from .epub_validation import ValidationError
from .make_epub import apply_edits, create_epub_from_txt_file, load_chapters

APP_NAME = "txt2epub - plain-text novel to EPUB converter"
APP_VERSION = "1.0.0"

# Global logger - will be initialized in main()
tolog: logging.Logger | None = None


def _read_css(css_path: str | None) -> str | None:
    if not css_path:
        return None
    return Path(css_path).read_text(encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the txt2epub command."""
    global tolog

    config_manager, config = setup_configuration(argv)

    parser = create_parser(config)
    args = parser.parse_args(argv)

    try:
        config = config_manager.update_with_args(args)
    except ValueError as e:
        parser.error(str(e))

    # Logging follows the final configuration, so --verbose applies
    tolog = setup_logging(config)
    setup_signal_handler(tolog)

    validate_args(args, parser)

    language = config["text_processing"]["language"]
    encoding_choice = config["text_processing"]["encoding"]
    renames = dict(args.rename)
    txt_path = Path(args.input)

    try:
        if args.list:
            read_result, chapters = load_chapters(
                txt_path,
                language,
                encoding_choice,
                dialects=build_dialects(config["chapters"]["extra_patterns"]),
                logger=tolog,
            )
            chapters = apply_edits(chapters, renames, args.merge, logger=tolog)
            print_chapter_table(chapters, read_result)
            return

        result = create_epub_from_txt_file(
            txt_path,
            output_path=Path(args.output) if args.output else None,
            title=args.title,
            author=config["epub"]["author"] or "",
            language=language,
            encoding_choice=encoding_choice,
            cover_path=Path(args.cover) if args.cover else None,
            paragraph_mode=config["epub"]["paragraph_mode"],
            custom_css=_read_css(config["epub"]["custom_css_path"]),
            extra_patterns=config["chapters"]["extra_patterns"],
            renames=renames,
            merges=args.merge,
            logger=tolog,
        )
    except (ValidationError, ValueError, OSError) as e:
        tolog.error(f"Conversion failed: {e}")
        safe_print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        sys.exit(1)

    safe_print(
        f"[bold green]Created {escape(str(result.output_path))}[/bold green] "
        f"({len(result.chapters)} chapters, encoding {result.read_result.used_encoding})"
    )


if __name__ == "__main__":
    main()
