#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Configuration schema and default template for txt2epub
#

"""
config_schema.py - Configuration schema and default template for txt2epub
"""

DEFAULT_CONFIG_FILE = "txt2epub_config.yml"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration template with comments
DEFAULT_CONFIG_TEMPLATE = """# txt2epub Configuration File
# ===========================
# Settings used when converting plain-text novels to EPUB.
# Any command-line arguments will override these settings.

text_processing:
  # Input encoding: "auto" to detect, or an explicit name (utf-8, gbk, big5, ...)
  encoding: "auto"
  # Book language: "zh-CN" or "en". Selects default chapter titles and labels.
  language: "zh-CN"

chapters:
  # Extra heading patterns (Python regular expressions), tried after the
  # built-in ones. A named group "title" selects the chapter title; without
  # it the whole matched line is the title.
  # Example: '^(?P<title>卷[一二三四五六七八九十]+.*)$'
  extra_patterns: []

epub:
  # Default author when none is given on the command line
  author: ""
  # Paragraph policy: "line" (one paragraph per non-blank line) or
  # "block" (consecutive non-blank lines merged into one paragraph)
  paragraph_mode: "line"
  # Optional path to a CSS file replacing the default stylesheet
  custom_css_path: null

logging:
  # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
  level: "INFO"
  # Log format (Python logging format string)
  format: "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
  # Also write logs to a file
  file_enabled: false
  # Log file path
  file_path: "txt2epub.log"
"""
