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
config_manager.py - Configuration management for txt2epub
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from .chapter_patterns import compile_extra_dialects
from .common_yaml_utils import load_safe_yaml, merge_yaml_configs, parse_yaml_string
from .config_schema import DEFAULT_CONFIG_FILE, DEFAULT_CONFIG_TEMPLATE, VALID_LOG_LEVELS
from .epub_constants import PARAGRAPH_MODES
from .models import Language

# Command-line argument name -> dotted configuration key
ARG_MAPPING = {
    "encoding": "text_processing.encoding",
    "language": "text_processing.language",
    "author": "epub.author",
    "paragraph_mode": "epub.paragraph_mode",
    "css": "epub.custom_css_path",
}


class ConfigManager:
    """Loads, validates and exposes txt2epub configuration."""

    def __init__(
        self,
        config_path: Path | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file (default: txt2epub_config.yml)
            logger: Logger instance

        Raises:
            ValueError: If the configuration file is malformed or invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config_path = config_path or Path(DEFAULT_CONFIG_FILE)
        self.config = self._load_config()

    @staticmethod
    def get_default_config() -> dict[str, Any]:
        """Default configuration as dictionary."""
        return parse_yaml_string(DEFAULT_CONFIG_TEMPLATE)

    def _load_config(self) -> dict[str, Any]:
        """Load the configuration file merged over the defaults."""
        defaults = self.get_default_config()
        if not self.config_path.exists():
            self.logger.debug(f"Configuration file {self.config_path} not found. Using defaults.")
            return defaults

        user_config = load_safe_yaml(self.config_path)
        if not user_config:
            self.logger.warning("Configuration file is empty. Using defaults.")
            return defaults

        config = merge_yaml_configs(defaults, user_config)
        self.validate(config)
        return config

    @staticmethod
    def validate(config: dict[str, Any]) -> None:
        """
        Validate a merged configuration.

        Raises:
            ValueError: On the first invalid value found
        """
        for section in ("text_processing", "chapters", "epub", "logging"):
            if not isinstance(config.get(section), dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

        Language.parse(config["text_processing"]["language"])

        encoding = config["text_processing"]["encoding"]
        if not isinstance(encoding, str) or not encoding.strip():
            raise ValueError("text_processing.encoding must be a non-empty string")

        patterns = config["chapters"]["extra_patterns"]
        if patterns is None:
            config["chapters"]["extra_patterns"] = []
        elif not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ValueError("chapters.extra_patterns must be a list of strings")
        else:
            compile_extra_dialects(patterns)

        mode = config["epub"]["paragraph_mode"]
        if mode not in PARAGRAPH_MODES:
            raise ValueError(f"epub.paragraph_mode must be one of {', '.join(PARAGRAPH_MODES)}, got '{mode}'")

        level = str(config["logging"]["level"]).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(VALID_LOG_LEVELS)}, got '{level}'")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'epub.paragraph_mode')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def update_with_args(self, args: Any) -> dict[str, Any]:
        """
        Update configuration with command-line arguments.
        Command-line args take precedence over the config file.

        Args:
            args: Parsed command-line arguments

        Returns:
            Updated configuration dictionary

        Raises:
            ValueError: If the resulting configuration is invalid
        """
        config = copy.deepcopy(self.config)

        for arg_name, key_path in ARG_MAPPING.items():
            value = getattr(args, arg_name, None)
            if value is None:
                continue
            section, key = key_path.split(".")
            config[section][key] = value

        if getattr(args, "verbose", False):
            config["logging"]["level"] = "DEBUG"

        self.validate(config)
        self.config = config
        return config
