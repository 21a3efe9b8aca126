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
Common YAML utility functions for safe loading and merging.
"""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any
import logging

logger = logging.getLogger(__name__)


def load_safe_yaml(yaml_path: str | Path) -> dict[str, Any]:
    """
    Safely load YAML file with error handling.

    Args:
        yaml_path: Path to the YAML file

    Returns:
        Dictionary containing the loaded YAML data (empty for an empty file)

    Raises:
        ValueError: If the file cannot be loaded or parsed
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise ValueError(f"YAML file not found: {yaml_path}")

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {yaml_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Error loading YAML file {yaml_path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"YAML file must contain a dictionary at the root level, got {type(data).__name__}")

    return data


def parse_yaml_string(text: str) -> dict[str, Any]:
    """Parse a YAML document held in a string; must be a mapping."""
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


def merge_yaml_configs(base_config: dict[str, Any], override_config: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two YAML configurations, with override taking precedence.

    Args:
        base_config: Base configuration dictionary
        override_config: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base_config.copy()

    for key, value in override_config.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            result[key] = merge_yaml_configs(result[key], value)
        else:
            # Override value
            result[key] = value

    return result
