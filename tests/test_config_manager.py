#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for config_manager and common_yaml_utils modules.
"""

import argparse

import pytest

from txt2epub.common_yaml_utils import load_safe_yaml, merge_yaml_configs
from txt2epub.config_manager import ConfigManager


def _args(**kwargs):
    defaults = {"encoding": None, "language": None, "author": None, "paragraph_mode": None, "css": None, "verbose": False}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestYamlUtils:
    def test_deep_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = merge_yaml_configs(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base["a"]["y"] == 2

    def test_missing_file(self, temp_dir):
        with pytest.raises(ValueError, match="not found"):
            load_safe_yaml(temp_dir / "none.yml")

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "bad.yml"
        path.write_text("a: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError, match="Error parsing"):
            load_safe_yaml(path)

    def test_non_mapping_root(self, temp_dir):
        path = temp_dir / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="dictionary"):
            load_safe_yaml(path)


class TestConfigManager:
    """Test the ConfigManager class."""

    def test_defaults_without_file(self, temp_dir, mock_logger):
        manager = ConfigManager(temp_dir / "missing.yml", logger=mock_logger)
        assert manager.get("text_processing.encoding") == "auto"
        assert manager.get("text_processing.language") == "zh-CN"
        assert manager.get("epub.paragraph_mode") == "line"
        assert manager.get("chapters.extra_patterns") == []

    def test_file_overrides_defaults(self, temp_dir, mock_logger):
        path = temp_dir / "cfg.yml"
        path.write_text("epub:\n  author: 某人\n  paragraph_mode: block\n", encoding="utf-8")
        manager = ConfigManager(path, logger=mock_logger)
        assert manager.get("epub.author") == "某人"
        assert manager.get("epub.paragraph_mode") == "block"
        assert manager.get("text_processing.encoding") == "auto"

    def test_empty_file(self, temp_dir, mock_logger):
        path = temp_dir / "empty.yml"
        path.write_text("", encoding="utf-8")
        manager = ConfigManager(path, logger=mock_logger)
        assert manager.config == ConfigManager.get_default_config()
        mock_logger.warning.assert_called_once()

    @pytest.mark.parametrize(
        "content,message",
        [
            ("epub:\n  paragraph_mode: page\n", "paragraph_mode"),
            ("text_processing:\n  language: fr\n", "Unsupported language"),
            ("chapters:\n  extra_patterns: ['(']\n", "Invalid chapter pattern"),
            ("chapters:\n  extra_patterns: 5\n", "list of strings"),
            ("logging:\n  level: LOUD\n", "logging.level"),
            ("epub: 3\n", "must be a mapping"),
        ],
    )
    def test_invalid_values(self, temp_dir, mock_logger, content, message):
        path = temp_dir / "cfg.yml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match=message):
            ConfigManager(path, logger=mock_logger)

    def test_null_patterns_become_empty(self, temp_dir, mock_logger):
        path = temp_dir / "cfg.yml"
        path.write_text("chapters:\n  extra_patterns:\n", encoding="utf-8")
        assert ConfigManager(path, logger=mock_logger).get("chapters.extra_patterns") == []

    def test_get_default(self, temp_dir, mock_logger):
        manager = ConfigManager(temp_dir / "missing.yml", logger=mock_logger)
        assert manager.get("epub.nope", "fallback") == "fallback"
        assert manager.get("nope.deeper") is None

    def test_args_take_precedence(self, temp_dir, mock_logger):
        path = temp_dir / "cfg.yml"
        path.write_text("epub:\n  author: File Author\n", encoding="utf-8")
        manager = ConfigManager(path, logger=mock_logger)
        config = manager.update_with_args(_args(author="CLI Author", language="en", css="x.css"))
        assert config["epub"]["author"] == "CLI Author"
        assert config["text_processing"]["language"] == "en"
        assert config["epub"]["custom_css_path"] == "x.css"
        assert manager.get("epub.author") == "CLI Author"

    def test_unset_args_keep_file_values(self, temp_dir, mock_logger):
        path = temp_dir / "cfg.yml"
        path.write_text("text_processing:\n  encoding: gbk\n", encoding="utf-8")
        manager = ConfigManager(path, logger=mock_logger)
        assert manager.update_with_args(_args())["text_processing"]["encoding"] == "gbk"

    def test_verbose_sets_debug(self, temp_dir, mock_logger):
        manager = ConfigManager(temp_dir / "missing.yml", logger=mock_logger)
        assert manager.update_with_args(_args(verbose=True))["logging"]["level"] == "DEBUG"

    def test_invalid_args_rejected(self, temp_dir, mock_logger):
        manager = ConfigManager(temp_dir / "missing.yml", logger=mock_logger)
        with pytest.raises(ValueError):
            manager.update_with_args(_args(paragraph_mode="page"))
        assert manager.get("epub.paragraph_mode") == "line"
