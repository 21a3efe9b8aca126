#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest configuration and shared fixtures for all tests
"""

import pytest
import sys
import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock

# Add src directory to path so we can import our modules
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
sys.path.insert(0, src_dir)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.exception = Mock()
    return logger


@pytest.fixture
def sample_chinese_text():
    """Sample Chinese novel with front matter and two chapters"""
    return "书名：测试\n作者：某人\n\n第一章 开始\n\u3000\u3000这是第一段。\n这是第二段。\n\n第二章 继续\n更多内容。\n"


@pytest.fixture
def sample_english_text():
    """Sample English novel without front matter"""
    return "Chapter 1: The Beginning\nIt was a dark night.\n\nThe rain fell.\nChapter 2: Continuing\nMore content.\n"


@pytest.fixture
def chinese_txt_file(temp_dir, sample_chinese_text):
    """Chinese novel written in GB18030"""
    path = temp_dir / "novel.txt"
    path.write_bytes(sample_chinese_text.encode("gb18030"))
    return path


@pytest.fixture
def english_txt_file(temp_dir, sample_english_text):
    """English novel written in UTF-8"""
    path = temp_dir / "story.txt"
    path.write_text(sample_english_text, encoding="utf-8")
    return path


@pytest.fixture
def png_cover(temp_dir):
    """Minimal PNG cover image"""
    path = temp_dir / "cover.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
    return path


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables before each test"""
    env_backup = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(env_backup)


# Configure pytest options
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their names"""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
