#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for make_epub module.
"""

import zipfile

import pytest

from txt2epub.chapter_parser import counter_id_factory
from txt2epub.epub_validation import ValidationError
from txt2epub.make_epub import apply_edits, create_epub_from_txt_file, load_chapters
from txt2epub.models import Chapter, Language


@pytest.fixture
def chapters():
    return [
        Chapter.create("i", "简介", ["书名"], is_intro=True),
        Chapter.create("a", "第1章", ["a"]),
        Chapter.create("b", "第2章", ["b"]),
        Chapter.create("c", "第3章", ["c"]),
    ]


class TestLoadChapters:
    """Test reading and segmenting a manuscript."""

    def test_chinese_file(self, chinese_txt_file, mock_logger):
        read_result, chapters = load_chapters(
            chinese_txt_file, Language.ZH_CN, "gbk", id_factory=counter_id_factory(), logger=mock_logger
        )
        assert read_result.used_encoding == "gb18030"
        assert [c.title for c in chapters] == ["简介", "第一章 开始", "第二章 继续"]
        assert chapters[0].is_intro
        assert list(chapters[0].lines) == ["书名：测试", "作者：某人", ""]
        assert list(chapters[1].lines) == ["这是第一段。", "这是第二段。", ""]
        assert [c.id for c in chapters] == ["chapter-1", "chapter-2", "chapter-3"]

    def test_english_file(self, english_txt_file, mock_logger):
        _, chapters = load_chapters(english_txt_file, "en", logger=mock_logger)
        assert [c.title for c in chapters] == ["Chapter 1: The Beginning", "Chapter 2: Continuing"]

    def test_missing_file(self, temp_dir, mock_logger):
        with pytest.raises(ValidationError):
            load_chapters(temp_dir / "missing.txt", logger=mock_logger)


class TestApplyEdits:
    """Test position-based renames and merges."""

    def test_no_edits(self, chapters, mock_logger):
        assert apply_edits(chapters, logger=mock_logger) == chapters

    def test_rename(self, chapters, mock_logger):
        result = apply_edits(chapters, {2: "序章"}, logger=mock_logger)
        assert result[1].title == "序章"

    def test_merges_use_original_positions(self, chapters, mock_logger):
        result = apply_edits(chapters, merges=[3, 4], logger=mock_logger)
        assert [c.id for c in result] == ["i", "a"]
        assert result[1].lines == ("a", "b", "c")

    def test_rename_then_merge(self, chapters, mock_logger):
        result = apply_edits(chapters, {2: "新", 3: "丢弃"}, [3], logger=mock_logger)
        assert [c.title for c in result] == ["简介", "新", "第3章"]

    def test_out_of_range_ignored(self, chapters, mock_logger):
        result = apply_edits(chapters, {9: "x"}, [0, 7], logger=mock_logger)
        assert result == chapters
        assert mock_logger.warning.call_count == 3

    def test_first_position_not_merged(self, chapters, mock_logger):
        assert apply_edits(chapters, merges=[1], logger=mock_logger) == chapters
        mock_logger.warning.assert_called_once()


class TestCreateEpubFromTxtFile:
    """Test the end-to-end conversion."""

    def test_default_output_path(self, english_txt_file, mock_logger):
        result = create_epub_from_txt_file(english_txt_file, language="en", logger=mock_logger)
        assert result.output_path == english_txt_file.with_suffix(".epub")
        assert zipfile.is_zipfile(result.output_path)
        with zipfile.ZipFile(result.output_path) as z:
            assert z.namelist()[0] == "mimetype"
            opf = z.read("OEBPS/content.opf").decode("utf-8")
            assert "OEBPS/chapter-2.xhtml" in z.namelist()
        assert "<dc:title>story</dc:title>" in opf
        assert "<dc:language>en</dc:language>" in opf

    def test_full_options_integration(self, chinese_txt_file, png_cover, temp_dir, mock_logger):
        out = temp_dir / "out" / "book.epub"
        result = create_epub_from_txt_file(
            chinese_txt_file,
            output_path=out,
            title="测试小说",
            author="某人",
            language="zh-CN",
            encoding_choice="gbk",
            cover_path=png_cover,
            paragraph_mode="block",
            custom_css="p{}",
            renames={2: "第一章 新标题"},
            merges=[3],
            metadata={"description": "简介文本"},
            logger=mock_logger,
        )
        assert result.output_path == out
        assert [c.title for c in result.chapters] == ["简介", "第一章 新标题"]
        assert result.read_result.used_encoding == "gb18030"
        with zipfile.ZipFile(out) as z:
            opf = z.read("OEBPS/content.opf").decode("utf-8")
            chapter = z.read("OEBPS/chapter-2.xhtml").decode("utf-8")
            assert z.read("OEBPS/style.css") == b"p{}"
            assert "OEBPS/images/cover.png" in z.namelist()
        assert "<dc:creator>某人</dc:creator>" in opf
        assert "<dc:description>简介文本</dc:description>" in opf
        assert "<p>这是第一段。这是第二段。</p>" in chapter
        assert "<p>更多内容。</p>" in chapter

    def test_extra_patterns(self, temp_dir, mock_logger):
        path = temp_dir / "vol.txt"
        path.write_text("卷一 风起\n内容\n卷二 云涌\n更多\n", encoding="utf-8")
        result = create_epub_from_txt_file(
            path, extra_patterns=[r"^卷[一二三]\s*(?P<title>.+)$"], encoding_choice="utf-8", logger=mock_logger
        )
        assert [c.title for c in result.chapters] == ["风起", "云涌"]

    def test_bad_output_suffix(self, english_txt_file, temp_dir, mock_logger):
        with pytest.raises(ValidationError):
            create_epub_from_txt_file(english_txt_file, output_path=temp_dir / "book.txt", logger=mock_logger)

    def test_bad_cover(self, english_txt_file, temp_dir, mock_logger):
        cover = temp_dir / "cover.bmp"
        cover.write_bytes(b"BM")
        with pytest.raises(ValidationError):
            create_epub_from_txt_file(english_txt_file, cover_path=cover, logger=mock_logger)
