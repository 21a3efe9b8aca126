#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for epub_generator module.
"""

import io
import zipfile
import xml.etree.ElementTree as ET

import pytest

from txt2epub.epub_generator import build_epub, write_epub
from txt2epub.models import BookMeta, Chapter, Cover, Language


@pytest.fixture
def meta():
    return BookMeta("测试小说", "某人", Language.ZH_CN)


@pytest.fixture
def chapters():
    return [
        Chapter.create("i", "简介", ["书名：测试小说", ""], is_intro=True),
        Chapter.create("a", "第1章 开始", ["内容一", "", "内容二", "内容三"]),
        Chapter.create("b", "第2章 继续", []),
    ]


def _open(data):
    return zipfile.ZipFile(io.BytesIO(data))


class TestBuildEpub:
    """Test the build_epub function."""

    def test_mimetype_first_and_stored(self, meta, chapters):
        with _open(build_epub(meta, chapters)) as z:
            first = z.infolist()[0]
            assert first.filename == "mimetype"
            assert first.compress_type == zipfile.ZIP_STORED
            assert z.read("mimetype") == b"application/epub+zip"

    def test_archive_layout(self, meta, chapters):
        with _open(build_epub(meta, chapters)) as z:
            names = set(z.namelist())
        assert {
            "META-INF/container.xml",
            "OEBPS/content.opf",
            "OEBPS/nav.xhtml",
            "OEBPS/style.css",
            "OEBPS/chapter-1.xhtml",
            "OEBPS/chapter-2.xhtml",
            "OEBPS/chapter-3.xhtml",
        } <= names
        assert not any(n.startswith("OEBPS/images/") for n in names)

    def test_paragraph_per_line(self, meta, chapters):
        with _open(build_epub(meta, chapters)) as z:
            doc = z.read("OEBPS/chapter-2.xhtml").decode("utf-8")
        assert doc.count("<p>") == 3
        assert "<h1>第1章 开始</h1>" in doc

    def test_block_mode(self, meta, chapters):
        with _open(build_epub(meta, chapters, paragraph_mode="block")) as z:
            doc = z.read("OEBPS/chapter-2.xhtml").decode("utf-8")
        assert "<p>内容二内容三</p>" in doc
        assert doc.count("<p>") == 2

    def test_spine_order(self, meta, chapters):
        with _open(build_epub(meta, chapters, uid="fixed")) as z:
            opf = z.read("OEBPS/content.opf").decode("utf-8")
        positions = [opf.index(f'<itemref idref="chapter-{i}"/>') for i in (1, 2, 3)]
        assert positions == sorted(positions)
        assert "urn:uuid:fixed" in opf
        assert 'properties="nav"' in opf

    def test_nav_lists_chapters(self, meta, chapters):
        with _open(build_epub(meta, chapters)) as z:
            nav = z.read("OEBPS/nav.xhtml").decode("utf-8")
        assert nav.index("简介") < nav.index("第1章 开始") < nav.index("第2章 继续")

    def test_cover(self, meta, chapters):
        cover = Cover(b"\x89PNG fake", "image/png", "Cover.PNG")
        with _open(build_epub(meta, chapters, cover=cover)) as z:
            assert z.read("OEBPS/images/cover.png") == b"\x89PNG fake"
            opf = z.read("OEBPS/content.opf").decode("utf-8")
            cover_page = z.read("OEBPS/cover.xhtml").decode("utf-8")
        assert 'properties="cover-image"' in opf
        assert '<meta name="cover" content="cover-image"/>' in opf
        assert opf.index('idref="coverpage"') < opf.index('idref="chapter-1"')
        assert 'src="images/cover.png"' in cover_page

    def test_custom_css(self, meta, chapters):
        with _open(build_epub(meta, chapters, custom_css="p{color:red}")) as z:
            assert z.read("OEBPS/style.css") == b"p{color:red}"

    def test_unknown_paragraph_mode(self, meta, chapters):
        with pytest.raises(ValueError):
            build_epub(meta, chapters, paragraph_mode="page")

    def test_metadata_passthrough(self, meta, chapters):
        with _open(build_epub(meta, chapters, metadata={"publisher": "Pub"})) as z:
            assert "<dc:publisher>Pub</dc:publisher>" in z.read("OEBPS/content.opf").decode("utf-8")

    def test_control_characters_keep_parts_well_formed(self):
        book = BookMeta("书\x01名", "作\x1a者", Language.ZH_CN)
        chapters = [Chapter.create("a", "第1章\x00", ["正文\x1a"])]
        with _open(build_epub(book, chapters, metadata={"description": "简\x02介"})) as z:
            for name in z.namelist():
                if name.endswith((".xhtml", ".opf", ".xml")):
                    ET.fromstring(z.read(name))
            chapter = ET.fromstring(z.read("OEBPS/chapter-1.xhtml"))
            opf = z.read("OEBPS/content.opf").decode("utf-8")
        assert chapter.find(".//{http://www.w3.org/1999/xhtml}p").text == "正文"
        assert "<dc:title>书名</dc:title>" in opf
        assert "<dc:creator>作者</dc:creator>" in opf


class TestWriteEpub:
    def test_writes_file(self, temp_dir, meta, chapters):
        out = temp_dir / "book.epub"
        assert write_epub(out, meta, chapters) == out
        assert zipfile.is_zipfile(out)
        with zipfile.ZipFile(out) as z:
            assert z.namelist()[0] == "mimetype"
