import sys
from pathlib import Path

import fitz
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pdf_highlight_kit.errors import InvalidArgument, LayoutUnavailable
from pdf_highlight_kit.pdf_processor.glyph_extractor import GlyphLayoutExtractor, PyMuPDFTextProvider
from pdf_highlight_kit.reconciler.models import Origin

PAGE_HEIGHT = 300


def _make_doc():
    doc = fitz.open()
    page = doc.new_page(width=400, height=PAGE_HEIGHT)
    page.insert_text((50, 100), "HELLO WORLD", fontsize=14)
    doc.new_page(width=400, height=PAGE_HEIGHT)  # blank page
    return doc


def test_glyphs_are_in_pdf_space_and_reading_order():
    doc = _make_doc()
    glyphs = GlyphLayoutExtractor(PyMuPDFTextProvider(doc)).extract_glyphs(0)

    assert "".join(g.character for g in glyphs) == "HELLO WORLD "
    assert all(g.origin is Origin.BOTTOM_LEFT for g in glyphs)
    assert all(g.page_index == 0 for g in glyphs)
    assert abs(glyphs[0].x - 50) < 1

    # baseline at 100pt from the top is 200pt from the bottom
    baseline = PAGE_HEIGHT - 100
    for glyph in glyphs[:-1]:
        assert glyph.y - glyph.height <= baseline <= glyph.y
    assert [g.x for g in glyphs] == sorted(g.x for g in glyphs)
    doc.close()


def test_line_end_gets_zero_width_separator():
    doc = _make_doc()
    glyphs = GlyphLayoutExtractor(PyMuPDFTextProvider(doc)).extract_glyphs(0)

    separator = glyphs[-1]
    assert separator.character == " "
    assert separator.width == 0
    assert separator.x == glyphs[-2].right
    assert separator.line_key == glyphs[-2].line_key
    doc.close()


def test_separator_can_be_disabled():
    doc = _make_doc()
    glyphs = GlyphLayoutExtractor(PyMuPDFTextProvider(doc, separate_lines=False)).extract_glyphs(0)
    assert "".join(g.character for g in glyphs) == "HELLO WORLD"
    doc.close()


def test_page_without_text_layer():
    doc = _make_doc()
    extractor = GlyphLayoutExtractor(PyMuPDFTextProvider(doc))

    with pytest.raises(LayoutUnavailable) as excinfo:
        extractor.extract_glyphs(1)
    assert excinfo.value.page_index == 1
    assert extractor.extract_glyphs_or_empty(1) == []
    doc.close()


@pytest.mark.parametrize("page_index", [-1, 2, 10])
def test_page_index_out_of_range(page_index):
    doc = _make_doc()
    extractor = GlyphLayoutExtractor(PyMuPDFTextProvider(doc))
    with pytest.raises(InvalidArgument):
        extractor.extract_glyphs(page_index)
    with pytest.raises(InvalidArgument):
        extractor.extract_glyphs_or_empty(page_index)
    doc.close()


def test_page_height():
    doc = _make_doc()
    provider = PyMuPDFTextProvider(doc)
    assert provider.page_count == 2
    assert provider.page_height(0) == PAGE_HEIGHT
    doc.close()
