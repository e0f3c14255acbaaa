"""
Glyph extraction - turn a page's text layer into positioned glyphs.

PyMuPDFTextProvider reads characters through PyMuPDF's "rawdict" output and
converts their boxes from MuPDF space (top-left origin, CropBox relative)
into PDF user space, where raw QuadPoints of highlight annotations live.
"""

import logging
from typing import List

import fitz  # PyMuPDF

from ..errors import InvalidArgument, LayoutUnavailable
from ..reconciler.models import Glyph, Origin
from .providers import PageTextProvider

logger = logging.getLogger(__name__)

LINE_SEPARATOR = " "


def visible_top(page: fitz.Page) -> float:
    """
    PDF user-space y of the top edge of the visible (CropBox) area.

    Flipping with `visible_top - y` turns a device y, measured down from
    the visible top, into PDF space.
    """
    visible = page.rect * ~page.transformation_matrix
    return max(visible.y0, visible.y1)


class PyMuPDFTextProvider(PageTextProvider):
    """PageTextProvider over an open fitz.Document"""

    def __init__(self, doc: fitz.Document, separate_lines: bool = True):
        self.doc = doc
        self.separate_lines = separate_lines

    @property
    def page_count(self) -> int:
        return len(self.doc)

    def _page(self, page_index: int) -> fitz.Page:
        if page_index < 0 or page_index >= len(self.doc):
            raise InvalidArgument(f"Invalid page number: {page_index}")
        return self.doc[page_index]

    def page_height(self, page_index: int) -> float:
        return visible_top(self._page(page_index))

    def glyphs_for_page(self, page_index: int) -> List[Glyph]:
        page = self._page(page_index)
        try:
            raw = page.get_text("rawdict")
        except Exception as e:
            raise LayoutUnavailable(page_index, f"text layer could not be decoded: {e}") from e

        to_pdf = ~page.transformation_matrix
        glyphs: List[Glyph] = []

        for block_index, block in enumerate(raw.get("blocks", [])):
            if block.get("type") != 0:
                # image block
                continue
            block_no = block.get("number", block_index)
            for line_no, line in enumerate(block.get("lines", [])):
                line_key = (block_no, line_no)
                line_glyphs: List[Glyph] = []
                for span in line.get("spans", []):
                    for char in span.get("chars", []):
                        rect = fitz.Rect(char["bbox"]) * to_pdf
                        x0, x1 = sorted((rect.x0, rect.x1))
                        y0, y1 = sorted((rect.y0, rect.y1))
                        line_glyphs.append(Glyph(
                            character=char["c"],
                            x=x0,
                            y=y1,
                            width=x1 - x0,
                            height=y1 - y0,
                            page_index=page_index,
                            origin=Origin.BOTTOM_LEFT,
                            line_key=line_key,
                        ))
                if not line_glyphs:
                    continue
                last = line_glyphs[-1]
                if self.separate_lines and not last.character.isspace():
                    line_glyphs.append(Glyph(
                        character=LINE_SEPARATOR,
                        x=last.right,
                        y=last.y,
                        width=0.0,
                        height=last.height,
                        page_index=page_index,
                        origin=last.origin,
                        line_key=line_key,
                    ))
                glyphs.extend(line_glyphs)

        if not glyphs:
            raise LayoutUnavailable(page_index)
        return glyphs


class GlyphLayoutExtractor:
    """Materializes the ordered glyph sequence of a page"""

    def __init__(self, provider: PageTextProvider):
        self.provider = provider

    def extract_glyphs(self, page_index: int) -> List[Glyph]:
        """
        Extract the glyphs of one page in reading order

        Args:
            page_index: 0-based page index

        Returns:
            List of glyphs

        Raises:
            InvalidArgument: If the page index is out of range
            LayoutUnavailable: If the page has no extractable text
        """
        if page_index < 0 or page_index >= self.provider.page_count:
            raise InvalidArgument(f"Invalid page number: {page_index}")
        return list(self.provider.glyphs_for_page(page_index))

    def extract_glyphs_or_empty(self, page_index: int) -> List[Glyph]:
        """Same as extract_glyphs, but a page without text yields []"""
        try:
            return self.extract_glyphs(page_index)
        except LayoutUnavailable as e:
            logger.debug(f"No glyphs for page {page_index}: {e.reason}")
            return []
