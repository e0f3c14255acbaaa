"""PyMuPDF adapter: glyph extraction, annotation storage and the document entry points."""

from .annotation_store import PyMuPDFAnnotationProvider
from .glyph_extractor import GlyphLayoutExtractor, PyMuPDFTextProvider
from .pdf_highlighter import (
    PDFHighlightDocument,
    extract_highlighted_text_from_file,
    extract_highlights,
    highlight_text,
    highlight_text_in_file,
    locate_in_document,
    remove_highlight_in_file,
)
from .providers import HighlightDocument, PageAnnotationProvider, PageTextProvider

__all__ = [
    "GlyphLayoutExtractor",
    "HighlightDocument",
    "PDFHighlightDocument",
    "PageAnnotationProvider",
    "PageTextProvider",
    "PyMuPDFAnnotationProvider",
    "PyMuPDFTextProvider",
    "extract_highlighted_text_from_file",
    "extract_highlights",
    "highlight_text",
    "highlight_text_in_file",
    "locate_in_document",
    "remove_highlight_in_file",
]
