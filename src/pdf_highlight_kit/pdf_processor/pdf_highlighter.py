"""
PDF Highlighter - read and stamp highlight annotations in PDF files
This module drives the reconciler over a PyMuPDF (fitz) document, page by page.
"""

import logging
from pathlib import Path
from typing import List, Optional

import fitz  # PyMuPDF

from ..config import SETTINGS, HighlightSettings, HighlightStyle
from ..errors import AnnotationWriteFailed, DocumentUnreadable, InvalidArgument, LayoutUnavailable
from ..reconciler.highlight_matcher import group_records_by_annotation, match_highlights
from ..reconciler.models import HighlightRecord, Origin, Region, SearchMode
from ..reconciler.text_locator import locate_text, locate_text_lines
from .annotation_store import PyMuPDFAnnotationProvider
from .glyph_extractor import GlyphLayoutExtractor, PyMuPDFTextProvider
from .providers import HighlightDocument, PageAnnotationProvider, PageTextProvider

logger = logging.getLogger(__name__)


class PDFHighlightDocument(HighlightDocument):
    """Owns an open fitz.Document and exposes it through the provider interfaces"""

    def __init__(self, pdf_path: str, settings: Optional[HighlightSettings] = None):
        self.pdf_path = Path(pdf_path)
        self.settings = settings or SETTINGS
        self.doc: Optional[fitz.Document] = None
        self._text_provider: Optional[PyMuPDFTextProvider] = None
        self._annotation_provider: Optional[PyMuPDFAnnotationProvider] = None

    def open_pdf(self) -> "PDFHighlightDocument":
        """
        Open the PDF file for processing

        Raises:
            DocumentUnreadable: If the file is missing or is not a readable PDF
        """
        if not self.pdf_path.is_file():
            logger.error(f"PDF file does not exist: {self.pdf_path}")
            raise DocumentUnreadable(f"PDF file does not exist: {self.pdf_path}")
        try:
            doc = fitz.open(str(self.pdf_path))
        except Exception as e:
            logger.error(f"Error opening PDF {self.pdf_path}: {e}")
            raise DocumentUnreadable(f"Cannot open {self.pdf_path}: {e}") from e
        if not doc.is_pdf:
            doc.close()
            logger.error(f"Not a PDF document: {self.pdf_path}")
            raise DocumentUnreadable(f"Not a PDF document: {self.pdf_path}")

        self.doc = doc
        self._text_provider = PyMuPDFTextProvider(doc, separate_lines=self.settings.separate_lines)
        self._annotation_provider = PyMuPDFAnnotationProvider(doc)
        return self

    def close_pdf(self):
        """Close the PDF document"""
        if self.doc:
            self.doc.close()
            self.doc = None
            self._text_provider = None
            self._annotation_provider = None

    def __enter__(self) -> "PDFHighlightDocument":
        if self.doc is None:
            self.open_pdf()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close_pdf()
        return False

    def _require_open(self) -> fitz.Document:
        if self.doc is None:
            raise DocumentUnreadable(f"PDF document not opened: {self.pdf_path}")
        return self.doc

    @property
    def page_count(self) -> int:
        return len(self._require_open())

    @property
    def text_provider(self) -> PageTextProvider:
        self._require_open()
        return self._text_provider

    @property
    def annotation_provider(self) -> PageAnnotationProvider:
        self._require_open()
        return self._annotation_provider

    def save_pdf(self, output_path: Optional[str] = None) -> Path:
        """
        Write the document, in place when no output path is given.

        In-place saves are incremental when the file allows it, so existing
        signatures and revisions survive.

        Returns:
            The path written

        Raises:
            AnnotationWriteFailed: If PyMuPDF cannot write the file
        """
        doc = self._require_open()
        save_path = Path(output_path) if output_path else self.pdf_path

        try:
            if save_path.resolve() == self.pdf_path.resolve():
                if doc.can_save_incrementally():
                    doc.save(str(save_path), incremental=True, encryption=fitz.PDF_ENCRYPT_KEEP)
                else:
                    data = doc.tobytes(garbage=self.settings.save_garbage, deflate=self.settings.save_deflate)
                    save_path.write_bytes(data)
            else:
                doc.save(
                    str(save_path),
                    garbage=self.settings.save_garbage,
                    deflate=self.settings.save_deflate,
                    clean=True,
                )
        except Exception as e:
            logger.error(f"Error saving PDF to {save_path}: {e}")
            raise AnnotationWriteFailed(f"Cannot save {save_path}: {e}") from e

        logger.info(f"PDF saved to {save_path}")
        return save_path


def extract_highlights(document: HighlightDocument) -> List[HighlightRecord]:
    """
    Collect the text under every highlight of a document.

    Pages without a text layer are skipped; the result is then partial rather
    than an error.
    """
    text_provider = document.text_provider
    annotations = document.annotation_provider
    extractor = GlyphLayoutExtractor(text_provider)

    records: List[HighlightRecord] = []
    for page_index in range(document.page_count):
        regions = annotations.highlight_regions_for_page(page_index)
        if not regions:
            continue
        try:
            glyphs = extractor.extract_glyphs(page_index)
        except LayoutUnavailable as e:
            logger.debug(f"Skipping page {page_index} with {len(regions)} highlight regions: {e.reason}")
            continue
        page_records = match_highlights(glyphs, regions, text_provider.page_height(page_index))
        logger.debug(f"Page {page_index}: {len(page_records)} of {len(regions)} regions cover text")
        records.extend(page_records)
    return records


def highlight_text(
    document: HighlightDocument,
    target: str,
    style: Optional[HighlightStyle] = None,
    per_line: Optional[bool] = None,
    mode: SearchMode = SearchMode.FIRST_ONLY,
) -> bool:
    """
    Highlight `target` where it first occurs in the document

    Args:
        document: Open document
        target: Exact text to highlight
        style: Color, title and opacity; defaults to the document settings' default_style
        per_line: One highlight per visual line (default from the document settings)
        mode: FIRST_ONLY stops at the first match; ALL marks every match

    Returns:
        True if at least one highlight was added; False when the text is not found

    Raises:
        InvalidArgument: If `target` is empty
        AnnotationWriteFailed: If the engine rejects a highlight
    """
    if not target:
        raise InvalidArgument("Search target must not be empty")
    settings = getattr(document, "settings", None) or SETTINGS
    style = style or settings.default_style
    if per_line is None:
        per_line = settings.per_line

    extractor = GlyphLayoutExtractor(document.text_provider)
    annotations = document.annotation_provider

    added = 0
    for page_index in range(document.page_count):
        glyphs = extractor.extract_glyphs_or_empty(page_index)
        if not glyphs:
            continue
        if per_line:
            groups = locate_text_lines(glyphs, target, mode)
        else:
            groups = [[region] for region in locate_text(glyphs, target, mode)]
        if not groups:
            continue

        for regions in groups:
            for region in regions:
                annotations.add_highlight_region(
                    page_index,
                    region,
                    style.color_hex,
                    contents=target,
                    title=style.title,
                    opacity=style.opacity,
                )
                added += 1
        logger.info(f"Highlighted {target!r} on page {page_index + 1} ({len(groups)} matches)")
        if mode is SearchMode.FIRST_ONLY:
            break

    if not added:
        logger.info(f"Text not found: {target!r}")
    return added > 0


def locate_in_document(document: HighlightDocument, target: str, mode: SearchMode = SearchMode.ALL) -> List[Region]:
    """Enclosing regions of `target` across all pages, without writing anything"""
    extractor = GlyphLayoutExtractor(document.text_provider)
    found: List[Region] = []
    for page_index in range(document.page_count):
        found.extend(locate_text(extractor.extract_glyphs_or_empty(page_index), target, mode))
        if found and mode is SearchMode.FIRST_ONLY:
            break
    return found


# --- Convenience wrappers for CLI usage ---

def extract_highlighted_text_from_file(pdf_path: str, by_annotation: bool = False) -> List[str]:
    """
    Highlighted strings of a PDF file, one per quad group (or per annotation).

    Raises:
        DocumentUnreadable: If the file is missing or corrupt
    """
    with PDFHighlightDocument(pdf_path) as document:
        records = extract_highlights(document)
    if by_annotation:
        return group_records_by_annotation(records)
    return [record.text for record in records]


def highlight_text_in_file(
    pdf_path: str,
    text: str,
    output_path: Optional[str] = None,
    style: Optional[HighlightStyle] = None,
    per_line: Optional[bool] = None,
    mode: SearchMode = SearchMode.FIRST_ONLY,
    settings: Optional[HighlightSettings] = None,
) -> bool:
    """
    Highlight `text` in a PDF file and save it.

    Args:
        pdf_path: Path to the input PDF file.
        text: Exact text to highlight.
        output_path: Where to write; None rewrites the input file in place.
        settings: Defaults for style, per-line writes and saving (global SETTINGS if None)

    Returns:
        True if a highlight was added and the file saved; False if the text was not found
        (nothing is written in that case).
    """
    with PDFHighlightDocument(pdf_path, settings) as document:
        if not highlight_text(document, text, style=style, per_line=per_line, mode=mode):
            logger.warning(f"No highlight added to {pdf_path}; not saving output.")
            return False
        document.save_pdf(output_path)
    return True


def remove_highlight_in_file(
    pdf_path: str,
    page_index: int,
    x: float,
    y: float,
    output_path: Optional[str] = None,
    origin: Origin = Origin.BOTTOM_LEFT,
) -> bool:
    """Delete the highlight under a point and save; False if there is none"""
    with PDFHighlightDocument(pdf_path) as document:
        if not document.annotation_provider.remove_highlight_at(page_index, x, y, origin=origin):
            return False
        document.save_pdf(output_path)
    return True
