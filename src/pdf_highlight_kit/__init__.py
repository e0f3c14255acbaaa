"""
PDF Highlight Kit

Read the text under highlight annotations in PDF files and stamp new
highlights over text found by search, by reconciling annotation geometry
with the positioned glyphs of each page.
"""

__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"

from .errors import (
    AnnotationWriteFailed,
    DocumentUnreadable,
    HighlightKitError,
    InvalidArgument,
    LayoutUnavailable,
)
from .reconciler import (
    Glyph,
    HighlightRecord,
    Origin,
    Region,
    SearchMode,
    locate_text,
    locate_text_lines,
    match_highlights,
)

__all__ = [
    "__version__",
    "__license__",
    "AnnotationWriteFailed",
    "DocumentUnreadable",
    "HighlightKitError",
    "InvalidArgument",
    "LayoutUnavailable",
    "Glyph",
    "HighlightRecord",
    "Origin",
    "Region",
    "SearchMode",
    "locate_text",
    "locate_text_lines",
    "match_highlights",
]
