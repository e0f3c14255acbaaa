"""
Error taxonomy shared by the reconciler and the PDF engine adapter.

Page-level failures (LayoutUnavailable) are recovered by the caller;
document-level failures abort the operation.
"""


class HighlightKitError(Exception):
    """Base class for every error raised by pdf_highlight_kit"""


class InvalidArgument(HighlightKitError, ValueError):
    """A caller supplied an empty search target or malformed geometry"""


class LayoutUnavailable(HighlightKitError):
    """A page has no decodable text layer (e.g. a scanned image)"""

    def __init__(self, page_index: int, reason: str = "no extractable text"):
        self.page_index = page_index
        self.reason = reason
        super().__init__(f"Page {page_index}: {reason}")


class DocumentUnreadable(HighlightKitError):
    """The PDF file is missing or cannot be parsed"""


class AnnotationWriteFailed(HighlightKitError):
    """The PDF engine could not add or persist a highlight annotation"""
