"""
Annotation Store - read and write highlight annotations with PyMuPDF

Regions are read from the quad vertices PyMuPDF reports for each highlight
(MuPDF space) and converted into PDF user space, bottom-left origin. New
highlights are converted back into MuPDF space before PyMuPDF stamps them.
TOP_LEFT input at this seam is MuPDF device space, i.e. `page.rect`
coordinates of the visible page.
"""

import logging
from typing import List, Optional

import fitz  # PyMuPDF

from ..errors import AnnotationWriteFailed, InvalidArgument
from ..reconciler.coordinates import regions_from_quad_points
from ..reconciler.models import Origin, Region
from ..reconciler.text_locator import region_at
from ..utils.color_utils import hex_to_rgb, rgb_to_hex
from .providers import PageAnnotationProvider

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Highlight"


class PyMuPDFAnnotationProvider(PageAnnotationProvider):
    """PageAnnotationProvider over an open fitz.Document"""

    def __init__(self, doc: fitz.Document):
        self.doc = doc

    def _page(self, page_index: int) -> fitz.Page:
        if page_index < 0 or page_index >= len(self.doc):
            raise InvalidArgument(f"Invalid page number: {page_index}")
        return self.doc[page_index]

    def _regions_for_annot(self, page: fitz.Page, annot: fitz.Annot) -> List[Region]:
        annotation_id = str(annot.xref)
        color_hex = rgb_to_hex((annot.colors or {}).get("stroke"))

        to_pdf = ~page.transformation_matrix
        points: List[float] = []
        # four vertices per quad, one quad per highlighted line
        for vertex in annot.vertices or []:
            point = fitz.Point(vertex) * to_pdf
            points.extend((point.x, point.y))
        if not points:
            # no /QuadPoints: use the annotation rect
            rect = annot.rect * to_pdf
            points = [rect.x0, rect.y0, rect.x1, rect.y0, rect.x0, rect.y1, rect.x1, rect.y1]

        regions = regions_from_quad_points(
            points,
            page.number,
            color_hex=color_hex,
            origin=Origin.BOTTOM_LEFT,
            annotation_id=annotation_id,
        )
        if not regions:
            logger.warning(f"Highlight {annotation_id} on page {page.number} has no usable quad points")
        return regions

    def highlight_regions_for_page(self, page_index: int) -> List[Region]:
        page = self._page(page_index)
        regions: List[Region] = []
        for annot in page.annots(types=[fitz.PDF_ANNOT_HIGHLIGHT]):
            regions.extend(self._regions_for_annot(page, annot))
        return regions

    def add_highlight_region(
        self,
        page_index: int,
        region: Region,
        color_hex: str,
        contents: str = "",
        title: Optional[str] = None,
        opacity: Optional[float] = None,
    ) -> None:
        page = self._page(page_index)
        stroke = hex_to_rgb(color_hex)
        if region.origin is Origin.TOP_LEFT:
            rect = fitz.Rect(region.left, region.top, region.right, region.bottom)
        else:
            rect = fitz.Rect(region.left, region.bottom, region.right, region.top) * page.transformation_matrix

        try:
            highlight = page.add_highlight_annot(rect)
        except Exception as e:
            logger.error(f"Error adding highlight on page {page_index}: {e}")
            raise AnnotationWriteFailed(f"Could not add highlight on page {page_index}: {e}") from e
        if highlight is None:
            logger.error(f"PyMuPDF returned no annotation for {rect} on page {page_index}")
            raise AnnotationWriteFailed(f"Could not add highlight on page {page_index}")

        try:
            highlight.set_info(title=title or DEFAULT_TITLE, content=contents)
            highlight.set_colors(stroke=stroke)
            if opacity is not None:
                highlight.set_opacity(opacity)
            highlight.update()
        except Exception as e:
            logger.error(f"Error styling highlight on page {page_index}: {e}")
            raise AnnotationWriteFailed(f"Could not style highlight on page {page_index}: {e}") from e

    def remove_highlight_at(self, page_index: int, x: float, y: float, origin: Origin = Origin.BOTTOM_LEFT) -> bool:
        page = self._page(page_index)
        if origin is Origin.TOP_LEFT:
            point = fitz.Point(x, y) * ~page.transformation_matrix
            x, y = point.x, point.y

        for annot in list(page.annots(types=[fitz.PDF_ANNOT_HIGHLIGHT])):
            if region_at(self._regions_for_annot(page, annot), x, y) is None:
                continue
            try:
                page.delete_annot(annot)
            except Exception as e:
                logger.error(f"Error removing highlight on page {page_index}: {e}")
                raise AnnotationWriteFailed(f"Could not remove highlight on page {page_index}: {e}") from e
            return True
        return False
