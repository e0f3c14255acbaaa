"""
Collaborator interfaces between the reconciler and a PDF engine.

An engine adapter implements these so that the entry points never touch the
engine directly.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..reconciler.models import Glyph, Origin, Region


class PageTextProvider(ABC):
    """Read access to the laid-out text of each page"""

    @property
    @abstractmethod
    def page_count(self) -> int:
        ...

    @abstractmethod
    def glyphs_for_page(self, page_index: int) -> List[Glyph]:
        """
        Glyphs of one page in reading order.

        Raises:
            LayoutUnavailable: If the page has no decodable text layer
        """
        ...

    @abstractmethod
    def page_height(self, page_index: int) -> float:
        """
        Height used to convert between bottom-left and top-left origins.

        On a cropped page this is the y of the visible top edge, not the
        MediaBox height.
        """
        ...


class PageAnnotationProvider(ABC):
    """Read and write access to highlight annotations"""

    @abstractmethod
    def highlight_regions_for_page(self, page_index: int) -> List[Region]:
        """Regions of every highlight on the page, in annotation then quad order"""
        ...

    @abstractmethod
    def add_highlight_region(
        self,
        page_index: int,
        region: Region,
        color_hex: str,
        contents: str = "",
        title: Optional[str] = None,
        opacity: Optional[float] = None,
    ) -> None:
        """
        Stamp a highlight over `region`.

        Raises:
            AnnotationWriteFailed: If the engine rejects the annotation
        """
        ...

    @abstractmethod
    def remove_highlight_at(self, page_index: int, x: float, y: float, origin: Origin = Origin.BOTTOM_LEFT) -> bool:
        """Delete the first highlight containing the point; False if none does"""
        ...


class HighlightDocument(ABC):
    """A document exposing both providers, as consumed by the entry points"""

    @property
    @abstractmethod
    def page_count(self) -> int:
        ...

    @property
    @abstractmethod
    def text_provider(self) -> PageTextProvider:
        ...

    @property
    @abstractmethod
    def annotation_provider(self) -> PageAnnotationProvider:
        ...
