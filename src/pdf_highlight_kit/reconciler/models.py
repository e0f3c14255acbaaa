"""
Value types shared by the highlight reconciler.

Every record is page scoped and immutable. Coordinates carry their origin
explicitly so that region/glyph comparisons never mix conventions.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from ..errors import InvalidArgument
from ..utils.color_utils import normalize_hex


class Origin(Enum):
    """Vertical axis convention of a coordinate"""

    BOTTOM_LEFT = "bottom-left"  # PDF user space, y grows upward
    TOP_LEFT = "top-left"  # device space, y grows downward from the page top

    def flipped(self) -> "Origin":
        return Origin.TOP_LEFT if self is Origin.BOTTOM_LEFT else Origin.BOTTOM_LEFT


class SearchMode(Enum):
    FIRST_ONLY = "first"
    ALL = "all"


@dataclass(frozen=True)
class Glyph:
    """
    One positioned character from a page's text layout.

    The vertical extent of the glyph is [y - height, y] in its own origin:
    with BOTTOM_LEFT, y is the top edge; with TOP_LEFT, y is the bottom edge.
    """

    character: str
    x: float
    y: float
    width: float
    height: float
    page_index: int
    origin: Origin = Origin.BOTTOM_LEFT
    line_key: Optional[Tuple[int, ...]] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y - self.height / 2

    def flipped(self, page_height: float) -> "Glyph":
        """Return the same glyph expressed in the other origin"""
        return replace(self, y=page_height - (self.y - self.height), origin=self.origin.flipped())


@dataclass(frozen=True)
class Region:
    """
    Rectangular extent of a highlight (one quad group) on a page.

    `top` is always the visually upper edge: top >= bottom in BOTTOM_LEFT,
    top <= bottom in TOP_LEFT.
    """

    left: float
    right: float
    top: float
    bottom: float
    page_index: int
    color_hex: Optional[str] = None
    origin: Origin = Origin.BOTTOM_LEFT
    annotation_id: Optional[str] = None

    def __post_init__(self):
        if self.left > self.right:
            raise InvalidArgument(f"Region left edge {self.left} is right of right edge {self.right}")
        if self.origin is Origin.BOTTOM_LEFT and self.top < self.bottom:
            raise InvalidArgument(f"Region top {self.top} is below bottom {self.bottom} in PDF space")
        if self.origin is Origin.TOP_LEFT and self.top > self.bottom:
            raise InvalidArgument(f"Region top {self.top} is below bottom {self.bottom} in device space")
        if self.page_index < 0:
            raise InvalidArgument(f"Invalid page index: {self.page_index}")
        if self.color_hex is not None:
            object.__setattr__(self, "color_hex", normalize_hex(self.color_hex))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)

    def contains(self, x: float, y: float) -> bool:
        """Inclusive point test; the point must be in this region's origin"""
        low, high = sorted((self.top, self.bottom))
        return self.left <= x <= self.right and low <= y <= high

    def flipped(self, page_height: float) -> "Region":
        """Convert all four edges to the other origin using the page height"""
        return replace(
            self,
            top=page_height - self.top,
            bottom=page_height - self.bottom,
            origin=self.origin.flipped(),
        )

    def in_origin(self, origin: Origin, page_height: Optional[float] = None) -> "Region":
        if origin is self.origin:
            return self
        if page_height is None:
            raise InvalidArgument("page_height is required to convert between coordinate origins")
        return self.flipped(page_height)

    @classmethod
    def enclosing(cls, glyphs: Iterable[Glyph], color_hex: Optional[str] = None) -> "Region":
        """Bounding box of a glyph run, in the glyphs' origin"""
        run = list(glyphs)
        if not run:
            raise InvalidArgument("Cannot build a region from an empty glyph run")
        origin = run[0].origin
        left = min(g.x for g in run)
        right = max(g.right for g in run)
        high = max(g.y for g in run)
        low = min(g.y - g.height for g in run)
        if origin is Origin.BOTTOM_LEFT:
            top, bottom = high, low
        else:
            top, bottom = low, high
        return cls(
            left=left,
            right=right,
            top=top,
            bottom=bottom,
            page_index=run[0].page_index,
            color_hex=color_hex,
            origin=origin,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left": self.left,
            "right": self.right,
            "top": self.top,
            "bottom": self.bottom,
            "page_index": self.page_index,
            "color": self.color_hex,
            "origin": self.origin.value,
            "annotation_id": self.annotation_id,
        }


@dataclass(frozen=True)
class HighlightRecord:
    """Text found under one highlight region"""

    text: str
    region: Region
    page_index: int

    @property
    def color_hex(self) -> Optional[str]:
        return self.region.color_hex

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "page_index": self.page_index,
            "color": self.color_hex,
            "region": self.region.to_dict(),
        }
