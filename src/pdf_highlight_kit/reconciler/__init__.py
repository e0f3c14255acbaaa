"""Geometric reconciliation of highlight regions with positioned glyphs."""

from .coordinates import flip_y, regions_from_quad_points
from .highlight_matcher import group_records_by_annotation, match_highlights
from .models import Glyph, HighlightRecord, Origin, Region, SearchMode
from .text_locator import (
    MatchWindow,
    line_regions,
    locate_span,
    locate_text,
    locate_text_lines,
    region_at,
)

__all__ = [
    "Glyph",
    "HighlightRecord",
    "MatchWindow",
    "Origin",
    "Region",
    "SearchMode",
    "flip_y",
    "group_records_by_annotation",
    "line_regions",
    "locate_span",
    "locate_text",
    "locate_text_lines",
    "match_highlights",
    "region_at",
    "regions_from_quad_points",
]
