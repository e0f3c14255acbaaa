"""
Read path: recover the text under highlight regions.

A glyph belongs to a region when its visual center lies inside the region
(inclusive on every edge). Regions are converted to the glyphs' coordinate
origin before any comparison; glyph anchors are never converted.
"""

from typing import Dict, List, Optional, Sequence

from .coordinates import common_origin
from .models import Glyph, HighlightRecord, Region


def text_in_region(glyphs: Sequence[Glyph], region: Region) -> str:
    """
    Concatenate the characters whose centers fall inside `region`.

    The region must already be in the glyphs' origin. Characters keep their
    original sequence order; the result is whitespace-trimmed.
    """
    return "".join(
        g.character
        for g in glyphs
        if g.page_index == region.page_index and region.contains(g.center_x, g.center_y)
    ).strip()


def match_highlights(
    glyphs: Sequence[Glyph],
    regions: Sequence[Region],
    page_height: Optional[float] = None,
) -> List[HighlightRecord]:
    """
    Match highlight regions against a page's glyphs.

    Args:
        glyphs: Glyphs in reading order, all in the same origin
        regions: Regions in annotation order, then quad-group order
        page_height: Needed only when a region's origin differs from the glyphs'

    Returns:
        One record per region that covers non-whitespace text, in region order.
        Overlapping regions each yield their own record. Region geometry in the
        records is expressed in the glyphs' origin.
    """
    origin = common_origin(glyphs)
    if origin is None:
        return []

    records: List[HighlightRecord] = []
    for region in regions:
        normalized = region.in_origin(origin, page_height)
        text = text_in_region(glyphs, normalized)
        if text:
            records.append(HighlightRecord(text=text, region=normalized, page_index=normalized.page_index))
    return records


def group_records_by_annotation(records: Sequence[HighlightRecord], separator: str = " ") -> List[str]:
    """
    Join the per-quad records of each annotation into a single string.

    Records without an annotation id stand alone. Output follows the order in
    which each annotation was first seen.
    """
    grouped: Dict[object, List[str]] = {}
    for index, record in enumerate(records):
        annotation_id = record.region.annotation_id
        key = (record.page_index, annotation_id) if annotation_id is not None else ("record", index)
        grouped.setdefault(key, []).append(record.text)
    return [separator.join(texts) for texts in grouped.values()]
