"""Coordinate conversion helpers and quad point normalization."""

from typing import List, Optional, Sequence

from ..errors import InvalidArgument
from .models import Glyph, Origin, Region

QUAD_GROUP_SIZE = 8


def flip_y(value: float, page_height: float) -> float:
    """Convert a vertical coordinate between bottom-left and top-left origins"""
    return page_height - value


def common_origin(glyphs: Sequence[Glyph]) -> Optional[Origin]:
    """
    Return the origin shared by all glyphs, or None for an empty sequence.

    Raises:
        InvalidArgument: If the glyphs mix coordinate conventions
    """
    origins = {g.origin for g in glyphs}
    if not origins:
        return None
    if len(origins) > 1:
        raise InvalidArgument("Glyph sequence mixes bottom-left and top-left coordinates")
    return origins.pop()


def regions_from_quad_points(
    points: Sequence[float],
    page_index: int,
    color_hex: Optional[str] = None,
    origin: Origin = Origin.BOTTOM_LEFT,
    annotation_id: Optional[str] = None,
) -> List[Region]:
    """
    Normalize raw QuadPoints (groups of 4 x/y pairs, one group per line)
    into one Region per group.

    A trailing group with fewer than 8 numbers is ignored.
    """
    regions: List[Region] = []
    for i in range(0, len(points) - QUAD_GROUP_SIZE + 1, QUAD_GROUP_SIZE):
        group = [float(v) for v in points[i:i + QUAD_GROUP_SIZE]]
        xs = group[0::2]
        ys = group[1::2]
        if origin is Origin.BOTTOM_LEFT:
            top, bottom = max(ys), min(ys)
        else:
            top, bottom = min(ys), max(ys)
        regions.append(Region(
            left=min(xs),
            right=max(xs),
            top=top,
            bottom=bottom,
            page_index=page_index,
            color_hex=color_hex,
            origin=origin,
            annotation_id=annotation_id,
        ))
    return regions
