"""
Color Utilities - "#RRGGBB" strings to and from PyMuPDF color tuples
"""

import re
from typing import Optional, Sequence, Tuple

from ..errors import InvalidArgument

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def normalize_hex(color_hex: str) -> str:
    """
    Normalize a hex color to upper case "#RRGGBB"

    Args:
        color_hex: Color such as "#ff9e00", "FF9E00" or " #F1C680 "

    Returns:
        The normalized color string

    Raises:
        InvalidArgument: If the value is not a six digit hex color
    """
    match = _HEX_RE.match((color_hex or "").strip())
    if not match:
        raise InvalidArgument(f"Invalid hex color: {color_hex!r}")
    return "#" + match.group(1).upper()


def hex_to_rgb(color_hex: str) -> Tuple[float, float, float]:
    """Convert "#RRGGBB" to the (r, g, b) floats in 0..1 that PyMuPDF expects"""
    value = int(normalize_hex(color_hex)[1:], 16)
    r = ((value & 0xFF0000) >> 16) / 255.0
    g = ((value & 0x00FF00) >> 8) / 255.0
    b = (value & 0x0000FF) / 255.0
    return (r, g, b)


def rgb_to_hex(color: Optional[Sequence[float]]) -> Optional[str]:
    """
    Convert a PyMuPDF color to "#RRGGBB".

    Grayscale (1 component) is expanded; CMYK and empty colors return None.
    """
    if not color:
        return None
    if len(color) == 1:
        color = (color[0], color[0], color[0])
    elif len(color) != 3:
        return None
    channels = [max(0, min(255, int(round(float(c) * 255)))) for c in color]
    return "#{:02X}{:02X}{:02X}".format(*channels)
